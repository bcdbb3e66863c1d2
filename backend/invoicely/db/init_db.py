"""Create all tables. Run on app startup.

Seeds a default owner account when the users table is empty; the front end
addresses its data by that user's id.
"""
import logging
import secrets

from invoicely.core.config import settings
from invoicely.db.base import Base
from invoicely.db.session import engine, SessionLocal
from invoicely.models import user, invoice, expense, business_settings  # noqa: F401 - register models
from invoicely.models.user import User
from invoicely.services import storage

logger = logging.getLogger(__name__)


def init_db(bind=None):
    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        if db.query(User).count() == 0:
            # Random password; there is no login flow, the account only owns data
            default_user = storage.create_user(db, settings.DEFAULT_USERNAME, secrets.token_urlsafe(16))
            logger.info(f"Default user '{default_user.username}' created with id {default_user.id}")
    finally:
        db.close()
