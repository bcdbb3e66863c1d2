"""User storage helpers and startup seeding."""
import pytest

from invoicely.core.exceptions import ValidationError
from invoicely.db.init_db import init_db
from invoicely.models.user import User
from invoicely.services import storage


class TestUsers:

    def test_create_user_hashes_password(self, db):
        user = storage.create_user(db, "bookkeeper", "s3cret")
        assert user.id is not None
        assert user.password_hash != "s3cret"
        assert storage.get_user_by_username(db, "bookkeeper").id == user.id
        assert storage.get_user(db, user.id).username == "bookkeeper"

    def test_duplicate_username_rejected(self, db):
        with pytest.raises(ValidationError, match="already taken"):
            storage.create_user(db, "owner", "another")
        assert db.query(User).filter(User.username == "owner").count() == 1

    def test_unknown_user_lookups(self, db):
        assert storage.get_user(db, 9999) is None
        assert storage.get_user_by_username(db, "nobody") is None


class TestInitDb:

    def test_seeds_default_user_once(self, engine, session_factory):
        init_db(bind=engine)
        init_db(bind=engine)

        session = session_factory()
        try:
            users = session.query(User).all()
            assert [u.username for u in users] == ["owner"]
        finally:
            session.close()
