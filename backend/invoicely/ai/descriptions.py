"""Invoice description generation."""

import logging
from decimal import Decimal
from typing import List, Optional

from .groq_client import get_groq_client
from .prompts import build_description_messages

logger = logging.getLogger(__name__)


def fallback_description(client_name: str) -> str:
    return f"Professional services provided to {client_name}"


def generate_invoice_description(
    client_name: str,
    amount: Decimal = Decimal("0"),
    services: Optional[List[str]] = None,
) -> str:
    """Ask the LLM for a short invoice description; static text on any failure."""
    services = [s.strip() for s in (services or []) if s and s.strip()]

    client = get_groq_client()
    if not client.is_available():
        return fallback_description(client_name)

    content = client.complete(build_description_messages(client_name, amount, services))
    if not content:
        logger.warning(f"Description generation fell back to default for client '{client_name}'")
        return fallback_description(client_name)
    return content
