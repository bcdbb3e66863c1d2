"""AI helpers backed by Groq's chat-completion API.

Both helpers are conveniences: when the LLM is unavailable or misbehaves they
return a static default instead of raising.
"""

from .categorizer import categorize_expense
from .descriptions import generate_invoice_description

__all__ = ["categorize_expense", "generate_invoice_description"]
