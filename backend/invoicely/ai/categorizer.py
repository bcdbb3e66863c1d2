"""
Expense auto-categorization.

The LLM is asked for a JSON object; its output is validated against the
ExpenseCategorization schema before use. Any failure (no API key, API error,
malformed JSON, schema violation) produces the static fallback: category
"Other" with confidence 0.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from invoicely.schemas.expense import EXPENSE_CATEGORIES, ExpenseCategory, ExpenseCategorization
from .groq_client import get_groq_client
from .prompts import build_categorize_messages

logger = logging.getLogger(__name__)

FALLBACK_SUB_CATEGORY = "General"


def fallback_categorization(reason: str = "AI categorization unavailable") -> ExpenseCategorization:
    return ExpenseCategorization(
        main_category=ExpenseCategory.OTHER.value,
        sub_category=FALLBACK_SUB_CATEGORY,
        confidence=0.0,
        explanation=reason,
    )


def _strip_code_fences(content: str) -> str:
    """Remove ```json ... ``` wrapping some models add despite instructions."""
    content = content.strip()
    if content.startswith("```"):
        lines = content.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        content = "\n".join(lines).strip()
    return content


def _normalize_category(value: str) -> Optional[str]:
    lookup = {c.lower(): c for c in EXPENSE_CATEGORIES}
    return lookup.get((value or "").strip().lower())


def parse_categorization(content: str) -> Optional[ExpenseCategorization]:
    """Validate raw LLM output. Returns None if it cannot be trusted."""
    try:
        data = json.loads(_strip_code_fences(content))
    except json.JSONDecodeError as e:
        logger.warning(f"LLM categorization is not valid JSON: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning("LLM categorization is not a JSON object")
        return None

    try:
        result = ExpenseCategorization.model_validate(data)
    except ValidationError as e:
        logger.warning(f"LLM categorization failed validation: {e.error_count()} error(s)")
        return None

    category = _normalize_category(result.main_category)
    if category is None:
        logger.info(f"LLM suggested unknown category '{result.main_category}', using Other")
        category = ExpenseCategory.OTHER.value
    result.main_category = category
    result.sub_category = result.sub_category.strip() or FALLBACK_SUB_CATEGORY
    return result


def categorize_expense(description: str) -> ExpenseCategorization:
    """Suggest a category for an expense description. Never raises."""
    description = (description or "").strip()
    if not description:
        return fallback_categorization("No description provided")

    client = get_groq_client()
    if not client.is_available():
        return fallback_categorization()

    content = client.complete(build_categorize_messages(description), json_mode=True)
    if not content:
        logger.warning("Categorization fell back to default (no LLM response)")
        return fallback_categorization()

    result = parse_categorization(content)
    if result is None:
        return fallback_categorization("AI response could not be understood")

    logger.info(f"Categorized expense as {result.main_category}/{result.sub_category} ({result.confidence:.2f})")
    return result
