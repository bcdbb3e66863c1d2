"""Prompt text for the two AI tasks."""
from decimal import Decimal
from typing import Dict, List

from invoicely.schemas.expense import EXPENSE_CATEGORIES

DESCRIPTION_SYSTEM_PROMPT = (
    "Generate a clear, professional invoice description based on the client name, "
    "amount, and any services provided. Keep it concise but detailed. "
    "Return only the description text."
)

CATEGORIZE_SYSTEM_PROMPT = (
    "You categorize business expenses. "
    f"Choose mainCategory from exactly one of: {', '.join(EXPENSE_CATEGORIES)}. "
    "Pick a short, specific subCategory (for example 'Airfare' under Travel or "
    "'Cloud Hosting' under Software). "
    "Respond with a single JSON object with keys "
    '"mainCategory" (string), "subCategory" (string), '
    '"confidence" (number between 0 and 1) and "explanation" (one sentence). '
    "No other text."
)


def build_description_messages(client_name: str, amount: Decimal, services: List[str]) -> List[Dict[str, str]]:
    services_part = f" for services: {', '.join(services)}" if services else ""
    return [
        {"role": "system", "content": DESCRIPTION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f'Generate an invoice description for client "{client_name}" '
                       f"for amount ${Decimal(str(amount)):,.2f}{services_part}.",
        },
    ]


def build_categorize_messages(description: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": CATEGORIZE_SYSTEM_PROMPT},
        {"role": "user", "content": f"Expense: {description}"},
    ]
