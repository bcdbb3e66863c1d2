"""
Invoice template registry.

Each template pairs display metadata with the palette the PDF renderer uses.
Unknown ids resolve to the modern template.
"""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class InvoiceTemplateStyle:
    id: str
    name: str
    description: str
    title: str
    accent_color: str  # title and totals
    header_background: str  # line-item table header row
    header_text_color: str
    title_alignment: str  # "left" | "center" | "right"
    stripe_color: str


TEMPLATES: Dict[str, InvoiceTemplateStyle] = {
    "modern": InvoiceTemplateStyle(
        id="modern",
        name="Modern",
        description="Clean and minimalist design",
        title="INVOICE",
        accent_color="#2c5282",
        header_background="#f3f4f6",
        header_text_color="#1f2937",
        title_alignment="center",
        stripe_color="#fafafa",
    ),
    "professional": InvoiceTemplateStyle(
        id="professional",
        name="Professional",
        description="Traditional business styling",
        title="INVOICE",
        accent_color="#111827",
        header_background="#1f2937",
        header_text_color="#ffffff",
        title_alignment="right",
        stripe_color="#f9fafb",
    ),
    "creative": InvoiceTemplateStyle(
        id="creative",
        name="Creative",
        description="Bold colors for a distinctive look",
        title="Invoice",
        accent_color="#7c3aed",
        header_background="#ede9fe",
        header_text_color="#5b21b6",
        title_alignment="left",
        stripe_color="#faf5ff",
    ),
}

DEFAULT_TEMPLATE = "modern"


def get_template(template_id: str | None) -> InvoiceTemplateStyle:
    return TEMPLATES.get(template_id or DEFAULT_TEMPLATE, TEMPLATES[DEFAULT_TEMPLATE])


def list_templates() -> list[InvoiceTemplateStyle]:
    return list(TEMPLATES.values())
