"""Invoicely: invoicing and expense tracking backend."""

__version__ = "0.1.0"
