"""Seed demo business settings, invoices and expenses for the default user."""
from datetime import date, timedelta
from decimal import Decimal

from invoicely.db.init_db import init_db
from invoicely.db.session import SessionLocal
from invoicely.models.user import User
from invoicely.schemas.business_settings import BusinessSettingsUpsert
from invoicely.schemas.expense import ExpenseCreate
from invoicely.schemas.invoice import InvoiceCreate, LineItemCreate
from invoicely.services import storage


def seed_demo_data():
    init_db()
    db = SessionLocal()
    try:
        user = db.query(User).order_by(User.id).first()
        if not user:
            print("❌ No user found. Database not initialized properly.")
            return

        storage.upsert_business_settings(db, BusinessSettingsUpsert(
            user_id=user.id,
            business_name="Northwind Design Studio",
            address="42 Harbor Street",
            city="Portland",
            state="OR",
            zip_code="97201",
            phone="(503) 555-0134",
            email="billing@northwind.example",
        ))
        print("✅ Business settings saved")

        today = date.today()
        invoices = [
            ("Acme Corp", "pending", today + timedelta(days=30), "modern", Decimal("0"), [
                ("Website redesign", Decimal("1"), Decimal("2400.00")),
                ("Hosting setup", Decimal("3"), Decimal("45.00")),
            ]),
            ("Globex LLC", "paid", today - timedelta(days=10), "professional", Decimal("0.0825"), [
                ("Brand guidelines", Decimal("1"), Decimal("1800.00")),
            ]),
            ("Initech", "pending", today - timedelta(days=5), "creative", Decimal("0"), [
                ("Illustration hours", Decimal("12.5"), Decimal("80.00")),
                ("", Decimal("1"), Decimal("150.00")),
            ]),
        ]
        for client, status, due, template, tax_rate, lines in invoices:
            invoice = storage.create_invoice(db, InvoiceCreate(
                user_id=user.id,
                client_name=client,
                status=status,
                due_date=due,
                template=template,
                tax_rate=tax_rate,
                line_items=[
                    LineItemCreate(description=d, quantity=q, unit_price=p) for d, q, p in lines
                ],
            ))
            print(f"  ✓ Invoice {invoice.invoice_number}: {client} ${invoice.amount}")

        expenses = [
            ("Adobe Creative Cloud subscription", Decimal("54.99"), "Software", "Design Tools"),
            ("Flight to client workshop", Decimal("412.30"), "Travel", "Airfare"),
            ("Printer paper and toner", Decimal("86.15"), "Office Supplies", "Printing"),
            ("Facebook ads campaign", Decimal("250.00"), "Marketing", "Social Media Ads"),
        ]
        for i, (description, amount, category, sub_category) in enumerate(expenses):
            storage.create_expense(db, ExpenseCreate(
                user_id=user.id,
                description=description,
                amount=amount,
                category=category,
                sub_category=sub_category,
                date=today - timedelta(days=i * 3),
            ))
        print(f"✅ Seeded {len(invoices)} invoices and {len(expenses)} expenses for user {user.id}")
    finally:
        db.close()


if __name__ == "__main__":
    seed_demo_data()
