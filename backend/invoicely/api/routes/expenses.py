"""Expenses: CRUD plus AI categorization."""
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invoicely.ai import categorize_expense
from invoicely.api.deps import get_db
from invoicely.core.exceptions import BusinessError
from invoicely.schemas.common import MessageResponse
from invoicely.schemas.expense import (
    CategorizeRequest,
    ExpenseCategorization,
    ExpenseCategory,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from invoicely.services import storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ExpenseResponse)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    """Record an expense. Without a category the AI picks one (Other on failure)."""
    if data.category is None:
        suggestion = categorize_expense(data.description)
        data.category = ExpenseCategory(suggestion.main_category)
        logger.info(f"Auto-categorized expense as {suggestion.main_category} ({suggestion.confidence:.2f})")
        if not data.sub_category:
            data.sub_category = suggestion.sub_category
    return storage.create_expense(db, data)


@router.post("/categorize", response_model=ExpenseCategorization)
def categorize(data: CategorizeRequest):
    return categorize_expense(data.description)


@router.get("/edit/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    expense = storage.get_expense(db, expense_id)
    if not expense:
        raise BusinessError.not_found("Expense")
    return expense


@router.get("/{user_id}", response_model=List[ExpenseResponse])
def list_expenses(user_id: int, db: Session = Depends(get_db)):
    return storage.get_expenses_by_user_id(db, user_id)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(expense_id: int, data: ExpenseUpdate, db: Session = Depends(get_db)):
    return storage.update_expense(db, expense_id, data)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(expense_id: int, db: Session = Depends(get_db)):
    storage.delete_expense(db, expense_id)
    return {"message": "Expense deleted successfully"}
