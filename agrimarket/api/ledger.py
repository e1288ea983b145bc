from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from agrimarket.db.session import get_db
from agrimarket.models.user import User
from agrimarket.schemas.ledger import LedgerEntry, LedgerEntryCreate, LedgerSummary
from agrimarket.services import ledger as ledger_service
from agrimarket.stores.ledger import LedgerStore
from agrimarket.auth.security import get_current_active_user

router = APIRouter()

@router.get("/", response_model=List[LedgerEntry])
def read_ledger(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return LedgerStore(db).list_by_party(current_user.id)

@router.post("/", response_model=LedgerEntry, status_code=status.HTTP_201_CREATED)
def create_ledger_entry(
    entry: LedgerEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return ledger_service.record_entry(db, current_user, entry)

@router.get("/summary", response_model=LedgerSummary)
def read_ledger_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return ledger_service.summarize(db, current_user.id)
