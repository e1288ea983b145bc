from typing import List, Optional
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrimarket.core.errors import DuplicateTransactionId
from agrimarket.models.ledger import LedgerEntry


def new_transaction_id() -> str:
    return f"TXN{uuid4().hex.upper()}"


class LedgerStore:
    """
    Append-only ledger.

    Entries are only inserted and read back; no update or delete is exposed.
    """

    def __init__(self, db: Session):
        self.db = db

    def append(self, entry: LedgerEntry) -> LedgerEntry:
        if self.exists(entry.transaction_id):
            raise DuplicateTransactionId(
                f"Transaction {entry.transaction_id} has already been recorded"
            )
        self.db.add(entry)
        try:
            self.db.flush()
        except IntegrityError as e:
            # a concurrent writer inserted the same id after our check
            if "transaction_id" in str(e.orig):
                raise DuplicateTransactionId(
                    f"Transaction {entry.transaction_id} has already been recorded"
                ) from e
            raise
        return entry

    def exists(self, transaction_id: str) -> bool:
        return self.get_by_transaction_id(transaction_id) is not None

    def get_by_transaction_id(self, transaction_id: str) -> Optional[LedgerEntry]:
        return (
            self.db.query(LedgerEntry)
            .filter(LedgerEntry.transaction_id == transaction_id)
            .first()
        )

    def list_by_party(self, party_id: int) -> List[LedgerEntry]:
        return (
            self.db.query(LedgerEntry)
            .filter(LedgerEntry.party_id == party_id)
            .order_by(LedgerEntry.created_at.desc(), LedgerEntry.id.desc())
            .all()
        )
