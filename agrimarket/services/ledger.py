import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agrimarket.core.errors import AgriMarketError, PersistenceFailure
from agrimarket.models.ledger import LedgerEntry, LedgerItem
from agrimarket.models.record import PurchaseRecord, SaleRecord
from agrimarket.models.user import User
from agrimarket.schemas.ledger import LedgerEntryCreate, LedgerSummary, LedgerEntry as LedgerEntrySchema
from agrimarket.stores.ledger import LedgerStore, new_transaction_id

logger = logging.getLogger(__name__)

RECENT_ENTRIES = 5


def record_entry(db: Session, party: User, entry: LedgerEntryCreate) -> LedgerEntry:
    """Append a manually entered ledger entry for ``party`` under a fresh transaction id."""
    db_entry = LedgerEntry(
        party_id=party.id,
        party_name=party.display_name,
        transaction_id=new_transaction_id(),
        entry_type=entry.entry_type,
        description=entry.description,
        amount=Decimal(str(entry.amount)),
        payment_method=entry.payment_method,
        status="completed",
        notes=entry.notes,
        items=[
            LedgerItem(
                item_name=item.item_name,
                quantity=item.quantity,
                unit_price=Decimal(str(item.unit_price)),
            )
            for item in entry.items
        ],
    )
    try:
        LedgerStore(db).append(db_entry)
        db.commit()
    except AgriMarketError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailure("Failed to create transaction") from e
    db.refresh(db_entry)
    logger.info("Ledger entry %s recorded for user %s", db_entry.transaction_id, party.id)
    return db_entry


def summarize(db: Session, party_id: int) -> LedgerSummary:
    entries = LedgerStore(db).list_by_party(party_id)

    purchases = db.query(
        func.count(PurchaseRecord.id), func.sum(PurchaseRecord.total_amount)
    ).filter(PurchaseRecord.buyer_id == party_id).first()
    sales = db.query(
        func.count(SaleRecord.id), func.sum(SaleRecord.total_amount)
    ).filter(SaleRecord.seller_id == party_id).first()

    total_purchases = float(purchases[1]) if purchases[1] else 0.0
    total_sales = float(sales[1]) if sales[1] else 0.0

    return LedgerSummary(
        total_transactions=len(entries),
        total_purchases=total_purchases,
        total_sales=total_sales,
        net_amount=total_sales - total_purchases,
        purchase_count=purchases[0] or 0,
        sales_count=sales[0] or 0,
        recent_transactions=[
            LedgerEntrySchema.model_validate(entry) for entry in entries[:RECENT_ENTRIES]
        ],
    )
