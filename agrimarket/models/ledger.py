from sqlalchemy import Column, Enum, Numeric, String, ForeignKey, Integer, CheckConstraint
from sqlalchemy.orm import relationship
from agrimarket.models.base import BaseModel

LEDGER_PAYMENT_METHODS = ('card', 'upi', 'netbanking', 'cash')


class LedgerEntry(BaseModel):
    """
    Append-only record of a monetary event.

    ``transaction_id`` is unique at the database level so a replayed
    operation can never produce a second entry.
    """
    __tablename__ = "ledger_entries"
    
    party_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    party_name = Column(String(100), nullable=False)
    transaction_id = Column(String(80), nullable=False, unique=True)
    entry_type = Column(Enum('purchase', 'sale', 'payment', name='ledger_entry_types'), nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(Enum(*LEDGER_PAYMENT_METHODS, name='ledger_payment_methods'), nullable=False)
    status = Column(Enum('completed', 'pending', 'failed', name='ledger_status'), default='completed')
    notes = Column(String)
    
    items = relationship("LedgerItem", back_populates="entry", order_by="LedgerItem.id")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_ledger_amount_nonneg"),
    )

class LedgerItem(BaseModel):
    __tablename__ = "ledger_items"
    
    entry_id = Column(Integer, ForeignKey('ledger_entries.id'), nullable=False)
    item_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    
    entry = relationship("LedgerEntry", back_populates="items")
