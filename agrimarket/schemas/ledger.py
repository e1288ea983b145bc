from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from agrimarket.schemas.base import BaseSchema, TimestampSchema

class LedgerItemBase(BaseModel):
    item_name: str
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)

class LedgerItem(BaseSchema, LedgerItemBase):
    pass

class LedgerEntryBase(BaseModel):
    entry_type: Literal["purchase", "sale", "payment"]
    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    payment_method: Literal["card", "upi", "netbanking", "cash"]
    notes: Optional[str] = None

class LedgerEntryCreate(LedgerEntryBase):
    items: List[LedgerItemBase] = []

class LedgerEntry(TimestampSchema, LedgerEntryBase):
    id: int
    party_id: int
    party_name: str
    transaction_id: str
    amount: float
    status: str
    items: List[LedgerItem] = []

class LedgerSummary(BaseModel):
    total_transactions: int
    total_purchases: float
    total_sales: float
    net_amount: float
    purchase_count: int
    sales_count: int
    recent_transactions: List[LedgerEntry]
