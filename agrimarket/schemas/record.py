from typing import Optional, Union
from pydantic import BaseModel
from agrimarket.schemas.base import TimestampSchema

# checked by the purchase workflow so bad input comes back as validation_error
class PurchaseRequest(BaseModel):
    listing_id: Optional[int] = None
    quantity: Optional[Union[int, float]] = None
    payment_method: Optional[str] = None

class PurchaseConfirmation(BaseModel):
    transaction_id: str
    crop_name: str
    quantity: int
    total_amount: float
    seller_name: str

class SaleRecord(TimestampSchema):
    id: int
    seller_id: int
    seller_name: str
    listing_id: Optional[int] = None
    crop_name: str
    quantity: int
    unit: str
    unit_price: float
    total_amount: float
    buyer_id: int
    buyer_name: str
    transaction_id: str
    payment_method: str

class PurchaseRecord(TimestampSchema):
    id: int
    buyer_id: int
    crop_name: str
    seller_name: str
    quantity: int
    unit: str
    unit_price: float
    total_amount: float
    transaction_id: str
    payment_method: str
    status: str
