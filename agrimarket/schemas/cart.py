from typing import Optional
from pydantic import BaseModel
from agrimarket.schemas.base import TimestampSchema

class CartItemCreate(BaseModel):
    # checked by the cart service so missing fields report a ValidationError
    crop: Optional[str] = None
    company: Optional[str] = None
    price_per_unit: Optional[float] = None
    quantity: Optional[int] = None
    image_url: Optional[str] = None

class CartItem(TimestampSchema):
    id: int
    user_id: int
    crop: str
    company: str
    price_per_unit: float
    quantity: int
    image_url: Optional[str] = None

class CheckoutRequest(BaseModel):
    payment_method: str
    transaction_id: str

class CheckoutConfirmation(BaseModel):
    transaction_id: str
    items_converted: int
    total_amount: float
