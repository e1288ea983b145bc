from typing import Optional
from pydantic import BaseModel, Field
from agrimarket.schemas.base import TimestampSchema

class ListingBase(BaseModel):
    crop_name: str = Field(..., min_length=1)
    price_per_unit: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    unit: str = "kg"
    description: Optional[str] = None

class ListingCreate(ListingBase):
    pass

class Listing(TimestampSchema, ListingBase):
    id: int
    seller_id: int
    seller_name: str
    # sold-out listings report zero
    quantity: int
    is_available: bool
