from sqlalchemy import Column, String, Numeric, Boolean, ForeignKey, Integer, CheckConstraint
from sqlalchemy.orm import relationship
from agrimarket.models.base import BaseModel

class Listing(BaseModel):
    __tablename__ = "crop_listings"
    
    seller_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    seller_name = Column(String(100), nullable=False)
    crop_name = Column(String(100), nullable=False)
    price_per_unit = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(20), nullable=False, default='kg')
    description = Column(String)
    is_available = Column(Boolean, nullable=False, default=True)
    
    seller = relationship("User")

    __table_args__ = (
        CheckConstraint("price_per_unit >= 0", name="ck_listing_price_nonneg"),
        CheckConstraint("quantity >= 0", name="ck_listing_qty_nonneg"),
    )
