from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, CheckConstraint
from agrimarket.models.base import BaseModel

class CartItem(BaseModel):
    __tablename__ = "cart_items"
    
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    crop = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False)
    price_per_unit = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    image_url = Column(String(255))

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_qty_positive"),
    )
