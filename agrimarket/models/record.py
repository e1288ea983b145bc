from sqlalchemy import Column, Enum, Numeric, String, ForeignKey, Integer
from agrimarket.models.base import BaseModel

PAYMENT_METHODS = ('card', 'upi', 'netbanking')


class SaleRecord(BaseModel):
    """Seller-side view of a completed purchase."""
    __tablename__ = "sale_records"
    
    seller_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    seller_name = Column(String(100), nullable=False)
    # kept after the listing itself is deleted
    listing_id = Column(Integer)
    crop_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(20), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    buyer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    buyer_name = Column(String(100), nullable=False)
    transaction_id = Column(String(80), nullable=False, unique=True)
    payment_method = Column(Enum(*PAYMENT_METHODS, name='sale_payment_methods'), nullable=False)


class PurchaseRecord(BaseModel):
    """Buyer-side view of a completed purchase or checked-out cart item."""
    __tablename__ = "purchase_records"
    
    buyer_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    crop_name = Column(String(100), nullable=False)
    seller_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(20), nullable=False, default='kg')
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    transaction_id = Column(String(80), nullable=False, index=True)
    payment_method = Column(Enum(*PAYMENT_METHODS, name='purchase_payment_methods'), nullable=False)
    status = Column(Enum('completed', 'pending', 'cancelled', name='purchase_status'), default='completed')
