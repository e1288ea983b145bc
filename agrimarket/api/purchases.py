from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from agrimarket.db.session import get_db
from agrimarket.models.user import User
from agrimarket.schemas.record import (
    PurchaseConfirmation, PurchaseRecord, PurchaseRequest, SaleRecord,
)
from agrimarket.services.payment import DemoPaymentGateway, PaymentGateway
from agrimarket.services.purchase import PurchaseWorkflow
from agrimarket.stores.records import RecordStore
from agrimarket.auth.security import get_current_active_user, is_customer, is_farmer

router = APIRouter()

_gateway = DemoPaymentGateway()


def get_payment_gateway() -> PaymentGateway:
    return _gateway


@router.post("/", response_model=PurchaseConfirmation, status_code=status.HTTP_201_CREATED)
def purchase_listing(
    purchase: PurchaseRequest,
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    current_user: User = Depends(is_customer)
):
    """
    Buy part or all of a crop listing.

    - **listing_id**: listing to buy from
    - **quantity**: units to buy, at most the listing's available quantity
    - **payment_method**: card, upi or netbanking
    """
    return PurchaseWorkflow(db, gateway).purchase(
        current_user, purchase.listing_id, purchase.quantity, purchase.payment_method
    )

@router.get("/", response_model=List[PurchaseRecord])
def read_my_purchases(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return RecordStore(db).list_purchases_by_customer(current_user.id)

@router.get("/sales", response_model=List[SaleRecord])
def read_my_sales(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_farmer)
):
    return RecordStore(db).list_sales_by_farmer(current_user.id)
