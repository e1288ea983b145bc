from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from agrimarket.db.session import get_db
from agrimarket.models.user import User
from agrimarket.schemas.cart import CartItem, CartItemCreate, CheckoutConfirmation, CheckoutRequest
from agrimarket.services.cart import CartService
from agrimarket.auth.security import get_current_active_user

router = APIRouter()

@router.get("/", response_model=List[CartItem])
def read_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return CartService(db).list_items(current_user.id)

@router.post("/", response_model=CartItem, status_code=status.HTTP_201_CREATED)
def add_cart_item(
    item: CartItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return CartService(db).add_item(current_user.id, item)

@router.post("/checkout", response_model=CheckoutConfirmation)
def checkout_cart(
    checkout: CheckoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return CartService(db).checkout(current_user, checkout.payment_method, checkout.transaction_id)

@router.delete("/{item_id}")
def remove_cart_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    CartService(db).remove_item(current_user.id, item_id)
    return {"message": "Item removed from cart"}
