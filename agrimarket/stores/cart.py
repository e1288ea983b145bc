from typing import List, Optional

from sqlalchemy.orm import Session

from agrimarket.models.cart import CartItem


class CartStore:
    def __init__(self, db: Session):
        self.db = db

    def add(self, item: CartItem) -> CartItem:
        self.db.add(item)
        self.db.flush()
        return item

    def get_owned(self, user_id: int, item_id: int) -> Optional[CartItem]:
        return self.db.query(CartItem).filter(
            CartItem.id == item_id, CartItem.user_id == user_id
        ).first()

    def list_items(self, user_id: int) -> List[CartItem]:
        return (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
            .all()
        )

    def delete(self, item: CartItem) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear(self, user_id: int, item_ids: List[int]) -> int:
        """Delete the given items from the user's cart."""
        if not item_ids:
            return 0
        removed = (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id, CartItem.id.in_(item_ids))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return removed
