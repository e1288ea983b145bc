import logging
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agrimarket.core.errors import (
    AgriMarketError, DuplicateTransactionId, NotFound, PersistenceFailure, ValidationError,
)
from agrimarket.models.cart import CartItem
from agrimarket.models.ledger import LedgerEntry, LedgerItem
from agrimarket.models.record import PurchaseRecord
from agrimarket.models.user import User
from agrimarket.schemas.cart import CartItemCreate, CheckoutConfirmation
from agrimarket.services.purchase import validate_payment_method
from agrimarket.stores.cart import CartStore
from agrimarket.stores.ledger import LedgerStore
from agrimarket.stores.records import RecordStore

logger = logging.getLogger(__name__)

# leaves room for the "_<item id>" suffix within the 80-character column
MAX_TRANSACTION_ID_LENGTH = 64

REQUIRED_FIELDS = ("crop", "company", "price_per_unit", "quantity")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart = CartStore(db)
        self.records = RecordStore(db)
        self.ledger = LedgerStore(db)

    def add_item(self, user_id: int, item: CartItemCreate) -> CartItem:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(getattr(item, name))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if item.price_per_unit <= 0:
            raise ValidationError("Price per unit must be greater than zero")
        if item.quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        db_item = CartItem(
            user_id=user_id,
            crop=item.crop.strip(),
            company=item.company.strip(),
            price_per_unit=item.price_per_unit,
            quantity=item.quantity,
            image_url=item.image_url,
        )
        try:
            self.cart.add(db_item)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceFailure("Failed to add to cart") from e
        self.db.refresh(db_item)
        return db_item

    def list_items(self, user_id: int) -> List[CartItem]:
        return self.cart.list_items(user_id)

    def remove_item(self, user_id: int, item_id: int) -> None:
        item = self.cart.get_owned(user_id, item_id)
        if item is None:
            raise NotFound("Item not found")
        try:
            self.cart.delete(item)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceFailure("Failed to remove item") from e

    def checkout(self, user: User, payment_method: str, transaction_id: str) -> CheckoutConfirmation:
        """
        Turn every item in the user's cart into a purchase record.

        Each item gets its own purchase record under ``<transaction_id>_<item id>``
        and the user's ledger gets one entry for the whole cart under
        ``transaction_id``. The cart is emptied in the same transaction, so
        either all items are converted or the cart is left untouched.
        """
        validate_payment_method(payment_method)
        transaction_id = (transaction_id or "").strip()
        if not transaction_id:
            raise ValidationError("Transaction id is required")
        if len(transaction_id) > MAX_TRANSACTION_ID_LENGTH:
            raise ValidationError(
                f"Transaction id must be at most {MAX_TRANSACTION_ID_LENGTH} characters"
            )

        user_id = user.id
        user_name = user.display_name
        try:
            if self.ledger.exists(transaction_id):
                raise DuplicateTransactionId(
                    f"Transaction {transaction_id} has already been recorded"
                )
            items = self.cart.list_items(user_id)
            if not items:
                raise ValidationError("Cart is empty")

            total_amount = Decimal("0")
            ledger_items = []
            for item in items:
                unit_price = Decimal(str(item.price_per_unit))
                item_total = unit_price * item.quantity
                total_amount += item_total
                self.records.record_purchase(PurchaseRecord(
                    buyer_id=user_id,
                    crop_name=item.crop,
                    seller_name=item.company,
                    quantity=item.quantity,
                    unit_price=unit_price,
                    total_amount=item_total,
                    transaction_id=f"{transaction_id}_{item.id}",
                    payment_method=payment_method,
                    status="completed",
                ))
                ledger_items.append(LedgerItem(
                    item_name=item.crop,
                    quantity=item.quantity,
                    unit_price=unit_price,
                ))

            self.ledger.append(LedgerEntry(
                party_id=user_id,
                party_name=user_name,
                transaction_id=transaction_id,
                entry_type="purchase",
                description=f"Cart checkout of {len(items)} item(s)",
                amount=total_amount,
                payment_method=payment_method,
                status="completed",
                items=ledger_items,
            ))
            self.cart.clear(user_id, [item.id for item in items])
            self.db.commit()
        except AgriMarketError as e:
            self.db.rollback()
            logger.warning("Checkout %s for user %s rejected: %s", transaction_id, user_id, e.message)
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Checkout %s for user %s rolled back", transaction_id, user_id)
            raise PersistenceFailure("Checkout could not be saved, please retry") from e

        logger.info(
            "Checkout %s completed: %s item(s) for %s", transaction_id, len(items), total_amount
        )
        return CheckoutConfirmation(
            transaction_id=transaction_id,
            items_converted=len(items),
            total_amount=float(total_amount),
        )
