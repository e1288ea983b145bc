import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agrimarket.core.errors import (
    AgriMarketError, InsufficientQuantity, ListingUnavailable, NotFound,
    PersistenceFailure, ValidationError,
)
from agrimarket.models.ledger import LedgerEntry, LedgerItem
from agrimarket.models.record import PAYMENT_METHODS, PurchaseRecord, SaleRecord
from agrimarket.models.user import User
from agrimarket.schemas.record import PurchaseConfirmation
from agrimarket.services.payment import Authorization, DemoPaymentGateway, PaymentError, PaymentGateway
from agrimarket.stores.ledger import LedgerStore, new_transaction_id
from agrimarket.stores.listings import ListingStore
from agrimarket.stores.records import RecordStore

logger = logging.getLogger(__name__)


def validate_payment_method(payment_method) -> None:
    if payment_method not in PAYMENT_METHODS:
        raise ValidationError(
            f"Invalid payment method. Must be one of: {', '.join(PAYMENT_METHODS)}"
        )


class PurchaseWorkflow:
    """
    Buys a quantity of a crop listing on behalf of a buyer.

    Everything the purchase writes (the listing decrement, the sale and
    purchase records and the seller's ledger entry) goes through the one
    session transaction and is committed together. Any failure rolls the
    session back and voids the payment authorization, so a failed call
    leaves nothing behind.
    """

    def __init__(self, db: Session, gateway: Optional[PaymentGateway] = None):
        self.db = db
        self.gateway = gateway or DemoPaymentGateway()
        self.listings = ListingStore(db)
        self.records = RecordStore(db)
        self.ledger = LedgerStore(db)

    def purchase(
        self,
        buyer: User,
        listing_id: int,
        quantity: int,
        payment_method: str,
    ) -> PurchaseConfirmation:
        if listing_id is None:
            raise ValidationError("Listing id is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive integer")
        validate_payment_method(payment_method)

        buyer_id = buyer.id
        buyer_name = buyer.display_name
        authorization = None
        try:
            listing = self.listings.get(listing_id)
            if listing is None:
                raise NotFound("Crop listing not found")
            if not listing.is_available:
                raise ListingUnavailable(f"Listing {listing.crop_name} is not available")
            if listing.quantity < quantity:
                raise InsufficientQuantity(
                    f"Not enough quantity for {listing.crop_name}. "
                    f"Available: {listing.quantity}, Requested: {quantity}"
                )

            unit_price = Decimal(str(listing.price_per_unit))
            total_amount = unit_price * quantity
            transaction_id = new_transaction_id()
            confirmation = PurchaseConfirmation(
                transaction_id=transaction_id,
                crop_name=listing.crop_name,
                quantity=quantity,
                total_amount=float(total_amount),
                seller_name=listing.seller_name,
            )

            authorization = self.gateway.authorize(transaction_id, total_amount, payment_method)

            self.listings.decrement_quantity(listing.id, quantity)

            self.records.record_sale(SaleRecord(
                seller_id=listing.seller_id,
                seller_name=listing.seller_name,
                listing_id=listing.id,
                crop_name=listing.crop_name,
                quantity=quantity,
                unit=listing.unit,
                unit_price=unit_price,
                total_amount=total_amount,
                buyer_id=buyer_id,
                buyer_name=buyer_name,
                transaction_id=transaction_id,
                payment_method=payment_method,
            ))
            self.records.record_purchase(PurchaseRecord(
                buyer_id=buyer_id,
                crop_name=listing.crop_name,
                seller_name=listing.seller_name,
                quantity=quantity,
                unit=listing.unit,
                unit_price=unit_price,
                total_amount=total_amount,
                transaction_id=transaction_id,
                payment_method=payment_method,
                status="completed",
            ))
            self.ledger.append(LedgerEntry(
                party_id=listing.seller_id,
                party_name=listing.seller_name,
                transaction_id=transaction_id,
                entry_type="sale",
                description=f"Sold {quantity} {listing.unit} of {listing.crop_name} to {buyer_name}",
                amount=total_amount,
                payment_method=payment_method,
                status="completed",
                items=[LedgerItem(
                    item_name=listing.crop_name,
                    quantity=quantity,
                    unit_price=unit_price,
                )],
            ))

            self.gateway.capture(authorization)
            self.db.commit()
        except AgriMarketError as e:
            self._abort(authorization)
            logger.warning("Purchase of listing %s by user %s rejected: %s", listing_id, buyer_id, e.message)
            raise
        except PaymentError as e:
            self._abort(authorization)
            logger.error("Payment failed for listing %s: %s", listing_id, e)
            raise PersistenceFailure(f"Payment could not be completed: {e}") from e
        except SQLAlchemyError as e:
            self._abort(authorization)
            logger.exception("Purchase of listing %s rolled back", listing_id)
            raise PersistenceFailure("Purchase could not be saved, please retry") from e

        logger.info(
            "Purchase %s completed: %s x %s for %s",
            confirmation.transaction_id, confirmation.quantity,
            confirmation.crop_name, confirmation.total_amount,
        )
        return confirmation

    def _abort(self, authorization: Optional[Authorization]) -> None:
        self.db.rollback()
        if authorization is None:
            return
        try:
            self.gateway.void(authorization)
        except PaymentError:
            logger.exception("Could not void payment %s", authorization.reference)
