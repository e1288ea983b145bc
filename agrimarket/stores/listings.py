import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from agrimarket.core.errors import (
    InsufficientQuantity, ListingUnavailable, NotFound, ValidationError
)
from agrimarket.models.listing import Listing
from agrimarket.models.user import User
from agrimarket.schemas.listing import ListingCreate

logger = logging.getLogger(__name__)


class ListingStore:
    """
    Crop listings offered for sale.

    Writes are flushed, never committed: the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, listing_id: int) -> Optional[Listing]:
        return self.db.query(Listing).filter(Listing.id == listing_id).first()

    def create(self, seller: User, listing: ListingCreate) -> Listing:
        db_listing = Listing(
            seller_id=seller.id,
            seller_name=seller.display_name,
            crop_name=listing.crop_name.strip(),
            price_per_unit=listing.price_per_unit,
            quantity=listing.quantity,
            unit=listing.unit or "kg",
            description=listing.description,
            is_available=listing.quantity > 0,
        )
        self.db.add(db_listing)
        self.db.flush()
        return db_listing

    def delete(self, listing_id: int) -> None:
        db_listing = self.get(listing_id)
        if db_listing is None:
            raise NotFound("Listing not found")
        self.db.delete(db_listing)
        self.db.flush()

    def list_available(self) -> List[Listing]:
        return (
            self.db.query(Listing)
            .filter(Listing.is_available == True)
            .order_by(Listing.created_at.desc(), Listing.id.desc())
            .all()
        )

    def list_by_seller(self, seller_id: int) -> List[Listing]:
        return (
            self.db.query(Listing)
            .filter(Listing.seller_id == seller_id)
            .order_by(Listing.created_at.desc(), Listing.id.desc())
            .all()
        )

    def decrement_quantity(self, listing_id: int, amount: int) -> Listing:
        """
        Take ``amount`` units out of a listing.

        The check and the decrement are one conditional UPDATE, so of two
        concurrent callers racing for the last units only one matches a row.
        A listing that reaches zero is marked unavailable in the same
        transaction.
        """
        if amount <= 0:
            raise ValidationError("Quantity must be a positive integer")

        updated = (
            self.db.query(Listing)
            .filter(
                Listing.id == listing_id,
                Listing.is_available == True,
                Listing.quantity >= amount,
            )
            .update({Listing.quantity: Listing.quantity - amount}, synchronize_session=False)
        )

        if updated == 0:
            current = self._reload(listing_id)
            if current is None:
                raise NotFound("Listing not found")
            if not current.is_available:
                raise ListingUnavailable(f"Listing {current.crop_name} is not available")
            raise InsufficientQuantity(
                f"Not enough quantity for {current.crop_name}. "
                f"Available: {current.quantity}, Requested: {amount}"
            )

        self.db.query(Listing).filter(
            Listing.id == listing_id, Listing.quantity == 0
        ).update({Listing.is_available: False}, synchronize_session=False)

        listing = self._reload(listing_id)
        logger.debug("Listing %s decremented by %s, %s left", listing_id, amount, listing.quantity)
        return listing

    def _reload(self, listing_id: int) -> Optional[Listing]:
        return (
            self.db.query(Listing)
            .populate_existing()
            .filter(Listing.id == listing_id)
            .first()
        )
