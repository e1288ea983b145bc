from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from agrimarket.core.errors import NotFound
from agrimarket.db.session import get_db
from agrimarket.models.user import User
from agrimarket.schemas.listing import Listing, ListingCreate
from agrimarket.stores.listings import ListingStore
from agrimarket.auth.security import get_current_active_user, is_farmer

router = APIRouter()

@router.post("/", response_model=Listing, status_code=status.HTTP_201_CREATED)
def create_listing(
    listing: ListingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(is_farmer)
):
    db_listing = ListingStore(db).create(current_user, listing)
    db.commit()
    db.refresh(db_listing)
    return db_listing

@router.get("/", response_model=List[Listing])
def read_available_listings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    return ListingStore(db).list_available()

@router.get("/mine", response_model=List[Listing])
def read_my_listings(
    db: Session = Depends(get_db),
    current_user: User = Depends(is_farmer)
):
    return ListingStore(db).list_by_seller(current_user.id)

@router.get("/{listing_id}", response_model=Listing)
def read_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    db_listing = ListingStore(db).get(listing_id)
    if db_listing is None:
        raise NotFound("Listing not found")
    return db_listing

@router.delete("/{listing_id}")
def delete_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(is_farmer)
):
    store = ListingStore(db)
    db_listing = store.get(listing_id)
    # another farmer's listing is reported as missing
    if db_listing is None or db_listing.seller_id != current_user.id:
        raise NotFound("Listing not found")
    
    store.delete(listing_id)
    db.commit()
    return {"message": "Listing deleted successfully"}
