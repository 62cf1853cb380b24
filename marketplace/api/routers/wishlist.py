from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity
from marketplace.data.database import get_db
from marketplace.domain.schemas import Identity, MessageOut, WishlistIn, WishlistItemOut
from marketplace.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("", response_model=List[WishlistItemOut])
def list_wishlist(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    return WishlistService(db).list_entries(identity.id)


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def add_to_wishlist(
    payload: WishlistIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    WishlistService(db).add_entry(identity.id, payload.product_id)
    return {"message": "Listing added to wishlist"}


@router.delete("/{listing_id}", response_model=MessageOut)
def remove_from_wishlist(
    listing_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    WishlistService(db).remove_entry(identity.id, listing_id)
    return {"message": "Listing removed from wishlist"}
