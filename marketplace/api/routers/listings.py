from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity
from marketplace.data.database import get_db
from marketplace.domain.schemas import Identity, ListingCreate, ListingOut, ListingUpdate
from marketplace.services.listing_service import ListingService

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("", response_model=List[ListingOut])
def list_listings(
    owner_id: int | None = Query(None),
    db: Session = Depends(get_db),
):
    return ListingService(db).list_listings(owner_id)


@router.get("/{listing_id}", response_model=ListingOut)
def get_listing(listing_id: int, db: Session = Depends(get_db)):
    return ListingService(db).get_listing(listing_id)


@router.post("", response_model=ListingOut, status_code=status.HTTP_201_CREATED)
def create_listing(
    payload: ListingCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ListingService(db).create_listing(identity, payload)


@router.put("/{listing_id}", response_model=ListingOut)
def update_listing(
    listing_id: int,
    payload: ListingUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ListingService(db).update_listing(identity, listing_id, payload)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_listing(
    listing_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    ListingService(db).delete_listing(identity, listing_id)
    return None
