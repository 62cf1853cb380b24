from typing import List

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.listing import ListingModel
from marketplace.domain.errors import NotFound, NotFoundOrForbidden
from marketplace.domain.schemas import Identity, ListingCreate, ListingOut, ListingUpdate
from marketplace.repos.listing_repo import ListingRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class ListingService:
    """
    Listing CRUD. Only the owner or an admin may change or delete a listing;
    any other caller gets the same NotFoundOrForbidden as for a missing one.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ListingRepo(db)

    def list_listings(self, owner_id: int | None = None) -> List[ListingOut]:
        return [ListingOut.model_validate(l) for l in self.repo.list_listings(owner_id)]

    def get_listing(self, listing_id: int) -> ListingOut:
        listing = self.repo.get_listing(listing_id)
        if not listing:
            raise NotFound("Listing not found")
        return ListingOut.model_validate(listing)

    def create_listing(self, identity: Identity, payload: ListingCreate) -> ListingOut:
        with transaction(self.db):
            listing = self.repo.create_listing(
                ListingModel(owner_id=identity.id, **payload.model_dump())
            )

        logger.info(f"User {identity.id} created listing {listing.id}")
        return ListingOut.model_validate(listing)

    def update_listing(self, identity: Identity, listing_id: int, payload: ListingUpdate) -> ListingOut:
        # fields that were not sent stay untouched
        data = payload.model_dump(exclude_unset=True)

        with transaction(self.db):
            if not self.repo.update_owned_listing(listing_id, identity.id, identity.is_admin, data):
                raise NotFoundOrForbidden("Listing not found")
            listing = self.repo.reload_listing(listing_id)

        logger.info(f"User {identity.id} updated listing {listing_id}: {sorted(data)}")
        return ListingOut.model_validate(listing)

    def delete_listing(self, identity: Identity, listing_id: int) -> None:
        with transaction(self.db):
            if not self.repo.delete_owned_listing(listing_id, identity.id, identity.is_admin):
                raise NotFoundOrForbidden("Listing not found")

        logger.info(f"User {identity.id} deleted listing {listing_id}")
