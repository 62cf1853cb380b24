from typing import Any, Dict, List

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.domain.errors import Conflict, NotFound
from marketplace.repos.listing_repo import ListingRepo
from marketplace.repos.wishlist_repo import WishlistRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = WishlistRepo(db)
        self.listings = ListingRepo(db)

    def list_entries(self, user_id: int) -> List[Dict[str, Any]]:
        return [dict(row._mapping) for row in self.repo.list_entries(user_id)]

    def add_entry(self, user_id: int, listing_id: int) -> None:
        if self.listings.get_listing(listing_id) is None:
            raise NotFound("Listing not found")

        # u_wishlist_user_listing decides, not a prior read
        try:
            with transaction(self.db):
                self.repo.add_entry(user_id, listing_id)
        except Conflict as e:
            raise Conflict("Listing already in wishlist") from e

        logger.info(f"User {user_id} added listing {listing_id} to wishlist")

    def remove_entry(self, user_id: int, listing_id: int) -> None:
        with transaction(self.db):
            if not self.repo.remove_entry(user_id, listing_id):
                raise NotFound("Listing not in wishlist")
