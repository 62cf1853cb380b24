from typing import List

from sqlalchemy import delete, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from marketplace.data.models.listing import ListingModel
from marketplace.data.models.wishlist import WishlistModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_entry(self, user_id: int, listing_id: int) -> WishlistModel:
        entry = WishlistModel(user_id=user_id, listing_id=listing_id)
        self.db.add(entry)
        self.db.flush()
        return entry

    def remove_entry(self, user_id: int, listing_id: int) -> int:
        result = self.db.execute(
            delete(WishlistModel)
            .where(
                WishlistModel.user_id == user_id,
                WishlistModel.listing_id == listing_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def list_entries(self, user_id: int) -> List[Row]:
        return self.db.execute(
            select(
                WishlistModel.listing_id.label("product_id"),
                ListingModel.name.label("listing_name"),
                ListingModel.price,
                ListingModel.photo,
            )
            .join(ListingModel, ListingModel.id == WishlistModel.listing_id)
            .where(WishlistModel.user_id == user_id)
            .order_by(WishlistModel.id)
        ).all()
