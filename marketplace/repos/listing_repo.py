from typing import Any, Dict, List

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from marketplace.data.models.listing import ListingModel


class ListingRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_listing(self, listing_id: int) -> ListingModel | None:
        return self.db.get(ListingModel, listing_id)

    def reload_listing(self, listing_id: int) -> ListingModel | None:
        # after a Core UPDATE the identity map may hold stale values
        return self.db.get(ListingModel, listing_id, populate_existing=True)

    def list_listings(self, owner_id: int | None = None) -> List[ListingModel]:
        stmt = select(ListingModel).order_by(ListingModel.created_at.desc(), ListingModel.id.desc())
        if owner_id is not None:
            stmt = stmt.where(ListingModel.owner_id == owner_id)
        return list(self.db.execute(stmt).scalars())

    def create_listing(self, listing: ListingModel) -> ListingModel:
        self.db.add(listing)
        self.db.flush()
        return listing

    @staticmethod
    def _owned(listing_id: int, user_id: int, is_admin: bool) -> list:
        # WHERE id = :id AND (owner_id = :uid OR :is_admin)
        clauses = [ListingModel.id == listing_id]
        if not is_admin:
            clauses.append(ListingModel.owner_id == user_id)
        return clauses

    def update_owned_listing(self, listing_id: int, user_id: int, is_admin: bool, values: Dict[str, Any]) -> int:
        clauses = self._owned(listing_id, user_id, is_admin)
        if not values:
            # nothing to set, still tell the caller whether the row is theirs
            return len(self.db.execute(select(ListingModel.id).where(*clauses)).all())
        result = self.db.execute(
            update(ListingModel)
            .where(*clauses)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_owned_listing(self, listing_id: int, user_id: int, is_admin: bool) -> int:
        result = self.db.execute(
            delete(ListingModel)
            .where(*self._owned(listing_id, user_id, is_admin))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
