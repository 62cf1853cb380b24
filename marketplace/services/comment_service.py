from typing import Any, Dict, List

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.comment import CommentModel
from marketplace.domain.errors import NotFound, NotFoundOrForbidden
from marketplace.domain.schemas import Identity
from marketplace.repos.comment_repo import CommentRepo
from marketplace.repos.listing_repo import ListingRepo
from marketplace.repos.user_repo import UserRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class CommentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CommentRepo(db)
        self.listings = ListingRepo(db)
        self.users = UserRepo(db)

    def list_comments(self, listing_id: int) -> List[Dict[str, Any]]:
        if self.listings.get_listing(listing_id) is None:
            raise NotFound("Listing not found")
        return [dict(row._mapping) for row in self.repo.list_for_listing(listing_id)]

    def add_comment(self, identity: Identity, listing_id: int, content: str) -> Dict[str, Any]:
        with transaction(self.db):
            if self.listings.get_listing(listing_id) is None:
                raise NotFound("Listing not found")
            comment = self.repo.create_comment(
                CommentModel(user_id=identity.id, listing_id=listing_id, content=content)
            )

        logger.info(f"User {identity.id} commented on listing {listing_id}")
        return self._comment_dict(comment, identity.username)

    def update_comment(self, identity: Identity, comment_id: int, content: str) -> Dict[str, Any]:
        with transaction(self.db):
            if not self.repo.update_owned_comment(comment_id, identity.id, identity.is_admin, content):
                raise NotFoundOrForbidden("Comment not found")
            comment = self.repo.get_comment(comment_id, refresh=True)

        # an admin may edit somebody else's comment, show the real author
        author = self.users.get_user(comment.user_id)
        return self._comment_dict(comment, author.username)

    def delete_comment(self, identity: Identity, comment_id: int) -> None:
        with transaction(self.db):
            if not self.repo.delete_owned_comment(comment_id, identity.id, identity.is_admin):
                raise NotFoundOrForbidden("Comment not found")

        logger.info(f"User {identity.id} deleted comment {comment_id}")

    def _comment_dict(self, comment: CommentModel, username: str) -> Dict[str, Any]:
        return {
            "id": comment.id,
            "user_id": comment.user_id,
            "listing_id": comment.listing_id,
            "username": username,
            "content": comment.content,
            "created_at": comment.created_at,
        }
