from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from marketplace.data.models.comment import CommentModel
from marketplace.data.models.user import UserModel


class CommentRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_comment(self, comment_id: int, refresh: bool = False) -> CommentModel | None:
        return self.db.get(CommentModel, comment_id, populate_existing=refresh)

    def list_for_listing(self, listing_id: int) -> List[Row]:
        return self.db.execute(
            select(
                CommentModel.id,
                CommentModel.user_id,
                CommentModel.listing_id,
                UserModel.username,
                CommentModel.content,
                CommentModel.created_at,
            )
            .join(UserModel, UserModel.id == CommentModel.user_id)
            .where(CommentModel.listing_id == listing_id)
            .order_by(CommentModel.id)
        ).all()

    def create_comment(self, comment: CommentModel) -> CommentModel:
        self.db.add(comment)
        self.db.flush()
        return comment

    @staticmethod
    def _owned(comment_id: int, user_id: int, is_admin: bool) -> list:
        clauses = [CommentModel.id == comment_id]
        if not is_admin:
            clauses.append(CommentModel.user_id == user_id)
        return clauses

    def update_owned_comment(self, comment_id: int, user_id: int, is_admin: bool, content: str) -> int:
        result = self.db.execute(
            update(CommentModel)
            .where(*self._owned(comment_id, user_id, is_admin))
            .values(content=content)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_owned_comment(self, comment_id: int, user_id: int, is_admin: bool) -> int:
        result = self.db.execute(
            delete(CommentModel)
            .where(*self._owned(comment_id, user_id, is_admin))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
