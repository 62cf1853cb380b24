from typing import List

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.report import ReportModel
from marketplace.domain.errors import Forbidden, NotFound
from marketplace.domain.schemas import Identity, ReportOut
from marketplace.repos.comment_repo import CommentRepo
from marketplace.repos.report_repo import ReportRepo
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReportRepo(db)
        self.comments = CommentRepo(db)

    def report_comment(self, identity: Identity, comment_id: int, reason: str) -> ReportOut:
        with transaction(self.db):
            if self.comments.get_comment(comment_id) is None:
                raise NotFound("Comment not found")
            report = self.repo.create_report(
                ReportModel(user_id=identity.id, comment_id=comment_id, reason=reason)
            )

        logger.info(f"User {identity.id} reported comment {comment_id}")
        return ReportOut.model_validate(report)

    def list_reports(self, identity: Identity) -> List[ReportOut]:
        if not identity.is_admin:
            raise Forbidden("Admin access required")
        return [ReportOut.model_validate(r) for r in self.repo.list_reports()]
