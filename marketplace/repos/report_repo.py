from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from marketplace.data.models.report import ReportModel


class ReportRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_report(self, report: ReportModel) -> ReportModel:
        self.db.add(report)
        self.db.flush()
        return report

    def list_reports(self) -> List[ReportModel]:
        return list(self.db.execute(select(ReportModel).order_by(ReportModel.id)).scalars())
