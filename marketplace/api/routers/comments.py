from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity
from marketplace.data.database import get_db
from marketplace.domain.schemas import CommentIn, CommentOut, Identity, ReportIn, ReportOut
from marketplace.services.comment_service import CommentService
from marketplace.services.report_service import ReportService

router = APIRouter(tags=["comments"])


@router.get("/listings/{listing_id}/comments", response_model=List[CommentOut])
def list_comments(listing_id: int, db: Session = Depends(get_db)):
    return CommentService(db).list_comments(listing_id)


@router.post("/listings/{listing_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def add_comment(
    listing_id: int,
    payload: CommentIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return CommentService(db).add_comment(identity, listing_id, payload.content)


@router.put("/comments/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: int,
    payload: CommentIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return CommentService(db).update_comment(identity, comment_id, payload.content)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    CommentService(db).delete_comment(identity, comment_id)
    return None


# reports hang off comments

@router.post("/comments/{comment_id}/report", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def report_comment(
    comment_id: int,
    payload: ReportIn,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return ReportService(db).report_comment(identity, comment_id, payload.reason)


@router.get("/reports", response_model=List[ReportOut])
def list_reports(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    return ReportService(db).list_reports(identity)
