from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.api.deps import get_current_identity
from marketplace.data.database import get_db
from marketplace.domain.schemas import Identity, LoginIn, LoginOut, MessageOut, ProfileUpdate, RegisterIn, UserRead
from marketplace.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/register", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    service = UserService(db)
    service.register(payload)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = UserService(db)
    return service.login(payload)


@router.get("/users/me", response_model=UserRead)
def get_me(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    service = UserService(db)
    return service.get_user(identity.id)


@router.put("/users/me", response_model=UserRead)
def update_me(
    payload: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    return service.update_profile(identity.id, payload)
