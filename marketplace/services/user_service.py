from typing import Any, Dict

from sqlalchemy.orm import Session

from marketplace.data.database import transaction
from marketplace.data.models.user import UserModel
from marketplace.domain.errors import Conflict, InvalidCredential, NotFound
from marketplace.domain.schemas import LoginIn, ProfileUpdate, RegisterIn, UserRead
from marketplace.repos.user_repo import UserRepo
from marketplace.services.auth_service import create_access_token, hash_password, verify_password
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserRead:
        try:
            with transaction(self.db):
                user = self.repo.create_user(
                    UserModel(
                        username=payload.username,
                        password=hash_password(payload.password),
                        email=payload.email,
                        name=payload.name,
                        surname=payload.surname,
                        role="user",
                        is_admin=False,
                    )
                )
        except Conflict as e:
            raise Conflict("Username or email already taken") from e

        logger.info(f"Registered user {user.id} ({user.username})")
        return UserRead.model_validate(user)

    def login(self, payload: LoginIn) -> Dict[str, Any]:
        user = self.repo.get_by_username(payload.username)

        # same answer for unknown user and wrong password
        if user is None or not verify_password(payload.password, user.password):
            raise InvalidCredential("Invalid username or password")

        return {
            "message": "Login successful",
            "user": UserRead.model_validate(user),
            "access_token": create_access_token(user),
            "token_type": "bearer",
        }

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return UserRead.model_validate(user)

    def update_profile(self, user_id: int, payload: ProfileUpdate) -> UserRead:
        data = payload.model_dump(exclude_unset=True)

        try:
            with transaction(self.db):
                user = self.repo.get_user(user_id)
                if not user:
                    raise NotFound("User not found")
                for field, value in data.items():
                    setattr(user, field, value)
        except Conflict as e:
            raise Conflict("Email already taken") from e

        logger.info(f"Updated profile of user {user_id}: {sorted(data)}")
        return UserRead.model_validate(user)
