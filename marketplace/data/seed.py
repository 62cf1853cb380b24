# marketplace/data/seed.py
from sqlalchemy.orm import sessionmaker

from marketplace.data.database import SessionLocal, transaction
from marketplace.data.models.user import UserModel
from marketplace.repos.user_repo import UserRepo
from marketplace.services.auth_service import hash_password
from marketplace.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_USERNAME
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def seed_admin(
    session_factory: sessionmaker = SessionLocal,
    username: str | None = ADMIN_USERNAME,
    password: str | None = ADMIN_PASSWORD,
    email: str = ADMIN_EMAIL,
) -> bool:
    """Creates the admin account once. Registration never hands out admin."""
    if not username or not password:
        return False

    db = session_factory()
    try:
        repo = UserRepo(db)
        # not forcing: only seed if absent
        if repo.get_by_username(username):
            return False
        with transaction(db):
            repo.create_user(
                UserModel(
                    username=username,
                    password=hash_password(password),
                    email=email,
                    name="Admin",
                    surname="Admin",
                    role="admin",
                    is_admin=True,
                )
            )
        logger.info(f"Seeded admin account {username}")
        return True
    finally:
        db.close()
