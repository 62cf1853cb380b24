# marketplace/api/deps.py
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.domain.schemas import Identity
from marketplace.services.auth_service import resolve_identity
from marketplace.services.lock_service import LockService

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    return resolve_identity(credentials.credentials if credentials else None)


@lru_cache
def get_lock_service() -> LockService:
    # one redis connection pool per process
    return LockService()
