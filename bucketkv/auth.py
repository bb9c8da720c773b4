import logging
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .errors import AuthError, StorageError
from .models import Bucket

logger = logging.getLogger(__name__)

def parse_bearer(authorization: Optional[str]) -> str:
    """Return the credential from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise AuthError("Authorization header required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError("Authorization header format must be Bearer {token}")
    return parts[1]

def resolve_bucket(db: Session, token: str, context: str = "") -> str:
    try:
        bucket_id = db.execute(
            select(Bucket.bucket_id).where(Bucket.token == token)
        ).scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Error authenticating token for %s", context or "request")
        raise StorageError("Database error during authentication") from exc

    if bucket_id is None:
        raise AuthError("Invalid token")
    return bucket_id

def authenticate(
    request: Request,
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> str:
    return resolve_bucket(
        db, parse_bearer(authorization), f"{request.method} {request.url.path}"
    )
