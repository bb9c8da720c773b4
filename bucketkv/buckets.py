import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import ConflictError, StorageError, ValidationError
from .models import Bucket

logger = logging.getLogger(__name__)

def _is_duplicate_email(exc: IntegrityError) -> bool:
    # sqlite reports "UNIQUE constraint failed: buckets.email"
    return "buckets.email" in str(exc.orig)

def create_bucket(db: Session, email: str) -> Bucket:
    """Insert a new bucket for ``email`` with a fresh id and bearer token.

    Raises ConflictError if a bucket already exists for the email and
    StorageError for any other database failure.
    """
    if not email:
        raise ValidationError("Email is required")

    bucket = Bucket(
        bucket_id=str(uuid.uuid4()),
        email=email,
        token=str(uuid.uuid4()),
    )
    db.add(bucket)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if _is_duplicate_email(exc):
            raise ConflictError("Email address already in use") from exc
        logger.exception("Error creating bucket for email %r", email)
        raise StorageError("Failed to create bucket") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating bucket for email %r", email)
        raise StorageError("Failed to create bucket") from exc

    logger.info("Created bucket %s", bucket.bucket_id)
    return bucket
