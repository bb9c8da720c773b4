"""Bucket-scoped key-value operations.

Every function takes the bucket id resolved by the auth gate for the current
request; keys are never shared between buckets. Each statement commits on its
own, so concurrent writers to one key resolve to last-write-wins.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import NotFoundError, StorageError
from .models import KeyValueEntry

logger = logging.getLogger(__name__)

def get_value(db: Session, bucket_id: str, key: str) -> bytes:
    try:
        row = db.execute(
            select(KeyValueEntry.value).where(
                KeyValueEntry.bucket == bucket_id, KeyValueEntry.key == key
            )
        ).one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Error getting key %r from bucket %r", key, bucket_id)
        raise StorageError() from exc

    if row is None:
        raise NotFoundError("Key not found")
    return row.value or b""

def put_value(db: Session, bucket_id: str, key: str, value: bytes) -> None:
    """Create or overwrite ``key``. An empty value is stored as-is."""
    stmt = insert(KeyValueEntry).values(bucket=bucket_id, key=key, value=value)
    stmt = stmt.on_conflict_do_update(
        index_elements=[KeyValueEntry.bucket, KeyValueEntry.key],
        set_={"value": stmt.excluded.value},
    )
    try:
        db.execute(stmt)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error putting key %r in bucket %r", key, bucket_id)
        raise StorageError() from exc

def delete_value(db: Session, bucket_id: str, key: str) -> None:
    """Remove ``key``; a key that does not exist is reported as NotFoundError."""
    try:
        result = db.execute(
            delete(KeyValueEntry).where(
                KeyValueEntry.bucket == bucket_id, KeyValueEntry.key == key
            )
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting key %r from bucket %r", key, bucket_id)
        raise StorageError() from exc

    if result.rowcount == 0:
        raise NotFoundError("Key not found")
