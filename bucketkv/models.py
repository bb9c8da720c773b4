from typing import Optional

from sqlalchemy import LargeBinary, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

class Base(DeclarativeBase):
    pass

class Bucket(Base):
    __tablename__ = "buckets"

    bucket_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    token: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)

class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    # no foreign key: the auth gate resolves the bucket before any kv statement
    bucket: Mapped[str] = mapped_column(Text, primary_key=True)
    key: Mapped[str] = mapped_column(Text, primary_key=True)
    # raw request body, returned byte for byte
    value: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)
