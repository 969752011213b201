from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Engine, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class BlobRow(Base):
    __tablename__ = "blobs"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


class SQLiteBlobStore:
    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    def get(self, key: str) -> Optional[str]:
        with self.sessionmaker() as session:
            row = session.get(BlobRow, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        with self.sessionmaker() as session:
            row = session.get(BlobRow, key)
            if row is None:
                session.add(BlobRow(key=key, value=value, updated_at=now))
            else:
                row.value = value
                row.updated_at = now
            session.commit()
