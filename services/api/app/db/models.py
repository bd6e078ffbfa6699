from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class IndexedTransaction(Base):
    """A resolved transaction record as handed over by the upstream decoder."""

    __tablename__ = "transactions"

    tx_id: Mapped[str] = mapped_column(String, primary_key=True)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    record_json: Mapped[dict] = mapped_column(JSON, nullable=False)

    indexed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
