from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class KitRecordORM(Base):
    __tablename__ = "kit_records"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    breeding_record_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeding_records.id"), nullable=False, index=True
    )
    kit_number: Mapped[int] = mapped_column(Integer, nullable=False)
    birth_weight: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    gender: Mapped[str] = mapped_column(String(6), nullable=False)
    color: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="alive")
    weaning_date: Mapped[date] = mapped_column(Date, nullable=False)
    weaning_weight: Mapped[Decimal | None] = mapped_column(Numeric(8, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
