from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BreedingRecordORM(Base):
    __tablename__ = "breeding_records"
    __table_args__ = (
        Index("ix_breeding_records_farm_buck_mating", "farm_id", "buck_id", "mating_date"),
        Index("ix_breeding_records_farm_doe_birth", "farm_id", "doe_id", "actual_birth_date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("farms.id"), nullable=False
    )
    doe_id: Mapped[str] = mapped_column(String(64), nullable=False)
    buck_id: Mapped[str] = mapped_column(String(64), nullable=False)
    mating_date: Mapped[date] = mapped_column(Date, nullable=False)
    expected_birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    alert_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_kits: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
