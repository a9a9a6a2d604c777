from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.kit_record import KitStatus


class BreedingRecordCreate(BaseModel):
    # Presence is checked by the use case so missing fields share one error message
    doe_id: str | None = None
    buck_id: str | None = None
    mating_date: date | None = None
    expected_birth_date: date | None = None
    notes: str | None = None


class BreedingRecordUpdate(BaseModel):
    actual_birth_date: date | None = None
    number_of_kits: int | None = Field(default=None, ge=0)
    notes: str | None = None


class KitRecordCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    breeding_record_id: UUID | None = None
    kit_number: int | None = None
    birth_weight: Decimal | None = None
    gender: str | None = None
    color: str | None = None
    status: KitStatus | None = None
    notes: str | None = None


class KitRecordUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    weaning_weight: Decimal | None = None
    status: KitStatus | None = None
    notes: str | None = None


class KitRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    breeding_record_id: UUID
    kit_number: int
    birth_weight: Decimal
    gender: str
    color: str
    status: str
    weaning_date: date
    weaning_weight: Decimal | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class BreedingRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    doe_id: str
    buck_id: str
    mating_date: date
    expected_birth_date: date
    alert_date: date
    actual_birth_date: date | None
    number_of_kits: int | None
    notes: str | None
    kits: list[KitRecordResponse] = []
    created_at: datetime
    updated_at: datetime


class CullingRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    doe_id: str
    reason: str
    number_of_kits: int
    recent_litters: list[int]


class BreedingRecordUpdateResponse(BreedingRecordResponse):
    culling_recommendation: CullingRecommendationResponse | None = None


class DeletedResponse(BaseModel):
    id: UUID
