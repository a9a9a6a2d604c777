from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from src.application.events.dispatcher import dispatch_events
from src.application.use_cases.breeding import (
    create_breeding_record,
    create_kit_record,
    delete_breeding_record,
    get_breeding_record,
    list_breeding_records,
    update_breeding_record,
    update_kit_record,
)
from src.config.settings import Settings
from src.domain.value_objects.permissions import MANAGE_BREEDING, VIEW_RABBITS
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.email.models import EmailService
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_email_service,
    get_uow,
)
from src.interfaces.http.schemas.breeding import (
    BreedingRecordCreate,
    BreedingRecordResponse,
    BreedingRecordUpdate,
    BreedingRecordUpdateResponse,
    CullingRecommendationResponse,
    DeletedResponse,
    KitRecordCreate,
    KitRecordResponse,
    KitRecordUpdate,
)

router = APIRouter(tags=["breeding"])


@router.post(
    "/breeding-records",
    response_model=BreedingRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_breeding_record_endpoint(
    payload: BreedingRecordCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(MANAGE_BREEDING)
    input_data = create_breeding_record.CreateBreedingRecordInput(
        doe_id=payload.doe_id,
        buck_id=payload.buck_id,
        mating_date=payload.mating_date,
        expected_birth_date=payload.expected_birth_date,
        notes=payload.notes,
    )
    return await create_breeding_record.execute(
        uow, context.farm_id, input_data, actor_user_id=context.user_id
    )


@router.get("/breeding-records", response_model=list[BreedingRecordResponse])
async def list_breeding_records_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(VIEW_RABBITS)
    return await list_breeding_records.execute(uow, context.farm_id)


@router.get("/breeding-records/{record_id}", response_model=BreedingRecordResponse)
async def get_breeding_record_endpoint(
    record_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(VIEW_RABBITS)
    return await get_breeding_record.execute(uow, context.farm_id, record_id)


@router.patch("/breeding-records/{record_id}", response_model=BreedingRecordUpdateResponse)
async def update_breeding_record_endpoint(
    record_id: UUID,
    payload: BreedingRecordUpdate,
    background_tasks: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
):
    context.require_permission(MANAGE_BREEDING)
    input_data = update_breeding_record.UpdateBreedingRecordInput(
        actual_birth_date=payload.actual_birth_date,
        number_of_kits=payload.number_of_kits,
        notes=payload.notes,
    )
    result = await update_breeding_record.execute(
        uow, context.farm_id, record_id, input_data, actor_user_id=context.user_id
    )

    # Culling alerts go out after the response (post-commit)
    events = uow.drain_events()
    if events:
        background_tasks.add_task(
            dispatch_events,
            events,
            email_service=email_service,
            alert_recipients=settings.breeding_alert_recipients_list,
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
        )

    response = BreedingRecordUpdateResponse.model_validate(result.record)
    if result.culling:
        response.culling_recommendation = CullingRecommendationResponse(
            doe_id=result.culling.doe_id,
            reason=result.culling.reason.value,
            number_of_kits=result.culling.number_of_kits,
            recent_litters=list(result.culling.recent_litters),
        )
    return response


@router.delete("/breeding-records/{record_id}", response_model=DeletedResponse)
async def delete_breeding_record_endpoint(
    record_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(MANAGE_BREEDING)
    return await delete_breeding_record.execute(
        uow, context.farm_id, record_id, actor_user_id=context.user_id
    )


@router.post(
    "/kit-records", response_model=KitRecordResponse, status_code=status.HTTP_201_CREATED
)
async def create_kit_record_endpoint(
    payload: KitRecordCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(MANAGE_BREEDING)
    input_data = create_kit_record.CreateKitRecordInput(
        breeding_record_id=payload.breeding_record_id,
        kit_number=payload.kit_number,
        birth_weight=payload.birth_weight,
        gender=payload.gender,
        color=payload.color,
        status=payload.status,
        notes=payload.notes,
    )
    return await create_kit_record.execute(
        uow, context.farm_id, input_data, actor_user_id=context.user_id
    )


@router.patch("/kit-records/{kit_id}", response_model=KitRecordResponse)
async def update_kit_record_endpoint(
    kit_id: UUID,
    payload: KitRecordUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    context.require_permission(MANAGE_BREEDING)
    input_data = update_kit_record.UpdateKitRecordInput(
        weaning_weight=payload.weaning_weight,
        status=payload.status,
        notes=payload.notes,
    )
    return await update_kit_record.execute(
        uow, context.farm_id, kit_id, input_data, actor_user_id=context.user_id
    )
