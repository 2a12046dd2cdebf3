"""Milk record endpoints.

Every response is wrapped in the ``{status, message, data}`` envelope.
Administrator-only routes depend on ``require_admin`` so a non-admin is
turned away before the service is called. Records the caller may not see
are reported as 404.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from milk_collection.application.schemas import (
    ApiResponse,
    MilkRecordCreate,
    MilkRecordResponse,
    MilkRecordUpdate,
    MilkSummaryResponse,
    UserResponse,
)
from milk_collection.application.services import MilkRecordService, UserService
from milk_collection.domain.entities import Actor, MilkRecord
from milk_collection.domain.exceptions import EntityNotFoundError, InvalidFieldError
from milk_collection.infrastructure.dependencies import (
    get_current_actor,
    get_milk_record_service,
    get_user_service,
    require_admin,
)
from milk_collection.presentation.api.v1.endpoints.mappers import (
    record_to_response,
    user_to_response,
)

router = APIRouter(prefix="/milk", tags=["Milk"])


# ── Helpers ──────────────────────────────────────────────────────────


async def _with_owners(
    service: MilkRecordService, records: list[MilkRecord]
) -> list[MilkRecordResponse]:
    owners = await service.owners_of(records)
    return [record_to_response(r, owners.get(r.owner_user_id)) for r in records]


def _invalid(e: InvalidFieldError) -> HTTPException:
    return HTTPException(status_code=422, detail=str(e))


def _not_found(e: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Collections ──────────────────────────────────────────────────────


@router.get("/my-milk", response_model=ApiResponse[list[MilkRecordResponse]])
async def list_my_records(
    actor: Actor = Depends(get_current_actor),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[list[MilkRecordResponse]]:
    """The caller's own records."""
    records = await service.list_by_owner(actor.id)
    return ApiResponse(
        message="Your milk list retrieved successfully",
        data=await _with_owners(service, records),
    )


@router.get("", response_model=ApiResponse[list[MilkRecordResponse]])
async def list_records(
    actor: Actor = Depends(require_admin),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[list[MilkRecordResponse]]:
    """Every record (administrators only)."""
    records = await service.list_for_actor(actor)
    return ApiResponse(
        message="Milk list retrieved successfully",
        data=await _with_owners(service, records),
    )


@router.get("/user/{user_id}", response_model=ApiResponse[list[MilkRecordResponse]])
async def list_records_for_user(
    user_id: int,
    actor: Actor = Depends(require_admin),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[list[MilkRecordResponse]]:
    """All records of one owner (administrators only)."""
    records = await service.list_by_owner(user_id)
    return ApiResponse(
        message="User's milk list retrieved successfully",
        data=[record_to_response(r) for r in records],
    )


@router.get("/users", response_model=ApiResponse[list[UserResponse]])
async def list_owners(
    actor: Actor = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> ApiResponse[list[UserResponse]]:
    """Accounts a record can be assigned to (administrators only)."""
    accounts = await users.list_users()
    return ApiResponse(
        message="Users list retrieved successfully",
        data=[user_to_response(u) for u in accounts],
    )


@router.get("/type/{milk_type}", response_model=ApiResponse[list[MilkRecordResponse]])
async def list_records_by_type(
    milk_type: str,
    actor: Actor = Depends(get_current_actor),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[list[MilkRecordResponse]]:
    """Records of one milk type that the caller may see."""
    records = await service.list_by_type(milk_type, actor)
    return ApiResponse(
        message="Milk list retrieved successfully",
        data=[record_to_response(r) for r in records],
    )


@router.get("/range", response_model=ApiResponse[list[MilkRecordResponse]])
async def list_records_by_entry_date(
    start: datetime = Query(..., description="Inclusive lower bound on entry date"),
    end: datetime = Query(..., description="Inclusive upper bound on entry date"),
    actor: Actor = Depends(get_current_actor),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[list[MilkRecordResponse]]:
    """Visible records whose entry date falls within [start, end]."""
    try:
        records = await service.list_by_entry_date_between(start, end, actor)
    except InvalidFieldError as e:
        raise _invalid(e)
    return ApiResponse(
        message="Milk list retrieved successfully",
        data=[record_to_response(r) for r in records],
    )


@router.get("/summary", response_model=ApiResponse[MilkSummaryResponse])
async def summarize_records(
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
    actor: Actor = Depends(get_current_actor),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[MilkSummaryResponse]:
    """Totals over the caller's visible records."""
    try:
        summary = await service.summarize(actor, start=start, end=end)
    except InvalidFieldError as e:
        raise _invalid(e)
    return ApiResponse(message="Milk summary computed successfully", data=summary)


# ── Single record ────────────────────────────────────────────────────


@router.post("", response_model=ApiResponse[MilkRecordResponse], status_code=status.HTTP_201_CREATED)
async def create_record(
    data: MilkRecordCreate,
    actor: Actor = Depends(require_admin),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[MilkRecordResponse]:
    """Create a record on behalf of ``user_id`` (administrators only)."""
    try:
        record = await service.create_record(data, actor)
    except EntityNotFoundError as e:
        raise _not_found(e)
    except InvalidFieldError as e:
        raise _invalid(e)
    return ApiResponse(message="Milk created successfully", data=record_to_response(record))


@router.get("/{record_id}", response_model=ApiResponse[MilkRecordResponse])
async def get_record(
    record_id: int,
    actor: Actor = Depends(get_current_actor),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[MilkRecordResponse]:
    """Retrieve a single record the caller may see."""
    try:
        record = await service.get_record(record_id, actor)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(message="Milk retrieved successfully", data=record_to_response(record))


@router.put("/{record_id}", response_model=ApiResponse[MilkRecordResponse])
async def update_record(
    record_id: int,
    data: MilkRecordUpdate,
    actor: Actor = Depends(require_admin),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[MilkRecordResponse]:
    """Replace a record's measurements (administrators only)."""
    try:
        record = await service.update_record(record_id, data, actor)
    except EntityNotFoundError as e:
        raise _not_found(e)
    except InvalidFieldError as e:
        raise _invalid(e)
    return ApiResponse(message="Milk updated successfully", data=record_to_response(record))


@router.delete("/{record_id}", response_model=ApiResponse[None])
async def delete_record(
    record_id: int,
    actor: Actor = Depends(require_admin),
    service: MilkRecordService = Depends(get_milk_record_service),
) -> ApiResponse[None]:
    """Delete a record (administrators only)."""
    try:
        await service.delete_record(record_id, actor)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return ApiResponse(message="Milk deleted successfully")
