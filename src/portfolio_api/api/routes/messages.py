"""Admin inbox endpoints for contact messages."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query

from src.portfolio_api.api.dependencies import (
    AppSettings,
    CurrentAdmin,
    MessageServiceDep,
    StatsServiceDep,
)
from src.portfolio_api.repositories import ListingParams, message_query_builder
from src.portfolio_api.schemas.message import (
    MessageDeleteResponse,
    MessageDetailResponse,
    MessageListResponse,
    MessageRead,
    MessageUpdate,
    MessageUpdateResponse,
)
from src.portfolio_api.schemas.pagination import PaginationMeta
from src.portfolio_api.schemas.stats import MessageStatsResponse, UnreadCountResponse

router = APIRouter(prefix="/messages", tags=["messages"])


def get_listing_params(
    settings: AppSettings,
    page: Annotated[str | None, Query(description="Page number, from 1")] = None,
    limit: Annotated[str | None, Query(description="Rows per page")] = None,
    status: Annotated[str | None, Query(description="Status filter, or 'all'")] = None,
    search: Annotated[str | None, Query(description="Substring of name, email or message")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> ListingParams:
    """Clamp raw query values into listing parameters; never rejects the request."""
    return message_query_builder.params(
        page=page,
        limit=limit,
        status=status,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        default_limit=settings.listing_default_limit,
        max_limit=settings.listing_max_limit,
    )


@router.get(
    "",
    response_model=MessageListResponse,
    summary="List messages",
    description="Paginated, filterable and searchable inbox with whole-table counts.",
)
async def list_messages(
    _admin: CurrentAdmin,
    service: MessageServiceDep,
    params: Annotated[ListingParams, Depends(get_listing_params)],
) -> MessageListResponse:
    page, stats = await service.list_messages(params)
    return MessageListResponse(
        messages=[MessageRead.model_validate(m) for m in page.items],
        pagination=PaginationMeta(
            page=page.page, limit=page.limit, total=page.total, pages=page.pages
        ),
        stats=stats,
    )


# Static paths are declared before /{message_id} so they are not captured by it


@router.get(
    "/stats/summary",
    response_model=MessageStatsResponse,
    summary="Message statistics",
)
async def message_stats(
    _admin: CurrentAdmin, stats_service: StatsServiceDep
) -> MessageStatsResponse:
    return MessageStatsResponse(stats=await stats_service.summary())


@router.get(
    "/count/unread",
    response_model=UnreadCountResponse,
    summary="Unread message count",
)
async def unread_count(
    _admin: CurrentAdmin, stats_service: StatsServiceDep
) -> UnreadCountResponse:
    return UnreadCountResponse(count=await stats_service.unread_count())


@router.get(
    "/{message_id}",
    response_model=MessageDetailResponse,
    summary="Get message",
    description="Fetching an unread message marks it read.",
    responses={
        400: {"description": "Invalid message ID"},
        404: {"description": "Message not found"},
    },
)
async def get_message(
    message_id: str, _admin: CurrentAdmin, service: MessageServiceDep
) -> MessageDetailResponse:
    message = await service.get_and_mark_read(message_id)
    return MessageDetailResponse(message=MessageRead.model_validate(message))


@router.put(
    "/{message_id}",
    response_model=MessageUpdateResponse,
    summary="Update message",
    responses={
        400: {"description": "Invalid ID, invalid status, or nothing to update"},
        404: {"description": "Message not found"},
    },
)
async def update_message(
    message_id: str,
    _admin: CurrentAdmin,
    service: MessageServiceDep,
    changes: Annotated[MessageUpdate | None, Body()] = None,
) -> MessageUpdateResponse:
    message = await service.update(message_id, changes or MessageUpdate())
    return MessageUpdateResponse(
        message="Message updated successfully",
        data=MessageRead.model_validate(message),
    )


@router.delete(
    "/{message_id}",
    response_model=MessageDeleteResponse,
    summary="Delete message",
    responses={404: {"description": "Message not found"}},
)
async def delete_message(
    message_id: str, _admin: CurrentAdmin, service: MessageServiceDep
) -> MessageDeleteResponse:
    await service.delete(message_id)
    return MessageDeleteResponse(message="Message deleted successfully")
