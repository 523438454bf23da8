# taskmanager/adapters/inbound/api/v1/endpoints/comment_endpoint.py

from uuid import UUID

from fastapi import APIRouter, Depends, status

from taskmanager.adapters.inbound.api.deps import get_comment_service, get_current_user
from taskmanager.application.dtos.base_dto import ApiResponse, MessageResponse
from taskmanager.application.dtos.comment_dto import (
    CommentCreate,
    CommentData,
    CommentListData,
    CommentOutput,
    CommentUpdate,
)
from taskmanager.application.use_cases.comment_use_cases import AsyncCommentService
from taskmanager.domain.models.user import User
from taskmanager.shared.utils.error_responses import resource_errors

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
    responses=resource_errors,
)


@router.get(
    "/task/{task_id}",
    response_model=ApiResponse[CommentListData],
    summary="List comments of a task",
    description="Newest first.",
)
async def list_task_comments(
        task_id: UUID,
        _: User = Depends(get_current_user),
        service: AsyncCommentService = Depends(get_comment_service),
):
    comments = await service.list_comments(task_id)
    return ApiResponse[CommentListData](
        data=CommentListData(
            comments=[CommentOutput.model_validate(c) for c in comments],
            count=len(comments),
        ),
    )


@router.get(
    "/{comment_id}",
    response_model=ApiResponse[CommentData],
    summary="Get a comment",
)
async def get_comment(
        comment_id: UUID,
        _: User = Depends(get_current_user),
        service: AsyncCommentService = Depends(get_comment_service),
):
    comment = await service.get_comment(comment_id)
    return ApiResponse[CommentData](data=CommentData(comment=CommentOutput.model_validate(comment)))


@router.post(
    "",
    response_model=ApiResponse[CommentData],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
)
async def create_comment(
        comment_input: CommentCreate,
        user: User = Depends(get_current_user),
        service: AsyncCommentService = Depends(get_comment_service),
):
    comment = await service.create_comment(comment_input.task_id, user.id, comment_input.content)
    return ApiResponse[CommentData](
        message="Comment created successfully",
        data=CommentData(comment=CommentOutput.model_validate(comment)),
    )


@router.patch(
    "/{comment_id}",
    response_model=ApiResponse[CommentData],
    summary="Edit own comment",
)
async def update_comment(
        comment_id: UUID,
        comment_input: CommentUpdate,
        user: User = Depends(get_current_user),
        service: AsyncCommentService = Depends(get_comment_service),
):
    comment = await service.update_comment(comment_id, user.id, comment_input.content)
    return ApiResponse[CommentData](
        message="Comment updated successfully",
        data=CommentData(comment=CommentOutput.model_validate(comment)),
    )


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment",
    description="Allowed for the comment author and for the owner of the task.",
)
async def delete_comment(
        comment_id: UUID,
        user: User = Depends(get_current_user),
        service: AsyncCommentService = Depends(get_comment_service),
):
    await service.delete_comment(comment_id, user.id)
    return MessageResponse(message="Comment deleted successfully")
