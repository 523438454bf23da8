# taskmanager/application/use_cases/comment_use_cases.py

import logging
from typing import List
from uuid import UUID

from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.domain.exceptions import PermissionDeniedException, ResourceNotFoundException
from taskmanager.domain.models.task import Comment

logger = logging.getLogger(__name__)


class AsyncCommentService:
    """
    Comments on tasks.

    Only the author may edit a comment; the author or the task owner may delete it.
    """

    def __init__(self, store: ITaskStore):
        self.store = store

    async def list_comments(self, task_id: UUID) -> List[Comment]:
        return await self.store.list_comments(task_id)

    async def get_comment(self, comment_id: UUID) -> Comment:
        comment = await self.store.get_comment(comment_id)
        if not comment:
            raise ResourceNotFoundException("Comment not found", resource_id=comment_id)
        return comment

    async def create_comment(self, task_id: UUID, author_id: UUID, content: str) -> Comment:
        if not await self.store.get_task(task_id):
            raise ResourceNotFoundException("Task not found", resource_id=task_id)
        comment = await self.store.create_comment(
            Comment(id=None, content=content, task_id=task_id, author_id=author_id)
        )
        logger.info(f"Comment {comment.id} added to task {task_id}")
        return comment

    async def update_comment(self, comment_id: UUID, user_id: UUID, content: str) -> Comment:
        comment = await self.get_comment(comment_id)
        if not comment.is_authored_by(user_id):
            raise PermissionDeniedException("You can only update your own comments")
        updated = await self.store.update_comment(comment_id, content)
        if not updated:
            raise ResourceNotFoundException("Comment not found", resource_id=comment_id)
        return updated

    async def delete_comment(self, comment_id: UUID, user_id: UUID) -> None:
        comment = await self.get_comment(comment_id)
        if not comment.is_authored_by(user_id):
            task = await self.store.get_task(comment.task_id)
            if not task or not task.is_owned_by(user_id):
                raise PermissionDeniedException(
                    "You can only delete your own comments or comments on your tasks"
                )
        await self.store.delete_comment(comment_id)
        logger.info(f"Comment {comment_id} deleted by user {user_id}")
