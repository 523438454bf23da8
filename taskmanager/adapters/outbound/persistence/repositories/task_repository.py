# taskmanager/adapters/outbound/persistence/repositories/task_repository.py

"""
SQLAlchemy implementation of the task store (tasks, comments, categories, priorities).
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from taskmanager.adapters.outbound.persistence.models.task_model import (
    CommentModel,
    TaskCategoryModel,
    TaskModel,
    TaskPriorityModel,
)
from taskmanager.adapters.outbound.persistence.repositories.base_repository import (
    AsyncSQLAlchemyRepository,
)
from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.domain.models.task import (
    Comment,
    SortDirection,
    Task,
    TaskCategory,
    TaskChanges,
    TaskFilter,
    TaskPriority,
    TaskSortField,
)

_SORT_COLUMNS = {
    TaskSortField.PRIORITY: TaskPriorityModel.level,
    TaskSortField.STATUS: TaskModel.status,
    TaskSortField.DUE_DATE: TaskModel.due_date,
    TaskSortField.CREATED_AT: TaskModel.created_at,
}


class SQLAlchemyTaskStore(AsyncSQLAlchemyRepository, ITaskStore):
    """Task store backed by PostgreSQL through SQLAlchemy."""

    # ———— REFERENCE DATA ————

    async def get_category(self, category_id: int) -> Optional[TaskCategory]:
        try:
            category = await self._get_model(TaskCategoryModel, category_id)
            return category.to_domain() if category else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching category {category_id}", e)

    async def list_categories(self) -> List[TaskCategory]:
        try:
            result = await self.db.execute(select(TaskCategoryModel).order_by(TaskCategoryModel.id))
            return [c.to_domain() for c in result.scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail("Error listing categories", e)

    async def create_category(self, name: str) -> TaskCategory:
        try:
            category = TaskCategoryModel(name=name)
            self.db.add(category)
            await self.db.commit()
            return category.to_domain()
        except SQLAlchemyError as e:
            raise await self._fail(f"Error creating category {name}", e)

    async def get_priority(self, priority_id: int) -> Optional[TaskPriority]:
        try:
            priority = await self._get_model(TaskPriorityModel, priority_id)
            return priority.to_domain() if priority else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching priority {priority_id}", e)

    async def list_priorities(self) -> List[TaskPriority]:
        try:
            result = await self.db.execute(select(TaskPriorityModel).order_by(TaskPriorityModel.level))
            return [p.to_domain() for p in result.scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail("Error listing priorities", e)

    async def create_priority(self, name: str, level: int) -> TaskPriority:
        try:
            priority = TaskPriorityModel(name=name, level=level)
            self.db.add(priority)
            await self.db.commit()
            return priority.to_domain()
        except SQLAlchemyError as e:
            raise await self._fail(f"Error creating priority {name}", e)

    # ———— TASKS ————

    async def create_task(self, task: Task) -> Task:
        try:
            model = TaskModel.from_domain(task)
            self.db.add(model)
            await self.db.commit()
            return await self.get_task(model.id)
        except SQLAlchemyError as e:
            raise await self._fail("Error creating task", e)

    async def get_task(self, task_id: UUID) -> Optional[Task]:
        try:
            task = await self._get_model(TaskModel, task_id)
            return task.to_domain() if task else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching task {task_id}", e)

    async def list_tasks(self, owner_id: UUID, task_filter: TaskFilter) -> List[Task]:
        try:
            query = (
                select(TaskModel)
                .join(TaskPriorityModel, TaskModel.priority_id == TaskPriorityModel.id)
                .where(TaskModel.created_by_id == owner_id)
            )

            if task_filter.priority_ids:
                query = query.where(TaskModel.priority_id.in_(task_filter.priority_ids))
            if task_filter.statuses:
                query = query.where(TaskModel.status.in_(task_filter.statuses))
            if task_filter.due_date_from:
                query = query.where(TaskModel.due_date >= task_filter.due_date_from)
            if task_filter.due_date_to:
                query = query.where(TaskModel.due_date <= task_filter.due_date_to)
            if task_filter.created_at_from:
                query = query.where(TaskModel.created_at >= task_filter.created_at_from)
            if task_filter.created_at_to:
                query = query.where(TaskModel.created_at <= task_filter.created_at_to)

            column = _SORT_COLUMNS[task_filter.sort_by]
            if task_filter.sort_direction == SortDirection.ASC:
                query = query.order_by(column.asc().nulls_last(), TaskModel.created_at.desc())
            else:
                query = query.order_by(column.desc().nulls_last(), TaskModel.created_at.desc())

            result = await self.db.execute(query)
            return [t.to_domain() for t in result.unique().scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail("Error listing tasks", e)

    async def update_task(self, task_id: UUID, changes: TaskChanges) -> Optional[Task]:
        try:
            task = await self._get_model(TaskModel, task_id)
            if not task:
                return None

            for name, value in changes.as_dict().items():
                setattr(task, name, value)

            await self.db.commit()
            return await self.get_task(task_id)
        except SQLAlchemyError as e:
            raise await self._fail(f"Error updating task {task_id}", e)

    async def delete_task(self, task_id: UUID) -> bool:
        try:
            result = await self.db.execute(delete(TaskModel).where(TaskModel.id == task_id))
            await self.db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            raise await self._fail(f"Error deleting task {task_id}", e)

    # ———— COMMENTS ————

    async def create_comment(self, comment: Comment) -> Comment:
        try:
            model = CommentModel.from_domain(comment)
            self.db.add(model)
            await self.db.commit()
            return await self.get_comment(model.id)
        except SQLAlchemyError as e:
            raise await self._fail("Error creating comment", e)

    async def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        try:
            comment = await self._get_model(CommentModel, comment_id)
            return comment.to_domain() if comment else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching comment {comment_id}", e)

    async def list_comments(self, task_id: UUID) -> List[Comment]:
        try:
            query = (
                select(CommentModel)
                .where(CommentModel.task_id == task_id)
                .order_by(CommentModel.created_at.desc())
            )
            result = await self.db.execute(query)
            return [c.to_domain() for c in result.unique().scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail(f"Error listing comments of task {task_id}", e)

    async def update_comment(self, comment_id: UUID, content: str) -> Optional[Comment]:
        try:
            comment = await self._get_model(CommentModel, comment_id)
            if not comment:
                return None
            comment.content = content
            await self.db.commit()
            return await self.get_comment(comment_id)
        except SQLAlchemyError as e:
            raise await self._fail(f"Error updating comment {comment_id}", e)

    async def delete_comment(self, comment_id: UUID) -> bool:
        try:
            result = await self.db.execute(delete(CommentModel).where(CommentModel.id == comment_id))
            await self.db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            raise await self._fail(f"Error deleting comment {comment_id}", e)
