# taskmanager/adapters/outbound/persistence/models/task_model.py

"""
Modelos de tarefas, comentários e dados de referência (categorias, prioridades).
"""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from taskmanager.adapters.outbound.persistence.models.base_model import Base
from taskmanager.domain.models.task import (
    Comment,
    Task,
    TaskCategory,
    TaskPriority,
    TaskStatus,
)
from taskmanager.shared.utils.datetime_utils import DateTimeUtil


class TaskCategoryModel(Base):
    __tablename__ = "task_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)

    def to_domain(self) -> TaskCategory:
        return TaskCategory(id=self.id, name=self.name)


class TaskPriorityModel(Base):
    """Prioridade; `level` define a ordem (LOW=1 ... URGENT=4)."""
    __tablename__ = "task_priorities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)
    level = Column(Integer, nullable=False)

    def to_domain(self) -> TaskPriority:
        return TaskPriority(id=self.id, name=self.name, level=self.level)


class TaskModel(Base):
    """
    Tarefa pertencente a um usuário.

    Attributes:
        id: Identificador único (UUID)
        status: PENDING, IN_PROGRESS ou COMPLETED
        created_by_id: Dono da tarefa; remover o usuário remove suas tarefas
    """
    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(Enum(TaskStatus, name="task_status"), nullable=False, default=TaskStatus.PENDING)
    priority_id = Column(Integer, ForeignKey("task_priorities.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("task_categories.id"), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_by_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    category = relationship("TaskCategoryModel", lazy="joined")
    priority = relationship("TaskPriorityModel", lazy="joined")
    created_by = relationship("UserModel", lazy="joined")

    comments = relationship(
        "CommentModel",
        back_populates="task",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload",
    )

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
            priority_id=self.priority_id,
            category_id=self.category_id,
            due_date=DateTimeUtil.ensure_utc(self.due_date),
            created_by_id=self.created_by_id,
            created_at=DateTimeUtil.ensure_utc(self.created_at),
            updated_at=DateTimeUtil.ensure_utc(self.updated_at),
            category=self.category.to_domain() if self.category else None,
            priority=self.priority.to_domain() if self.priority else None,
            created_by=self.created_by.to_summary() if self.created_by else None,
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskModel":
        return cls(
            id=task.id or uuid.uuid4(),
            title=task.title,
            description=task.description,
            status=task.status,
            priority_id=task.priority_id,
            category_id=task.category_id,
            due_date=task.due_date,
            created_by_id=task.created_by_id,
        )


class CommentModel(Base):
    __tablename__ = "comments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    content = Column(String(1000), nullable=False)
    task_id = Column(UUID(as_uuid=True), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    task = relationship("TaskModel", back_populates="comments", lazy="noload")
    author = relationship("UserModel", lazy="joined")

    def to_domain(self) -> Comment:
        return Comment(
            id=self.id,
            content=self.content,
            task_id=self.task_id,
            author_id=self.author_id,
            created_at=DateTimeUtil.ensure_utc(self.created_at),
            updated_at=DateTimeUtil.ensure_utc(self.updated_at),
            author=self.author.to_summary() if self.author else None,
        )

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentModel":
        return cls(
            id=comment.id or uuid.uuid4(),
            content=comment.content,
            task_id=comment.task_id,
            author_id=comment.author_id,
        )
