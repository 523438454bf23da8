# taskmanager/adapters/outbound/persistence/repositories/memory_repository.py

"""
In-memory implementations of the credential and task stores.

Both stores share one InMemoryDatabase so user deletion cascades to tasks,
comments and refresh tokens just like the SQL schema does. Used by the test
suite and for running the API without PostgreSQL.

Every mutation completes without awaiting, so within a single event loop each
operation (including refresh-token rotation) is atomic.
"""

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.domain.exceptions import DuplicateEmailException
from taskmanager.domain.models.task import (
    Comment,
    SortDirection,
    Task,
    TaskCategory,
    TaskChanges,
    TaskFilter,
    TaskPriority,
    TaskSortField,
    TaskStatus,
)
from taskmanager.domain.models.user import (
    RefreshTokenRecord,
    Role,
    User,
    UserChanges,
    UserSummary,
)
from taskmanager.shared.utils.datetime_utils import DateTimeUtil

logger = logging.getLogger(__name__)


@dataclass
class InMemoryDatabase:
    roles: Dict[int, Role] = field(default_factory=dict)
    users: Dict[UUID, User] = field(default_factory=dict)
    refresh_tokens: Dict[str, RefreshTokenRecord] = field(default_factory=dict)
    categories: Dict[int, TaskCategory] = field(default_factory=dict)
    priorities: Dict[int, TaskPriority] = field(default_factory=dict)
    tasks: Dict[UUID, Task] = field(default_factory=dict)
    comments: Dict[UUID, Comment] = field(default_factory=dict)
    _sequences: Dict[str, int] = field(default_factory=dict)

    def next_id(self, name: str) -> int:
        value = self._sequences.get(name, 0) + 1
        self._sequences[name] = value
        return value

    def bump_sequence(self, name: str, used: int) -> None:
        self._sequences[name] = max(self._sequences.get(name, 0), used)

    def summary(self, user_id: UUID) -> Optional[UserSummary]:
        user = self.users.get(user_id)
        return UserSummary(id=user.id, email=user.email) if user else None


class InMemoryCredentialStore(ICredentialStore):

    def __init__(self, database: Optional[InMemoryDatabase] = None):
        self.database = database or InMemoryDatabase()

    def _loaded(self, user: User) -> User:
        loaded = copy.copy(user)
        loaded.role = copy.copy(self.database.roles.get(user.role_id))
        return loaded

    # Users

    async def get_user(self, user_id: UUID) -> Optional[User]:
        user = self.database.users.get(user_id)
        return self._loaded(user) if user else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        for user in self.database.users.values():
            if user.email == email:
                return self._loaded(user)
        return None

    async def create_user(self, email: str, password_hash: str, role_id: int) -> User:
        if any(u.email == email for u in self.database.users.values()):
            raise DuplicateEmailException()
        now = DateTimeUtil.utcnow()
        user = User(
            id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
            role_id=role_id,
            created_at=now,
            updated_at=now,
        )
        self.database.users[user.id] = user
        return self._loaded(user)

    async def update_user(self, user_id: UUID, changes: UserChanges) -> Optional[User]:
        user = self.database.users.get(user_id)
        if not user:
            return None
        if changes.has("email") and any(
                u.email == changes.email and u.id != user_id for u in self.database.users.values()
        ):
            raise DuplicateEmailException("Email already in use")

        if changes.has("email"):
            user.email = changes.email
        if changes.has("password"):
            user.password_hash = changes.password
        if changes.has("role_id"):
            user.role_id = changes.role_id
        user.updated_at = DateTimeUtil.utcnow()
        return self._loaded(user)

    async def delete_user(self, user_id: UUID) -> bool:
        if self.database.users.pop(user_id, None) is None:
            return False
        # ON DELETE CASCADE
        db = self.database
        db.refresh_tokens = {k: r for k, r in db.refresh_tokens.items() if r.user_id != user_id}
        owned_tasks = {t.id for t in db.tasks.values() if t.created_by_id == user_id}
        db.tasks = {k: t for k, t in db.tasks.items() if k not in owned_tasks}
        db.comments = {
            k: c for k, c in db.comments.items()
            if c.author_id != user_id and c.task_id not in owned_tasks
        }
        return True

    async def list_users(self) -> List[User]:
        return [self._loaded(u) for u in sorted(self.database.users.values(), key=lambda u: u.email)]

    # Roles

    async def get_role(self, role_id: int) -> Optional[Role]:
        role = self.database.roles.get(role_id)
        return copy.copy(role) if role else None

    async def get_role_by_name(self, name: str) -> Optional[Role]:
        for role in self.database.roles.values():
            if role.name == name:
                return copy.copy(role)
        return None

    async def create_role(self, name: str, role_id: Optional[int] = None) -> Role:
        if role_id is None:
            role_id = self.database.next_id("roles")
        else:
            self.database.bump_sequence("roles", role_id)
        role = Role(id=role_id, name=name)
        self.database.roles[role_id] = role
        return copy.copy(role)

    async def list_roles(self) -> List[Role]:
        return [copy.copy(r) for _, r in sorted(self.database.roles.items())]

    # Refresh tokens

    async def create_refresh_token(self, record: RefreshTokenRecord) -> RefreshTokenRecord:
        stored = copy.copy(record)
        if stored.created_at is None:
            stored.created_at = DateTimeUtil.utcnow()
        self.database.refresh_tokens[stored.id] = stored
        return copy.copy(stored)

    async def find_live_refresh_token(self, user_id: UUID, token_id: str) -> Optional[RefreshTokenRecord]:
        record = self.database.refresh_tokens.get(token_id)
        if record and record.user_id == user_id and not record.revoked:
            return copy.copy(record)
        return None

    async def revoke_refresh_tokens(self, user_id: UUID, token_id: str) -> int:
        record = self.database.refresh_tokens.get(token_id)
        if record and record.user_id == user_id and not record.revoked:
            record.revoked = True
            return 1
        return 0

    async def rotate_refresh_token(self, user_id: UUID, old_token_id: str,
                                   new_record: RefreshTokenRecord) -> bool:
        if await self.revoke_refresh_tokens(user_id, old_token_id) != 1:
            return False
        await self.create_refresh_token(new_record)
        return True

    async def purge_refresh_tokens(self, now: datetime) -> int:
        stale = [k for k, r in self.database.refresh_tokens.items() if r.revoked or r.is_expired(now)]
        for key in stale:
            del self.database.refresh_tokens[key]
        return len(stale)


class InMemoryTaskStore(ITaskStore):

    def __init__(self, database: Optional[InMemoryDatabase] = None):
        self.database = database or InMemoryDatabase()

    def _loaded_task(self, task: Task) -> Task:
        loaded = copy.copy(task)
        loaded.category = copy.copy(self.database.categories.get(task.category_id))
        loaded.priority = copy.copy(self.database.priorities.get(task.priority_id))
        loaded.created_by = self.database.summary(task.created_by_id)
        return loaded

    def _loaded_comment(self, comment: Comment) -> Comment:
        loaded = copy.copy(comment)
        loaded.author = self.database.summary(comment.author_id)
        return loaded

    # Reference data

    async def get_category(self, category_id: int) -> Optional[TaskCategory]:
        category = self.database.categories.get(category_id)
        return copy.copy(category) if category else None

    async def list_categories(self) -> List[TaskCategory]:
        return [copy.copy(c) for _, c in sorted(self.database.categories.items())]

    async def create_category(self, name: str) -> TaskCategory:
        category = TaskCategory(id=self.database.next_id("categories"), name=name)
        self.database.categories[category.id] = category
        return copy.copy(category)

    async def get_priority(self, priority_id: int) -> Optional[TaskPriority]:
        priority = self.database.priorities.get(priority_id)
        return copy.copy(priority) if priority else None

    async def list_priorities(self) -> List[TaskPriority]:
        return [copy.copy(p) for p in sorted(self.database.priorities.values(), key=lambda p: p.level)]

    async def create_priority(self, name: str, level: int) -> TaskPriority:
        priority = TaskPriority(id=self.database.next_id("priorities"), name=name, level=level)
        self.database.priorities[priority.id] = priority
        return copy.copy(priority)

    # Tasks

    async def create_task(self, task: Task) -> Task:
        now = DateTimeUtil.utcnow()
        stored = copy.copy(task)
        stored.id = stored.id or uuid.uuid4()
        stored.created_at = stored.created_at or now
        stored.updated_at = now
        stored.category = stored.priority = stored.created_by = None
        self.database.tasks[stored.id] = stored
        return self._loaded_task(stored)

    async def get_task(self, task_id: UUID) -> Optional[Task]:
        task = self.database.tasks.get(task_id)
        return self._loaded_task(task) if task else None

    async def list_tasks(self, owner_id: UUID, task_filter: TaskFilter) -> List[Task]:
        f = task_filter
        # ordem de inserção invertida: empates saem do mais novo para o mais antigo
        tasks = [self._loaded_task(t) for t in reversed(list(self.database.tasks.values()))
                 if t.created_by_id == owner_id]

        if f.priority_ids:
            tasks = [t for t in tasks if t.priority_id in f.priority_ids]
        if f.statuses:
            tasks = [t for t in tasks if t.status in f.statuses]
        if f.due_date_from:
            tasks = [t for t in tasks if t.due_date and t.due_date >= f.due_date_from]
        if f.due_date_to:
            tasks = [t for t in tasks if t.due_date and t.due_date <= f.due_date_to]
        if f.created_at_from:
            tasks = [t for t in tasks if t.created_at >= f.created_at_from]
        if f.created_at_to:
            tasks = [t for t in tasks if t.created_at <= f.created_at_to]

        # Desempate: mais recentes primeiro
        tasks.sort(key=lambda t: t.created_at, reverse=True)

        def sort_value(task: Task):
            if f.sort_by == TaskSortField.PRIORITY:
                return task.priority.level if task.priority else None
            if f.sort_by == TaskSortField.STATUS:
                # mesma ordem do enum no PostgreSQL (ordem de declaração)
                return list(TaskStatus).index(task.status)
            if f.sort_by == TaskSortField.DUE_DATE:
                return task.due_date
            return task.created_at

        present = [t for t in tasks if sort_value(t) is not None]
        missing = [t for t in tasks if sort_value(t) is None]
        present.sort(key=sort_value, reverse=f.sort_direction == SortDirection.DESC)
        # NULLS LAST nos dois sentidos, como na consulta SQL
        return present + missing

    async def update_task(self, task_id: UUID, changes: TaskChanges) -> Optional[Task]:
        task = self.database.tasks.get(task_id)
        if not task:
            return None
        for name, value in changes.as_dict().items():
            setattr(task, name, value)
        task.updated_at = DateTimeUtil.utcnow()
        return self._loaded_task(task)

    async def delete_task(self, task_id: UUID) -> bool:
        if self.database.tasks.pop(task_id, None) is None:
            return False
        self.database.comments = {k: c for k, c in self.database.comments.items() if c.task_id != task_id}
        return True

    # Comments

    async def create_comment(self, comment: Comment) -> Comment:
        now = DateTimeUtil.utcnow()
        stored = copy.copy(comment)
        stored.id = stored.id or uuid.uuid4()
        stored.created_at = stored.created_at or now
        stored.updated_at = now
        stored.author = None
        self.database.comments[stored.id] = stored
        return self._loaded_comment(stored)

    async def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        comment = self.database.comments.get(comment_id)
        return self._loaded_comment(comment) if comment else None

    async def list_comments(self, task_id: UUID) -> List[Comment]:
        comments = [c for c in reversed(list(self.database.comments.values())) if c.task_id == task_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return [self._loaded_comment(c) for c in comments]

    async def update_comment(self, comment_id: UUID, content: str) -> Optional[Comment]:
        comment = self.database.comments.get(comment_id)
        if not comment:
            return None
        comment.content = content
        comment.updated_at = DateTimeUtil.utcnow()
        return self._loaded_comment(comment)

    async def delete_comment(self, comment_id: UUID) -> bool:
        return self.database.comments.pop(comment_id, None) is not None
