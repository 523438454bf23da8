# taskmanager/adapters/outbound/persistence/models/__init__.py

"""
Importa todos os modelos para que Base.metadata fique completo (Alembic, testes).
"""

from taskmanager.adapters.outbound.persistence.models.base_model import Base
from taskmanager.adapters.outbound.persistence.models.user_model import (
    RefreshTokenModel,
    RoleModel,
    UserModel,
)
from taskmanager.adapters.outbound.persistence.models.task_model import (
    CommentModel,
    TaskCategoryModel,
    TaskModel,
    TaskPriorityModel,
)

__all__ = [
    "Base",
    "RoleModel",
    "UserModel",
    "RefreshTokenModel",
    "TaskCategoryModel",
    "TaskPriorityModel",
    "TaskModel",
    "CommentModel",
]
