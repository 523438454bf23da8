# taskmanager/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
# Manter em ordem alfabética
from taskmanager.adapters.inbound.api.v1.endpoints import (
    admin_endpoint,
    auth_endpoint,
    comment_endpoint,
    protected_endpoint,
    task_endpoint,
)

api_router = APIRouter()

# Autenticação baseada em cookie de refresh + bearer de acesso
api_router.include_router(auth_endpoint.router)
api_router.include_router(protected_endpoint.router)

# Recursos do usuário autenticado
api_router.include_router(task_endpoint.router)
api_router.include_router(comment_endpoint.router)

# Administração
api_router.include_router(admin_endpoint.router)
