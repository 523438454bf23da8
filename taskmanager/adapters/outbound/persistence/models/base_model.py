# taskmanager/adapters/outbound/persistence/models/base_model.py

"""
Base class for SQLAlchemy models.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base declarativa para todos os modelos."""


def register_all_events():
    """
    Registra todos os eventos para os modelos.
    """
    from taskmanager.adapters.outbound.persistence.events import register_datetime_events
    register_datetime_events()
