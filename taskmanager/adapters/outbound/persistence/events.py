# taskmanager/adapters/outbound/persistence/events.py

"""
Event listeners for SQLAlchemy ORM lifecycle.

Timestamps are filled on the Python side so the values are available on the
instance right after flush, without a refresh round-trip in async sessions.
"""

import logging
from sqlalchemy import event

from taskmanager.shared.utils.datetime_utils import DateTimeUtil

logger = logging.getLogger(__name__)

_registered = False


def register_datetime_events():
    """
    Register event listeners for datetime fields in SQLAlchemy models.
    """
    global _registered
    if _registered:
        return

    from taskmanager.adapters.outbound.persistence.models.base_model import Base

    @event.listens_for(Base, 'before_insert', propagate=True)
    def set_created_at(mapper, connection, target):
        """
        Set created_at and updated_at to current UTC time before insert.
        """
        now = DateTimeUtil.utcnow()
        if hasattr(target, 'created_at') and target.created_at is None:
            target.created_at = now

        if hasattr(target, 'updated_at'):
            target.updated_at = now

    @event.listens_for(Base, 'before_update', propagate=True)
    def set_updated_at(mapper, connection, target):
        """
        Set updated_at to current UTC time before update.
        """
        if hasattr(target, 'updated_at'):
            target.updated_at = DateTimeUtil.utcnow()

    _registered = True
    logger.info("DateTime event listeners registered for SQLAlchemy models")
