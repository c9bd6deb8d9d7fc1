import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from burpp.db.models import AdminActivityLog

logger = logging.getLogger(__name__)


async def log_admin_activity(
    db: AsyncSession,
    admin_id: str,
    action: str,
    table_name: str,
    record_id: str | None = None,
    old_values: dict[str, Any] | None = None,
    new_values: dict[str, Any] | None = None,
) -> AdminActivityLog:
    """Append an audit row in the caller's transaction."""
    entry = AdminActivityLog(
        admin_id=admin_id,
        action=action,
        table_name=table_name,
        record_id=record_id,
        old_values=old_values,
        new_values=new_values,
    )
    db.add(entry)
    logger.info("Admin %s: %s on %s %s", admin_id, action, table_name, record_id)
    return entry
