"""Database status endpoint."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from app.db import utils as db_utils

router = APIRouter(prefix="/db", tags=["system"])


@router.get("/status")
async def database_status() -> dict[str, Any]:
    """Report whether the database is reachable and which server it is."""
    connected = await db_utils.check_connection()
    info = await db_utils.get_info() if connected else None
    return {
        "connected": connected,
        "info": info,
        "timestamp": datetime.now(UTC).isoformat(),
    }
