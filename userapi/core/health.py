"""Health checks: liveness (process up) and readiness (database reachable)."""
from typing import Any, Dict, Optional

from userapi.db import Database


def check_live() -> Dict[str, Any]:
    """Liveness: app process is running."""
    return {"status": "ok", "check": "live"}


def check_ready(database: Optional[Database]) -> Dict[str, Any]:
    """Readiness: database answers SELECT 1."""
    db_ok = database is not None and database.ping()
    return {
        "status": "ok" if db_ok else "degraded",
        "check": "ready",
        "database": "up" if db_ok else "down",
    }
