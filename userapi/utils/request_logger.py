"""
Structured request logging: path, method, client_ip, status_code, latency_ms, request_id.
"""
import json
import logging
import time
from pathlib import Path
from typing import Optional

import config


def _log_path() -> Optional[Path]:
    if not config.LOG_FILE.strip():
        return None
    p = Path(config.LOG_FILE)
    if not p.is_absolute():
        p = config.BASE_DIR / p
    return p


def setup_request_logger() -> logging.Logger:
    """Configure and return a logger for request logs (JSON lines to LOG_FILE, or stderr)."""
    request_logger = logging.getLogger("userapi.requests")
    request_logger.setLevel(logging.INFO)
    request_logger.propagate = False
    if not request_logger.handlers:
        log_path = _log_path()
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        request_logger.addHandler(handler)
    return request_logger


REQUEST_LOGGER = setup_request_logger()


def log_request(request, status_code: int, latency_ms: float) -> None:
    """Emit one structured JSON log line for a finished request."""
    state = getattr(request, "state", None)
    request_id = getattr(state, "request_id", None) if state else None
    client_ip = request.client.host if request.client else ""
    payload = {
        "path": request.url.path,
        "method": request.method,
        "client_ip": client_ip,
        "status_code": status_code,
        "latency_ms": round(latency_ms, 2),
        "timestamp": time.time(),
    }
    if request_id:
        payload["request_id"] = request_id
    REQUEST_LOGGER.info(json.dumps(payload))
