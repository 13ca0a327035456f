"""
FastAPI application and API endpoints.
Layered: API -> repository -> MySQL table. The Database handle is built in the
lifespan and injected into the repository per request.
"""
import logging
import re
import time
import uuid
from contextlib import asynccontextmanager
from typing import Annotated, List, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userapi.core.health import check_live, check_ready
from userapi.core.settings import get_settings
from userapi.db import Database
from userapi.deps import get_user_repository
from userapi.errors import DecodeError, ServiceError, StorageError, ValidationError
from userapi.models import ErrorDetail, ErrorResponse, User
from userapi.repositories import MySQLUserRepository
from userapi.repositories.protocols import UserRepository
from userapi.utils.request_logger import log_request

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"[+-]?[0-9]+")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the Database handle, create the user table if missing."""
    settings = get_settings()
    logging.getLogger("userapi").setLevel(settings.log_level)
    database = Database.from_settings(settings)
    app.state.database = database
    repo = MySQLUserRepository(database)
    try:
        repo.ensure_schema()
        logger.info("User table ready in %s (%d users)", database.name, repo.count())
    except StorageError as e:
        logger.warning("MySQL schema init failed: %s. Check DATABASE_URL and that MySQL is running.", e)
    yield


app = FastAPI(
    title="userapi",
    description="CRUD API for a single User resource backed by MySQL",
    version="1.0.0",
    lifespan=lifespan,
)


def _error_response(
    request: Request, status_code: int, code: str, message: str, details: Optional[List[ErrorDetail]] = None
) -> JSONResponse:
    """Structured ErrorResponse, with request_id when available."""
    body = ErrorResponse(code=code, message=message, details=details)
    payload = body.model_dump()
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        payload["request_id"] = request_id
    response = JSONResponse(status_code=status_code, content=payload)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(ServiceError)
def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, StorageError):
        # driver detail was logged by the repository
        return _error_response(request, exc.status_code, exc.code, exc.public_message)
    return _error_response(request, exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or mistyped request body -> 400 DecodeError."""
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(ErrorDetail(code=loc or err.get("type", "body"), message=err.get("msg", "invalid")))
    return _error_response(request, status.HTTP_400_BAD_REQUEST, DecodeError.code, "invalid user body", details)


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(request, exc.status_code, str(exc.status_code), message)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Set request_id on request.state and add X-Request-ID to response."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        log_request(request, status_code, (time.perf_counter() - start) * 1000)


def _require(user: User, *fields: str) -> None:
    missing = [f for f in fields if getattr(user, f) is None]
    if missing:
        raise ValidationError(f"{', '.join(missing)} required")


# ----- Users -----

@app.get("/users", response_model=List[User])
def list_users(user_repo: Annotated[UserRepository, Depends(get_user_repository)]):
    """All users, in table row order."""
    return user_repo.list_all()


@app.get("/user", response_model=User)
def get_user(
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    id: Optional[str] = None,
    name: Optional[str] = None,
):
    """GET /user?id=ID or /user?name=NAME (exactly one)."""
    if id and name:
        raise ValidationError("id or name required, not both")
    if id:
        # ASCII digits only: int() would also take "1_0", " 10 " and non-ASCII digits
        if not ID_PATTERN.fullmatch(id):
            raise ValidationError(f"invalid id: {id!r}")
        return user_repo.get_by_id(int(id))
    if name:
        return user_repo.get_by_username(name)
    raise ValidationError("id or name required")


@app.post("/user", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    body: User,
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Store a new user; the response carries the assigned id."""
    _require(body, "username", "password")
    return user_repo.create(body)


@app.put("/user", response_model=User)
def update_user(
    body: User,
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    _require(body, "id", "username", "password")
    return user_repo.update(body)


@app.delete("/user", response_class=PlainTextResponse)
def delete_user(
    body: User,
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
):
    _require(body, "id")
    user_repo.delete(body)
    return PlainTextResponse("deleted")


# ----- Health -----

@app.get("/health")
def health():
    """Simple health (backward compatible)."""
    return {"status": "ok"}


@app.get("/health/live")
def health_live():
    """Liveness: process is up."""
    return check_live()


@app.get("/health/ready")
def health_ready(request: Request):
    """Readiness: database reachable."""
    return check_ready(getattr(request.app.state, "database", None))
