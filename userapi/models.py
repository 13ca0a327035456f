"""
Pydantic data models for API request/response and error schema.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from userapi.nullable import NullableInt, NullableStr, scan_int, scan_str


class ErrorDetail(BaseModel):
    """Single error detail (e.g. field-level)."""

    code: str = Field(..., description="Error code or field name")
    message: str = Field(..., description="Human-readable message")


class ErrorResponse(BaseModel):
    """Structured error response for 4xx/5xx."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Human-readable summary")
    details: Optional[List[ErrorDetail]] = Field(None, description="Optional per-field or extra details")


class User(BaseModel):
    """User record. Every field may be absent; id is absent until the row is stored."""

    model_config = ConfigDict(extra="ignore")

    id: NullableInt
    username: NullableStr
    password: NullableStr
    email: NullableStr

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        """Build from a DictCursor row, binding by column name."""
        return cls(
            id=scan_int(row.get("id")),
            username=scan_str(row.get("username")),
            password=scan_str(row.get("password")),
            email=scan_str(row.get("email")),
        )
