"""Uniform response envelope shared by every endpoint."""

import math
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, model_validator


class ErrorInfo(BaseModel):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: str | None = None


class Meta(BaseModel):
    """Pagination metadata."""

    page: int | None = None
    per_page: int | None = None
    total: int | None = None
    total_pages: int | None = None

    @classmethod
    def paginate(cls, page: int, per_page: int, total: int) -> "Meta":
        total_pages = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(page=page, per_page=per_page, total=total, total_pages=total_pages)


class Response(BaseModel):
    success: bool
    data: Any = None
    error: ErrorInfo | None = None
    meta: Meta | None = None

    @model_validator(mode="after")
    def check_branch(self) -> "Response":
        if self.success and self.error is not None:
            raise ValueError("A successful response cannot carry an error")
        if not self.success:
            if self.error is None:
                raise ValueError("A failed response must carry an error")
            if self.data is not None or self.meta is not None:
                raise ValueError("A failed response cannot carry data or meta")
        return self

    def to_wire(self) -> dict[str, Any]:
        """Serialize, omitting absent members instead of emitting nulls.

        Only envelope members are dropped when empty; ``data`` is encoded as-is.
        """
        body: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            body["data"] = jsonable_encoder(self.data)
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        if self.meta is not None:
            body["meta"] = self.meta.model_dump(exclude_none=True)
        return body
