"""Problem detail schema shared by every admin error response."""

from __future__ import annotations

from pydantic import BaseModel


class Problem(BaseModel):
    """Standardized error body returned on every non-2xx admin response."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
