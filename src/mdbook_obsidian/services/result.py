"""ServiceResult and ServiceError: what every service hands back.

INVARIANT: Services never raise for expected failures (bad input,
unsupported renderer). They return ``ok=False`` with a ServiceError and
leave exit codes and stream routing to the CLI.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes
INVALID_INPUT = "INVALID_INPUT"
UNSUPPORTED_RENDERER = "UNSUPPORTED_RENDERER"
INVALID_CONFIG = "INVALID_CONFIG"


class ServiceError(BaseModel):
    """Machine-readable code plus a message fit for stderr."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: False only when the process should exit non-zero.
        op: Operation name (``"preprocess"``, ``"supports"``, ``"rewrite"``).
        data: Payload on success; ``preprocess`` carries the book here.
        warnings: Non-fatal notes, always routed to stderr.
        error: Set when ``ok`` is False.
        meta: Counts and other diagnostics for verbose rendering.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failed(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result carrying a single ServiceError."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
