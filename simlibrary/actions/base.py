"""ActionResult: the discriminated outcome of every player action.

Expected domain failures (funds, ids, state, capacity, cooldowns) are
returned as ``ActionResult.fail(code)``; nothing in ``simlibrary.actions``
raises for them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from simlibrary.core.enums import ErrorCode


@dataclass(frozen=True, slots=True)
class ActionResult:
    success: bool
    error: ErrorCode | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, **data: Any) -> ActionResult:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ErrorCode, **data: Any) -> ActionResult:
        return cls(success=False, error=error, data=data)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            out["error"] = self.error.value
        out.update(self.data)
        return out

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"ActionResult(ok, {self.data!r})"
        return f"ActionResult(fail={self.error.value if self.error else None})"
