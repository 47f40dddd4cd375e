from dataclasses import dataclass
from typing import Any

INVALID_ARGUMENT = "invalid_argument"
NOT_FOUND = "not_found"


@dataclass
class Result:
    """Outcome of a user action: a value on success, an error kind + message otherwise."""
    ok: bool
    value: Any = None
    error: str = ""
    message: str = ""

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> "Result":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(cls, error: str, message: str) -> "Result":
        return cls(ok=False, error=error, message=message)

    def __bool__(self) -> bool:
        return self.ok
