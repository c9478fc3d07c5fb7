# openshiftmcp/executor.py
"""
Command Result dataclass.

Every oc invocation resolves to exactly one CommandResult. Process-level
failures (non-zero exit, timeout, output overflow, spawn failure) are
reported as data here, never raised.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class OutputKind(Enum):
    """Shape of the stdout payload on a successful run."""
    JSON = "json"
    TEXT = "text"
    EMPTY = "empty"


@dataclass(frozen=True)
class CommandResult:
    """Result of executing one oc command."""
    success: bool
    data: Any = None
    error: Optional[str] = None
    stderr: Optional[str] = None
    kind: Optional[OutputKind] = None
    return_code: Optional[int] = None
    timed_out: bool = False
    buffer_exceeded: bool = False
    command: Optional[str] = None
    # stdout read before a timeout cut the process off
    partial_stdout: Optional[str] = None

    @classmethod
    def from_stdout(cls, stdout: str, return_code: int = 0, **kwargs: Any) -> "CommandResult":
        """Build a success result, parsing stdout as JSON when possible."""
        text = stdout.strip()
        if not text:
            # No output is reported as an empty object, tagged EMPTY so callers
            # can tell it apart from a literal "{}".
            return cls(success=True, data={}, kind=OutputKind.EMPTY, return_code=return_code, **kwargs)
        try:
            return cls(success=True, data=json.loads(text), kind=OutputKind.JSON, return_code=return_code, **kwargs)
        except ValueError:
            return cls(success=True, data=text, kind=OutputKind.TEXT, return_code=return_code, **kwargs)

    @classmethod
    def failure(cls, error: str, stderr: str = "", **kwargs: Any) -> "CommandResult":
        """Build a failure result."""
        return cls(success=False, error=error, stderr=stderr, **kwargs)

    @property
    def is_json(self) -> bool:
        return self.kind is OutputKind.JSON

    @property
    def is_text(self) -> bool:
        return self.kind is OutputKind.TEXT

    @property
    def is_empty(self) -> bool:
        return self.kind is OutputKind.EMPTY

    @property
    def text(self) -> str:
        """Payload as text, whatever its kind."""
        if self.data is None or self.is_empty:
            return ""
        if isinstance(self.data, str):
            return self.data
        return json.dumps(self.data, indent=2)
