"""Unified error handling for oc tools."""

import functools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """Base class for tool parameter errors."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        super().__init__(message)
        self.recovery_hint = recovery_hint or "Check the tool parameters and try again."


class MissingParamError(ToolError):
    """Raised when a required parameter is missing."""

    def __init__(self, param: str, tool: str):
        self.param = param
        self.tool = tool
        message = f"Missing required parameter '{param}' for {tool}"
        hint = f"Provide the '{param}' parameter when calling {tool}"
        super().__init__(message, recovery_hint=hint)


class InvalidParamError(ToolError):
    """Raised when a parameter value fails validation."""

    def __init__(self, param: str, reason: str, valid_values: Optional[List[str]] = None):
        self.param = param
        self.reason = reason
        self.valid_values = valid_values
        message = f"Invalid value for '{param}': {reason}"
        hint = f"Use one of: {', '.join(valid_values)}" if valid_values else f"Fix the '{param}' parameter"
        super().__init__(message, recovery_hint=hint)


class ConfirmationRequiredError(ToolError):
    """Raised when a destructive operation needs confirm=True."""

    def __init__(self, operation: str, reasons: List[str]):
        self.operation = operation
        self.reasons = reasons
        message = f"{operation} requires explicit confirmation: {'; '.join(reasons)}"
        super().__init__(message, recovery_hint="Review the scope, then call again with confirm=True")


def handle_tool_errors(func: Callable) -> Callable:
    """Turn ToolError raised by an async tool into an error dict."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ToolError as e:
            logger.info(f"{func.__name__} rejected: {e}")
            return {"error": str(e), "recovery_hint": e.recovery_hint}

    return wrapper
