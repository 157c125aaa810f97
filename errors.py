"""Roadmap Quoter error handling.

Typed exceptions raised by the calculation pipeline and its tool surface.
"""

from typing import Optional, Dict, Any


class ErrorCode:
    """Error code constants."""

    INVALID_INPUT = "INVALID_INPUT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    TOOL_UPSTREAM_FAILURE = "TOOL_UPSTREAM_FAILURE"


class QuoterError(Exception):
    """Base exception for Roadmap Quoter errors.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a JSON-serialisable dictionary."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInput(QuoterError):
    """A required input field is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class ConfigurationError(QuoterError):
    """A configured table value would make a calculation undefined."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class ToolUpstreamFailure(QuoterError):
    """Opaque failure passed through from the calling tool framework."""

    def __init__(
        self,
        message: str,
        tool: str,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=ErrorCode.TOOL_UPSTREAM_FAILURE,
            message=message,
            details={**(details or {}), "tool": tool}
        )
        self.tool = tool

    @classmethod
    def from_exception(cls, tool: str, error: Exception) -> "ToolUpstreamFailure":
        """Wrap an arbitrary exception raised while running a tool."""
        return cls(
            message=str(error) or type(error).__name__,
            tool=tool,
            details={"error_type": type(error).__name__},
        )


def invalid_input_from_validation(error, context: Optional[str] = None) -> InvalidInput:
    """Convert a pydantic ValidationError into InvalidInput.

    The first failing location becomes the dotted field name; every
    location and message is kept in details.
    """
    errors = error.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "validation failed")
    return InvalidInput(
        f"Invalid input for {context}: {message}" if context else f"Invalid input: {message}",
        field=field,
        details={"errors": [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in errors
        ]},
    )
