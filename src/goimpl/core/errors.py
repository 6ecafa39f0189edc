"""goimpl error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Editor / resources
- 4xxx: Symbol search / LSP
- 5xxx: Generation
- 6xxx: Insertion
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Editor / resources (3xxx)
    PRECONDITION_FAILED = 3001
    RESOURCE_FILE_NOT_FOUND = 3101
    RESOURCE_READ_ERROR = 3102
    RESOURCE_EMPTY = 3103
    RESOURCE_BUFFER_RELEASED = 3104

    # Symbol search / LSP (4xxx)
    SEARCH_TIMEOUT = 4001
    LSP_REQUEST_CANCELLED = 4101
    LSP_RESPONSE_ERROR = 4102
    LSP_SERVER_EXITED = 4103
    LSP_PROTOCOL_ERROR = 4104

    # Generation (5xxx)
    GENERATION_NOT_FOUND = 5001
    GENERATION_FAILED = 5002
    GENERATION_MISSING_RECEIVER_TEXT = 5003
    GENERATION_TOOL_NOT_FOUND = 5004
    GENERATION_TIMEOUT = 5005

    # Insertion (6xxx)
    STRUCTURAL_ANCHOR_MISSING = 6001


@dataclass(frozen=True, slots=True)
class GoImplError(Exception):
    """Base error with structured context for log output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured log fields."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GoImplError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class PreconditionError(GoImplError):
    """The cursor is not on something goimpl can work with.

    Raised before any I/O and reported to the user.
    """

    @classmethod
    def no_type_identifier(cls, message: str, line: int, col: int) -> "PreconditionError":
        return cls(
            code=ErrorCode.PRECONDITION_FAILED,
            message=message,
            details={"line": line, "col": col},
        )


class ResourceError(GoImplError):
    """A file or scratch buffer could not be used."""

    @classmethod
    def file_not_found(cls, path: str) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_FILE_NOT_FOUND,
            message=f"File not found: {path}",
            details={"path": path},
        )

    @classmethod
    def read_error(cls, path: str, reason: str) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_READ_ERROR,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def empty(cls, path: str) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_EMPTY,
            message=f"File is empty: {path}",
            details={"path": path},
        )

    @classmethod
    def buffer_released(cls, handle: int) -> "ResourceError":
        return cls(
            code=ErrorCode.RESOURCE_BUFFER_RELEASED,
            message=f"Scratch buffer {handle} was already released",
            details={"handle": handle},
        )


class SearchError(GoImplError):
    """Workspace symbol search errors."""

    @classmethod
    def timeout(cls, query: str, timeout_sec: float) -> "SearchError":
        return cls(
            code=ErrorCode.SEARCH_TIMEOUT,
            message=f"Symbol search for {query!r} timed out after {timeout_sec}s",
            retryable=True,
            details={"query": query, "timeout_sec": timeout_sec},
        )


class LspError(GoImplError):
    """Language server transport and protocol errors."""

    @classmethod
    def request_cancelled(cls, method: str, request_id: int) -> "LspError":
        return cls(
            code=ErrorCode.LSP_REQUEST_CANCELLED,
            message=f"Request {request_id} ({method}) was cancelled",
            details={"method": method, "request_id": request_id},
        )

    @classmethod
    def response_error(cls, method: str, error: dict[str, Any]) -> "LspError":
        return cls(
            code=ErrorCode.LSP_RESPONSE_ERROR,
            message=f"{method} failed: {error.get('message', 'unknown error')}",
            details={"method": method, "error_code": error.get("code")},
        )

    @classmethod
    def server_exited(cls, returncode: int | None = None) -> "LspError":
        return cls(
            code=ErrorCode.LSP_SERVER_EXITED,
            message="Language server closed its output stream",
            details={"returncode": returncode},
        )

    @classmethod
    def protocol_error(cls, reason: str) -> "LspError":
        return cls(
            code=ErrorCode.LSP_PROTOCOL_ERROR,
            message=f"Malformed language server message: {reason}",
            details={"reason": reason},
        )


class GenerationError(GoImplError):
    """Stub generation errors."""

    @classmethod
    def not_found(cls, interface: str, first_line: str) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_NOT_FOUND,
            message=f"Interface not found by generator: {interface}",
            retryable=True,
            details={"interface": interface, "output": first_line},
        )

    @classmethod
    def failed(cls, interface: str, reason: str, exit_code: int | None = None) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_FAILED,
            message=f"Stub generation for {interface} failed: {reason}",
            details={"interface": interface, "reason": reason, "exit_code": exit_code},
        )

    @classmethod
    def missing_receiver_text(cls) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_MISSING_RECEIVER_TEXT,
            message="Receiver node has no source text",
        )

    @classmethod
    def tool_not_found(cls, executable: str) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_TOOL_NOT_FOUND,
            message=f"Executable not found: {executable}",
            details={"executable": executable},
        )

    @classmethod
    def timeout(cls, interface: str, timeout_sec: float) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_TIMEOUT,
            message=f"Stub generation for {interface} timed out after {timeout_sec}s",
            details={"interface": interface, "timeout_sec": timeout_sec},
        )


class InsertionError(GoImplError):
    """Generated text could not be placed in the buffer."""

    @classmethod
    def anchor_missing(cls, missing: str) -> "InsertionError":
        return cls(
            code=ErrorCode.STRUCTURAL_ANCHOR_MISSING,
            message=f"Receiver has no {missing} to anchor the insertion",
            details={"missing": missing},
        )
