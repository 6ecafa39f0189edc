"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GOIMPL__SECTION__KEY)
3. Module YAML (<go module root>/.goimpl/config.yaml)
4. Global YAML (~/.config/goimpl/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GOIMPL__<SECTION>__<KEY>=<VALUE>

Examples:
    GOIMPL__LOGGING__LEVEL=DEBUG
    GOIMPL__IMPL__EXECUTABLE=/home/me/go/bin/impl
    GOIMPL__SEARCH__TIMEOUT_SEC=10
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GOIMPL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Deep failures are logged at WARNING/ERROR.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ImplToolConfig(BaseModel):
    """Stub-generation utility configuration.

    Env vars:
        GOIMPL__IMPL__EXECUTABLE: Name or path of the impl binary
        GOIMPL__IMPL__TIMEOUT_SEC: Max runtime of one impl invocation
    """

    executable: str = Field(
        default="impl",
        description="Stub generator executable (github.com/josharian/impl).",
    )
    timeout_sec: float = Field(
        default=10.0,
        description="A run exceeding this is killed and treated as failed.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_sec must be positive, got {v}")
        return v


class SearchConfig(BaseModel):
    """Workspace symbol search configuration.

    Env vars:
        GOIMPL__SEARCH__TIMEOUT_SEC: Max wait for one workspace/symbol response
        GOIMPL__SEARCH__DEBOUNCE_SEC: Quiet period before a query is sent
    """

    timeout_sec: float = Field(
        default=5.0,
        description="Search timeout. A timed-out search yields no results.",
    )
    debounce_sec: float = Field(
        default=0.05,
        description="Debounce window. A newer query inside this window replaces the older one "
        "before anything is sent to the language server.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout_sec must be positive, got {v}")
        return v

    @field_validator("debounce_sec")
    @classmethod
    def validate_debounce(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"debounce_sec must not be negative, got {v}")
        return v


class LspConfig(BaseModel):
    """Language server configuration.

    Env vars:
        GOIMPL__LSP__STARTUP_TIMEOUT_SEC: Max wait for the initialize handshake
    """

    command: list[str] = Field(
        default_factory=lambda: ["gopls"],
        description="Language server command line (stdio transport).",
    )
    startup_timeout_sec: float = Field(
        default=15.0,
        description="Max wait for initialize. gopls loads the whole module first.",
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("command must not be empty")
        return v


class GoImplConfig(BaseModel):
    """Root configuration for goimpl.

    All settings can be configured via:
    1. Environment variables: GOIMPL__SECTION__KEY
    2. YAML config files (module or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    impl: ImplToolConfig = Field(default_factory=ImplToolConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    lsp: LspConfig = Field(default_factory=LspConfig)
