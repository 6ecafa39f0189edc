"""Models for one stub-generation invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from goimpl.config.constants import IMPL_NOT_FOUND_MARKERS


@dataclass(frozen=True)
class ReceiverSpec:
    """``<variable_name> *<type_expression>`` as handed to impl."""

    variable_name: str
    type_expression: str

    @property
    def expression(self) -> str:
        return f"{self.variable_name} *{self.type_expression}"


@dataclass(frozen=True)
class GenerationRequest:
    """Everything needed to run impl once (or twice, with the fallback)."""

    receiver: ReceiverSpec
    interface_name: str
    working_directory: Path
    package_qualifier: str | None = None
    type_parameters: str = ""

    @property
    def qualified_interface(self) -> str:
        if self.package_qualifier:
            return f"{self.package_qualifier}.{self.interface_name}{self.type_parameters}"
        return self.unqualified_interface

    @property
    def unqualified_interface(self) -> str:
        return f"{self.interface_name}{self.type_parameters}"

    def without_qualifier(self) -> GenerationRequest:
        return GenerationRequest(
            receiver=self.receiver,
            interface_name=self.interface_name,
            working_directory=self.working_directory,
            package_qualifier=None,
            type_parameters=self.type_parameters,
        )


class GenerationOutcome(Enum):
    """Classification of one impl run."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Captured output of one impl run."""

    exit_code: int | None
    stdout_lines: list[str] = field(default_factory=list)
    stderr_text: str = ""
    command: list[str] | None = None

    @property
    def first_line(self) -> str:
        if self.stdout_lines:
            return self.stdout_lines[0]
        stripped = self.stderr_text.strip()
        return stripped.splitlines()[0] if stripped else ""

    @property
    def outcome(self) -> GenerationOutcome:
        first = self.first_line
        if any(marker in first for marker in IMPL_NOT_FOUND_MARKERS):
            return GenerationOutcome.NOT_FOUND
        if self.exit_code != 0 or not self.stdout_lines:
            return GenerationOutcome.FAILED
        return GenerationOutcome.SUCCESS


def split_output_lines(stdout: str) -> list[str]:
    """Split stdout into lines, dropping one trailing empty line.

    Some platforms deliver an extra empty line after the final newline.
    """
    lines = stdout.split("\n")
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass
class ImplOutcome:
    """What one selection produced."""

    inserted: bool
    interface_name: str
    package_qualifier: str | None = None
    type_parameters: str = ""
    lines: list[str] = field(default_factory=list)
    insert_row: int | None = None
