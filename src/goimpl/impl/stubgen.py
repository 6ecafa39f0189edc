"""Run the external stub generator (impl) for a receiver and an interface."""

from __future__ import annotations

import asyncio
import contextlib
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from goimpl.config.constants import RECEIVER_FALLBACK_NAME, RECEIVER_PREFIX_LEN
from goimpl.core.errors import GenerationError, GoImplError
from goimpl.impl.models import (
    GenerationOutcome,
    GenerationRequest,
    GenerationResult,
    ReceiverSpec,
    split_output_lines,
)
from goimpl.parsing.queries import SyntaxQueryEngine, render_type_parameters

if TYPE_CHECKING:
    from tree_sitter import Node

logger = structlog.get_logger()


def receiver_variable_name(type_name: str) -> str:
    """Lowercased first characters of the type name, never empty.

    Raises:
        GenerationError: the type name itself is empty.
    """
    if not type_name:
        raise GenerationError.missing_receiver_text()
    prefix = type_name[:RECEIVER_PREFIX_LEN].lower().strip()
    return prefix or RECEIVER_FALLBACK_NAME


class StubGenerator:
    """Builds the impl command line, runs it, and retries once without the package."""

    def __init__(
        self,
        executable: str = "impl",
        *,
        timeout_sec: float = 10.0,
        engine: SyntaxQueryEngine | None = None,
    ) -> None:
        self._executable = executable
        self._timeout_sec = timeout_sec
        self._engine = engine or SyntaxQueryEngine()

    def build_receiver(self, receiver_node: Node) -> ReceiverSpec:
        text = receiver_node.text.decode("utf-8", errors="replace") if receiver_node.text else ""
        variable = receiver_variable_name(text)

        type_expression = text
        spec = receiver_node.parent
        if spec is not None:
            params = spec.child_by_field_name("type_parameters")
            if params is not None:
                names = self._engine.extract_type_parameter_names(params)
                type_expression += render_type_parameters(names)
        return ReceiverSpec(variable_name=variable, type_expression=type_expression)

    def build_request(
        self,
        receiver_node: Node,
        working_directory: Path,
        interface_name: str,
        package_qualifier: str | None = None,
        type_parameters: str = "",
    ) -> GenerationRequest:
        return GenerationRequest(
            receiver=self.build_receiver(receiver_node),
            interface_name=interface_name,
            working_directory=working_directory,
            package_qualifier=package_qualifier or None,
            type_parameters=type_parameters,
        )

    def build_command(self, request: GenerationRequest) -> list[str]:
        """Argument vector; never passed through a shell."""
        return [
            self._executable,
            "-dir",
            str(request.working_directory),
            request.receiver.expression,
            request.qualified_interface,
        ]

    async def generate(
        self,
        receiver_node: Node,
        working_directory: Path,
        interface_name: str,
        package_qualifier: str | None = None,
        type_parameters: str = "",
    ) -> list[str] | None:
        """Generated method stubs, or None when there is nothing to insert.

        Failures are logged here and never raised.
        """
        try:
            request = self.build_request(
                receiver_node, working_directory, interface_name, package_qualifier, type_parameters
            )
        except GenerationError as e:
            logger.warning("stub_generation_skipped", **e.to_dict())
            return None
        return await self.run(request)

    async def run(self, request: GenerationRequest) -> list[str] | None:
        log = logger.bind(
            receiver=request.receiver.expression,
            interface=request.qualified_interface,
        )
        try:
            result = await self._execute(request)
            if result.outcome is GenerationOutcome.NOT_FOUND and request.package_qualifier:
                # A main package reports its directory name as the container,
                # which impl cannot resolve; the bare name often works.
                log.info("stub_generation_retry_unqualified", output=result.first_line)
                request = request.without_qualifier()
                result = await self._execute(request)

            if result.outcome is GenerationOutcome.SUCCESS:
                log.debug("stub_generation_done", lines=len(result.stdout_lines))
                return result.stdout_lines

            if result.outcome is GenerationOutcome.NOT_FOUND:
                raise GenerationError.not_found(request.qualified_interface, result.first_line)
            reason = result.first_line or "no output"
            raise GenerationError.failed(request.qualified_interface, reason, result.exit_code)
        except GoImplError as e:
            log.warning("stub_generation_failed", **e.to_dict())
            return None

    async def _execute(self, request: GenerationRequest) -> GenerationResult:
        cmd = self.build_command(request)
        if not shutil.which(cmd[0]):
            raise GenerationError.tool_not_found(cmd[0])

        logger.debug("stub_generation_spawn", command=cmd, cwd=str(request.working_directory))
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=request.working_directory,
            )
        except OSError as e:
            raise GenerationError.failed(request.qualified_interface, str(e)) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout_sec
            )
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            raise GenerationError.timeout(request.qualified_interface, self._timeout_sec) from e

        return GenerationResult(
            exit_code=proc.returncode,
            stdout_lines=split_output_lines(stdout_bytes.decode(errors="replace")),
            stderr_text=stderr_bytes.decode(errors="replace"),
            command=cmd,
        )
