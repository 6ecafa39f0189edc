"""Recover the type-parameter list of an interface declared in another file."""

from __future__ import annotations

from pathlib import Path

import structlog

from goimpl.core.errors import GoImplError
from goimpl.parsing.queries import SyntaxQueryEngine, render_type_parameters
from goimpl.parsing.scratch import ScratchBufferLoader

logger = structlog.get_logger()


class GenericsInspector:
    """Looks up ``interface_name`` in ``file_path`` and renders its type parameters.

    The file is parsed in a scratch buffer owned by this call alone and
    released before returning, whatever happened.
    """

    def __init__(
        self,
        loader: ScratchBufferLoader | None = None,
        engine: SyntaxQueryEngine | None = None,
    ) -> None:
        self._loader = loader or ScratchBufferLoader()
        self._engine = engine or SyntaxQueryEngine()

    async def resolve_type_parameters(self, file_path: Path, interface_name: str) -> str:
        """``"[T, K]"`` for a generic interface, ``""`` otherwise or on any failure."""
        log = logger.bind(path=str(file_path), interface=interface_name)
        try:
            with self._loader.open(file_path) as buf:
                for decl in self._engine.find_interface_declarations(buf.tree):
                    found = self._engine.find_generic_name_and_params(decl)
                    if found is None:
                        continue
                    name, params = found
                    if name != interface_name:
                        continue
                    names = self._engine.extract_type_parameter_names(params)
                    rendered = render_type_parameters(names)
                    log.debug("type_parameters_resolved", type_parameters=rendered)
                    return rendered
        except GoImplError as e:
            log.warning("type_parameters_unavailable", **e.to_dict())
            return ""
        except Exception:
            log.exception("type_parameters_lookup_failed")
            return ""

        log.debug("interface_not_generic")
        return ""
