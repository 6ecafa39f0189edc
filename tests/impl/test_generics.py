"""Tests for GenericsInspector."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from goimpl.impl.generics import GenericsInspector
from goimpl.parsing.scratch import ScratchBufferLoader


@pytest.fixture
def loader() -> ScratchBufferLoader:
    return ScratchBufferLoader()


class TestResolveTypeParameters:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("interface", "expected"),
        [
            ("Store", "[K, V]"),
            ("Getter", "[T]"),
            ("Closer", ""),
            ("Plain", ""),
            ("Missing", ""),
        ],
    )
    async def test_renders_parameters(
        self, loader: ScratchBufferLoader, generic_file: Path, interface: str, expected: str
    ) -> None:
        inspector = GenericsInspector(loader)

        rendered = await inspector.resolve_type_parameters(generic_file, interface)

        assert rendered == expected
        assert loader.live_count == 0

    @pytest.mark.asyncio
    async def test_file_not_found_yields_empty(
        self, loader: ScratchBufferLoader, tmp_path: Path
    ) -> None:
        inspector = GenericsInspector(loader)

        rendered = await inspector.resolve_type_parameters(tmp_path / "gone.go", "Store")

        assert rendered == ""
        assert loader.live_count == 0

    @pytest.mark.asyncio
    async def test_empty_file_yields_empty(
        self, loader: ScratchBufferLoader, tmp_path: Path
    ) -> None:
        path = tmp_path / "empty.go"
        path.write_text("")

        assert await GenericsInspector(loader).resolve_type_parameters(path, "Store") == ""
        assert loader.live_count == 0

    @pytest.mark.asyncio
    async def test_query_failure_yields_empty_and_releases(
        self, loader: ScratchBufferLoader, generic_file: Path
    ) -> None:
        inspector = GenericsInspector(loader)

        with patch.object(
            inspector._engine, "find_interface_declarations", side_effect=RuntimeError("boom")
        ):
            rendered = await inspector.resolve_type_parameters(generic_file, "Store")

        assert rendered == ""
        assert loader.live_count == 0

    @pytest.mark.asyncio
    async def test_unparseable_file_yields_empty(
        self, loader: ScratchBufferLoader, tmp_path: Path
    ) -> None:
        path = tmp_path / "notes.go"
        path.write_text("this is not Go at all {{{")

        assert await GenericsInspector(loader).resolve_type_parameters(path, "Store") == ""
        assert loader.live_count == 0
