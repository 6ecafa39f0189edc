"""Tests for config model validation."""

import pytest
from pydantic import ValidationError

from goimpl.config.models import (
    GoImplConfig,
    ImplToolConfig,
    LogOutputConfig,
    LspConfig,
    SearchConfig,
)


class TestModelDefaults:
    def test_defaults(self) -> None:
        config = GoImplConfig()

        assert config.impl.executable == "impl"
        assert config.search.debounce_sec == 0.05
        assert config.lsp.startup_timeout_sec == 15.0
        assert config.logging.outputs[0].destination == "stderr"


class TestModelValidation:
    @pytest.mark.parametrize("value", [0, -1.5])
    def test_impl_timeout_must_be_positive(self, value: float) -> None:
        with pytest.raises(ValidationError):
            ImplToolConfig(timeout_sec=value)

    def test_search_debounce_may_be_zero(self) -> None:
        assert SearchConfig(debounce_sec=0).debounce_sec == 0

    def test_search_debounce_must_not_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            SearchConfig(debounce_sec=-0.1)

    def test_lsp_command_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            LspConfig(command=[])

    def test_relative_log_destination_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/goimpl.log")

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations_accepted(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination
