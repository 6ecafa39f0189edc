"""Stub generation pipeline: generics lookup, impl subprocess, insertion."""

from goimpl.impl.generics import GenericsInspector
from goimpl.impl.insert import ResultInserter, insertion_row
from goimpl.impl.models import (
    GenerationOutcome,
    GenerationRequest,
    GenerationResult,
    ImplOutcome,
    ReceiverSpec,
    split_output_lines,
)
from goimpl.impl.ops import ImplOps
from goimpl.impl.stubgen import StubGenerator, receiver_variable_name

__all__ = [
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationResult",
    "GenericsInspector",
    "ImplOps",
    "ImplOutcome",
    "ReceiverSpec",
    "ResultInserter",
    "StubGenerator",
    "insertion_row",
    "receiver_variable_name",
    "split_output_lines",
]
