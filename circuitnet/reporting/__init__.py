"""Reporting utilities for circuitnet."""

from .artifacts import write_manifest
from .metrics import JsonlSink
from .plots import PlotAdapter

__all__ = ["write_manifest", "JsonlSink", "PlotAdapter"]
