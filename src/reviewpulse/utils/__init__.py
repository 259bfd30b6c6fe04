"""Utility modules for ReviewPulse."""

from .data_prep import build_sink_payload, export_to_json, prepare_export

__all__ = [
    "build_sink_payload",
    "export_to_json",
    "prepare_export",
]
