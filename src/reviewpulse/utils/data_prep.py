"""Data preparation for the logging webhook and JSON export."""

import json
from typing import Dict, Any, List, Optional
from ..core.constants import FileConstants
from ..core.models import AnalysisResult, HistoryEntry


def build_sink_payload(
    result: AnalysisResult,
    model_name: str = "",
    source: str = ""
) -> Dict[str, Any]:
    """Build the webhook body; ``meta`` is itself a JSON-encoded string."""
    meta = {
        "label": result.label,
        "score": result.score,
        "confidence": result.confidence_percent,
        "triggered_by_user": result.triggered_by_user,
        "model": model_name,
        "source": source,
    }
    return {
        "ts_iso": result.timestamp.isoformat(),
        "review": result.text,
        "sentiment": result.sentiment.value,
        "meta": json.dumps(meta, ensure_ascii=False),
    }


def prepare_export(
    history: List[HistoryEntry],
    status: Dict[str, Any],
    last_result: Optional[AnalysisResult] = None
) -> Dict[str, Any]:
    """Prepare history and loop status for JSON export."""

    history_data = [
        {
            "text": entry.text,
            "label": entry.label,
            "confidence_percent": entry.confidence_percent,
            "timestamp": entry.timestamp.isoformat(),
        }
        for entry in history
    ]

    latest = None
    if last_result is not None:
        latest = {
            "text": last_result.text,
            "label": last_result.label,
            "score": last_result.score,
            "sentiment": last_result.sentiment.value,
            "confidence_percent": last_result.confidence_percent,
            "timestamp": last_result.timestamp.isoformat(),
            "triggered_by_user": last_result.triggered_by_user,
        }

    return {
        "status": status,
        "latest": latest,
        "history": history_data,
        "metadata": {
            "export_timestamp": None,  # Will be set by caller
            "version": FileConstants.EXPORT_VERSION
        }
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    import datetime

    # Add timestamp
    data["metadata"]["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
