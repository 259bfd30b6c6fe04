"""Command-line interface for ReviewPulse."""

import argparse
import logging
import sys
import time

from .core.config import settings
from .core.constants import FileConstants
from .core.errors import NotReadyError, ReviewPulseError
from .core.orchestrator import AnalysisLoop
from .utils.data_prep import export_to_json, prepare_export

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=FileConstants.LOG_FORMAT
    )


def _build_loop(args) -> AnalysisLoop:
    overrides = {}
    if getattr(args, "dataset", None):
        overrides["dataset_path"] = args.dataset
    if getattr(args, "backend", None):
        overrides["classifier_backend"] = args.backend
    if getattr(args, "interval", None):
        overrides["analysis_interval_seconds"] = args.interval
    config = settings.model_copy(update=overrides) if overrides else settings

    loop = AnalysisLoop.from_settings(config)
    if not loop.initialize():
        raise NotReadyError(loop.state.startup_error)
    if getattr(args, "log", False):
        loop.set_auto_logging(True)
    return loop


def _print_result(result):
    print(f"Review: {result.text[:200]}{'...' if len(result.text) > 200 else ''}")
    print(f"Sentiment: {result.sentiment.value} ({result.confidence_display}% {result.label})")


def cmd_analyze(args):
    """Analyze command: classify a few random reviews."""
    loop = _build_loop(args)
    try:
        for i in range(args.count):
            result = loop.request_analysis(triggered_by_user=True)
            print(f"\n[{i + 1}/{args.count}]")
            _print_result(result)
    finally:
        loop.close()


def cmd_watch(args):
    """Watch command: run the periodic loop until interrupted."""
    loop = _build_loop(args)

    print(f"Analyzing a random review every {loop.config.analysis_interval_seconds:g}s (Ctrl-C to stop)")
    seen = 0
    loop.start()
    try:
        while True:
            time.sleep(1)
            if loop.state.analyses_completed != seen and loop.state.last_result is not None:
                seen = loop.state.analyses_completed
                print()
                _print_result(loop.state.last_result)
    finally:
        loop.close()
        status = loop.status()
        print(f"\nCompleted {status['analyses_completed']} analyses, auto-logged {status['auto_logged']}")


def cmd_export(args):
    """Export command: analyze N reviews and write history to JSON."""
    loop = _build_loop(args)
    try:
        for _ in range(args.count):
            loop.request_analysis(triggered_by_user=True)
        data = prepare_export(loop.recent_history(), loop.status(), loop.state.last_result)
    finally:
        loop.close()

    export_to_json(data, args.out)
    print(f"Results exported to {args.out}")


def cmd_ui(args):
    """UI command."""
    from .ui import run_streamlit_app

    print("Launching ReviewPulse UI...")
    try:
        returncode = run_streamlit_app()
    except KeyboardInterrupt:
        print("\nUI stopped by user")
        return
    if returncode:
        print(f"Streamlit exited with code {returncode}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="ReviewPulse - Live Review Sentiment")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_common(sub):
        sub.add_argument('--dataset', help='TSV file or URL (overrides settings)')
        sub.add_argument('--backend', choices=['transformers', 'vader'], help='Classifier backend')
        sub.add_argument('--log', action='store_true', help='Enable auto-logging to the webhook')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Classify random reviews now')
    add_common(analyze_parser)
    analyze_parser.add_argument('--count', type=int, default=1, help='Number of reviews to analyze')

    # Watch command
    watch_parser = subparsers.add_parser('watch', help='Run the periodic analysis loop')
    add_common(watch_parser)
    watch_parser.add_argument('--interval', type=float, help='Seconds between analyses')

    # Export command
    export_parser = subparsers.add_parser('export', help='Analyze reviews and export history')
    add_common(export_parser)
    export_parser.add_argument('--count', type=int, default=10, help='Number of reviews to analyze')
    export_parser.add_argument('--out', required=True, help='Output JSON file')

    # UI command
    subparsers.add_parser('ui', help='Launch web UI')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    setup_logging()

    try:
        if args.command == 'analyze':
            cmd_analyze(args)
        elif args.command == 'watch':
            cmd_watch(args)
        elif args.command == 'export':
            cmd_export(args)
        elif args.command == 'ui':
            cmd_ui(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
    except ReviewPulseError as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)
