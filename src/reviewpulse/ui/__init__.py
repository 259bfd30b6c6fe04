"""Streamlit user interface for ReviewPulse."""

import subprocess
import sys
from pathlib import Path

APP_PATH = Path(__file__).parent / "streamlit_app.py"


def run_streamlit_app() -> int:
    """Launch the Streamlit page and return its exit code."""
    return subprocess.run([sys.executable, "-m", "streamlit", "run", str(APP_PATH)], check=False).returncode
