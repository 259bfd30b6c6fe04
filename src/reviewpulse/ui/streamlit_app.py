"""Streamlit page for ReviewPulse."""

import streamlit as st
import logging
from datetime import timedelta

import pandas as pd

# Import from organized modules
from reviewpulse.core.config import settings
from reviewpulse.core.constants import FileConstants, ScheduleConstants
from reviewpulse.core.errors import ReviewPulseError
from reviewpulse.core.models import Sentiment
from reviewpulse.core.orchestrator import AnalysisLoop

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO), format=FileConstants.LOG_FORMAT)
logger = logging.getLogger(__name__)

SENTIMENT_BADGES = {
    Sentiment.POSITIVE: ("😊", "Positive"),
    Sentiment.NEGATIVE: ("😞", "Negative"),
    Sentiment.NEUTRAL: ("😐", "Neutral"),
}


@st.cache_resource
def get_loop() -> AnalysisLoop:
    """One loop per server process; the periodic trigger starts only after a clean startup."""
    loop = AnalysisLoop.from_settings()
    if loop.initialize():
        loop.start()
    else:
        logger.error(f"Startup failed, interactive features disabled: {loop.state.startup_error}")
    return loop


def render_result(result, heading: str) -> None:
    emoji, name = SENTIMENT_BADGES[result.sentiment]
    st.subheader(heading)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Sentiment", f"{emoji} {name}")
    with col2:
        st.metric("Confidence", f"{result.confidence_display}%")
    with col3:
        st.metric("Model Label", result.label)
    st.write(f"> {result.text}")
    st.caption(f"Analyzed at {result.timestamp:%H:%M:%S} UTC")


# Page configuration
st.set_page_config(
    page_title="ReviewPulse — Live Sentiment",
    page_icon="📈",
    layout="wide"
)

loop = get_loop()
ready = loop.state.ready

# Main UI
st.title("📈 ReviewPulse — Live Sentiment")
st.write("Random reviews from the dataset are classified by a pretrained sentiment model.")

if not ready:
    st.error(f"Startup failed: {loop.state.startup_error}")
    st.info("Check the dataset path and model settings, then restart the app.")

# Sidebar for controls
with st.sidebar:
    st.header("⚙️ Controls")

    auto_logging = st.toggle(
        "Auto-log results to spreadsheet",
        value=loop.state.auto_logging_enabled,
        disabled=not ready,
        help="Send each new, non-duplicate result to the logging webhook"
    )
    if auto_logging != loop.state.auto_logging_enabled:
        loop.set_auto_logging(auto_logging)
    if loop.sink is None:
        st.caption("No webhook configured; results stay local.")

    run_analysis = st.button("🔍 Analyze now", disabled=not ready, width='stretch')

# Manual trigger
if run_analysis:
    try:
        with st.spinner("Classifying review..."):
            result = loop.request_analysis(triggered_by_user=True)
        if result is None:
            st.info("An analysis is already running; try again in a moment.")
        else:
            st.session_state["last_manual_result"] = result
    except ReviewPulseError as e:
        logger.error(f"Manual analysis failed: {e}")

if "last_manual_result" in st.session_state:
    render_result(st.session_state["last_manual_result"], "Your Analysis")


@st.fragment(run_every=timedelta(seconds=ScheduleConstants.UI_REFRESH_SECONDS))
def live_panel():
    error = loop.current_error()
    if error:
        st.error(f"Analysis failed: {error}")

    status = loop.status()
    st.subheader("Status")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Reviews Loaded", status["dataset_size"])
    with col2:
        st.metric("Analyses", status["analyses_completed"])
    with col3:
        st.metric("Auto-logged", status["auto_logged"])
    with col4:
        st.metric("Webhook", status["sink_status"])
    st.caption(
        f"Model: {'ready' if status['model_ready'] else 'not loaded'} · "
        f"Busy: {'yes' if status['busy'] else 'no'} · "
        f"Timer: {'running' if status['running'] else 'stopped'} "
        f"(every {settings.analysis_interval_seconds:g}s)"
    )

    latest = loop.state.last_result
    if latest is not None and not latest.triggered_by_user:
        render_result(latest, "Latest Automatic Analysis")

    history = loop.recent_history()
    st.subheader("Recent History")
    if history:
        df = pd.DataFrame([
            {
                "time": entry.timestamp.strftime("%H:%M:%S"),
                "review": entry.text,
                "label": entry.label,
                "confidence %": entry.confidence_percent,
            }
            for entry in reversed(history)
        ])
        st.dataframe(df, hide_index=True)
    else:
        st.info("No analyses yet.")

    if loop.state.diagnostics:
        with st.expander(f"🔧 Diagnostics ({len(loop.state.diagnostics)})"):
            for item in reversed(loop.state.diagnostics):
                st.caption(f"{item['timestamp']}: {item['message']}")


live_panel()
