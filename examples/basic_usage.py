"""Basic usage examples for ReviewPulse."""

import time

from reviewpulse import AnalysisLoop, ClassifierFactory, ReviewDataset, settings


def example_manual_analysis():
    """Example: classify a few random reviews on demand."""
    print("🔍 Manual analysis with the VADER backend")

    loop = AnalysisLoop(
        dataset=ReviewDataset("data/reviews.tsv"),
        classifier=ClassifierFactory.create("vader"),
    )
    if not loop.initialize():
        print(f"❌ Startup failed: {loop.state.startup_error}")
        return

    for _ in range(3):
        result = loop.request_analysis(triggered_by_user=True)
        print(f"  {result.sentiment.value:>8} {result.confidence_display:>5}%  {result.text[:60]}")

    print(f"📋 History holds {len(loop.recent_history())} entries")


def example_periodic_loop():
    """Example: let the timer drive analyses in the background."""
    print("\n⏱️ Periodic analysis every 2 seconds")

    config = settings.model_copy(update={"analysis_interval_seconds": 2, "classifier_backend": "vader"})
    loop = AnalysisLoop.from_settings(config)
    if not loop.initialize():
        print(f"❌ Startup failed: {loop.state.startup_error}")
        return

    loop.start()
    try:
        time.sleep(7)
    finally:
        loop.close()

    status = loop.status()
    print(f"📊 Completed {status['analyses_completed']} analyses, dropped {status['skipped_busy']} busy ticks")


if __name__ == "__main__":
    example_manual_analysis()
    example_periodic_loop()
