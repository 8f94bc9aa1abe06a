"""
Benchmark report assembly.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from .constants import OBM_VERSION, SCORE_PLACEHOLDER
from .models import BenchmarkReport, SystemProfile, TierResult


def build_report(ollama_version: str, profile: SystemProfile,
                 performance: Sequence[TierResult],
                 testdate: Optional[str] = None) -> BenchmarkReport:
    """
    Package the run into the collector's submission shape.

    Args:
        ollama_version: Server version string
        profile: Host profile captured at startup
        performance: Tier results in the order they ran
        testdate: ISO-8601 timestamp (now, in UTC, if None)

    Returns:
        BenchmarkReport with the score left as the placeholder
    """
    if testdate is None:
        testdate = datetime.now(timezone.utc).isoformat()

    return BenchmarkReport(
        testdate=testdate,
        ollamaversion=ollama_version,
        sysinfo=profile,
        performance=tuple(performance),
        OBMVersion=OBM_VERSION,
        OBMScore=SCORE_PLACEHOLDER,
    )
