"""
Client for the OBM collector service.

Submission is best-effort: every failure surfaces as SubmissionError so
the caller can report it without discarding the local results.
"""

from typing import Optional

import requests

from .constants import DEFAULT_COLLECTOR_URL
from .errors import SubmissionError
from .models import BenchmarkReport, Score


class SubmissionClient:
    """POST benchmark reports to the collector and read back the score."""

    def __init__(self, url: str = DEFAULT_COLLECTOR_URL,
                 timeout: Optional[float] = None):
        """
        Initialize submission client.

        Args:
            url: Collector endpoint receiving the report
            timeout: Request timeout in seconds (None waits indefinitely)
        """
        self.url = url
        self.timeout = timeout

    def submit(self, report: BenchmarkReport) -> Score:
        """
        Send a report to the collector.

        Args:
            report: Completed benchmark report

        Returns:
            Score with the composite and per-tier values

        Raises:
            SubmissionError: If the request fails or the reply has no score
        """
        try:
            response = requests.post(self.url, json=report.to_dict(), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SubmissionError(f"Submission to {self.url} failed: {e}") from e
        except ValueError as e:
            raise SubmissionError(f"Collector returned invalid JSON: {e}") from e

        score = data.get("OBMScore") if isinstance(data, dict) else None
        if not isinstance(score, dict) or "obmscore" not in score:
            raise SubmissionError(f"Collector response has no score: {data!r}")

        return Score(
            obmscore=score["obmscore"],
            obm7=score.get("obm7"),
            obm13=score.get("obm13"),
            obm70=score.get("obm70"),
        )
