"""
Core benchmark functionality for the Ollama API.

Provides API client, model tiers, and orchestration logic.
"""

import statistics
from collections import namedtuple
from datetime import datetime, timezone
from typing import Dict, List, Any, Optional

import requests

from .constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    RUNS_PER_MODEL,
    STANDARD_PROMPT,
    STATUS_OK,
    WARMUP_ALIAS,
    WARMUP_MODEL,
)
from .errors import ProvisioningError, TransportError
from .models import BenchmarkReport, GenerationResult, SystemProfile, TierResult
from .report import build_report

# min_memory_gb is exclusive; None means the tier always runs
Tier = namedtuple("Tier", ["name", "model", "min_memory_gb", "score_key"])

BENCHMARK_TIERS = (
    Tier("baseline", "llama2:7b", None, "obm7"),
    Tier("second", "llama2:13b", 13, "obm13"),
    Tier("third", "llama2:70b", 63, "obm70"),
)

ORDINALS = ("First", "Second", "Third", "Fourth")


def select_tiers(memory_gb: float) -> List[Tier]:
    """
    Choose the model tiers this host can run.

    Args:
        memory_gb: Total system memory in gigabytes

    Returns:
        Tiers in ascending size order; the baseline tier is always included
    """
    return [
        tier for tier in BENCHMARK_TIERS
        if tier.min_memory_gb is None or memory_gb > tier.min_memory_gb
    ]


def average_tokens_per_second(results: List[GenerationResult]) -> float:
    """
    Unweighted mean of the per-run tokens per second.

    Every run counts once regardless of how many tokens it produced.
    Runs with zero eval time have no rate and are left out.
    """
    rates = [r.tokens_per_second for r in results if r.tokens_per_second is not None]
    if not rates:
        return 0.0
    return statistics.mean(rates)


def _format_rate(rate: Optional[float]) -> str:
    return f"{rate:.2f}" if rate is not None else "n/a"


class BenchmarkCore:
    """
    Core benchmark orchestration for the Ollama API.

    Handles API communication, model provisioning, test execution and
    report assembly. Every request is awaited before the next is sent;
    concurrent generations would contend for the same server and skew
    the timings.
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 timeout: Optional[float] = None):
        """
        Initialize benchmark core.

        Args:
            host: API host address
            port: API port number
            timeout: Request timeout in seconds applied to every call
                     (None waits indefinitely)
        """
        self.base_url = f"http://{host}:{port}"
        self.timeout = timeout

    def _request(self, method: str, path: str,
                 payload: Optional[Dict[str, Any]] = None,
                 check_status: bool = True) -> Any:
        """
        Send one API request and decode its JSON body.

        Args:
            method: HTTP method
            path: API path below the base URL
            payload: JSON request body
            check_status: Treat an HTTP error status as a transport failure;
                          when False the error body is returned for the caller

        Raises:
            TransportError: On connection failure, HTTP error or non-JSON body
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, json=payload, timeout=self.timeout)
            if check_status:
                response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"{method} {url} returned invalid JSON: {e}") from e

    def list_models(self) -> List[str]:
        """
        Get names of the models resident on the server.

        Returns:
            Model names such as "llama2:7b"

        Raises:
            TransportError: If the listing fails or is malformed
        """
        data = self._request("GET", "/api/tags")
        try:
            return [m["name"] for m in data["models"]]
        except (KeyError, TypeError) as e:
            raise TransportError(f"Malformed model listing: {data!r}") from e

    def ensure_model(self, model: str) -> None:
        """
        Make sure a model is available, pulling it if needed.

        Args:
            model: Model name including tag

        Raises:
            ProvisioningError: If the pull does not report success
            TransportError: If the server cannot be reached
        """
        if model in self.list_models():
            return

        print(f"{model} is not on this system. Downloading first.")
        # A rejected pull answers with an HTTP error and an {"error": ...} body
        data = self._request("POST", "/api/pull", {"name": model, "stream": False},
                             check_status=False)
        status = ""
        if isinstance(data, dict):
            status = data.get("status") or data.get("error") or ""
        if status != "success":
            raise ProvisioningError(model, status)
        print(f"Pulled {model}")

    def _chat(self, prompt: str, model: str) -> Any:
        request_data = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False
        }
        return self._request("POST", "/api/chat", request_data)

    def generate(self, prompt: str, model: str) -> GenerationResult:
        """
        Execute a single chat completion.

        Args:
            prompt: User message content
            model: Model name

        Returns:
            GenerationResult with durations converted to seconds

        Raises:
            TransportError: If the call fails or the response lacks counters
        """
        return GenerationResult.from_api(self._chat(prompt, model))

    def warm_up(self, model: str) -> None:
        """
        Send an empty prompt so the model is loaded before measuring.

        The reply carries no generation counters and is discarded.
        """
        self._chat("", model)

    def run_model(self, prompt: str, model: str) -> TierResult:
        """
        Measure one model over four sequential generations.

        Args:
            prompt: Prompt sent on every run
            model: Model name

        Returns:
            TierResult holding the runs in issue order and their mean rate

        Raises:
            TransportError: If any run fails; the benchmark is aborted
        """
        runs = []
        for ordinal in ORDINALS[:RUNS_PER_MODEL]:
            result = self.generate(prompt, model)
            runs.append(result)
            print(
                f"{ordinal} run of {model} took {result.load_duration:.2f} seconds to load "
                f"then {result.eval_duration:.2f} seconds to evaluate with "
                f"{_format_rate(result.tokens_per_second)} tokens per second"
            )

        averagetps = average_tokens_per_second(runs)
        print(f"Average Tokens per Second for {model} is {averagetps:.2f}")
        print()
        return TierResult.from_runs(model, runs, averagetps)

    def run_benchmark(self, profile: SystemProfile, ollama_version: str,
                      prompt: str = STANDARD_PROMPT) -> BenchmarkReport:
        """
        Execute the complete tiered benchmark.

        Args:
            profile: Host profile; its memory decides which tiers run
            ollama_version: Server version string for the report
            prompt: Prompt used for every measured run

        Returns:
            BenchmarkReport with one TierResult per tier run, in tier order

        Raises:
            ProvisioningError: If a required model cannot be pulled
            TransportError: If any API call fails
        """
        tiers = select_tiers(profile.mem.totalgb)
        baseline = tiers[0]

        print("Ensuring models are loaded")
        self.ensure_model(WARMUP_MODEL)
        self.ensure_model(baseline.model)
        print(f"Loading {WARMUP_ALIAS} to reset")
        self.warm_up(WARMUP_ALIAS)
        testdate = datetime.now(timezone.utc).isoformat()

        performance = []
        for tier in tiers:
            if tier is not baseline:
                self.ensure_model(tier.model)
            print(f"Loading {tier.model}")
            performance.append(self.run_model(prompt, tier.model))

        print(f"Benchmark runs: {STATUS_OK} ({len(performance)} of {len(BENCHMARK_TIERS)} tiers)")
        return build_report(ollama_version, profile, performance, testdate=testdate)
