"""
Command line entry point for the Ollama benchmark.

Measures tokens per second for the llama2 tiers this host can run and,
with the user's consent, shares the results with the OBM collector.

Usage:
    ollama-benchmark
    ollama-benchmark --host 192.168.1.20 --timeout 600
    ollama-benchmark --no-submit
"""

import argparse
import sys
from typing import List, Optional

from .collectors import SystemProfileCollector, VersionCollector
from .constants import (
    DEFAULT_COLLECTOR_URL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    STANDARD_PROMPT,
    STATUS_ERROR,
    STATUS_INFO,
    STATUS_OK,
)
from .core import BENCHMARK_TIERS, BenchmarkCore
from .errors import BenchmarkError, SubmissionError
from .models import BenchmarkReport, Score, SystemProfile
from .submission import SubmissionClient

CONSENT_QUESTION = (
    "Do you approve to send the output from this command to obm.tvl.st "
    "to share with everyone? No personal info is included"
)


def print_system_info(profile: SystemProfile, ollama_version: str) -> None:
    """
    Print the host summary shown before benchmarking.

    Args:
        profile: Collected host profile
        ollama_version: Server version string
    """
    print(
        f"{profile.os.distro} {profile.os.release} with {profile.mem.totalgb}GB and "
        f"{profile.cpu.manufacturer} {profile.cpu.brand} with {profile.cpu.cores} cores"
    )
    if profile.gpu:
        print("GPU Info:")
        for g in profile.gpu:
            corestring = f" and {g.cores} cores" if g.cores > 0 else ""
            print(f"{g.gpu} with {g.vram:g}GB vram{corestring}")
        print()
    print(f"Using Ollama version: {ollama_version}")


def print_summary(report: BenchmarkReport) -> None:
    """
    Print per-model throughput.

    Args:
        report: Completed benchmark report
    """
    print()
    print("=" * 60)
    print("Benchmark Results Summary")
    print("=" * 60)
    print(f"{'Model':<25} {'Tokens/sec':>15}")
    print("-" * 60)
    for tier in report.performance:
        print(f"{tier.model:<25} {tier.averagetps:>15.2f}")
    print("=" * 60)


def print_score(score: Score) -> None:
    """Print the composite score and its per-tier components."""
    print(f"Your OBMScore is {score.obmscore} and is made of {len(BENCHMARK_TIERS)} components:")
    for tier in BENCHMARK_TIERS:
        value = getattr(score, tier.score_key)
        print(f"{tier.model} OBMScore: {value if value is not None else 'n/a'}")


def confirm(question: str) -> bool:
    """Ask a yes/no question; anything but yes, or no terminal, declines."""
    try:
        answer = input(f"{question} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Tiered Ollama inference benchmark with optional OBM score submission",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Benchmark the local server and ask before submitting
  ollama-benchmark

  # Remote server, give up on any request after 10 minutes
  ollama-benchmark --host 192.168.1.20 --timeout 600

  # Local results only
  ollama-benchmark --no-submit
        """
    )

    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help=f"Ollama API host address (default: {DEFAULT_HOST})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Ollama API port number (default: {DEFAULT_PORT})"
    )

    parser.add_argument(
        "--prompt",
        default=STANDARD_PROMPT,
        help=f"Prompt used for every measured run (default: {STANDARD_PROMPT!r})"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds applied to every request (default: none)"
    )

    parser.add_argument(
        "--collector-url",
        default=DEFAULT_COLLECTOR_URL,
        help=f"Collector endpoint for submissions (default: {DEFAULT_COLLECTOR_URL})"
    )

    parser.add_argument(
        "--ollama-bin",
        default="ollama",
        help="Ollama executable used to read the version (default: ollama)"
    )

    consent = parser.add_mutually_exclusive_group()
    consent.add_argument(
        "--yes",
        action="store_true",
        help="Approve submission without prompting"
    )
    consent.add_argument(
        "--no-submit",
        action="store_true",
        help="Skip the submission prompt and keep results local"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function to execute the benchmark.

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        ollama_version = VersionCollector(args.ollama_bin).get_version()
        profile = SystemProfileCollector().collect()
        print_system_info(profile, ollama_version)

        benchmark = BenchmarkCore(
            host=args.host,
            port=args.port,
            timeout=args.timeout
        )
        report = benchmark.run_benchmark(profile, ollama_version, prompt=args.prompt)
        print_summary(report)

    except BenchmarkError as e:
        print(f"ERROR: Benchmark execution failed: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return EXIT_FAILURE

    try:
        if args.no_submit or not (args.yes or confirm(CONSENT_QUESTION)):
            print(f"Submission: {STATUS_INFO} (skipped, results not shared)")
            return EXIT_SUCCESS

        score = SubmissionClient(args.collector_url, timeout=args.timeout).submit(report)
    except SubmissionError as e:
        print(f"Submission: {STATUS_ERROR} ({e})", file=sys.stderr)
        return EXIT_SUCCESS
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Submission: {STATUS_OK}")
    print_score(score)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
