"""
Benchmark framework for Ollama inference performance testing.

This package runs a tiered set of models against a local Ollama server,
measures generation throughput, and optionally submits the results to
the OBM collector for cross-device comparison.
"""

from .core import BenchmarkCore, BENCHMARK_TIERS, select_tiers
from .constants import (
    OBM_VERSION,
    STATUS_OK,
    STATUS_WARN,
    STATUS_ERROR,
    STATUS_INFO,
    EXIT_SUCCESS,
    EXIT_FAILURE,
    EXIT_INVALID_USAGE
)
from .errors import (
    BenchmarkError,
    TransportError,
    ProvisioningError,
    ConfigurationError,
    SubmissionError
)
from .report import build_report
from .submission import SubmissionClient

__all__ = [
    'BenchmarkCore',
    'BENCHMARK_TIERS',
    'select_tiers',
    'build_report',
    'SubmissionClient',
    'BenchmarkError',
    'TransportError',
    'ProvisioningError',
    'ConfigurationError',
    'SubmissionError',
    'OBM_VERSION',
    'STATUS_OK',
    'STATUS_WARN',
    'STATUS_ERROR',
    'STATUS_INFO',
    'EXIT_SUCCESS',
    'EXIT_FAILURE',
    'EXIT_INVALID_USAGE'
]
