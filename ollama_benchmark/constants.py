"""
Status, exit code and benchmark policy constants.

These constants ensure consistent output formatting across the
benchmark tool and pin the values shared with the OBM collector.
"""

# Status indicators
STATUS_OK = "OK"
STATUS_WARN = "WARN"
STATUS_ERROR = "ERROR"
STATUS_INFO = "INFO"

# Exit codes (Unix standard)
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INVALID_USAGE = 2

# Reported to the collector alongside every result
OBM_VERSION = "0.0.1"
SCORE_PLACEHOLDER = "0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 11434
DEFAULT_COLLECTOR_URL = "https://obm.tvl.st/api/postbm"
STANDARD_PROMPT = "Why is the sky blue?"

# Ollama reports every duration in nanoseconds
NANOSECONDS_PER_SECOND = 1e9

# Number of measured generations per model
RUNS_PER_MODEL = 4

WARMUP_MODEL = "orca-mini:latest"
# Tag-less name on purpose, the server resolves it to :latest
WARMUP_ALIAS = "orca-mini"
