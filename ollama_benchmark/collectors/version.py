"""
Ollama version probe.

Runs the ollama executable with --version and extracts the semantic
version from its free-text output.
"""

import re
import subprocess

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+")
UNKNOWN_VERSION = "unknown"


def parse_version(output: str) -> str:
    """Return the first x.y.z in output, or "unknown" if there is none."""
    match = VERSION_PATTERN.search(output or "")
    return match.group(0) if match else UNKNOWN_VERSION


class VersionCollector:
    """Report the installed Ollama version."""

    def __init__(self, executable: str = "ollama"):
        """
        Initialize version collector.

        Args:
            executable: Name or path of the ollama command line tool
        """
        self.executable = executable

    def get_version(self) -> str:
        """
        Invoke the executable and parse its version.

        Returns:
            Version string such as "0.1.17", or "unknown" if the tool is
            missing or prints no recognizable version
        """
        try:
            result = subprocess.run(
                [self.executable, "--version"],
                capture_output=True,
                text=True,
                timeout=30
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError):
            return UNKNOWN_VERSION

        return parse_version(result.stdout)
