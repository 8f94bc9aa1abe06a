"""Tests for the Ollama version probe."""

import subprocess
from unittest.mock import Mock, patch

from ollama_benchmark.collectors.version import VersionCollector, parse_version


def test_parse_version_extracts_semver():
    assert parse_version("ollama version is 0.1.17\n") == "0.1.17"
    assert parse_version("Warning: could not connect\nclient version is 0.5.7") == "0.5.7"


def test_parse_version_without_match_is_unknown():
    assert parse_version("ollama version is dev") == "unknown"
    assert parse_version("") == "unknown"


@patch("ollama_benchmark.collectors.version.subprocess.run")
def test_get_version_invokes_cli(run):
    run.return_value = Mock(stdout="ollama version is 0.1.20\n", returncode=0)
    assert VersionCollector("/usr/local/bin/ollama").get_version() == "0.1.20"
    assert run.call_args[0][0] == ["/usr/local/bin/ollama", "--version"]


@patch("ollama_benchmark.collectors.version.subprocess.run", side_effect=FileNotFoundError)
def test_missing_executable_is_unknown(_run):
    assert VersionCollector().get_version() == "unknown"


@patch("ollama_benchmark.collectors.version.subprocess.run",
       side_effect=subprocess.TimeoutExpired("ollama", 30))
def test_hung_executable_is_unknown(_run):
    assert VersionCollector().get_version() == "unknown"
