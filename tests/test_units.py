"""Tests for memory unit normalization."""

import pytest

from ollama_benchmark.collectors.units import memory_divisor, MEMORY_DIVISORS
from ollama_benchmark.errors import ConfigurationError


@pytest.mark.parametrize("platform", ["linux", "windows"])
def test_linux_and_windows_report_bytes_and_mebibytes(platform):
    assert memory_divisor("ram", platform) == 1000 * 1024 * 1024
    assert memory_divisor("vram", platform) == 1024


def test_darwin_reports_kibibytes_and_gigabytes():
    assert memory_divisor("ram", "darwin") == 1024 * 1024
    assert memory_divisor("vram", "darwin") == 1


@pytest.mark.parametrize("platform", ["freebsd", "win32", "", "Linux"])
def test_unknown_platform_has_no_default(platform):
    with pytest.raises(ConfigurationError):
        memory_divisor("ram", platform)


def test_unknown_kind_is_rejected():
    with pytest.raises(ConfigurationError):
        memory_divisor("swap", "linux")


def test_divisor_table_is_read_only():
    with pytest.raises(TypeError):
        MEMORY_DIVISORS["freebsd"] = {"ram": 1, "vram": 1}
    with pytest.raises(TypeError):
        MEMORY_DIVISORS["linux"]["ram"] = 1
