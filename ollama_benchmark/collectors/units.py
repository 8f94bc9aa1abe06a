"""
Memory unit normalization.

The host inspector reports raw RAM and VRAM magnitudes in a different
base unit on each platform. The divisors below turn them into gigabytes.
"""

from types import MappingProxyType
from typing import Mapping

from ..errors import ConfigurationError

MEMORY_KINDS = ("ram", "vram")

# platform -> {kind: divisor}
MEMORY_DIVISORS: Mapping[str, Mapping[str, int]] = MappingProxyType({
    "linux": MappingProxyType({"ram": 1000 * 1024 * 1024, "vram": 1024}),
    "windows": MappingProxyType({"ram": 1000 * 1024 * 1024, "vram": 1024}),
    "darwin": MappingProxyType({"ram": 1024 * 1024, "vram": 1}),
})


def memory_divisor(kind: str, platform: str) -> int:
    """
    Look up the divisor converting a raw memory reading to gigabytes.

    Args:
        kind: "ram" or "vram"
        platform: Normalized platform identifier (linux, windows, darwin)

    Returns:
        Divisor for the platform's native reporting unit

    Raises:
        ConfigurationError: If the platform or kind is not supported
    """
    if kind not in MEMORY_KINDS:
        raise ConfigurationError(f"Unknown memory kind: {kind}")
    try:
        return MEMORY_DIVISORS[platform][kind]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported platform for memory normalization: {platform!r}"
        ) from None
