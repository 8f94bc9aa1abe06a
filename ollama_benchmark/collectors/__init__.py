"""
Host collectors consumed once at startup.

Available collectors:
- SystemProfileCollector: OS, CPU, memory and GPU facts
- VersionCollector: Ollama version via the command line tool
"""

from .system import SystemProfileCollector, HostInspector, GPU_RENAMES
from .units import memory_divisor, MEMORY_DIVISORS
from .version import VersionCollector, parse_version

__all__ = [
    'SystemProfileCollector',
    'HostInspector',
    'GPU_RENAMES',
    'memory_divisor',
    'MEMORY_DIVISORS',
    'VersionCollector',
    'parse_version'
]
