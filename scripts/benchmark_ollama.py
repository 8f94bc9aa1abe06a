#!/usr/bin/env python3
"""
Tiered Ollama inference benchmark.

Runs llama2:7b, plus llama2:13b and llama2:70b when the host has the
memory for them, and reports average tokens per second for each.

Usage (run from repo root):
    python scripts/benchmark_ollama.py
    python scripts/benchmark_ollama.py --no-submit --timeout 600
"""

import sys
from pathlib import Path

# Add repo root to Python path for ollama_benchmark package import
sys.path.insert(0, str(Path(__file__).parent.parent))

from ollama_benchmark.cli import main


if __name__ == "__main__":
    sys.exit(main())
