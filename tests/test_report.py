"""Tests for report assembly."""

import json
from datetime import datetime

from conftest import chat_body
from ollama_benchmark.models import GenerationResult, TierResult
from ollama_benchmark.report import build_report


def make_tier(model):
    runs = [GenerationResult.from_api(chat_body(model=model)) for _ in range(4)]
    return TierResult.from_runs(model, runs, 50.0)


def test_report_stamps_version_and_placeholder(make_profile):
    report = build_report("0.1.17", make_profile(), [make_tier("llama2:7b")])
    assert report.OBMVersion == "0.0.1"
    assert report.OBMScore == "0"
    assert report.ollamaversion == "0.1.17"
    datetime.fromisoformat(report.testdate)


def test_explicit_testdate_kept(make_profile):
    report = build_report("0.1.17", make_profile(), [], testdate="2023-12-01T10:00:00+00:00")
    assert report.testdate == "2023-12-01T10:00:00+00:00"
    assert report.performance == ()


def test_performance_order_preserved_and_detached(make_profile):
    performance = [make_tier("llama2:7b"), make_tier("llama2:13b")]
    report = build_report("0.1.17", make_profile(), performance)
    performance.append(make_tier("llama2:70b"))
    assert [t.model for t in report.performance] == ["llama2:7b", "llama2:13b"]


def test_serialized_shape(make_profile):
    report = build_report("0.1.17", make_profile(totalgb=16), [make_tier("llama2:7b")])
    data = json.loads(json.dumps(report.to_dict()))
    assert set(data) == {"testdate", "ollamaversion", "sysinfo", "performance", "OBMVersion", "OBMScore"}
    assert data["sysinfo"]["mem"] == {"totalgb": 16}
    assert data["sysinfo"]["gpu"][0]["gpu"] == "NVIDIA Corporation Device A100"
    assert data["performance"][0]["model"] == "llama2:7b"
    assert data["performance"][0]["firstgen"]["eval_duration"] == 2.0
