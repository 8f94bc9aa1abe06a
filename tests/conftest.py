"""Shared fixtures: a fake Ollama server and canned payloads."""

from unittest.mock import Mock, patch

import pytest
import requests

from ollama_benchmark.models import CPUInfo, GPUInfo, MemoryInfo, OSInfo, SystemProfile


def make_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


def chat_body(eval_count=100, eval_duration=2_000_000_000, model="llama2:7b", **overrides):
    body = {
        "model": model,
        "created_at": "2023-12-01T10:00:00.000000Z",
        "message": {"role": "assistant", "content": "Rayleigh scattering."},
        "done": True,
        "total_duration": 3_000_000_000,
        "load_duration": 500_000_000,
        "prompt_eval_count": 26,
        "prompt_eval_duration": 250_000_000,
        "eval_count": eval_count,
        "eval_duration": eval_duration,
    }
    body.update(overrides)
    return body


class FakeOllama:
    """Routes requests.request calls to canned Ollama replies and records them."""

    def __init__(self, models=None, pull_status="success", pull_error=None):
        self.models = list(models or [])
        self.pull_status = pull_status
        self.pull_error = pull_error
        self.chat_replies = []
        self.calls = []

    def paths(self, method=None):
        return [path for m, path, _ in self.calls if method is None or m == method]

    def payloads(self, path):
        return [payload for _, p, payload in self.calls if p == path]

    def __call__(self, method, url, json=None, timeout=None):
        path = url.split("11434", 1)[-1]
        self.calls.append((method, path, json))
        if path == "/api/tags":
            return make_response({"models": [{"name": m} for m in self.models]})
        if path == "/api/pull":
            if self.pull_error:
                return make_response({"error": self.pull_error}, status_code=500)
            if self.pull_status == "success":
                self.models.append(json["name"])
            return make_response({"status": self.pull_status})
        if path == "/api/chat":
            if not json["messages"][0]["content"]:
                return make_response({"model": json["model"], "done": True, "done_reason": "load"})
            if self.chat_replies:
                return make_response(self.chat_replies.pop(0))
            return make_response(chat_body(model=json["model"]))
        return make_response({"error": "not found"}, status_code=404)


@pytest.fixture
def fake_server():
    server = FakeOllama(models=["orca-mini:latest", "llama2:7b", "llama2:13b", "llama2:70b"])
    with patch("ollama_benchmark.core.requests.request", side_effect=server):
        yield server


@pytest.fixture
def make_profile():
    def _profile(totalgb=16, platform="linux"):
        return SystemProfile(
            os=OSInfo(platform=platform, distro="Ubuntu", release="22.04", codename="jammy"),
            cpu=CPUInfo(manufacturer="AMD", brand="Ryzen 9 7950X", cores=32),
            mem=MemoryInfo(totalgb=totalgb),
            gpu=(GPUInfo(gpu="NVIDIA Corporation Device A100", vram=40.0, cores=0),),
        )
    return _profile
