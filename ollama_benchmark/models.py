"""
Result types shared by the benchmark pipeline.

All types are immutable. Each exposes ``to_dict()`` producing the wire
shape the OBM collector expects, so the report can be serialized with
a plain ``json.dumps``.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Any, Optional, Sequence, Tuple

from .constants import NANOSECONDS_PER_SECOND, RUNS_PER_MODEL
from .errors import TransportError


@dataclass(frozen=True)
class OSInfo:
    """Operating system identification, opaque strings from the host."""
    platform: str
    distro: str
    release: str
    codename: str


@dataclass(frozen=True)
class CPUInfo:
    """CPU identification and logical core count."""
    manufacturer: str
    brand: str
    cores: int


@dataclass(frozen=True)
class MemoryInfo:
    """Total system memory in whole gigabytes."""
    totalgb: int


@dataclass(frozen=True)
class GPUInfo:
    """
    One graphics adapter.

    Attributes:
        gpu: Vendor and model label, possibly remapped to a marketing name
        vram: Memory in gigabytes; equals system memory on unified-memory hosts
        cores: Core count, 0 when not reported
    """
    gpu: str
    vram: float
    cores: int = 0


@dataclass(frozen=True)
class SystemProfile:
    """Host facts captured once per run."""
    os: OSInfo
    cpu: CPUInfo
    mem: MemoryInfo
    gpu: Tuple[GPUInfo, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "os": asdict(self.os),
            "cpu": asdict(self.cpu),
            "mem": asdict(self.mem),
            "gpu": [asdict(g) for g in self.gpu],
        }


@dataclass(frozen=True)
class Message:
    role: str
    content: str


@dataclass(frozen=True)
class GenerationResult:
    """
    One chat completion, with every duration expressed in seconds.

    Instances are only built through ``from_api`` which performs the
    nanosecond conversion; there is no path that converts twice.
    """
    model: str
    created_at: str
    message: Message
    done: bool
    total_duration: float
    load_duration: float
    prompt_eval_count: int
    prompt_eval_duration: float
    eval_count: int
    eval_duration: float

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "GenerationResult":
        """
        Build a result from a raw /api/chat response body.

        Args:
            data: Decoded JSON body, durations in nanoseconds

        Returns:
            GenerationResult with durations in seconds

        Raises:
            TransportError: If the body lacks the generation counters
        """
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected chat response: {data!r}")

        missing = [key for key in ("eval_count", "eval_duration") if key not in data]
        if missing:
            raise TransportError(
                f"Chat response missing required fields: {', '.join(missing)}"
            )

        message = data.get("message") or {}
        try:
            return cls(
                model=str(data.get("model", "")),
                created_at=str(data.get("created_at", "")),
                message=Message(
                    role=str(message.get("role", "assistant")),
                    content=str(message.get("content", "")),
                ),
                done=bool(data.get("done", False)),
                total_duration=data.get("total_duration", 0) / NANOSECONDS_PER_SECOND,
                load_duration=data.get("load_duration", 0) / NANOSECONDS_PER_SECOND,
                prompt_eval_count=int(data.get("prompt_eval_count", 0)),
                prompt_eval_duration=data.get("prompt_eval_duration", 0) / NANOSECONDS_PER_SECOND,
                eval_count=int(data["eval_count"]),
                eval_duration=data["eval_duration"] / NANOSECONDS_PER_SECOND,
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise TransportError(f"Malformed chat response: {e}") from e

    @property
    def tokens_per_second(self) -> Optional[float]:
        """Generated tokens per second of eval time, None if eval took no time."""
        if self.eval_duration == 0:
            return None
        return self.eval_count / self.eval_duration

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TierResult:
    """Four measured generations of one model and their mean throughput."""
    model: str
    firstgen: GenerationResult
    secondgen: GenerationResult
    thirdgen: GenerationResult
    fourthgen: GenerationResult
    averagetps: float

    @classmethod
    def from_runs(cls, model: str, runs: Sequence[GenerationResult],
                  averagetps: float) -> "TierResult":
        if len(runs) != RUNS_PER_MODEL:
            raise ValueError(f"Expected {RUNS_PER_MODEL} runs, got {len(runs)}")
        first, second, third, fourth = runs
        return cls(model, first, second, third, fourth, averagetps)

    @property
    def runs(self) -> List[GenerationResult]:
        return [self.firstgen, self.secondgen, self.thirdgen, self.fourthgen]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "firstgen": self.firstgen.to_dict(),
            "secondgen": self.secondgen.to_dict(),
            "thirdgen": self.thirdgen.to_dict(),
            "fourthgen": self.fourthgen.to_dict(),
            "averagetps": self.averagetps,
        }


@dataclass(frozen=True)
class BenchmarkReport:
    """The unit submitted to the collector."""
    testdate: str
    ollamaversion: str
    sysinfo: SystemProfile
    performance: Tuple[TierResult, ...]
    OBMVersion: str
    OBMScore: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "testdate": self.testdate,
            "ollamaversion": self.ollamaversion,
            "sysinfo": self.sysinfo.to_dict(),
            "performance": [tier.to_dict() for tier in self.performance],
            "OBMVersion": self.OBMVersion,
            "OBMScore": self.OBMScore,
        }


@dataclass(frozen=True)
class Score:
    """Composite and per-tier scores returned by the collector."""
    obmscore: Any
    obm7: Any = None
    obm13: Any = None
    obm70: Any = None
