"""
Host hardware and OS collector.

HostInspector reads raw facts from the running machine; the
SystemProfileCollector turns them into a normalized SystemProfile.
"""

import json
import platform as platform_module
import re
import subprocess
from types import MappingProxyType
from typing import Dict, List, Any, Optional

import psutil

from ..errors import ConfigurationError
from ..models import CPUInfo, GPUInfo, MemoryInfo, OSInfo, SystemProfile
from .units import MEMORY_DIVISORS, memory_divisor

# Generic PCI identifiers and the product they actually are
GPU_RENAMES = MappingProxyType({
    "NVIDIA Corporation Device 20b0": "NVIDIA Corporation Device A100",
})

CPU_VENDORS = MappingProxyType({
    "GenuineIntel": "Intel",
    "AuthenticAMD": "AMD",
})

GPU_CLASSES = ("VGA compatible controller", "3D controller", "Display controller")


def host_platform() -> str:
    """Return the running platform as linux, windows or darwin."""
    return platform_module.system().lower()


def _run(args: List[str]) -> Optional[str]:
    """Run a probe command, returning stdout or None if it is unavailable."""
    try:
        result = subprocess.run(args, capture_output=True, text=True, timeout=15)
    except (subprocess.TimeoutExpired, FileNotFoundError, PermissionError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout


class HostInspector:
    """
    Read raw system facts in each platform's native units.

    RAM is bytes on linux and windows and KiB on darwin. GPU VRAM is MiB
    on linux and windows and GB on darwin.
    """

    def __init__(self, platform: str):
        self.platform = platform

    def memory_total(self) -> int:
        total = psutil.virtual_memory().total
        if self.platform == "darwin":
            return total // 1024
        return total

    def cpu(self) -> Dict[str, Any]:
        """
        Collect CPU identification.

        Returns:
            Dictionary containing manufacturer, brand and cores
        """
        info = {"manufacturer": "", "brand": ""}

        if self.platform == "linux":
            try:
                with open("/proc/cpuinfo", "r") as f:
                    for line in f:
                        if line.startswith("vendor_id") and not info["manufacturer"]:
                            vendor = line.split(":", 1)[1].strip()
                            info["manufacturer"] = CPU_VENDORS.get(vendor, vendor)
                        elif line.startswith("model name") and not info["brand"]:
                            info["brand"] = line.split(":", 1)[1].strip()
            except FileNotFoundError:
                pass
        elif self.platform == "darwin":
            brand = _run(["sysctl", "-n", "machdep.cpu.brand_string"])
            if brand:
                info["brand"] = brand.strip()
                info["manufacturer"] = "Apple" if info["brand"].startswith("Apple") else "Intel"

        if not info["brand"]:
            processor = platform_module.processor()
            info["brand"] = processor
            # Windows: "Intel64 Family 6 Model 158 Stepping 10, GenuineIntel"
            if not info["manufacturer"] and "," in processor:
                vendor = processor.rsplit(",", 1)[1].strip()
                info["manufacturer"] = CPU_VENDORS.get(vendor, vendor)

        info["cores"] = psutil.cpu_count() or 0
        return info

    def os_info(self) -> Dict[str, str]:
        """
        Collect OS identification.

        Returns:
            Dictionary containing platform, distro, release and codename
        """
        info = {
            "platform": self.platform,
            "distro": platform_module.system(),
            "release": platform_module.release(),
            "codename": "",
        }

        if self.platform == "linux":
            release = {}
            try:
                with open("/etc/os-release", "r") as f:
                    for line in f:
                        if "=" in line:
                            key, value = line.rstrip("\n").split("=", 1)
                            release[key] = value.strip('"')
            except FileNotFoundError:
                pass
            info["distro"] = release.get("NAME", info["distro"])
            info["release"] = release.get("VERSION_ID", info["release"])
            info["codename"] = release.get("VERSION_CODENAME", "")
        elif self.platform == "windows":
            info["distro"] = f"Windows {platform_module.release()}"
            info["release"] = platform_module.version()
        elif self.platform == "darwin":
            info["distro"] = "macOS"
            info["release"] = platform_module.mac_ver()[0]

        return info

    def gpus(self) -> List[Dict[str, Any]]:
        """
        Enumerate graphics adapters.

        Returns:
            List of dictionaries with vendor, model, vram (native unit or
            None when not reported) and cores. Empty when no probe tool
            is available.
        """
        if self.platform == "darwin":
            return self._system_profiler_gpus()

        nvidia = self._nvidia_smi_gpus()
        if self.platform == "linux":
            adapters = self._lspci_gpus()
            if adapters:
                # nvidia-smi lists NVIDIA boards in PCI bus order, same as lspci
                vram = iter(g["vram"] for g in nvidia)
                for adapter in adapters:
                    if adapter["vendor"].startswith("NVIDIA"):
                        adapter["vram"] = next(vram, None)
                return adapters
        return nvidia

    def _lspci_gpus(self) -> List[Dict[str, Any]]:
        output = _run(["lspci", "-vmm"])
        if not output:
            return []

        adapters = []
        for record in output.strip().split("\n\n"):
            fields = {}
            for line in record.splitlines():
                if ":" in line:
                    key, value = line.split(":", 1)
                    fields[key.strip()] = value.strip()
            if fields.get("Class") in GPU_CLASSES:
                adapters.append({
                    "vendor": fields.get("Vendor", ""),
                    "model": fields.get("Device", ""),
                    "vram": None,
                    "cores": 0,
                })
        return adapters

    def _nvidia_smi_gpus(self) -> List[Dict[str, Any]]:
        output = _run([
            "nvidia-smi",
            "--query-gpu=name,memory.total",
            "--format=csv,noheader,nounits",
        ])
        if not output:
            return []

        gpus = []
        for line in output.strip().splitlines():
            parts = [p.strip() for p in line.split(",")]
            if len(parts) != 2:
                continue
            try:
                vram = float(parts[1])
            except ValueError:
                vram = None
            gpus.append({"vendor": "NVIDIA", "model": parts[0], "vram": vram, "cores": 0})
        return gpus

    def _system_profiler_gpus(self) -> List[Dict[str, Any]]:
        output = _run(["system_profiler", "SPDisplaysDataType", "-json"])
        if not output:
            return []

        try:
            displays = json.loads(output).get("SPDisplaysDataType", [])
        except ValueError:
            return []

        gpus = []
        for display in displays:
            vendor = display.get("spdisplays_vendor", "")
            vendor = vendor.replace("sppci_vendor_", "")
            try:
                cores = int(display.get("sppci_cores", 0))
            except ValueError:
                cores = 0
            gpus.append({
                "vendor": vendor,
                "model": display.get("sppci_model", ""),
                "vram": _parse_darwin_vram(
                    display.get("spdisplays_vram") or display.get("spdisplays_vram_shared")
                ),
                "cores": cores,
            })
        return gpus


def _parse_darwin_vram(value: Optional[str]) -> Optional[float]:
    """Parse "8 GB" or "1536 MB" into gigabytes."""
    if not value:
        return None
    match = re.match(r"\s*([\d.]+)\s*(GB|MB)", value)
    if not match:
        return None
    amount = float(match.group(1))
    return amount / 1024 if match.group(2) == "MB" else amount


class SystemProfileCollector:
    """
    Compose an immutable SystemProfile from raw host facts.

    Construction fails with ConfigurationError for a platform without a
    memory unit mapping, before any host query runs.
    """

    def __init__(self, platform: Optional[str] = None,
                 inspector: Optional[HostInspector] = None):
        """
        Initialize collector.

        Args:
            platform: Platform identifier (detected from the host if None)
            inspector: Raw fact source (a HostInspector for the platform if None)

        Raises:
            ConfigurationError: If the platform is not supported
        """
        self.platform = platform or host_platform()
        if self.platform not in MEMORY_DIVISORS:
            raise ConfigurationError(
                f"Unsupported platform for memory normalization: {self.platform!r}"
            )
        self.inspector = inspector or HostInspector(self.platform)

    def collect(self) -> SystemProfile:
        """Query the host and return a normalized SystemProfile."""
        os_info = self.inspector.os_info()
        cpu = self.inspector.cpu()
        raw_ram = self.inspector.memory_total()

        totalgb = int(round(raw_ram / memory_divisor("ram", self.platform)))
        memory = MemoryInfo(totalgb=max(0, totalgb))

        vram_divisor = memory_divisor("vram", self.platform)
        gpus = []
        for g in self.inspector.gpus():
            label = f"{g.get('vendor', '')} {g.get('model', '')}".strip()
            raw_vram = g.get("vram")
            # No dedicated VRAM reported: the GPU shares system memory
            vram = raw_vram / vram_divisor if raw_vram else memory.totalgb
            gpus.append(GPUInfo(
                gpu=GPU_RENAMES.get(label, label),
                vram=max(0.0, float(vram)),
                cores=max(0, int(g.get("cores") or 0)),
            ))

        return SystemProfile(
            os=OSInfo(
                platform=os_info.get("platform", self.platform),
                distro=os_info.get("distro", ""),
                release=os_info.get("release", ""),
                codename=os_info.get("codename", ""),
            ),
            cpu=CPUInfo(
                manufacturer=cpu.get("manufacturer", ""),
                brand=cpu.get("brand", ""),
                cores=max(0, int(cpu.get("cores") or 0)),
            ),
            mem=memory,
            gpu=tuple(gpus),
        )
