"""Response envelope models for the cgminer JSON API.

Every record field is optional: ``None`` means the daemon build or device
did not report it, not that it is zero. Keys the models don't know about
are kept in ``extra`` rather than rejected.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

from cgminer_api.errors import DecodeError


class StatusCode(Enum):
    """Single-letter outcome classifier embedded in every response."""
    SUCCESS = "S"
    INFORMATIONAL = "I"
    WARNING = "W"
    ERROR = "E"
    FATAL = "F"

    @property
    def is_success(self) -> bool:
        return self in (StatusCode.SUCCESS, StatusCode.INFORMATIONAL, StatusCode.WARNING)


def _wire(key: str, kind: type):
    return field(default=None, metadata={"wire": key, "kind": kind})


def _coerce(key: str, value: Any, kind: type) -> Any:
    if value is None:
        return None
    if kind is bool:
        if isinstance(value, bool):
            return value
    elif kind is str:
        if isinstance(value, str):
            return value
    elif isinstance(value, bool):
        pass  # JSON true/false is never a number here
    elif kind is int:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
    elif kind is float:
        if isinstance(value, (int, float)):
            return float(value)
    raise DecodeError(f"Field {key!r}: expected {kind.__name__}, got {type(value).__name__}")


@dataclass
class _Record:
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, item: Any):
        if not isinstance(item, dict):
            raise DecodeError(f"{cls.__name__} entry must be an object, got {type(item).__name__}")
        known = {}
        wire_keys = set()
        for f in fields(cls):
            key = f.metadata.get("wire")
            if key is None:
                continue
            wire_keys.add(key)
            if key in item:
                known[f.name] = _coerce(key, item[key], f.metadata["kind"])
        extra = {k: v for k, v in item.items() if k not in wire_keys}
        return cls(extra=extra, **known)


@dataclass
class APIStatus(_Record):
    """One entry of the STATUS list."""
    status: Optional[str] = _wire("STATUS", str)
    code: Optional[int] = _wire("Code", int)
    msg: Optional[str] = _wire("Msg", str)
    description: Optional[str] = _wire("Description", str)
    when: Optional[int] = _wire("When", int)

    @property
    def status_code(self) -> Optional[StatusCode]:
        try:
            return StatusCode(self.status)
        except ValueError:
            return None


@dataclass
class Summary(_Record):
    """Rig-wide totals returned by ``summary``."""
    accepted: Optional[int] = _wire("Accepted", int)
    best_share: Optional[float] = _wire("Best Share", float)
    device_hardware: Optional[float] = _wire("Device Hardware%", float)
    device_rejected: Optional[float] = _wire("Device Rejected%", float)
    difficulty_accepted: Optional[float] = _wire("Difficulty Accepted", float)
    difficulty_rejected: Optional[float] = _wire("Difficulty Rejected", float)
    difficulty_stale: Optional[float] = _wire("Difficulty Stale", float)
    discarded: Optional[float] = _wire("Discarded", float)
    elapsed: Optional[float] = _wire("Elapsed", float)
    found_blocks: Optional[float] = _wire("Found Blocks", float)
    get_failures: Optional[float] = _wire("Get Failures", float)
    getworks: Optional[float] = _wire("Getworks", float)
    hardware_errors: Optional[float] = _wire("Hardware Errors", float)
    local_work: Optional[float] = _wire("Local Work", float)
    mhs_5s: Optional[float] = _wire("MHS 5s", float)
    mhs_av: Optional[float] = _wire("MHS av", float)
    network_blocks: Optional[float] = _wire("Network Blocks", float)
    pool_rejected: Optional[float] = _wire("Pool Rejected%", float)
    pool_stale: Optional[float] = _wire("Pool Stale%", float)
    rejected: Optional[float] = _wire("Rejected", float)
    remote_failures: Optional[float] = _wire("Remote Failures", float)
    stale: Optional[float] = _wire("Stale", float)
    total_mh: Optional[float] = _wire("Total MH", float)
    utility: Optional[float] = _wire("Utility", float)
    work_utility: Optional[float] = _wire("Work Utility", float)


@dataclass
class Config(_Record):
    """Daemon configuration returned by ``config``."""
    adl: Optional[str] = _wire("ADL", str)
    adl_in_use: Optional[str] = _wire("ADL in use", str)
    asc_count: Optional[float] = _wire("ASC Count", float)
    device_code: Optional[str] = _wire("Device Code", str)
    expiry: Optional[float] = _wire("Expiry", float)
    failover_only: Optional[bool] = _wire("Failover-Only", bool)
    gpu_count: Optional[float] = _wire("GPU Count", float)
    hotplug: Optional[float] = _wire("Hotplug", float)
    log_interval: Optional[float] = _wire("Log Interval", float)
    os: Optional[str] = _wire("OS", str)
    pga_count: Optional[float] = _wire("PGA Count", float)
    pool_count: Optional[float] = _wire("Pool Count", float)
    queue: Optional[float] = _wire("Queue", float)
    scan_time: Optional[float] = _wire("ScanTime", float)
    strategy: Optional[str] = _wire("Strategy", str)


@dataclass
class Devs(_Record):
    """Per-device telemetry, used for both the DEVS and GPU lists."""
    accepted: Optional[int] = _wire("Accepted", int)
    device_elapsed: Optional[float] = _wire("Device Elapsed", float)
    device_hardware: Optional[float] = _wire("Device Hardware%", float)
    device_rejected: Optional[float] = _wire("Device Rejected%", float)
    diff1_work: Optional[float] = _wire("Diff1 Work", float)
    difficulty_accepted: Optional[float] = _wire("Difficulty Accepted", float)
    difficulty_rejected: Optional[float] = _wire("Difficulty Rejected", float)
    enabled: Optional[str] = _wire("Enabled", str)
    fan_percent: Optional[float] = _wire("Fan Percent", float)
    fan_speed: Optional[int] = _wire("Fan Speed", int)
    gpu: Optional[float] = _wire("GPU", float)
    gpu_activity: Optional[int] = _wire("GPU Activity", int)
    gpu_clock: Optional[int] = _wire("GPU Clock", int)
    gpu_voltage: Optional[float] = _wire("GPU Voltage", float)
    hardware_errors: Optional[float] = _wire("Hardware Errors", float)
    intensity: Optional[str] = _wire("Intensity", str)
    last_share_difficulty: Optional[float] = _wire("Last Share Difficulty", float)
    last_share_pool: Optional[float] = _wire("Last Share Pool", float)
    last_share_time: Optional[float] = _wire("Last Share Time", float)
    last_valid_work: Optional[float] = _wire("Last Valid Work", float)
    mhs_5s: Optional[float] = _wire("MHS 5s", float)
    mhs_av: Optional[float] = _wire("MHS av", float)
    memory_clock: Optional[int] = _wire("Memory Clock", int)
    powertune: Optional[int] = _wire("Powertune", int)
    rejected: Optional[int] = _wire("Rejected", int)
    status: Optional[str] = _wire("Status", str)
    temperature: Optional[float] = _wire("Temperature", float)
    total_mh: Optional[float] = _wire("Total MH", float)
    utility: Optional[float] = _wire("Utility", float)


def _records(data: Dict[str, Any], key: str, cls) -> Optional[list]:
    items = data.get(key)
    if items is None:
        return None
    if not isinstance(items, list):
        raise DecodeError(f"{key} must be a list, got {type(items).__name__}")
    return [cls.from_dict(item) for item in items]


_SECTIONS = ("STATUS", "SUMMARY", "CONFIG", "DEVS", "GPU")


@dataclass
class Response:
    """Decoded response envelope.

    ``status`` is always present; at most one of the result lists is
    populated, depending on the command. Absent lists are ``None``.
    """
    status: List[APIStatus]
    summary: Optional[List[Summary]] = None
    config: Optional[List[Config]] = None
    devs: Optional[List[Devs]] = None
    gpu: Optional[List[Devs]] = None
    # Undecoded sections such as POOLS or VERSION, keyed as on the wire
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "Response":
        if not isinstance(data, dict):
            raise DecodeError(f"Response must be a JSON object, got {type(data).__name__}")
        if "STATUS" not in data:
            raise DecodeError("Response has no STATUS list")
        return cls(
            status=_records(data, "STATUS", APIStatus) or [],
            summary=_records(data, "SUMMARY", Summary),
            config=_records(data, "CONFIG", Config),
            devs=_records(data, "DEVS", Devs),
            gpu=_records(data, "GPU", Devs),
            extra={k: v for k, v in data.items() if k not in _SECTIONS},
        )

    @property
    def first_status(self) -> APIStatus:
        """The entry that decides the call outcome."""
        if not self.status:
            raise DecodeError("Response STATUS list is empty")
        return self.status[0]
