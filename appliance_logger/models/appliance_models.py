from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


###############################################################################
# 1. DEVICE -------------------------------------------------------------------
###############################################################################

class DeviceType(Enum):
    WASHER = "washer"
    DRYER  = "dryer"
    OTHER  = "other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "DeviceType":
        """Map a client type name (``"WASHER"``, ``"dryer"``…) onto a known type."""
        try:
            return cls[(name or "").strip().upper()]
        except KeyError:
            return cls.OTHER


@dataclass(frozen=True, slots=True)
class Device:
    """Immutable projection of one entry of the client's device list."""
    device_id: str
    name: str
    type: DeviceType
    model_id: str
    type_name: Optional[str] = None   # client's own type label, e.g. "REFRIGERATOR"

    # ---------- factory --------------------------------------------------- #
    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Device":
        type_name = row.get("type")
        return cls(
            device_id = str(row["device_id"]),
            name      = row.get("name") or row["device_id"],
            type      = DeviceType.from_name(type_name),
            model_id  = str(row.get("model_id", "")),
            type_name = type_name.upper() if type_name else None,
        )

    @property
    def tags(self) -> Dict[str, str]:
        return {
            "device_id":       self.device_id,
            "device_name":     self.name,
            "device_type":     self.type_name or self.type.name,
            "device_model_id": self.model_id,
        }


###############################################################################
# 2. FIELD DESCRIPTORS --------------------------------------------------------
###############################################################################

class DescriptorKind(Enum):
    ENUM      = "enum"
    RANGE     = "range"
    REFERENCE = "reference"
    BITMASK   = "bitmask"
    UNKNOWN   = "unknown"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """How one status field is declared in the device model's value table."""
    kind: DescriptorKind
    options: Mapping[str, str] = field(default_factory=dict)   # enum / bitmask labels
    min: Optional[float] = None
    max: Optional[float] = None
    reference: Optional[str] = None                            # key of the reference table

    @classmethod
    def enum(cls, options: Mapping[str, str]) -> "FieldDescriptor":
        return cls(DescriptorKind.ENUM, options=dict(options))

    @classmethod
    def range(cls, min: float, max: float) -> "FieldDescriptor":
        return cls(DescriptorKind.RANGE, min=min, max=max)

    @classmethod
    def reference_to(cls, table: Optional[str] = None) -> "FieldDescriptor":
        return cls(DescriptorKind.REFERENCE, reference=table)

    @classmethod
    def bitmask(cls, options: Mapping[str, str]) -> "FieldDescriptor":
        return cls(DescriptorKind.BITMASK, options=dict(options))

    @classmethod
    def unknown(cls) -> "FieldDescriptor":
        return cls(DescriptorKind.UNKNOWN)


@dataclass(frozen=True, slots=True)
class RenderedField:
    """A classified status field, ready for logging and series emission."""
    key: str
    kind: DescriptorKind
    raw: Any
    label: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None

    def describe(self) -> str:
        match self.kind:
            case DescriptorKind.ENUM:
                return f"- ENUM: {self.key}: {self.raw} / {self.label}"
            case DescriptorKind.RANGE:
                return f"- RANGE {self.key}: {self.raw} ({self.min} - {self.max})"
            case DescriptorKind.REFERENCE:
                return f"- REFERENCE: {self.key}: {self.raw} / {self.label}"
            case DescriptorKind.BITMASK:
                return f"- BIT: {self.key}: {self.raw} {self.label}"
            case _:
                return f"- UNDECODABLE {self.key}: {self.raw}"


###############################################################################
# 3. SERIES POINTS ------------------------------------------------------------
###############################################################################

@dataclass(frozen=True, slots=True)
class SeriesPoint:
    series: str
    value: Any
    tags: Mapping[str, str]
    timestamp: int                    # unix seconds

    def to_influx(self) -> Dict[str, Any]:
        return {
            "measurement": self.series,
            "tags":        dict(self.tags),
            "time":        self.timestamp,
            "fields":      {"value": self.value},
        }
