"""Data models for the RAID calculator"""

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .exceptions import ConfigurationError


RAID_LEVELS: Tuple[str, ...] = ("0", "1", "5", "6", "10")
MEDIA_TYPES: Tuple[str, ...] = ("HDD", "SSD")

MIN_DISKS_FOR_RAID: Dict[str, int] = {
    "0": 2,
    "1": 2,
    "5": 3,
    "6": 4,
    "10": 4,
}

# Levels that pair disks and therefore need an even count
MIRRORED_LEVELS: Tuple[str, ...] = ("1", "10")

RAID_LEVEL_NAMES: Dict[str, str] = {
    "0": "RAID 0 (Striping)",
    "1": "RAID 1 (Mirroring)",
    "5": "RAID 5 (Striping + Parity)",
    "6": "RAID 6 (Striping + Dual Parity)",
    "10": "RAID 10 (Mirrored Stripes)",
}

MEDIA_TYPE_NAMES: Dict[str, str] = {
    "HDD": "Hard Disk Drive",
    "SSD": "Solid State Drive",
}


def normalize_raid_level(raid_level) -> str:
    """Return the canonical string form of a RAID level

    Accepts ints ("5" and 5 are the same level) and a "RAID" prefix.

    Raises:
        ConfigurationError: If the level is not one of 0, 1, 5, 6, 10
    """
    level = str(raid_level).strip().upper()
    if level.startswith("RAID"):
        level = level[4:].strip()
    if level not in RAID_LEVELS:
        raise ConfigurationError(f"Unsupported RAID level: {raid_level}")
    return level


def normalize_media_type(media_type) -> str:
    """Return the canonical media type name

    Raises:
        ConfigurationError: If the media type is not HDD or SSD
    """
    media = str(media_type).strip().upper()
    if media not in MEDIA_TYPES:
        raise ConfigurationError(f"Unsupported media type: {media_type}")
    return media


def _positive_size(size) -> float:
    try:
        value = float(size)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Disk size must be a number, got {size!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"Disk size must be positive, got {size!r}")
    return value


@dataclass(frozen=True)
class Disk:
    """A single member disk of an array"""

    size: float                      # Capacity in TB
    media_type: str = "HDD"          # HDD or SSD

    def __post_init__(self):
        """Validate and normalize disk data after initialization"""
        object.__setattr__(self, "size", _positive_size(self.size))
        object.__setattr__(self, "media_type", normalize_media_type(self.media_type))

    def to_dict(self) -> dict:
        """Convert disk to dictionary representation"""
        return {
            "size": self.size,
            "media_type": self.media_type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Disk":
        """Create Disk from dictionary"""
        if not isinstance(data, dict):
            raise ConfigurationError(f"Disk entry must be a mapping, got {data!r}")
        return cls(
            size=data.get("size", 0),
            media_type=data.get("media_type", "HDD"),
        )


@dataclass(frozen=True)
class UniformDiskConfig:
    """Shorthand for an array of identical disks"""

    disk_count: int
    disk_size: float
    media_type: str = "HDD"

    def __post_init__(self):
        count = self.disk_count
        if isinstance(count, float) and count.is_integer():
            count = int(count)
        if isinstance(count, bool) or not isinstance(count, int):
            raise ConfigurationError(f"Disk count must be an integer, got {self.disk_count!r}")
        if count < 1:
            raise ConfigurationError(f"Disk count must be at least 1, got {count}")
        object.__setattr__(self, "disk_count", count)
        object.__setattr__(self, "disk_size", _positive_size(self.disk_size))
        object.__setattr__(self, "media_type", normalize_media_type(self.media_type))

    def to_disks(self) -> Tuple[Disk, ...]:
        """Expand the shorthand into a list of disks"""
        return tuple(Disk(self.disk_size, self.media_type) for _ in range(self.disk_count))

    def to_dict(self) -> dict:
        return {
            "disk_count": self.disk_count,
            "disk_size": self.disk_size,
            "media_type": self.media_type,
        }


@dataclass(frozen=True)
class RaidConfiguration:
    """A RAID level plus either an explicit disk list or a uniform shorthand

    Exactly one of ``disks`` and ``uniform`` is set.
    """

    raid_level: str
    disks: Optional[Tuple[Disk, ...]] = None
    uniform: Optional[UniformDiskConfig] = None
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "raid_level", normalize_raid_level(self.raid_level))
        if (self.disks is None) == (self.uniform is None):
            raise ConfigurationError("Configuration needs either a disk list or a uniform disk setup")
        if self.disks is not None:
            disks = tuple(self.disks)
            if not disks:
                raise ConfigurationError("No disks specified")
            object.__setattr__(self, "disks", disks)

    @property
    def is_uniform(self) -> bool:
        return self.uniform is not None

    @property
    def disk_count(self) -> int:
        if self.uniform is not None:
            return self.uniform.disk_count
        return len(self.disks)

    @property
    def media_types(self) -> FrozenSet[str]:
        if self.uniform is not None:
            return frozenset((self.uniform.media_type,))
        return frozenset(disk.media_type for disk in self.disks)

    def to_disks(self) -> Tuple[Disk, ...]:
        """Normalize either shape into a tuple of disks"""
        if self.uniform is not None:
            return self.uniform.to_disks()
        return self.disks

    @classmethod
    def from_uniform(cls, raid_level, disk_count: int, disk_size: float, media_type: str = "HDD",
                     name: Optional[str] = None, description: Optional[str] = None) -> "RaidConfiguration":
        """Create a uniform configuration"""
        return cls(
            raid_level=raid_level,
            uniform=UniformDiskConfig(disk_count, disk_size, media_type),
            name=name,
            description=description,
        )

    @classmethod
    def from_disks(cls, raid_level, disks, name: Optional[str] = None,
                   description: Optional[str] = None) -> "RaidConfiguration":
        """Create a configuration from a disk list

        Identical disks collapse into the uniform shorthand.
        """
        disks = tuple(disks)
        if disks and all(d == disks[0] for d in disks):
            return cls.from_uniform(raid_level, len(disks), disks[0].size, disks[0].media_type,
                                    name=name, description=description)
        return cls(raid_level=raid_level, disks=disks, name=name, description=description)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary representation"""
        data = {"raid_level": self.raid_level}
        if self.uniform is not None:
            data.update(self.uniform.to_dict())
        else:
            data["disks"] = [disk.to_dict() for disk in self.disks]
        if self.name:
            data["name"] = self.name
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "RaidConfiguration":
        """Create RaidConfiguration from dictionary

        Accepts the uniform keys (disk_count, disk_size, media_type) or a
        ``disks`` list.
        """
        raid_level = data.get("raid_level")
        if raid_level is None:
            raise ConfigurationError("Configuration is missing raid_level")
        if "disks" in data:
            disks = [Disk.from_dict(d) for d in data.get("disks") or []]
            return cls(raid_level=raid_level, disks=tuple(disks),
                       name=data.get("name"), description=data.get("description"))
        return cls.from_uniform(
            raid_level,
            data.get("disk_count", 0),
            data.get("disk_size", 0),
            data.get("media_type", "HDD"),
            name=data.get("name"),
            description=data.get("description"),
        )


@dataclass
class CapacityResult:
    """Capacity figures for a RAID configuration"""

    usable_capacity: float           # TB available for data
    total_capacity: float            # Raw TB across all disks
    efficiency: float                # Percentage (0-100)
    fault_tolerance: int             # Disks that can fail without data loss
    parity_overhead: float           # TB spent on redundancy
    stripe_size: int                 # Number of data disks
    description: str = ""
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert result to dictionary representation"""
        return {
            "usable_capacity": self.usable_capacity,
            "total_capacity": self.total_capacity,
            "efficiency": self.efficiency,
            "fault_tolerance": self.fault_tolerance,
            "parity_overhead": self.parity_overhead,
            "stripe_size": self.stripe_size,
            "description": self.description,
            "warnings": list(self.warnings),
        }


@dataclass
class PerformanceResult:
    """Heuristic performance estimate for a RAID configuration"""

    random_read_iops: int
    random_write_iops: int
    sequential_read_mbps: float
    sequential_write_mbps: float
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert estimate to dictionary representation"""
        return {
            "random_read_iops": self.random_read_iops,
            "random_write_iops": self.random_write_iops,
            "sequential_read_mbps": self.sequential_read_mbps,
            "sequential_write_mbps": self.sequential_write_mbps,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class MediaPerformance:
    """Single-disk baseline for a media type"""

    random_read_iops: float
    random_write_iops: float
    sequential_read_mbps: float
    sequential_write_mbps: float


@dataclass(frozen=True)
class RaidPerformanceProfile:
    """Per-level multipliers applied on top of the media baseline"""

    random_read_multiplier: float
    random_write_multiplier: float
    sequential_read_multiplier: float
    sequential_write_multiplier: float
    write_amplification: float
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Preset:
    """A named vendor configuration used to pre-fill the calculator"""

    id: str
    vendor: str
    name: str
    description: str
    configuration: RaidConfiguration
    tags: FrozenSet[str] = frozenset()
    popular: bool = False

    def __post_init__(self):
        if not self.id:
            raise ConfigurationError("Preset needs an id")
        object.__setattr__(self, "tags", frozenset(self.tags))

    def to_dict(self) -> dict:
        """Convert preset to dictionary representation"""
        return {
            "id": self.id,
            "vendor": self.vendor,
            "name": self.name,
            "description": self.description,
            "tags": sorted(self.tags),
            "popular": self.popular,
            "configuration": self.configuration.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Preset":
        """Create Preset from dictionary

        The configuration keys may sit at the top level or under
        ``configuration``.
        """
        config_data = data.get("configuration") or data
        if not isinstance(config_data, dict):
            raise ConfigurationError("Preset configuration must be a mapping")
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = (tags,)
        return cls(
            id=data.get("id", ""),
            vendor=data.get("vendor", "Generic"),
            name=data.get("name", ""),
            description=data.get("description", ""),
            configuration=RaidConfiguration.from_dict(config_data),
            tags=frozenset(tags),
            popular=bool(data.get("popular", False)),
        )
