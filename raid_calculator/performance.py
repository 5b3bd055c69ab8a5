"""Heuristic IOPS and throughput estimates for RAID configurations

The numbers are static single-disk baselines scaled by an effective disk
count and per-level multipliers. They are a rough guide, not a simulation.
"""

from typing import Dict, List, Optional

from .capacity import get_valid_raid_levels
from .exceptions import ConfigurationError
from .models import (
    MEDIA_TYPES,
    MIRRORED_LEVELS,
    MediaPerformance,
    PerformanceResult,
    RaidConfiguration,
    RaidPerformanceProfile,
    normalize_media_type,
    normalize_raid_level,
)


MEDIA_BASELINES: Dict[str, MediaPerformance] = {
    # Typical 7200 RPM drive
    "HDD": MediaPerformance(
        random_read_iops=150,
        random_write_iops=140,
        sequential_read_mbps=180,
        sequential_write_mbps=160,
    ),
    # Typical SATA SSD
    "SSD": MediaPerformance(
        random_read_iops=75000,
        random_write_iops=65000,
        sequential_read_mbps=550,
        sequential_write_mbps=520,
    ),
}

RAID_PROFILES: Dict[str, RaidPerformanceProfile] = {
    "0": RaidPerformanceProfile(
        random_read_multiplier=1.0,
        random_write_multiplier=1.0,
        sequential_read_multiplier=1.0,
        sequential_write_multiplier=1.0,
        write_amplification=1.0,
        notes=(
            "Performance scales linearly with disk count",
            "No fault tolerance - any disk failure causes data loss",
            "Best performance for both reads and writes",
        ),
    ),
    "1": RaidPerformanceProfile(
        random_read_multiplier=1.8,
        random_write_multiplier=0.5,
        sequential_read_multiplier=1.0,
        sequential_write_multiplier=0.5,
        write_amplification=2.0,
        notes=(
            "Read performance can benefit from multiple mirrors",
            "Write performance limited by mirroring overhead",
            "Excellent fault tolerance",
        ),
    ),
    "5": RaidPerformanceProfile(
        random_read_multiplier=0.9,
        random_write_multiplier=0.25,
        sequential_read_multiplier=0.9,
        sequential_write_multiplier=0.4,
        write_amplification=4.0,   # read-modify-write cycle
        notes=(
            "Good read performance scaling",
            "Write performance significantly impacted by parity calculations",
            "Small random writes are particularly affected",
        ),
    ),
    "6": RaidPerformanceProfile(
        random_read_multiplier=0.85,
        random_write_multiplier=0.2,
        sequential_read_multiplier=0.85,
        sequential_write_multiplier=0.35,
        write_amplification=6.0,
        notes=(
            "Similar read performance to RAID 5",
            "Write performance further reduced by dual parity",
            "Higher CPU overhead for parity calculations",
        ),
    ),
    "10": RaidPerformanceProfile(
        random_read_multiplier=1.8,
        random_write_multiplier=0.5,
        sequential_read_multiplier=0.9,
        sequential_write_multiplier=0.5,
        write_amplification=2.0,
        notes=(
            "Combines benefits of RAID 0 and RAID 1",
            "Excellent read performance",
            "Better write performance than RAID 5/6",
        ),
    ),
}

# Slowest first; used to pick the bounding media of a mixed array
MEDIA_SPEED_ORDER = ("HDD", "SSD")


def effective_disk_count(raid_level, disk_count: int) -> float:
    """Number of disks whose baseline performance adds up

    RAID 0 uses every disk, mirrored levels count each pair once and the
    parity levels lose one (RAID 5) or two (RAID 6) disks to parity.
    """
    level = normalize_raid_level(raid_level)
    if level == "0":
        return disk_count
    if level in MIRRORED_LEVELS:
        return disk_count / 2
    if level == "5":
        return disk_count - 1
    return disk_count - 2


def _check_positive(name: str, value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive number, got {value!r}")
    return value


def estimate_iops(raid_level, disk_count: int, media_type: str,
                  data_disk_override: Optional[float] = None,
                  custom_random_read_iops: Optional[float] = None,
                  custom_sequential_read_mbps: Optional[float] = None) -> PerformanceResult:
    """Estimate random IOPS and sequential throughput for an array

    Reads scale with the effective disk count on every level. Writes scale
    with it on RAID 0/5/6; mirrored levels pay the write multiplier once
    without disk count scaling.

    Args:
        raid_level: One of 0, 1, 5, 6, 10
        disk_count: Number of member disks
        media_type: HDD or SSD
        data_disk_override: Replaces the effective disk count
        custom_random_read_iops: Replaces the random read baseline
        custom_sequential_read_mbps: Replaces the sequential read baseline

    Returns:
        PerformanceResult with IOPS rounded to integers

    Raises:
        ConfigurationError: For an unsupported level or media type, or a
            non-positive count or override
    """
    level = normalize_raid_level(raid_level)
    media = normalize_media_type(media_type)
    if isinstance(disk_count, bool) or not isinstance(disk_count, int) or disk_count < 1:
        raise ConfigurationError(f"Disk count must be a positive integer, got {disk_count!r}")
    _check_positive("Data disk override", data_disk_override)
    _check_positive("Custom random read IOPS", custom_random_read_iops)
    _check_positive("Custom sequential read MB/s", custom_sequential_read_mbps)

    baseline = MEDIA_BASELINES[media]
    profile = RAID_PROFILES[level]

    effective = data_disk_override or max(effective_disk_count(level, disk_count), 0)
    write_scale = 1 if level in MIRRORED_LEVELS else effective

    base_random_read = custom_random_read_iops or baseline.random_read_iops
    base_seq_read = custom_sequential_read_mbps or baseline.sequential_read_mbps

    random_read = base_random_read * effective * profile.random_read_multiplier
    sequential_read = base_seq_read * effective * profile.sequential_read_multiplier
    random_write = baseline.random_write_iops * write_scale * profile.random_write_multiplier
    sequential_write = baseline.sequential_write_mbps * write_scale * profile.sequential_write_multiplier

    notes = list(profile.notes)
    if media == "HDD":
        notes.append("HDD performance varies significantly with workload patterns")
        notes.append("Sequential workloads perform much better than random")
    else:
        notes.append("SSD performance more consistent across workload types")
        if profile.write_amplification > 2:
            notes.append("High write amplification may impact SSD lifespan")

    return PerformanceResult(
        random_read_iops=int(round(random_read)),
        random_write_iops=int(round(random_write)),
        sequential_read_mbps=round(sequential_read, 2),
        sequential_write_mbps=round(sequential_write, 2),
        notes=notes,
    )


def bounding_media_type(configuration: RaidConfiguration) -> str:
    """Slowest media type present in a configuration"""
    present = configuration.media_types
    for media in MEDIA_SPEED_ORDER:
        if media in present:
            return media
    return MEDIA_TYPES[0]


def estimate_configuration(configuration: RaidConfiguration,
                           custom_random_read_iops: Optional[float] = None,
                           custom_sequential_read_mbps: Optional[float] = None) -> PerformanceResult:
    """Estimate performance for a RaidConfiguration"""
    return estimate_iops(
        configuration.raid_level,
        configuration.disk_count,
        bounding_media_type(configuration),
        custom_random_read_iops=custom_random_read_iops,
        custom_sequential_read_mbps=custom_sequential_read_mbps,
    )


def compare_raid_performance(disk_count: int, media_type: str) -> Dict[str, PerformanceResult]:
    """Estimate every RAID level that can be built from ``disk_count`` disks"""
    return {
        level: estimate_iops(level, disk_count, media_type)
        for level in get_valid_raid_levels(disk_count)
    }


_WORKLOADS: Dict[str, Dict] = {
    "database": {
        "recommended": ["10", "1", "5"],
        "notes": [
            "Database workloads benefit from low write latency",
            "RAID 10 provides best balance of performance and reliability",
        ],
        "ssd_note": "SSDs significantly improve database performance",
    },
    "fileserver": {
        "recommended": ["5", "6", "10"],
        "notes": [
            "File servers typically have mixed read/write patterns",
            "RAID 5 offers good balance for most file serving workloads",
        ],
    },
    "backup": {
        "recommended": ["6", "5"],
        "notes": [
            "Backup systems prioritize capacity and reliability",
            "Write performance is less critical for backup workloads",
        ],
    },
    "virtualization": {
        "recommended": ["10", "5"],
        "notes": [
            "VMs generate mixed I/O patterns with burst activity",
            "Low latency is important for VM responsiveness",
        ],
        "ssd_note": "SSDs highly recommended for virtualization",
    },
}


def get_performance_recommendations(workload: str, disk_count: int, media_type: str) -> Dict[str, List[str]]:
    """Recommend RAID levels for a workload, filtered to the disk count

    Returns:
        Dict with ``recommended`` levels and explanatory ``notes``

    Raises:
        ConfigurationError: For an unknown workload or media type
    """
    media = normalize_media_type(media_type)
    entry = _WORKLOADS.get(workload)
    if entry is None:
        raise ConfigurationError(f"Unknown workload type: {workload}")

    notes = list(entry["notes"])
    if media == "SSD" and "ssd_note" in entry:
        notes.append(entry["ssd_note"])

    valid = get_valid_raid_levels(disk_count)
    recommended = [level for level in entry["recommended"] if level in valid]
    return {"recommended": recommended, "notes": notes}
