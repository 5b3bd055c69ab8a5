"""Capacity, efficiency and fault tolerance calculations for RAID 0/1/5/6/10"""

from typing import AbstractSet, Callable, Dict, List, Sequence

from .exceptions import ConfigurationError
from .models import (
    CapacityResult,
    Disk,
    MIN_DISKS_FOR_RAID,
    MIRRORED_LEVELS,
    RaidConfiguration,
    normalize_raid_level,
)


# Size spread (largest / smallest) above which a warning is raised
SIZE_SPREAD_WARNING_RATIO = 1.5


def _raid0(disk_count: int, disk_size: float) -> CapacityResult:
    """RAID 0 - striping, no redundancy"""
    return CapacityResult(
        usable_capacity=disk_count * disk_size,
        total_capacity=disk_count * disk_size,
        efficiency=100.0,
        fault_tolerance=0,
        parity_overhead=0.0,
        stripe_size=disk_count,
        description=("RAID 0 provides maximum performance and capacity but no fault tolerance. "
                     "Any disk failure results in total data loss."),
    )


def _raid1(disk_count: int, disk_size: float) -> CapacityResult:
    """RAID 1 - mirroring"""
    usable = disk_count * disk_size / 2
    return CapacityResult(
        usable_capacity=usable,
        total_capacity=disk_count * disk_size,
        efficiency=50.0,
        fault_tolerance=disk_count // 2,
        parity_overhead=usable,
        stripe_size=1,
        description=("RAID 1 mirrors data across disk pairs, providing excellent fault tolerance "
                     "at 50% capacity efficiency."),
    )


def _raid5(disk_count: int, disk_size: float) -> CapacityResult:
    """RAID 5 - striping with distributed parity"""
    return CapacityResult(
        usable_capacity=(disk_count - 1) * disk_size,
        total_capacity=disk_count * disk_size,
        efficiency=round((disk_count - 1) / disk_count * 100, 2),
        fault_tolerance=1,
        parity_overhead=disk_size,
        stripe_size=disk_count - 1,
        description=("RAID 5 distributes parity across all disks, tolerating one disk failure "
                     "with good capacity efficiency."),
    )


def _raid6(disk_count: int, disk_size: float) -> CapacityResult:
    """RAID 6 - striping with dual distributed parity"""
    return CapacityResult(
        usable_capacity=(disk_count - 2) * disk_size,
        total_capacity=disk_count * disk_size,
        efficiency=round((disk_count - 2) / disk_count * 100, 2),
        fault_tolerance=2,
        parity_overhead=disk_size * 2,
        stripe_size=disk_count - 2,
        description=("RAID 6 uses dual parity for enhanced fault tolerance, surviving two "
                     "simultaneous disk failures."),
    )


def _raid10(disk_count: int, disk_size: float) -> CapacityResult:
    """RAID 10 - mirrored stripes"""
    usable = disk_count * disk_size / 2
    return CapacityResult(
        usable_capacity=usable,
        total_capacity=disk_count * disk_size,
        efficiency=50.0,
        fault_tolerance=disk_count // 2,
        parity_overhead=usable,
        stripe_size=disk_count // 2,
        description="RAID 10 combines mirroring and striping for high performance and fault tolerance.",
    )


_CALCULATORS: Dict[str, Callable[[int, float], CapacityResult]] = {
    "0": _raid0,
    "1": _raid1,
    "5": _raid5,
    "6": _raid6,
    "10": _raid10,
}


def validate_minimum_disks(raid_level, disk_count: int) -> None:
    """Check that a level can be built from ``disk_count`` disks

    Raises:
        ConfigurationError: If the count is below the level minimum or a
            mirrored level gets an odd count
    """
    level = normalize_raid_level(raid_level)
    required = MIN_DISKS_FOR_RAID[level]
    if disk_count < required:
        raise ConfigurationError(f"RAID {level} requires at least {required} disks, got {disk_count}")
    if level in MIRRORED_LEVELS and disk_count % 2 != 0:
        raise ConfigurationError(f"RAID {level} requires an even number of disks")


def compute_capacity(raid_level, disks: Sequence[Disk]) -> CapacityResult:
    """Calculate capacity figures for a RAID level over a disk list

    Every level is sized from the smallest member; ``total_capacity`` is
    the raw sum of the real disk sizes.

    Args:
        raid_level: One of 0, 1, 5, 6, 10 (str or int)
        disks: Member disks

    Returns:
        CapacityResult for the array

    Raises:
        ConfigurationError: For an empty list, an unsupported level or a
            disk count the level cannot use
    """
    if not disks:
        raise ConfigurationError("No disks specified")

    sizes = [disk.size for disk in disks]
    return _summarize(raid_level, len(disks), min(sizes), max(sizes), sum(sizes),
                      {disk.media_type for disk in disks})


def _summarize(raid_level, disk_count: int, smallest: float, largest: float, total: float,
               media_types: AbstractSet[str]) -> CapacityResult:
    level = normalize_raid_level(raid_level)
    validate_minimum_disks(level, disk_count)

    result = _CALCULATORS[level](disk_count, smallest)
    result.total_capacity = total

    warnings: List[str] = []
    if largest / smallest > SIZE_SPREAD_WARNING_RATIO:
        warnings.append(
            f"Disk sizes range from {smallest:g}TB to {largest:g}TB. "
            f"Capacity is limited by the smallest disk ({smallest:g}TB per member)."
        )
    if len(media_types) > 1:
        warnings.append("Mixed media types detected. Performance is bounded by the slowest media.")
    result.warnings = warnings

    return result


def compute_configuration(configuration: RaidConfiguration) -> CapacityResult:
    """Calculate capacity figures for a RaidConfiguration

    The uniform shorthand is sized directly from its count and disk size,
    without expanding it into a disk list.
    """
    uniform = configuration.uniform
    if uniform is None:
        return compute_capacity(configuration.raid_level, configuration.disks)
    return _summarize(configuration.raid_level, uniform.disk_count, uniform.disk_size, uniform.disk_size,
                      uniform.disk_count * uniform.disk_size, {uniform.media_type})


def get_valid_raid_levels(disk_count: int) -> List[str]:
    """Return the RAID levels that can be built from ``disk_count`` disks"""
    levels = []
    for level in _CALCULATORS:
        try:
            validate_minimum_disks(level, disk_count)
        except ConfigurationError:
            continue
        levels.append(level)
    return levels


_RECOMMENDATION_ORDER: Dict[str, List[str]] = {
    "performance": ["0", "10", "5"],
    "capacity": ["5", "6", "0"],
    "reliability": ["6", "10", "1", "5"],
}


def get_raid_recommendations(disk_count: int, priority: str) -> List[str]:
    """Suggest RAID levels for a disk count, best first

    Args:
        disk_count: Number of disks available
        priority: One of performance, capacity, reliability

    Raises:
        ConfigurationError: If the priority is unknown
    """
    order = _RECOMMENDATION_ORDER.get(priority)
    if order is None:
        raise ConfigurationError(f"Unknown priority: {priority}")
    valid = get_valid_raid_levels(disk_count)
    return [level for level in order if level in valid]
