"""
RAID Calculator

Computes usable capacity, redundancy overhead, fault tolerance and rough
performance estimates for RAID 0/1/5/6/10 arrays, and encodes
configurations into shareable URL query strings.
"""

from .capacity import compute_capacity, compute_configuration
from .codec import deserialize, serialize
from .exceptions import ConfigurationError
from .models import CapacityResult, Disk, PerformanceResult, Preset, RaidConfiguration
from .performance import estimate_configuration, estimate_iops
from .presets import PresetCatalog, VENDOR_PRESETS

__version__ = "1.0.0"
__all__ = [
    "CapacityResult",
    "ConfigurationError",
    "Disk",
    "PerformanceResult",
    "Preset",
    "PresetCatalog",
    "RaidConfiguration",
    "VENDOR_PRESETS",
    "compute_capacity",
    "compute_configuration",
    "deserialize",
    "estimate_configuration",
    "estimate_iops",
    "serialize",
]
