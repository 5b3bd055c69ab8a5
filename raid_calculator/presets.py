"""Vendor preset configurations for popular NAS and storage systems"""

import logging
from typing import Iterable, List, Optional, Tuple

from .exceptions import ConfigurationError
from .models import Preset, RaidConfiguration


def _uniform(raid_level: str, count: int, size: float, media: str, name: str, description: str) -> RaidConfiguration:
    return RaidConfiguration.from_uniform(raid_level, count, size, media, name=name, description=description)


VENDOR_PRESETS: Tuple[Preset, ...] = (
    # Synology
    Preset(
        id="synology-raid5-8x12tb",
        vendor="Synology",
        name="DS1821+ RAID 5 Setup",
        description="8×12TB drives in RAID 5 for balanced capacity and protection",
        popular=True,
        tags=frozenset({"home-office", "media-server", "backup"}),
        configuration=_uniform("5", 8, 12, "HDD", "Synology RAID 5 8×12TB",
                               "Popular configuration for Synology DS1821+ and similar 8-bay units"),
    ),
    Preset(
        id="synology-raid6-6x18tb",
        vendor="Synology",
        name="DS1621+ RAID 6 Setup",
        description="6×18TB drives in RAID 6 for maximum protection",
        popular=True,
        tags=frozenset({"business", "critical-data", "high-capacity"}),
        configuration=_uniform("6", 6, 18, "HDD", "Synology RAID 6 6×18TB",
                               "High-capacity setup with dual parity protection"),
    ),
    Preset(
        id="synology-ssd-raid10-4x4tb",
        vendor="Synology",
        name="DS920+ SSD RAID 10",
        description="4×4TB SSDs in RAID 10 for high performance",
        popular=False,
        tags=frozenset({"performance", "ssd", "small-business"}),
        configuration=_uniform("10", 4, 4, "SSD", "Synology SSD RAID 10 4×4TB",
                               "High-performance SSD configuration for demanding workloads"),
    ),
    # QNAP
    Preset(
        id="qnap-raid6-8x18tb",
        vendor="QNAP",
        name="TS-832PX RAID 6 Setup",
        description="8×18TB drives in RAID 6 for enterprise reliability",
        popular=True,
        tags=frozenset({"enterprise", "high-capacity", "reliability"}),
        configuration=_uniform("6", 8, 18, "HDD", "QNAP RAID 6 8×18TB",
                               "Enterprise-grade setup with maximum capacity and dual fault tolerance"),
    ),
    Preset(
        id="qnap-raid5-4x12tb",
        vendor="QNAP",
        name="TS-464 RAID 5 Setup",
        description="4×12TB drives in RAID 5 for home/small office",
        popular=True,
        tags=frozenset({"home-office", "cost-effective", "balanced"}),
        configuration=_uniform("5", 4, 12, "HDD", "QNAP RAID 5 4×12TB",
                               "Cost-effective setup for home and small office use"),
    ),
    Preset(
        id="qnap-raid10-6x8tb",
        vendor="QNAP",
        name="TS-664 RAID 10 Setup",
        description="6×8TB drives in RAID 10 for balanced performance",
        popular=False,
        tags=frozenset({"performance", "balanced", "mid-range"}),
        configuration=_uniform("10", 6, 8, "HDD", "QNAP RAID 10 6×8TB",
                               "Balanced performance and capacity for mixed workloads"),
    ),
    # ZFS (RAIDZ levels mapped to their closest RAID equivalent)
    Preset(
        id="zfs-raidz2-8x16tb",
        vendor="ZFS",
        name="ZFS RAIDZ2 Pool",
        description="8×16TB drives in RAIDZ2 (equivalent to RAID 6)",
        popular=True,
        tags=frozenset({"zfs", "enterprise", "data-integrity"}),
        configuration=_uniform("6", 8, 16, "HDD", "ZFS RAIDZ2 8×16TB",
                               "ZFS RAIDZ2 configuration with excellent data integrity features"),
    ),
    Preset(
        id="zfs-mirror-4x12tb",
        vendor="ZFS",
        name="ZFS Mirrored Pool",
        description="4×12TB drives in mirrored pairs (RAID 10 equivalent)",
        popular=True,
        tags=frozenset({"zfs", "performance", "reliability"}),
        configuration=_uniform("10", 4, 12, "HDD", "ZFS Mirror 4×12TB",
                               "ZFS mirrored vdevs for high performance and reliability"),
    ),
    Preset(
        id="zfs-raidz1-6x10tb",
        vendor="ZFS",
        name="ZFS RAIDZ1 Pool",
        description="6×10TB drives in RAIDZ1 (equivalent to RAID 5)",
        popular=False,
        tags=frozenset({"zfs", "cost-effective", "home-lab"}),
        configuration=_uniform("5", 6, 10, "HDD", "ZFS RAIDZ1 6×10TB",
                               "Cost-effective ZFS configuration for home lab environments"),
    ),
    # Generic
    Preset(
        id="generic-raid1-2x4tb",
        vendor="Generic",
        name="Basic RAID 1 Mirror",
        description="2×4TB drives in RAID 1 for simple redundancy",
        popular=True,
        tags=frozenset({"basic", "simple", "entry-level"}),
        configuration=_uniform("1", 2, 4, "HDD", "Basic RAID 1 2×4TB",
                               "Simple two-drive mirror for basic redundancy"),
    ),
    Preset(
        id="generic-raid0-4x2tb",
        vendor="Generic",
        name="Performance RAID 0",
        description="4×2TB drives in RAID 0 for maximum performance",
        popular=False,
        tags=frozenset({"performance", "no-redundancy", "temporary"}),
        configuration=_uniform("0", 4, 2, "SSD", "Performance RAID 0 4×2TB SSD",
                               "High-performance configuration with no fault tolerance"),
    ),
    Preset(
        id="generic-raid5-5x8tb",
        vendor="Generic",
        name="Balanced RAID 5",
        description="5×8TB drives in RAID 5 for good capacity and protection",
        popular=True,
        tags=frozenset({"balanced", "cost-effective", "general-purpose"}),
        configuration=_uniform("5", 5, 8, "HDD", "Balanced RAID 5 5×8TB",
                               "Well-balanced configuration for general-purpose storage"),
    ),
)


class PresetCatalog:
    """Read-only lookup table of named configurations"""

    def __init__(self, presets: Iterable[Preset] = VENDOR_PRESETS, logger: Optional[logging.Logger] = None):
        """Initialize the catalog

        Args:
            presets: Presets to serve, in display order
            logger: Logger instance

        Raises:
            ConfigurationError: If two presets share an id
        """
        self.logger = logger or logging.getLogger(__name__)
        self._presets: Tuple[Preset, ...] = tuple(presets)

        seen = set()
        for preset in self._presets:
            if preset.id in seen:
                raise ConfigurationError(f"Duplicate preset id: {preset.id}")
            seen.add(preset.id)

    def __len__(self) -> int:
        return len(self._presets)

    def __iter__(self):
        return iter(self._presets)

    def all(self) -> Tuple[Preset, ...]:
        return self._presets

    def get(self, preset_id: str) -> Optional[Preset]:
        """Get a preset by id, or None"""
        for preset in self._presets:
            if preset.id == preset_id:
                return preset
        return None

    def by_vendor(self, vendor: str) -> List[Preset]:
        return [preset for preset in self._presets if preset.vendor == vendor]

    def by_tag(self, tag: str) -> List[Preset]:
        return [preset for preset in self._presets if tag in preset.tags]

    def popular(self) -> List[Preset]:
        return [preset for preset in self._presets if preset.popular]

    def vendors(self) -> List[str]:
        """Vendors in first-seen order"""
        vendors = []
        for preset in self._presets:
            if preset.vendor not in vendors:
                vendors.append(preset.vendor)
        return vendors

    def tags(self) -> List[str]:
        """All tags, sorted"""
        return sorted({tag for preset in self._presets for tag in preset.tags})

    def search(self, query: str) -> List[Preset]:
        """Case-insensitive match against name, description and tags"""
        needle = query.lower()
        return [
            preset for preset in self._presets
            if needle in preset.name.lower()
            or needle in preset.description.lower()
            or any(needle in tag.lower() for tag in preset.tags)
        ]

    def with_presets(self, extra: Iterable[Preset]) -> "PresetCatalog":
        """Return a new catalog with ``extra`` appended"""
        extra = tuple(extra)
        if extra:
            self.logger.debug(f"Adding {len(extra)} presets to catalog")
        return PresetCatalog(self._presets + extra, logger=self.logger)
