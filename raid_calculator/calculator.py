"""Command-line front end for the RAID calculator"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from . import codec
from .capacity import compute_configuration
from .config import ConfigManager, DEFAULT_CONFIG_FILE
from .exceptions import ConfigurationError
from .models import (
    Disk,
    MEDIA_TYPES,
    RAID_LEVEL_NAMES,
    RAID_LEVELS,
    CapacityResult,
    PerformanceResult,
    RaidConfiguration,
)
from .performance import bounding_media_type, compare_raid_performance, estimate_configuration
from .presets import PresetCatalog


def parse_disk_spec(spec: str) -> Disk:
    """Parse a ``SIZE[:MEDIA]`` disk argument, e.g. ``4``, ``3.84:SSD`` or ``8:H``

    Raises:
        ConfigurationError: If the size or media is invalid
    """
    size_text, _, media_text = spec.partition(":")
    media = media_text.strip().upper() or "HDD"
    media = codec.CODE_MEDIA.get(media, media)
    return Disk(size_text.strip(), media)


class RaidCalculator:
    """Main class for the RAID calculator CLI

    Resolves a configuration from a share URL, a preset, explicit disks or
    the configured defaults, then prints capacity and performance figures.
    """

    def __init__(self):
        """Initialize the RaidCalculator instance"""
        # Options
        self.json_output = False
        self.verbose = False
        self.quiet = False
        self.config_file = DEFAULT_CONFIG_FILE
        self.raid_level = None
        self.disk_count = None
        self.disk_size = None
        self.media_type = None
        self.disk_specs: List[str] = []
        self.url = None
        self.preset_id = None
        self.name = None
        self.list_presets = False
        self.vendor = None
        self.tag = None
        self.search = None
        self.compare = False
        self.custom_iops = None
        self.custom_mbps = None
        self.share = False
        self.embed = False
        self.theme = "light"
        self.base_url = None

        # Components (initialized later)
        self.logger = self._setup_logger()
        self.config_manager: Optional[ConfigManager] = None
        self.catalog: Optional[PresetCatalog] = None

    def _setup_logger(self) -> logging.Logger:
        """Set up the logger for the application"""
        logger = logging.getLogger("raid-calculator")
        logger.setLevel(logging.INFO)

        if not logger.handlers:
            ch = logging.StreamHandler()
            ch.setLevel(logging.INFO)

            formatter = logging.Formatter('[%(levelname)s] %(message)s')
            ch.setFormatter(formatter)

            logger.addHandler(ch)

        return logger

    def parse_arguments(self, argv: Optional[List[str]] = None) -> None:
        """Parse command line arguments"""
        parser = argparse.ArgumentParser(
            description="Calculates usable capacity, fault tolerance and estimated performance of RAID arrays."
        )

        parser.add_argument("-r", "--raid-level", choices=RAID_LEVELS, help="RAID level")
        parser.add_argument("-c", "--disk-count", type=int, metavar="COUNT", help="Number of identical disks")
        parser.add_argument("-s", "--disk-size", type=float, metavar="TB", help="Size of each disk in TB")
        parser.add_argument("-m", "--media", type=str.upper, choices=MEDIA_TYPES, help="Media type of the disks")
        parser.add_argument("-d", "--disk", action="append", default=[], metavar="SIZE[:MEDIA]",
                          help="Add one disk of a mixed array (repeatable), e.g. -d 4 -d 8:SSD")
        parser.add_argument("-n", "--name", help="Display name stored in share links")
        parser.add_argument("--url", metavar="QUERY", help="Load configuration from a share link or query string")
        parser.add_argument("--preset", metavar="PRESET_ID", help="Load a vendor preset")
        parser.add_argument("--list-presets", action="store_true", help="List available presets")
        parser.add_argument("--vendor", help="Only list presets of this vendor")
        parser.add_argument("--tag", help="Only list presets with this tag")
        parser.add_argument("--search", metavar="TEXT", help="Only list presets matching this text")
        parser.add_argument("--compare", action="store_true",
                          help="Compare estimated performance of every valid RAID level")
        parser.add_argument("--custom-iops", type=float, metavar="IOPS",
                          help="Replace the single-disk random read IOPS baseline")
        parser.add_argument("--custom-mbps", type=float, metavar="MBPS",
                          help="Replace the single-disk sequential read MB/s baseline")
        parser.add_argument("--share", action="store_true", help="Print a shareable link")
        parser.add_argument("--embed", action="store_true", help="Print HTML embed code")
        parser.add_argument("--theme", choices=codec.EMBED_THEMES, default="light", help="Theme of the embed code")
        parser.add_argument("--base-url", metavar="URL", help="Base URL for share links")
        parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, metavar="FILE", help="Configuration file")
        parser.add_argument("-j", "--json", action="store_true", help="Output results in JSON format")
        parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
        parser.add_argument("-q", "--quiet", action="store_true", help="Suppress INFO messages")

        args = parser.parse_args(argv)

        # Set instance variables
        self.raid_level = args.raid_level
        self.disk_count = args.disk_count
        self.disk_size = args.disk_size
        self.media_type = args.media
        self.disk_specs = args.disk
        self.name = args.name
        self.url = args.url
        self.preset_id = args.preset
        self.list_presets = args.list_presets
        self.vendor = args.vendor
        self.tag = args.tag
        self.search = args.search
        self.compare = args.compare
        self.custom_iops = args.custom_iops
        self.custom_mbps = args.custom_mbps
        self.share = args.share
        self.embed = args.embed
        self.theme = args.theme
        self.base_url = args.base_url
        self.config_file = args.config
        self.json_output = args.json
        self.verbose = args.verbose
        self.quiet = args.quiet

        # Configure logger
        if self.verbose:
            self.logger.setLevel(logging.DEBUG)
            for handler in self.logger.handlers:
                handler.setLevel(logging.DEBUG)
        elif self.quiet:
            self.logger.setLevel(logging.WARNING)
            for handler in self.logger.handlers:
                handler.setLevel(logging.WARNING)

        if self.disk_specs and (self.disk_count is not None or self.disk_size is not None):
            self.logger.error("Use either --disk or --disk-count/--disk-size, not both")
            sys.exit(1)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point for the application"""
        self.parse_arguments(argv)

        self.config_manager = ConfigManager(self.config_file, logger=self.logger)
        try:
            self.catalog = PresetCatalog(logger=self.logger).with_presets(self.config_manager.presets)
        except ConfigurationError as e:
            self.logger.error(f"Invalid preset configuration: {e}")
            sys.exit(1)

        if self.list_presets:
            self._handle_list_presets()
            return

        try:
            configuration = self.resolve_configuration()

            if self.compare:
                self._handle_compare(configuration)
                return

            capacity = compute_configuration(configuration)
            performance = estimate_configuration(
                configuration,
                custom_random_read_iops=self.custom_iops or self.config_manager.custom_random_read_iops,
                custom_sequential_read_mbps=self.custom_mbps or self.config_manager.custom_sequential_read_mbps,
            )
            base_url = self.base_url if self.base_url is not None else self.config_manager.base_url
            embed_code = (codec.generate_embed_code(configuration, base_url, theme=self.theme)
                          if self.embed else None)
        except ConfigurationError as e:
            self.logger.error(str(e))
            sys.exit(1)

        self._display_results(configuration, capacity, performance, base_url, embed_code)

    def resolve_configuration(self) -> RaidConfiguration:
        """Pick the configuration to compute

        Order: --url, then --preset, then explicit disk options layered over
        the configured defaults. An unreadable URL falls back to defaults.

        Raises:
            ConfigurationError: If a preset is unknown or options are invalid
        """
        if self.url:
            configuration = codec.deserialize(self.url)
            if configuration is not None:
                self.logger.debug(f"Loaded configuration from URL: {configuration}")
                return configuration
            self.logger.warning("Could not read configuration from URL, using defaults")
            return self.config_manager.default_configuration()

        if self.preset_id:
            preset = self.catalog.get(self.preset_id)
            if preset is None:
                raise ConfigurationError(f"Unknown preset: {self.preset_id}")
            self.logger.info(f"Using preset: {preset.name}")
            return preset.configuration

        defaults = self.config_manager.defaults
        raid_level = self.raid_level or defaults["raid_level"]

        if self.disk_specs:
            disks = [parse_disk_spec(spec) for spec in self.disk_specs]
            return RaidConfiguration.from_disks(raid_level, disks, name=self.name)

        return RaidConfiguration.from_uniform(
            raid_level,
            self.disk_count if self.disk_count is not None else defaults["disk_count"],
            self.disk_size if self.disk_size is not None else defaults["disk_size"],
            self.media_type or defaults["media_type"],
            name=self.name,
        )

    def _handle_list_presets(self) -> None:
        """Handle preset listing"""
        presets = list(self.catalog)
        if self.vendor:
            presets = [p for p in presets if p.vendor.lower() == self.vendor.lower()]
        if self.tag:
            presets = [p for p in presets if self.tag in p.tags]
        if self.search:
            matches = {p.id for p in self.catalog.search(self.search)}
            presets = [p for p in presets if p.id in matches]

        if self.json_output:
            print(json.dumps([p.to_dict() for p in presets], indent=2, ensure_ascii=False))
            return

        if not presets:
            print("No presets found")
            return

        headers = ["ID", "Vendor", "Name", "RAID", "Disks", "Popular"]
        table_data = []
        for preset in presets:
            table_data.append([
                preset.id,
                preset.vendor,
                preset.name,
                preset.configuration.raid_level,
                self._describe_disks(preset.configuration),
                "yes" if preset.popular else "",
            ])
        self._print_table(headers, table_data)

    def _handle_compare(self, configuration: RaidConfiguration) -> None:
        """Handle performance comparison across RAID levels"""
        media_type = bounding_media_type(configuration)
        estimates = compare_raid_performance(configuration.disk_count, media_type)

        if self.json_output:
            print(json.dumps({level: est.to_dict() for level, est in estimates.items()}, indent=2))
            return

        if not estimates:
            print(f"No RAID level can be built from {configuration.disk_count} disks")
            return

        headers = ["Level", "Rand Read IOPS", "Rand Write IOPS", "Seq Read MB/s", "Seq Write MB/s"]
        table_data = [
            [RAID_LEVEL_NAMES[level], str(est.random_read_iops), str(est.random_write_iops),
             f"{est.sequential_read_mbps:g}", f"{est.sequential_write_mbps:g}"]
            for level, est in estimates.items()
        ]
        print(f"\nEstimated performance for {configuration.disk_count} x {media_type}")
        self._print_table(headers, table_data)

    def _display_results(self, configuration: RaidConfiguration, capacity: CapacityResult,
                         performance: PerformanceResult, base_url: str,
                         embed_code: Optional[str]) -> None:
        """Display capacity and performance results"""
        share_link = codec.generate_shareable_link(configuration, base_url)

        if self.json_output:
            output: Dict = {
                "configuration": configuration.to_dict(),
                "capacity": capacity.to_dict(),
                "performance": performance.to_dict(),
                "share_link": share_link,
            }
            if embed_code is not None:
                output["embed_code"] = embed_code
            print(json.dumps(output, indent=2, ensure_ascii=False))
            return

        title = configuration.name or RAID_LEVEL_NAMES[configuration.raid_level]
        print(f"\n{title}: {self._describe_disks(configuration)}")

        headers = ["Metric", "Value"]
        table_data = [
            ["Usable capacity", f"{capacity.usable_capacity:g} TB"],
            ["Total capacity", f"{capacity.total_capacity:g} TB"],
            ["Efficiency", f"{capacity.efficiency:g}%"],
            ["Fault tolerance", f"{capacity.fault_tolerance} disk(s)"],
            ["Redundancy overhead", f"{capacity.parity_overhead:g} TB"],
            ["Data disks per stripe", str(capacity.stripe_size)],
            ["Random read", f"{performance.random_read_iops} IOPS"],
            ["Random write", f"{performance.random_write_iops} IOPS"],
            ["Sequential read", f"{performance.sequential_read_mbps:g} MB/s"],
            ["Sequential write", f"{performance.sequential_write_mbps:g} MB/s"],
        ]
        self._print_table(headers, table_data)

        print(f"\n{capacity.description}")
        for warning in capacity.warnings:
            print(f"Warning: {warning}")

        if not self.quiet:
            print("\nNotes:")
            for note in performance.notes:
                print(f"  - {note}")

        if self.share:
            print(f"\nShare link: {share_link}")
        if embed_code is not None:
            print(f"\n{embed_code}")

    def _describe_disks(self, configuration: RaidConfiguration) -> str:
        """Short text such as '4 x 12TB HDD' or '8TB HDD, 4TB SSD'"""
        if configuration.is_uniform:
            uniform = configuration.uniform
            return f"{uniform.disk_count} x {uniform.disk_size:g}TB {uniform.media_type}"
        return ", ".join(f"{disk.size:g}TB {disk.media_type}" for disk in configuration.disks)

    def _print_table(self, headers: List[str], data: List[List[str]]) -> None:
        """Print a formatted table"""
        # Calculate column widths
        widths = [len(h) for h in headers]
        for row in data:
            for i, val in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(val)))

        header_line = "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        print("-" * len(header_line))
        print(header_line)
        print("-" * len(header_line))

        for row in data:
            print("  ".join(str(val).ljust(widths[i]) for i, val in enumerate(row)))

        print("-" * len(header_line))


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point"""
    RaidCalculator().run(argv)
