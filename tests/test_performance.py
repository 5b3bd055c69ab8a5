"""
Tests for the performance estimator
"""
import pytest

from raid_calculator.exceptions import ConfigurationError
from raid_calculator.models import Disk, RaidConfiguration
from raid_calculator.performance import (
    bounding_media_type,
    compare_raid_performance,
    effective_disk_count,
    estimate_configuration,
    estimate_iops,
    get_performance_recommendations,
)


class TestEstimateIops:
    """Heuristic IOPS and throughput figures."""

    def test_raid0_scales_both_directions(self):
        result = estimate_iops("0", 4, "HDD")
        assert result.random_read_iops == 600
        assert result.random_write_iops == 560
        assert result.sequential_read_mbps == 720
        assert result.sequential_write_mbps == 640

    def test_raid5_uses_data_disks(self):
        result = estimate_iops("5", 4, "HDD")
        assert result.random_read_iops == 405
        assert result.random_write_iops == 105
        assert result.sequential_read_mbps == 486
        assert result.sequential_write_mbps == 192

    def test_raid10_reads_scale_with_pairs(self):
        result = estimate_iops("10", 4, "HDD")
        assert result.random_read_iops == 540
        assert result.sequential_read_mbps == 324

    def test_mirror_writes_not_scaled_by_disk_count(self):
        four = estimate_iops("10", 4, "HDD")
        eight = estimate_iops("10", 8, "HDD")
        assert four.random_write_iops == eight.random_write_iops == 70
        assert four.sequential_write_mbps == eight.sequential_write_mbps == 80

    def test_raid1_pair(self):
        result = estimate_iops("1", 2, "HDD")
        assert result.random_read_iops == 270
        assert result.random_write_iops == 70
        assert result.sequential_read_mbps == 180

    def test_iops_are_integers(self):
        result = estimate_iops("6", 7, "SSD")
        assert isinstance(result.random_read_iops, int)
        assert isinstance(result.random_write_iops, int)

    def test_deterministic(self):
        assert estimate_iops("6", 8, "SSD") == estimate_iops("6", 8, "SSD")

    @pytest.mark.parametrize("level,start", [("0", 2), ("5", 3), ("6", 4)])
    def test_reads_increase_with_disk_count(self, level, start):
        previous = estimate_iops(level, start, "HDD")
        for count in range(start + 1, start + 10):
            current = estimate_iops(level, count, "HDD")
            assert current.random_read_iops > previous.random_read_iops
            assert current.sequential_read_mbps > previous.sequential_read_mbps
            previous = current


class TestOverrides:
    """Custom baselines and data disk overrides."""

    def test_custom_read_baselines(self):
        result = estimate_iops("0", 2, "HDD", custom_random_read_iops=1000, custom_sequential_read_mbps=300)
        assert result.random_read_iops == 2000
        assert result.sequential_read_mbps == 600
        # Writes keep the media baseline
        assert result.random_write_iops == 280
        assert result.sequential_write_mbps == 320

    def test_data_disk_override(self):
        result = estimate_iops("5", 4, "HDD", data_disk_override=2)
        assert result.random_read_iops == 270

    def test_non_positive_custom_value(self):
        with pytest.raises(ConfigurationError):
            estimate_iops("5", 4, "HDD", custom_random_read_iops=0)


class TestNotes:
    """Notes attached to the estimate."""

    def test_hdd_notes(self):
        notes = estimate_iops("0", 2, "HDD").notes
        assert "HDD performance varies significantly with workload patterns" in notes

    def test_ssd_parity_lifespan_note(self):
        assert "High write amplification may impact SSD lifespan" in estimate_iops("5", 4, "SSD").notes
        assert "High write amplification may impact SSD lifespan" not in estimate_iops("0", 4, "SSD").notes


class TestValidation:
    """Unsupported inputs raise ConfigurationError."""

    def test_unknown_media(self):
        with pytest.raises(ConfigurationError):
            estimate_iops("5", 4, "NVMe")

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            estimate_iops("7", 4, "HDD")

    def test_zero_disks(self):
        with pytest.raises(ConfigurationError):
            estimate_iops("0", 0, "HDD")


class TestHelpers:
    """Comparison, recommendations and configuration helpers."""

    def test_effective_disk_count(self):
        assert effective_disk_count("0", 6) == 6
        assert effective_disk_count("1", 6) == 3
        assert effective_disk_count("5", 6) == 5
        assert effective_disk_count("6", 6) == 4
        assert effective_disk_count("10", 6) == 3

    def test_compare_only_valid_levels(self):
        assert list(compare_raid_performance(3, "HDD")) == ["0", "5"]
        assert list(compare_raid_performance(4, "SSD")) == ["0", "1", "5", "6", "10"]

    def test_workload_recommendations(self):
        database = get_performance_recommendations("database", 4, "SSD")
        assert database["recommended"] == ["10", "1", "5"]
        assert "SSDs significantly improve database performance" in database["notes"]

        backup = get_performance_recommendations("backup", 3, "HDD")
        assert backup["recommended"] == ["5"]

    def test_unknown_workload(self):
        with pytest.raises(ConfigurationError):
            get_performance_recommendations("gaming", 4, "HDD")

    def test_mixed_media_uses_slowest(self):
        config = RaidConfiguration.from_disks("1", [Disk(4, "SSD"), Disk(4, "HDD")])
        assert bounding_media_type(config) == "HDD"
        assert estimate_configuration(config) == estimate_iops("1", 2, "HDD")

    def test_large_uniform_configuration(self):
        config = RaidConfiguration.from_uniform("0", 1_000_000_000, 4, "SSD")
        assert bounding_media_type(config) == "SSD"
        assert estimate_configuration(config).random_read_iops == 75000 * 1_000_000_000
