"""
Tests for the preset catalog
"""
import pytest

from raid_calculator.capacity import compute_configuration
from raid_calculator.exceptions import ConfigurationError
from raid_calculator.models import Preset, RaidConfiguration
from raid_calculator.presets import PresetCatalog, VENDOR_PRESETS


@pytest.fixture
def catalog():
    return PresetCatalog()


class TestBuiltInPresets:
    """The built-in vendor table."""

    def test_ids_unique(self):
        ids = [preset.id for preset in VENDOR_PRESETS]
        assert len(ids) == len(set(ids)) == 12

    def test_every_preset_computes(self):
        for preset in VENDOR_PRESETS:
            result = compute_configuration(preset.configuration)
            assert result.usable_capacity > 0

    def test_table_is_read_only(self):
        assert isinstance(VENDOR_PRESETS, tuple)


class TestCatalogLookups:
    """Lookup helpers on the catalog."""

    def test_get(self, catalog):
        preset = catalog.get("zfs-raidz2-8x16tb")
        assert preset.vendor == "ZFS"
        assert preset.configuration.raid_level == "6"
        assert catalog.get("missing") is None

    def test_by_vendor(self, catalog):
        assert len(catalog.by_vendor("Synology")) == 3
        assert catalog.by_vendor("Unknown") == []

    def test_by_tag(self, catalog):
        ids = {preset.id for preset in catalog.by_tag("zfs")}
        assert ids == {"zfs-raidz2-8x16tb", "zfs-mirror-4x12tb", "zfs-raidz1-6x10tb"}

    def test_popular(self, catalog):
        assert all(preset.popular for preset in catalog.popular())
        assert len(catalog.popular()) == 8

    def test_vendors_in_order(self, catalog):
        assert catalog.vendors() == ["Synology", "QNAP", "ZFS", "Generic"]

    def test_tags_sorted(self, catalog):
        tags = catalog.tags()
        assert tags == sorted(tags)
        assert "home-lab" in tags

    def test_search_is_case_insensitive(self, catalog):
        ids = {preset.id for preset in catalog.search("RAIDZ")}
        assert "zfs-raidz1-6x10tb" in ids
        assert "zfs-raidz2-8x16tb" in ids

    def test_search_matches_tags(self, catalog):
        assert [p.id for p in catalog.search("entry-level")] == ["generic-raid1-2x4tb"]


class TestCatalogExtension:
    """Adding user presets."""

    def test_with_presets_returns_new_catalog(self, catalog):
        extra = Preset(
            id="lab-raid6",
            vendor="Generic",
            name="Lab",
            description="Lab array",
            configuration=RaidConfiguration.from_uniform("6", 6, 8, "HDD"),
        )
        extended = catalog.with_presets([extra])
        assert len(extended) == len(catalog) + 1
        assert extended.get("lab-raid6") is extra
        assert catalog.get("lab-raid6") is None

    def test_duplicate_id_rejected(self, catalog):
        with pytest.raises(ConfigurationError):
            catalog.with_presets([VENDOR_PRESETS[0]])
