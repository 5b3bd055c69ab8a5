"""
Tests for the configuration codec
"""
import base64
from collections import Counter

import pytest

from raid_calculator.codec import (
    decode_mixed_disks,
    deserialize,
    generate_embed_code,
    generate_shareable_link,
    generate_social_urls,
    serialize,
    validate_url_params,
)
from raid_calculator.exceptions import ConfigurationError
from raid_calculator.models import Disk, RaidConfiguration


def b64(text):
    return base64.b64encode(text.encode("ascii")).decode("ascii")


def disk_multiset(config):
    return Counter((disk.size, disk.media_type) for disk in config.to_disks())


@pytest.fixture
def uniform_config():
    return RaidConfiguration.from_uniform("5", 4, 4, "HDD")


@pytest.fixture
def mixed_config():
    return RaidConfiguration(raid_level="6", disks=(Disk(4, "HDD"), Disk(8, "SSD"), Disk(3.84, "SSD"), Disk(4, "HDD")))


class TestSerialize:
    """Encoding configurations into query strings."""

    def test_uniform_keys(self, uniform_config):
        assert serialize(uniform_config) == "r=5&c=4&s=4&m=HDD"

    def test_fractional_size(self):
        config = RaidConfiguration.from_uniform("1", 2, 3.84, "SSD")
        assert serialize(config) == "r=1&c=2&s=3.84&m=SSD"

    def test_mixed_payload(self):
        config = RaidConfiguration(raid_level="0", disks=(Disk(4, "HDD"), Disk(8, "SSD")))
        query = serialize(config)
        assert query.startswith("r=0&d=")
        assert deserialize(query).disks == (Disk(4, "HDD"), Disk(8, "SSD"))
        assert decode_mixed_disks(b64("4:H,8:S")) == [Disk(4, "HDD"), Disk(8, "SSD")]

    def test_name_included(self):
        config = RaidConfiguration.from_uniform("5", 4, 4, "HDD", name="My NAS")
        assert serialize(config).endswith("&n=My+NAS")


class TestRoundTrip:
    """deserialize(serialize(c)) preserves level and disks."""

    def test_uniform(self, uniform_config):
        decoded = deserialize(serialize(uniform_config))
        assert decoded.raid_level == uniform_config.raid_level
        assert disk_multiset(decoded) == disk_multiset(uniform_config)

    def test_mixed(self, mixed_config):
        decoded = deserialize(serialize(mixed_config))
        assert decoded.raid_level == "6"
        assert disk_multiset(decoded) == disk_multiset(mixed_config)

    @pytest.mark.parametrize("size", [0.1, 1.92, 3.84, 7.68, 14.5, 0.3333333333333333])
    def test_fractional_sizes(self, size):
        for config in (RaidConfiguration.from_uniform("10", 4, size, "SSD"),
                       RaidConfiguration(raid_level="5", disks=(Disk(size), Disk(size * 2), Disk(1)))):
            decoded = deserialize(serialize(config))
            assert disk_multiset(decoded) == disk_multiset(config)

    def test_name_survives(self):
        config = RaidConfiguration.from_uniform("6", 6, 18, "HDD", name="Rack A & B")
        assert deserialize(serialize(config)).name == "Rack A & B"


class TestDeserialize:
    """Decoding accepts URLs and rejects malformed input with None."""

    def test_leading_question_mark(self):
        assert deserialize("?r=5&c=4&s=4&m=HDD").disk_count == 4

    def test_full_url(self):
        config = deserialize("https://example.com/raid?r=10&c=6&s=8&m=SSD#calc")
        assert config.raid_level == "10"
        assert config.uniform.media_type == "SSD"

    @pytest.mark.parametrize("query", [
        "r=7&c=4&s=4&m=HDD",
        "c=4&s=4&m=HDD",
        "",
        "r=5&c=4&s=4&m=NVMe",
        "r=5&c=4&s=4",
        "r=5&c=four&s=4&m=HDD",
        "r=5&c=0&s=4&m=HDD",
        "r=5&c=4&s=0&m=HDD",
        "r=5&c=4&s=-2&m=HDD",
        "r=5&c=4&s=abc&m=HDD",
        "r=5&c=4&s=nan&m=HDD",
        "r=5&d=%%%",
        "r=5&d=not-base64!",
    ])
    def test_invalid_returns_none(self, query):
        assert deserialize(query) is None

    def test_invalid_media_code(self):
        assert deserialize(f"r=0&d={b64('4:X,4:H')}") is None

    def test_non_positive_mixed_size(self):
        assert deserialize(f"r=0&d={b64('0:H,4:H')}") is None
        assert deserialize(f"r=0&d={b64('abc:H,4:H')}") is None

    def test_both_shapes_rejected(self):
        assert deserialize(f"r=0&c=2&s=4&m=HDD&d={b64('4:H,4:H')}") is None

    def test_non_string_input(self):
        assert deserialize(None) is None

    def test_literal_question_mark_in_bare_query(self):
        config = deserialize("r=5&c=4&s=4&m=HDD&n=why?")
        assert config.name == "why?"
        assert config.disk_count == 4

    def test_path_prefixed_query(self):
        assert deserialize("/raid?r=0&c=2&s=4&m=SSD").raid_level == "0"

    def test_large_count_decodes_without_expanding(self):
        config = deserialize("r=0&c=1000000000&s=4&m=HDD")
        assert config.disk_count == 1_000_000_000
        assert config.is_uniform


class TestLinks:
    """Share, embed and social link helpers."""

    def test_shareable_link(self, uniform_config):
        link = generate_shareable_link(uniform_config, "https://example.com/raid")
        assert link == "https://example.com/raid?r=5&c=4&s=4&m=HDD"

    def test_embed_code(self, uniform_config):
        code = generate_embed_code(uniform_config, "https://example.com/raid", theme="dark")
        assert code.startswith("<iframe")
        assert "embed=true&amp;theme=dark" in code
        assert 'width="800"' in code

    def test_embed_rejects_unknown_theme(self, uniform_config):
        with pytest.raises(ConfigurationError):
            generate_embed_code(uniform_config, "", theme="blue")

    def test_social_urls(self, uniform_config):
        urls = generate_social_urls(uniform_config, "https://example.com/raid")
        assert set(urls) == {"twitter", "facebook", "linkedin", "reddit"}
        assert "https%3A%2F%2Fexample.com%2Fraid%3Fr%3D5" in urls["facebook"]


class TestValidateUrlParams:
    """Form-level validation of query parameters."""

    def test_valid(self):
        assert validate_url_params("r=5&c=4&s=4&m=HDD") == (True, [])

    def test_collects_errors(self):
        valid, errors = validate_url_params("r=7&c=30&s=200&m=TAPE&d=%%%")
        assert valid is False
        assert errors == [
            "Invalid RAID level",
            "Invalid disk count",
            "Invalid disk size",
            "Invalid media type",
            "Invalid disk configuration",
        ]
