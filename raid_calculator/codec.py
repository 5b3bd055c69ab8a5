"""URL query-string encoding of RAID configurations

Query keys:
    r  RAID level (0, 1, 5, 6, 10)
    c  disk count (uniform only)
    s  disk size in TB (uniform only)
    m  media type, HDD or SSD (uniform only)
    d  base64 of ``size:code`` pairs joined by commas (mixed only), code H or S
    n  optional display name

Decoding never raises: malformed input yields ``None`` so callers can fall
back to their defaults.
"""

import base64
import binascii
import html
import logging
import math
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, quote, urlencode, urlsplit

from .exceptions import ConfigurationError
from .models import Disk, MEDIA_TYPES, RAID_LEVELS, RaidConfiguration


logger = logging.getLogger(__name__)

MEDIA_CODES: Dict[str, str] = {"HDD": "H", "SSD": "S"}
CODE_MEDIA: Dict[str, str] = {code: media for media, code in MEDIA_CODES.items()}

_URL_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")

UNIFORM_KEYS = ("c", "s", "m")
EMBED_THEMES = ("light", "dark")

# Limits enforced by the calculator form
MAX_FORM_DISK_COUNT = 24
MAX_FORM_DISK_SIZE = 100


def format_size(size: float) -> str:
    """Shortest decimal text that reads back as the same size"""
    if float(size).is_integer():
        return str(int(size))
    return repr(float(size))


def encode_mixed_disks(disks) -> str:
    """Encode a disk list as base64 of ``size:code`` pairs"""
    pairs = ",".join(f"{format_size(disk.size)}:{MEDIA_CODES[disk.media_type]}" for disk in disks)
    return base64.b64encode(pairs.encode("ascii")).decode("ascii")


def _parse_size(text: str) -> Optional[float]:
    try:
        size = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(size) or size <= 0:
        return None
    return size


def decode_mixed_disks(encoded: str) -> Optional[List[Disk]]:
    """Decode the ``d`` payload back into disks

    Returns:
        List of disks, or None if the payload is malformed
    """
    # '+' turns into a space when a query is unquoted
    encoded = encoded.strip().replace(" ", "+")
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("ascii")
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Invalid base64 disk payload {encoded!r}: {e}")
        return None

    disks = []
    for item in decoded.split(","):
        size_text, sep, code = item.partition(":")
        if not sep or code not in CODE_MEDIA:
            logger.debug(f"Invalid disk entry {item!r}")
            return None
        size = _parse_size(size_text)
        if size is None:
            logger.debug(f"Invalid disk size in entry {item!r}")
            return None
        disks.append(Disk(size, CODE_MEDIA[code]))

    return disks or None


def serialize(configuration: RaidConfiguration) -> str:
    """Encode a configuration as a query string (without the leading '?')"""
    params = [("r", configuration.raid_level)]

    if configuration.is_uniform:
        uniform = configuration.uniform
        params.append(("c", str(uniform.disk_count)))
        params.append(("s", format_size(uniform.disk_size)))
        params.append(("m", uniform.media_type))
    else:
        params.append(("d", encode_mixed_disks(configuration.disks)))

    if configuration.name:
        params.append(("n", configuration.name))

    return urlencode(params)


def _query_part(query: str) -> str:
    """Strip any scheme/host/path and fragment, leaving the raw query

    Only input that starts like a URL is split on its first '?', so a bare
    query may carry a literal '?' inside a value.
    """
    query = query.strip()
    if query.startswith("?"):
        query = query[1:]
    elif query.startswith("/") or _URL_PREFIX.match(query):
        return urlsplit(query).query
    return query.split("#", 1)[0]


def _params(query: str) -> Dict[str, str]:
    parsed = parse_qs(_query_part(query), keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def deserialize(query: str) -> Optional[RaidConfiguration]:
    """Decode a query string into a configuration

    Accepts a bare query, a query with a leading '?' or a full URL.

    Returns:
        RaidConfiguration, or None if the parameters are missing or invalid
    """
    if not isinstance(query, str):
        return None

    params = _params(query)

    raid_level = params.get("r")
    if raid_level not in RAID_LEVELS:
        logger.debug(f"Invalid or missing RAID level: {raid_level!r}")
        return None

    name = params.get("n") or None
    has_uniform = any(key in params for key in UNIFORM_KEYS)

    if "d" in params:
        if has_uniform:
            logger.debug("Query mixes uniform and mixed disk parameters")
            return None
        disks = decode_mixed_disks(params["d"])
        if not disks:
            return None
        return RaidConfiguration(raid_level=raid_level, disks=tuple(disks), name=name)

    count_text = params.get("c", "")
    if not count_text.isdecimal() or int(count_text) < 1:
        logger.debug(f"Invalid disk count: {count_text!r}")
        return None

    size = _parse_size(params.get("s"))
    if size is None:
        logger.debug(f"Invalid disk size: {params.get('s')!r}")
        return None

    media_type = params.get("m")
    if media_type not in MEDIA_TYPES:
        logger.debug(f"Invalid media type: {media_type!r}")
        return None

    try:
        return RaidConfiguration.from_uniform(raid_level, int(count_text), size, media_type, name=name)
    except ConfigurationError as e:
        logger.debug(f"Rejected decoded configuration: {e}")
        return None


def build_url(configuration: RaidConfiguration, base_url: str = "") -> str:
    """Join a base URL and the encoded configuration"""
    return f"{base_url}?{serialize(configuration)}"


def generate_shareable_link(configuration: RaidConfiguration, base_url: str) -> str:
    """Link that reopens the calculator with this configuration"""
    return build_url(configuration, base_url)


def generate_embed_code(configuration: RaidConfiguration, base_url: str,
                        width: int = 800, height: int = 600, theme: str = "light") -> str:
    """HTML iframe snippet embedding the calculator in embed mode

    Raises:
        ConfigurationError: If the theme is not light or dark
    """
    if theme not in EMBED_THEMES:
        raise ConfigurationError(f"Unsupported embed theme: {theme}")

    embed_url = f"{generate_shareable_link(configuration, base_url)}&{urlencode({'embed': 'true', 'theme': theme})}"
    return (
        "<iframe\n"
        f'  src="{html.escape(embed_url)}"\n'
        f'  width="{int(width)}"\n'
        f'  height="{int(height)}"\n'
        '  frameborder="0"\n'
        '  style="border: 1px solid #e2e8f0; border-radius: 8px;"\n'
        '  title="RAID Calculator">\n'
        "</iframe>"
    )


def generate_social_urls(configuration: RaidConfiguration, base_url: str) -> Dict[str, str]:
    """Share links for common social sites"""
    share_url = quote(generate_shareable_link(configuration, base_url), safe="")
    title = f"RAID {configuration.raid_level} Calculator Results"
    description = f"Check out this RAID configuration: {configuration.name or 'Custom Setup'}"

    return {
        "twitter": f"https://twitter.com/intent/tweet?url={share_url}&text={quote(f'{title} - {description}', safe='')}",
        "facebook": f"https://www.facebook.com/sharer/sharer.php?u={share_url}",
        "linkedin": f"https://www.linkedin.com/sharing/share-offsite/?url={share_url}",
        "reddit": f"https://reddit.com/submit?url={share_url}&title={quote(title, safe='')}",
    }


def validate_url_params(query: str) -> Tuple[bool, List[str]]:
    """Check query parameters against the calculator form limits

    Only the parameters that are present are checked.

    Returns:
        Tuple of (is_valid, errors)
    """
    params = _params(query)
    errors = []

    raid_level = params.get("r")
    if raid_level is not None and raid_level not in RAID_LEVELS:
        errors.append("Invalid RAID level")

    count_text = params.get("c")
    if count_text is not None:
        if not count_text.isdecimal() or not 2 <= int(count_text) <= MAX_FORM_DISK_COUNT:
            errors.append("Invalid disk count")

    size_text = params.get("s")
    if size_text is not None:
        size = _parse_size(size_text)
        if size is None or size > MAX_FORM_DISK_SIZE:
            errors.append("Invalid disk size")

    media_type = params.get("m")
    if media_type is not None and media_type not in MEDIA_TYPES:
        errors.append("Invalid media type")

    encoded = params.get("d")
    if encoded is not None and decode_mixed_disks(encoded) is None:
        errors.append("Invalid disk configuration")

    return len(errors) == 0, errors
