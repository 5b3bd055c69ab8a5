"""Exceptions raised by the RAID calculator"""


class ConfigurationError(ValueError):
    """Raised when a RAID configuration cannot be computed

    Covers disk counts below a level's minimum, odd disk counts for
    mirrored levels and unsupported RAID level / media type values.
    """
