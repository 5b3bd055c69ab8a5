import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from raid_calculator.models import Disk  # noqa: E402


@pytest.fixture
def make_disks():
    """Build a list of identical disks."""
    def _make(count, size, media_type="HDD"):
        return [Disk(size, media_type) for _ in range(count)]
    return _make


@pytest.fixture
def missing_config(tmp_path):
    """Path to a configuration file that does not exist."""
    return str(tmp_path / "missing.conf")
