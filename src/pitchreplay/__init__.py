"""pitchreplay: Playback engine for football tracking data."""

from .schema import validate_snapshot, validate_snapshot_file
from .version import get_package_version

__version__ = get_package_version()
__author__ = "pitchreplay contributors"
__description__ = "Playback engine for football tracking data"

__all__ = ["validate_snapshot", "validate_snapshot_file"]
