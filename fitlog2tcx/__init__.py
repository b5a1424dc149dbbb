"""This is the init module for fitlog2tcx"""

from .activity import Activity
from .core import Converter
from .lap import Lap
from .trackpoint import TrackPoint
from .xmlfields import ParseError

__version__ = "0.0.1"
__all__ = [
    "Activity",
    "Converter",
    "Lap",
    "ParseError",
    "TrackPoint",
]
