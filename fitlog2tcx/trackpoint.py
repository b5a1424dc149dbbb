"""Track point model: one GPS / heart-rate sample of a fitlog track."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime, timedelta

from fitlog2tcx.xmlfields import parse_float, parse_int


@dataclass
class TrackPoint:
    """A single sample. ``time`` is absolute: track start plus the ``tm`` offset."""

    time: datetime
    latitude: float = 0.0
    longitude: float = 0.0
    elevation: float = 0.0  # meters
    heart_rate: int = 0  # bpm

    @classmethod
    def parse(cls, node: ET.Element, track_start: datetime) -> TrackPoint:
        # Negative offsets are accepted as-is
        offset = parse_int(node, "tm")
        return cls(
            time=track_start + timedelta(seconds=offset),
            latitude=parse_float(node, "lat"),
            longitude=parse_float(node, "lon"),
            elevation=parse_float(node, "ele"),
            heart_rate=parse_int(node, "hr"),
        )

    def write(self, parent: ET.Element) -> None:
        """Serialize this sample under a TCX ``<Track>`` element.

        Not implemented yet: track points are parsed but produce no TCX output,
        so a lap's ``<Track>`` stays empty. Emitting ``<Trackpoint>`` (Time,
        Position, AltitudeMeters, HeartRateBpm) belongs here.
        """
        return None
