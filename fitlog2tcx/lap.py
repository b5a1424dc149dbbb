"""Lap model for fitlog activities."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime

from fitlog2tcx.trackpoint import TrackPoint
from fitlog2tcx.xmlfields import local_name, parse_datetime, parse_float, write_date_attribute, write_int


@dataclass
class Lap:
    """One interval of an activity.

    ``start_distance`` never comes from the lap's own node; the owning
    Activity fills it in from its ``DistanceMarkers`` block.
    """

    start_time: datetime
    duration: float = 0.0  # seconds
    calories: float = 0.0  # kcal
    start_distance: float = 0.0  # meters
    track: list[TrackPoint] = field(default_factory=list)

    @classmethod
    def parse(cls, node: ET.Element) -> Lap:
        lap = cls(
            start_time=parse_datetime(node, "StartTime"),
            duration=parse_float(node, "DurationSeconds"),
        )
        for child in node:
            if local_name(child.tag) == "Calories":
                lap.calories = parse_float(child, "TotalCal")
        return lap

    def update(self) -> None:
        """Recompute lap data from attached track points (not implemented, no-op)."""

    def write(self, parent: ET.Element) -> ET.Element:
        lap_elem = ET.SubElement(parent, "Lap")
        write_date_attribute(lap_elem, "StartTime", self.start_time)
        # int() truncates toward zero: 90.7 s -> 90
        write_int(lap_elem, "TotalTimeSeconds", int(self.duration))
        write_int(lap_elem, "Calories", int(self.calories))

        if self.track:
            track_elem = ET.SubElement(lap_elem, "Track")
            for point in self.track:
                point.write(track_elem)
        return lap_elem
