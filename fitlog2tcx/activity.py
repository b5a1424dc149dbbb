"""Activity model: one logged workout from a fitlog AthleteLog."""

from __future__ import annotations

import logging
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime

from fitlog2tcx.lap import Lap
from fitlog2tcx.trackpoint import TrackPoint
from fitlog2tcx.xmlfields import (
    ParseError,
    local_name,
    parse_datetime,
    parse_float,
    require_attribute,
    write_datetime,
    write_int,
    write_string,
)

logger = logging.getLogger(__name__)

# fitlog category name -> TCX Sport attribute. Unlisted categories get no Sport.
SPORT_BY_CATEGORY: dict[str, str] = {
    "Hardlopen": "Running",
    "Mijn activiteiten": "Running",
    "Wedstrijd": "Running",
    "Fietsen": "Biking",
    "Schaatsen": "Other",
}

MARKER_INDEXING_LEGACY = "legacy"
MARKER_INDEXING_CORRECTED = "corrected"
MARKER_INDEXING_MODES = (MARKER_INDEXING_LEGACY, MARKER_INDEXING_CORRECTED)


@dataclass
class Activity:
    """A fitlog activity and everything parsed from beneath it."""

    id: uuid.UUID
    start_time: datetime
    total_duration: float = 0.0  # seconds
    total_distance: float = 0.0  # meters
    total_calories: float = 0.0  # kcal
    category: str = ""
    track_start_time: datetime | None = None
    track: list[TrackPoint] = field(default_factory=list)
    laps: list[Lap] = field(default_factory=list)

    @property
    def sport(self) -> str | None:
        return SPORT_BY_CATEGORY.get(self.category)

    @classmethod
    def parse(cls, node: ET.Element, marker_indexing: str = MARKER_INDEXING_LEGACY) -> Activity:
        """Build an Activity from a fitlog ``<Activity>`` element.

        ``DistanceMarkers`` are collected while walking the children and applied
        to the laps once every child has been read.
        """
        start_time = parse_datetime(node, "StartTime")
        raw_id = require_attribute(node, "Id")
        try:
            activity_id = uuid.UUID(raw_id)
        except ValueError as e:
            raise ParseError(f"Attribute 'Id' is not a UUID: {raw_id!r}", "Id") from e

        activity = cls(id=activity_id, start_time=start_time)
        logger.debug("Activity: %s, %s", activity.id, activity.start_time)

        marker_blocks: list[list[float]] = []
        for child in node:
            tag = local_name(child.tag)
            if tag == "Duration":
                activity.total_duration = parse_float(child, "TotalSeconds")
            elif tag == "Distance":
                activity.total_distance = parse_float(child, "TotalMeters")
            elif tag == "Calories":
                activity.total_calories = parse_float(child, "TotalCal")
            elif tag == "Category":
                activity.category = require_attribute(child, "Name")
            elif tag == "Track":
                activity.track_start_time = parse_datetime(child, "StartTime")
                for point_node in child:
                    activity.track.append(TrackPoint.parse(point_node, activity.track_start_time))
            elif tag == "Laps":
                for lap_node in child:
                    activity.laps.append(Lap.parse(lap_node))
            elif tag == "DistanceMarkers":
                marker_blocks.append(
                    [parse_float(marker, "dist") for marker in child if local_name(marker.tag) == "Marker"]
                )

        for distances in marker_blocks:
            activity.apply_distance_markers(distances, marker_indexing)

        logger.debug("Distance: %s m", activity.total_distance)
        return activity

    def apply_distance_markers(self, distances: list[float], indexing: str = MARKER_INDEXING_LEGACY) -> None:
        """Set lap start distances from marker ``dist`` values.

        Legacy indexing assigns the k-th marker (counting from 1) to ``laps[k]``,
        leaving ``laps[0]`` at 0. Corrected indexing assigns it to ``laps[k - 1]``.
        A marker with no lap to land on raises IndexError.
        """
        if indexing not in MARKER_INDEXING_MODES:
            raise ValueError(f"Unknown marker indexing mode: {indexing!r}")
        first = 1 if indexing == MARKER_INDEXING_LEGACY else 0
        for position, distance in enumerate(distances, start=first):
            if position >= len(self.laps):
                raise IndexError(
                    f"Activity {self.id}: distance marker {position - first + 1} "
                    f"targets lap index {position} but only {len(self.laps)} laps exist"
                )
            self.laps[position].start_distance = distance

    def convert_tracks_to_tcx(self) -> None:
        """Distribute ``track`` samples over the laps.

        Samples are not redistributed yet; each lap only gets its ``update()``
        hook called, which is itself a no-op.
        """
        for lap in self.laps:
            lap.update()

    def write(self, elem: ET.Element, include_creator: bool = False) -> ET.Element:
        sport = self.sport
        if sport is not None:
            elem.set("Sport", sport)
        # TCX identifies an activity by its start time; the fitlog UUID is dropped
        write_datetime(elem, "Id", self.start_time)

        for lap in self.laps:
            lap.write(elem)

        if include_creator:
            self._write_creator(elem)
        return elem

    @staticmethod
    def _write_creator(parent: ET.Element) -> ET.Element:
        """Append fixed Forerunner 305 device metadata."""
        creator = ET.SubElement(parent, "Creator")
        creator.set("xsi:type", "Device_t")
        write_string(creator, "Name", "Forerunner 305")
        write_int(creator, "UnitId", 3396510648)
        write_int(creator, "ProductID", 484)
        version = ET.SubElement(creator, "Version")
        write_int(version, "VersionMajor", 2)
        write_int(version, "VersionMinor", 9)
        write_int(version, "BuildMajor", 0)
        write_int(version, "BuildMinor", 0)
        return creator
