"""Core fitlog2tcx functionality: read a fitlog, convert, write a TCX document."""

import contextlib
import copy
import gzip
import logging
import os
import stat
import tempfile
import xml.etree.ElementTree as ET
import zlib
from pathlib import Path
from typing import Any

from .activity import Activity
from .appconfig import DEFAULT_CONFIG, load_config, validate_config
from .xmlfields import ParseError, local_name

logger = logging.getLogger(__name__)

TCX_NAMESPACE_ATTRIBUTES = {
    "xmlns": "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2",
    "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "xsi:schemaLocation": "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2 "
    "http://www.garmin.com/xmlschemas/TrainingCenterDatabasev2.xsd",
}


class Converter:
    """Owns the parsed activities of one fitlog file and turns them into TCX.

    Lifecycle is a single pass: ``read_source`` -> ``convert`` -> ``write_target``.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        if config is None:
            self.config = load_config()
        else:
            self.config = validate_config({**copy.deepcopy(DEFAULT_CONFIG), **config})

        if self.config.get("debug", False):
            logging.basicConfig(level=logging.DEBUG)

        self.activities: list[Activity] = []

    @staticmethod
    def _load_document(path: str | os.PathLike) -> ET.Element:
        """Parse the XML at *path*, transparently handling ``.gz`` files."""
        try:
            if str(path).lower().endswith(".gz"):
                with gzip.open(path, "rb") as f:
                    data = f.read()
                return ET.fromstring(data.lstrip())
            return ET.parse(path).getroot()
        except ET.ParseError as e:
            raise ParseError(f"Malformed XML: {e}") from e
        except gzip.BadGzipFile as e:
            raise ParseError(f"Not a gzip file: {e}") from e
        except (EOFError, zlib.error) as e:
            raise ParseError(f"Corrupt gzip file: {e}") from e

    def read_source(self, path: str | os.PathLike) -> list[Activity]:
        """Parse every ``AthleteLog/Activity`` of the fitlog at *path*.

        Any failure aborts the whole read; ``self.activities`` is only replaced
        once every activity parsed.
        """
        root = self._load_document(path)

        activities: list[Activity] = []
        found_log = False
        for log_node in root:
            if local_name(log_node.tag) != "AthleteLog":
                continue
            found_log = True
            for node in log_node:
                if local_name(node.tag) == "Activity":
                    activities.append(Activity.parse(node, self.config["marker_indexing"]))

        if not found_log:
            raise ParseError(f"No AthleteLog element under <{local_name(root.tag)}>")

        logger.debug("Read %d activities from %s", len(activities), path)
        self.activities = activities
        return activities

    def convert(self) -> None:
        for activity in self.activities:
            activity.convert_tracks_to_tcx()

    def build_document(self, activities: list[Activity] | None = None) -> ET.ElementTree:
        """Build the TCX tree: TrainingCenterDatabase -> Activities -> Activity*."""
        if activities is None:
            activities = self.activities

        root = ET.Element("TrainingCenterDatabase")
        if self.config.get("tcx_namespace", False):
            for name, value in TCX_NAMESPACE_ATTRIBUTES.items():
                root.set(name, value)

        activities_elem = ET.SubElement(root, "Activities")
        include_creator = self.config.get("include_creator", False)
        for activity in activities:
            activity.write(ET.SubElement(activities_elem, "Activity"), include_creator=include_creator)

        tree = ET.ElementTree(root)
        indent = self.config.get("indent", "")
        if indent:
            ET.indent(tree, space=indent)
        return tree

    def write_target(self, path: str | os.PathLike, activities: list[Activity] | None = None) -> None:
        """Write the TCX document to *path*.

        The document is written to a temporary file next to *path* and moved
        into place, so a failed write never leaves a truncated target behind.
        """
        tree = self.build_document(activities)
        directory = os.path.dirname(os.path.abspath(path))
        fd, tmp_path = tempfile.mkstemp(prefix=".fitlog2tcx-", suffix=".tcx", dir=directory)
        try:
            with os.fdopen(fd, "wb") as f:
                tree.write(f, encoding="utf-8", xml_declaration=True)
            os.chmod(tmp_path, _target_mode(path))
            os.replace(tmp_path, path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise

        logger.debug("Wrote %d activities to %s", len(tree.getroot()[0]), path)

    def run(self, source: str | os.PathLike, target: str | os.PathLike) -> list[Activity]:
        """Read *source*, convert, and write *target*."""
        activities = self.read_source(source)
        self.convert()
        self.write_target(target)
        return activities

    def cleanup(self):
        self.activities = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()


def default_target_path(source: str | os.PathLike) -> Path:
    """``run.fitlog`` / ``run.fitlog.gz`` -> ``run.tcx`` alongside the source."""
    source = Path(source)
    name = source.name
    if name.lower().endswith(".gz"):
        name = name[: -len(".gz")]
    return source.with_name(f"{Path(name).stem}.tcx")


def _target_mode(path: str | os.PathLike) -> int:
    """Permission bits for the written file: the existing target's, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
