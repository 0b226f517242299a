"""
Course reference data.

Loads the course list and the MiClub fee-group mapping once at startup.
Both are read-only for the lifetime of the process.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from app.models import Course, FeeGroup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceData:
    courses: tuple[Course, ...] = ()
    fee_groups: Mapping[str, FeeGroup] = field(default_factory=dict)

    def get_course(self, course_id: str) -> Course | None:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None


def _read_json(path: Path) -> object:
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def load_courses(path: str | Path) -> tuple[Course, ...]:
    """Parse the course list; malformed entries are skipped with a warning."""
    raw = _read_json(Path(path))
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of courses")

    courses: list[Course] = []
    seen: set[str] = set()
    for i, entry in enumerate(raw):
        try:
            course = Course.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping course #%d in %s: %s", i, path, exc.errors()[0]["msg"])
            continue
        if course.id in seen:
            logger.warning("Skipping duplicate course id %s in %s", course.id, path)
            continue
        seen.add(course.id)
        courses.append(course)
    return tuple(courses)


def load_fee_groups(path: str | Path) -> dict[str, FeeGroup]:
    """Parse ``{course name: {bookingResourceId, feeGroupId}}``; a missing file is empty."""
    path = Path(path)
    if not path.exists():
        logger.warning("Fee group file %s not found; MiClub URLs fall back to the course URL", path)
        return {}

    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object keyed by course name")

    groups: dict[str, FeeGroup] = {}
    for name, entry in raw.items():
        try:
            groups[name] = FeeGroup.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping fee group for %s in %s", name, path)
    return groups


def load_reference_data(courses_path: str | Path, fee_groups_path: str | Path) -> ReferenceData:
    data = ReferenceData(
        courses=load_courses(courses_path),
        fee_groups=load_fee_groups(fee_groups_path),
    )
    logger.info(
        "Loaded %d courses and %d fee groups",
        len(data.courses),
        len(data.fee_groups),
    )
    return data
