# aim_ai/modules/catalog.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Iterator, Literal, Mapping, Optional

from pydantic import ValidationError

from aim_ai.catalog_data import COURSES
from aim_ai.errors import ConfigError
from aim_ai.models import Course, Module

CourseFilter = Literal["all", "active", "completed"]


class Catalog:
    """Read-only, ordered collection of courses."""

    def __init__(self, courses: Iterable[Course]):
        self._courses = tuple(courses)
        self._by_id = {c.id: c for c in self._courses}

    @classmethod
    def from_dicts(cls, rows: Iterable[dict]) -> "Catalog":
        return cls(Course.model_validate(r) for r in rows)

    def __iter__(self) -> Iterator[Course]:
        return iter(self._courses)

    def __len__(self) -> int:
        return len(self._courses)

    @property
    def courses(self) -> tuple[Course, ...]:
        return self._courses

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._by_id.get(course_id)

    def get_module(self, course_id: str, module_id: str) -> Optional[Module]:
        course = self.get_course(course_id)
        if course is None:
            return None
        for m in course.modules:
            if m.id == module_id:
                return m
        return None


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Built-in catalog, or the JSON file at `path` (a list of courses)."""
    if path is None:
        return Catalog.from_dicts(COURSES)

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
        return Catalog.from_dicts(rows)
    except (OSError, ValueError, ValidationError) as e:
        raise ConfigError(f"Could not load catalog from {path}: {e}")


# ----------------- progress-based views -----------------

def course_status(percentage: int) -> str:
    if percentage >= 100:
        return "completed"
    if percentage > 0:
        return "active"
    return "not_started"


def filter_courses(
    courses: Iterable[Course],
    progress: Mapping[str, int],
    status: CourseFilter = "all",
    search: str = "",
) -> list[Course]:
    """
    Catalog screen filter.

    - search: case-insensitive substring of the title
    - status: "active" (0 < p < 100), "completed" (p == 100) or "all"
    """
    needle = search.strip().lower()
    out: list[Course] = []
    for course in courses:
        if needle and needle not in course.title.lower():
            continue
        pct = progress.get(course.id, 0)
        if status == "active" and course_status(pct) != "active":
            continue
        if status == "completed" and course_status(pct) != "completed":
            continue
        out.append(course)
    return out


def active_courses(courses: Iterable[Course], progress: Mapping[str, int]) -> list[Course]:
    return filter_courses(courses, progress, "active")


def completed_courses(courses: Iterable[Course], progress: Mapping[str, int]) -> list[Course]:
    return filter_courses(courses, progress, "completed")


def minutes_learned(catalog: Catalog, completed: Iterable[tuple[str, str]]) -> int:
    """Sum of durations of completed (course_id, module_id) pairs."""
    total = 0
    for course_id, module_id in set(completed):
        module = catalog.get_module(course_id, module_id)
        if module is not None:
            total += module.duration_minutes
    return total


def chart_label(course: Course) -> str:
    return " ".join(course.title.split(" ")[:2])


# ----------------- player navigation -----------------

def module_index(course: Course, module_id: Optional[str]) -> int:
    for i, m in enumerate(course.modules):
        if m.id == module_id:
            return i
    return -1


def previous_module(course: Course, module_id: Optional[str]) -> Optional[Module]:
    i = module_index(course, module_id)
    if i > 0:
        return course.modules[i - 1]
    return None


def next_module(course: Course, module_id: Optional[str]) -> Optional[Module]:
    i = module_index(course, module_id)
    if 0 <= i < len(course.modules) - 1:
        return course.modules[i + 1]
    return None
