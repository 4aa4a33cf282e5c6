# aim_ai/ui/routes.py
from typing import NamedTuple, Optional

DASHBOARD = "dashboard"
COURSES = "courses"
SETTINGS = "settings"
COURSE_DETAILS = "course_details"
COURSE_PLAYER = "course_player"
NOT_FOUND = "not_found"


class Route(NamedTuple):
    name: str
    course_id: Optional[str] = None

    @property
    def uses_sidebar(self) -> bool:
        # the player gets a header-only layout
        return self.name != COURSE_PLAYER


def resolve_route(path: Optional[str]) -> Route:
    """Map a location like "/course/c1" to a Route; unknown paths -> NOT_FOUND."""
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    parts = [p for p in path.strip().split("/") if p]

    if not parts:
        return Route(DASHBOARD)
    if parts == ["courses"]:
        return Route(COURSES)
    if parts == ["settings"]:
        return Route(SETTINGS)
    if len(parts) == 2 and parts[0] == "course-details":
        return Route(COURSE_DETAILS, parts[1])
    if len(parts) == 2 and parts[0] == "course":
        return Route(COURSE_PLAYER, parts[1])
    return Route(NOT_FOUND)


def course_details_path(course_id: str) -> str:
    return f"/course-details/{course_id}"


def course_player_path(course_id: str) -> str:
    return f"/course/{course_id}"
