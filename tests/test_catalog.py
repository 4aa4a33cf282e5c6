import json

import pytest
from pydantic import ValidationError

from aim_ai.errors import ConfigError
from aim_ai.models import Module, ModuleKind, User
from aim_ai.modules.catalog import (
    active_courses,
    chart_label,
    completed_courses,
    course_status,
    filter_courses,
    load_catalog,
    minutes_learned,
    next_module,
    previous_module,
)


class TestBuiltInCatalog:
    def test_order_and_modules(self, catalog):
        assert [c.id for c in catalog] == ["c1", "c2", "c3"]
        c1 = catalog.get_course("c1")
        assert [m.id for m in c1.modules] == ["m1-1", "m1-2", "m1-3"]
        assert [m.kind for m in c1.modules] == [ModuleKind.TEXT, ModuleKind.VIDEO, ModuleKind.QUIZ]
        assert c1.total_minutes == 30
        assert c1.first_module.id == "m1-1"

    def test_lookup(self, catalog):
        assert catalog.get_course("missing") is None
        assert catalog.get_module("c1", "m1-2").duration_minutes == 15
        assert catalog.get_module("c1", "m2-1") is None
        assert catalog.get_module("missing", "m1-1") is None

    def test_modules_are_immutable(self, catalog):
        with pytest.raises(ValidationError):
            catalog.get_course("c1").title = "Changed"

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            Module(id="x", title="x", kind="text", content="", duration_minutes=-1)


class TestLoadFromFile:
    def test_json_catalog(self, tmp_path):
        path = tmp_path / "courses.json"
        path.write_text(json.dumps([{
            "id": "k1",
            "title": "Knitting",
            "description": "Loops.",
            "instructor": "Pat",
            "level": "Advanced",
            "modules": [{"id": "k1-1", "title": "Cast on", "kind": "video",
                         "content": "https://example.com/v.mp4", "duration_minutes": 7}],
        }]))
        loaded = load_catalog(path)
        assert len(loaded) == 1
        assert loaded.get_module("k1", "k1-1").kind is ModuleKind.VIDEO

    @pytest.mark.parametrize("content", ["not json", json.dumps([{"id": "only-id"}])])
    def test_bad_file(self, tmp_path, content):
        path = tmp_path / "courses.json"
        path.write_text(content)
        with pytest.raises(ConfigError):
            load_catalog(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_catalog(tmp_path / "absent.json")


class TestFilters:
    PROGRESS = {"c1": 100, "c2": 50, "c3": 0}

    def test_status(self):
        assert course_status(0) == "not_started"
        assert course_status(1) == "active"
        assert course_status(99) == "active"
        assert course_status(100) == "completed"

    def test_filter_by_status(self, catalog):
        assert [c.id for c in filter_courses(catalog, self.PROGRESS)] == ["c1", "c2", "c3"]
        assert [c.id for c in active_courses(catalog, self.PROGRESS)] == ["c2"]
        assert [c.id for c in completed_courses(catalog, self.PROGRESS)] == ["c1"]

    def test_search_is_case_insensitive(self, catalog):
        assert [c.id for c in filter_courses(catalog, {}, search="  next.JS ")] == ["c3"]
        assert filter_courses(catalog, {}, search="haskell") == []

    def test_search_and_status_combine(self, catalog):
        assert filter_courses(catalog, self.PROGRESS, "completed", search="ui/ux") == []
        assert [c.id for c in filter_courses(catalog, self.PROGRESS, "active", search="ui")] == ["c2"]

    def test_missing_progress_counts_as_zero(self, catalog):
        assert active_courses(catalog, {}) == []


class TestDerivedNumbers:
    def test_minutes_learned(self, catalog):
        pairs = [("c1", "m1-1"), ("c1", "m1-2"), ("c1", "m1-1"), ("c9", "m9-9")]
        assert minutes_learned(catalog, pairs) == 25
        assert minutes_learned(catalog, []) == 0

    def test_chart_label(self, catalog):
        assert chart_label(catalog.get_course("c1")) == "Modern React"
        assert chart_label(catalog.get_course("c3")) == "Fullstack Next.js"


class TestPlayerNavigation:
    def test_previous_and_next(self, catalog):
        c1 = catalog.get_course("c1")
        assert previous_module(c1, "m1-1") is None
        assert next_module(c1, "m1-1").id == "m1-2"
        assert previous_module(c1, "m1-3").id == "m1-2"
        assert next_module(c1, "m1-3") is None

    def test_unknown_module(self, catalog):
        c1 = catalog.get_course("c1")
        assert previous_module(c1, "zzz") is None
        assert next_module(c1, None) is None


class TestUser:
    def test_names_from_full_name(self):
        user = User(id="1", email="alex.design@example.com", full_name="Alex Johnson")
        assert user.display_name == "Alex Johnson"
        assert user.first_name == "Alex"
        assert "alex.design@example.com" in user.avatar_url

    def test_fallbacks(self):
        assert User(id="1", email="sam@example.com").display_name == "sam"
        assert User(id="1").display_name == "Student"
