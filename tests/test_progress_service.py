"""
Progress service tests: percentage math, idempotent completion,
backend selection and the best-effort failure policy.
"""

import json

import pytest

from aim_ai.errors import ProgressStoreError
from aim_ai.modules.catalog import filter_courses
from aim_ai.modules.progress_store import LocalProgressStore
from aim_ai.services.progress_service import (
    LocalProgressBackend,
    ProgressService,
    SupabaseProgressBackend,
    build_progress_service,
    percentage,
)

from conftest import FakeSupabase

USER = "user-1"


@pytest.fixture
def local_service(catalog, local_store):
    return ProgressService(LocalProgressBackend(local_store), catalog)


@pytest.fixture
def remote_service(catalog, fake_supabase):
    return ProgressService(SupabaseProgressBackend(fake_supabase), catalog)


class TestPercentage:
    def test_examples(self):
        assert percentage(0, 3) == 0
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67
        assert percentage(3, 3) == 100
        assert percentage(1, 2) == 50

    def test_halves_round_up(self):
        assert percentage(1, 8) == 13  # 12.5
        assert percentage(3, 8) == 38  # 37.5

    def test_range_and_formula(self):
        for total in range(1, 25):
            for done in range(0, total + 1):
                pct = percentage(done, total)
                assert 0 <= pct <= 100
                assert abs(pct - 100 * done / total) <= 0.5


class TestScenario:
    @pytest.mark.parametrize("service_name", ["local_service", "remote_service"])
    def test_course_c1_walkthrough(self, request, service_name, catalog):
        service = request.getfixturevalue(service_name)

        assert service.mark_complete(USER, "c1", "m1-1") is True
        assert service.get_user_progress(USER)["c1"] == 33

        assert service.mark_complete(USER, "c1", "m1-2") is True
        assert service.get_user_progress(USER)["c1"] == 67

        assert service.mark_complete(USER, "c1", "m1-3") is True
        progress = service.get_user_progress(USER)
        assert progress["c1"] == 100

        completed = filter_courses(catalog, progress, "completed")
        active = filter_courses(catalog, progress, "active")
        assert [c.id for c in completed] == ["c1"]
        assert "c1" not in [c.id for c in active]


class TestIdempotence:
    @pytest.mark.parametrize("service_name", ["local_service", "remote_service"])
    def test_marking_twice_counts_once(self, request, service_name):
        service = request.getfixturevalue(service_name)
        service.mark_complete(USER, "c2", "m2-1")
        once = service.get_user_progress(USER)

        assert service.mark_complete(USER, "c2", "m2-1") is True
        assert service.get_user_progress(USER) == once
        assert once["c2"] == 50

    def test_remote_uses_composite_upsert(self, remote_service, fake_supabase):
        remote_service.mark_complete(USER, "c1", "m1-1")
        remote_service.mark_complete(USER, "c1", "m1-1")

        table, op, payload, on_conflict, _ = fake_supabase.calls[0]
        assert (table, op) == ("user_progress", "upsert")
        assert payload == {"user_id": USER, "course_id": "c1", "module_id": "m1-1"}
        assert on_conflict == "user_id,course_id,module_id"
        assert len(fake_supabase.tables["user_progress"]) == 1

    def test_duplicate_remote_rows_still_count_once(self, remote_service, fake_supabase):
        # rows inserted behind the upsert's back (e.g. a race) must not inflate progress
        fake_supabase.tables["user_progress"] = [
            {"user_id": USER, "course_id": "c1", "module_id": "m1-1", "completed_at": None},
            {"user_id": USER, "course_id": "c1", "module_id": "m1-1", "completed_at": None},
        ]
        assert remote_service.get_user_progress(USER)["c1"] == 33


class TestProgressMap:
    def test_every_nonempty_course_reported(self, local_service, catalog):
        progress = local_service.get_user_progress(USER)
        assert progress == {c.id: 0 for c in catalog}

    def test_zero_module_course_omitted(self, catalog_with_empty_course, local_store):
        service = ProgressService(LocalProgressBackend(local_store), catalog_with_empty_course)
        service.mark_complete(USER, "c3", "m3-1")

        progress = service.get_user_progress(USER)
        assert "c-empty" not in progress
        assert progress["c3"] == 100

    def test_unknown_modules_ignored(self, local_service):
        local_service.mark_complete(USER, "c1", "m9-9")
        local_service.mark_complete(USER, "nope", "m1-1")
        assert local_service.get_user_progress(USER)["c1"] == 0

    def test_progress_is_per_user(self, local_service):
        local_service.mark_complete(USER, "c3", "m3-1")
        assert local_service.get_user_progress("someone-else")["c3"] == 0

    def test_remote_reads_filter_by_user(self, remote_service, fake_supabase):
        remote_service.get_user_progress(USER)
        table, op, columns, _, filters = fake_supabase.calls[-1]
        assert op == "select"
        assert "module_id" in columns
        assert filters == [("user_id", USER)]

    def test_completed_module_ids(self, local_service):
        local_service.mark_complete(USER, "c1", "m1-1")
        local_service.mark_complete(USER, "c2", "m2-2")

        assert local_service.get_completed_module_ids(USER, "c1") == {"m1-1"}
        assert local_service.get_completed_module_ids(USER) == {"m1-1", "m2-2"}
        assert local_service.get_completed_pairs(USER) == {("c1", "m1-1"), ("c2", "m2-2")}

    def test_snapshot_uses_one_read(self, remote_service, fake_supabase):
        remote_service.mark_complete(USER, "c1", "m1-1")
        remote_service.mark_complete(USER, "c1", "m1-2")
        before = len(fake_supabase.calls)

        progress, pairs = remote_service.get_progress_snapshot(USER)

        assert progress == {"c1": 67, "c2": 0, "c3": 0}
        assert pairs == {("c1", "m1-1"), ("c1", "m1-2")}
        assert [op for _, op, _, _, _ in fake_supabase.calls[before:]] == ["select"]

    def test_snapshot_degrades_on_failure(self, catalog):
        service = ProgressService(SupabaseProgressBackend(FakeSupabase(fail=True)), catalog)
        assert service.get_progress_snapshot(USER) == ({"c1": 0, "c2": 0, "c3": 0}, set())


class TestFailures:
    def test_remote_write_failure_returns_false(self, catalog):
        service = ProgressService(SupabaseProgressBackend(FakeSupabase(fail=True)), catalog)
        assert service.mark_complete(USER, "c1", "m1-1") is False

    def test_remote_read_failure_degrades_to_zero(self, catalog):
        service = ProgressService(SupabaseProgressBackend(FakeSupabase(fail=True)), catalog)
        assert service.get_user_progress(USER) == {"c1": 0, "c2": 0, "c3": 0}
        assert service.get_completed_module_ids(USER) == set()

    def test_corrupt_local_file_degrades(self, catalog, tmp_path):
        path = tmp_path / "progress.json"
        path.write_text("{ not json")
        service = ProgressService(LocalProgressBackend(LocalProgressStore(path)), catalog)
        assert service.mark_complete(USER, "c1", "m1-1") is False
        assert service.get_user_progress(USER)["c1"] == 0

    @pytest.mark.parametrize("user_value", [
        ["m1-1"],
        {"courseId": "c1", "moduleId": "m1-1"},
        [{"courseId": "c1", "moduleId": 7}],
    ])
    def test_wrong_shape_local_file_degrades(self, catalog, tmp_path, user_value):
        path = tmp_path / "progress.json"
        path.write_text(json.dumps({"aim_ai_progress_" + USER: user_value}))
        service = ProgressService(LocalProgressBackend(LocalProgressStore(path)), catalog)

        assert service.get_user_progress(USER) == {"c1": 0, "c2": 0, "c3": 0}
        assert service.get_completed_module_ids(USER, "c1") == set()

    @pytest.mark.parametrize("user_value", [["m1-1"], {"courseId": "c1"}])
    def test_wrong_shape_local_file_rejects_writes(self, catalog, tmp_path, user_value):
        path = tmp_path / "progress.json"
        path.write_text(json.dumps({"aim_ai_progress_" + USER: user_value}))
        service = ProgressService(LocalProgressBackend(LocalProgressStore(path)), catalog)

        assert service.mark_complete(USER, "c1", "m1-1") is False
        assert json.loads(path.read_text())["aim_ai_progress_" + USER] == user_value

    def test_malformed_remote_rows_degrade(self, remote_service, fake_supabase):
        fake_supabase.tables["user_progress"] = [{"user_id": USER, "course_id": "c1"}]
        assert remote_service.get_user_progress(USER)["c1"] == 0

    def test_backend_error_type(self):
        backend = SupabaseProgressBackend(FakeSupabase(fail=True))
        with pytest.raises(ProgressStoreError):
            backend.fetch(USER)


class TestBackendSelection:
    def test_local_when_no_client(self, catalog, local_store):
        service = build_progress_service(catalog, None, local_store)
        assert isinstance(service.backend, LocalProgressBackend)

    def test_supabase_when_client(self, catalog, local_store, fake_supabase):
        service = build_progress_service(catalog, fake_supabase, local_store)
        assert isinstance(service.backend, SupabaseProgressBackend)
