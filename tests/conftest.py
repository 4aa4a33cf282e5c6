"""
Shared fixtures: in-memory stand-ins for the Supabase client and the
Gemini HTTP session, plus a small catalog.
"""

from types import SimpleNamespace

import pytest

from aim_ai.models import Course
from aim_ai.modules.catalog import Catalog, load_catalog
from aim_ai.modules.progress_store import LocalProgressStore


# -----------------------------------------------------------------------------
# Supabase
# -----------------------------------------------------------------------------

class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = None
        self.payload = None
        self.on_conflict = None
        self.filters = []

    def upsert(self, row, on_conflict=None):
        self.op, self.payload, self.on_conflict = "upsert", row, on_conflict
        return self

    def insert(self, row):
        self.op, self.payload = "insert", row
        return self

    def select(self, columns):
        self.op, self.payload = "select", columns
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def execute(self):
        self.client.calls.append((self.table, self.op, self.payload, self.on_conflict, list(self.filters)))
        if self.client.fail:
            raise RuntimeError("network down")

        rows = self.client.tables.setdefault(self.table, [])
        if self.op == "insert":
            rows.append(dict(self.payload, completed_at="2024-01-01T00:00:00+00:00"))
            return SimpleNamespace(data=[self.payload])
        if self.op == "upsert":
            keys = [k.strip() for k in self.on_conflict.split(",")]
            for r in rows:
                if all(r[k] == self.payload[k] for k in keys):
                    r.update(self.payload)
                    return SimpleNamespace(data=[r])
            rows.append(dict(self.payload, completed_at="2024-01-01T00:00:00+00:00"))
            return SimpleNamespace(data=[self.payload])
        if self.op == "select":
            data = [r for r in rows if all(r.get(c) == v for c, v in self.filters)]
            return SimpleNamespace(data=data)
        raise AssertionError(f"unexpected op {self.op}")


class FakeSubscription:
    def __init__(self, auth, callback):
        self.auth = auth
        self.callback = callback
        self.unsubscribed = False

    def unsubscribe(self):
        self.unsubscribed = True
        if self.callback in self.auth.callbacks:
            self.auth.callbacks.remove(self.callback)


class FakeAuth:
    def __init__(self):
        self.session = None
        self.callbacks = []
        self.subscriptions = []
        self.otp_requests = []
        self.otp_error = None
        self.verify_result = None
        self.get_session_error = None
        self.signed_out = False

    def get_session(self):
        if self.get_session_error:
            raise self.get_session_error
        return self.session

    def set_session(self, access, refresh):
        self.session = make_sb_session(access_token=access, refresh_token=refresh)

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        sub = FakeSubscription(self, callback)
        self.subscriptions.append(sub)
        return sub

    def push(self, event, session):
        self.session = session
        for cb in list(self.callbacks):
            cb(event, session)

    def sign_in_with_otp(self, payload):
        if self.otp_error:
            raise self.otp_error
        self.otp_requests.append(payload)

    def verify_otp(self, payload):
        return SimpleNamespace(session=self.verify_result, user=None)

    def sign_out(self):
        self.signed_out = True
        self.session = None


class FakeSupabase:
    def __init__(self, fail=False):
        self.fail = fail
        self.tables = {}
        self.calls = []
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)


def make_sb_session(user_id="u-1", email="ann.lee@example.com", full_name="Ann Lee",
                    access_token="access-1", refresh_token="refresh-1"):
    user = SimpleNamespace(id=user_id, email=email, user_metadata={"full_name": full_name} if full_name else {})
    return SimpleNamespace(access_token=access_token, refresh_token=refresh_token, user=user)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


# -----------------------------------------------------------------------------
# Gemini HTTP
# -----------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeHttp:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, json=None, timeout=None):
        self.requests.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def gemini_payload(text="Sure!", chunks=None):
    candidate = {"content": {"role": "model", "parts": [{"text": text}]}}
    if chunks is not None:
        candidate["groundingMetadata"] = {"groundingChunks": chunks}
    return {"candidates": [candidate]}


# -----------------------------------------------------------------------------
# Catalog / storage
# -----------------------------------------------------------------------------

@pytest.fixture
def catalog():
    return load_catalog()


@pytest.fixture
def catalog_with_empty_course():
    base = load_catalog()
    empty = Course(
        id="c-empty",
        title="Coming Soon",
        description="Nothing here yet.",
        instructor="TBA",
        level="Beginner",
        modules=(),
    )
    return Catalog(list(base.courses) + [empty])


@pytest.fixture
def local_store(tmp_path):
    return LocalProgressStore(tmp_path / "progress.json")
