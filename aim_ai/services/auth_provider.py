# aim_ai/services/auth_provider.py
"""
Auth providers.

Both providers expose the same observable state:
    user, session, loading, is_mock
and notify subscribers (listener(provider)) on every change.

- SupabaseAuthProvider: passwordless e-mail sign-in; state follows the
  Supabase auth-state channel until stop().
- MockAuthProvider: used when Supabase is not configured; signs in a fixed
  demo user after a short delay so the loading transition looks the same.

While `loading` is True the identity is unknown: views must not query
progress or render protected screens yet.
"""

from __future__ import annotations

import logging
import pathlib
import threading
from typing import Any, Callable, List, Optional

from pydantic import BaseModel
from supabase import Client

from aim_ai.errors import AuthError
from aim_ai.models import User
from aim_ai.services import db_supabase

logger = logging.getLogger(__name__)

Listener = Callable[["AuthProvider"], None]


class AuthSession(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    user: User


def session_from_supabase(sess: Any) -> Optional[AuthSession]:
    """Convert a gotrue Session (or None) into an AuthSession."""
    if sess is None or getattr(sess, "user", None) is None:
        return None
    sb_user = sess.user
    metadata = getattr(sb_user, "user_metadata", None) or {}
    return AuthSession(
        access_token=sess.access_token,
        refresh_token=getattr(sess, "refresh_token", None),
        user=User(
            id=str(sb_user.id),
            email=getattr(sb_user, "email", None),
            full_name=metadata.get("full_name"),
        ),
    )


class AuthProvider:
    is_mock = False

    def __init__(self):
        self.session: Optional[AuthSession] = None
        self.loading = True
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    # ----------------- observable state -----------------

    @property
    def user(self) -> Optional[User]:
        return self.session.user if self.session else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns the matching unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, session: Optional[AuthSession], loading: bool = False) -> None:
        self.session = session
        self.loading = loading
        self._notify()

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(self)
            except Exception:
                logger.exception("Auth listener failed")

    # ----------------- lifecycle / actions -----------------

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def sign_in_with_otp(self, email: str) -> None:
        raise NotImplementedError

    def verify_otp(self, email: str, code: str) -> None:
        raise NotImplementedError

    def sign_out(self) -> None:
        raise NotImplementedError


class SupabaseAuthProvider(AuthProvider):
    def __init__(self, client: Client, session_file: pathlib.Path):
        super().__init__()
        self.client = client
        self.session_file = session_file
        self._subscription = None
        self._active = False

    def start(self) -> None:
        self._active = True
        self.loading = True

        db_supabase.restore_session(self.client, self.session_file)
        try:
            current = session_from_supabase(self.client.auth.get_session())
        except Exception as e:
            logger.error("Could not fetch Supabase session: %s", e)
            current = None
        self._set_state(current)

        try:
            self._subscription = self.client.auth.on_auth_state_change(self._on_auth_change)
        except Exception as e:
            logger.error("Could not subscribe to auth changes: %s", e)

    def stop(self) -> None:
        self._active = False
        if self._subscription is not None:
            try:
                self._subscription.unsubscribe()
            except Exception as e:
                logger.warning("Auth unsubscribe failed: %s", e)
            self._subscription = None

    def _on_auth_change(self, event, session) -> None:
        if not self._active:
            return
        logger.debug("Auth event: %s", event)
        current = session_from_supabase(session)
        self._persist(current)
        self._set_state(current)

    def _persist(self, current: Optional[AuthSession]) -> None:
        try:
            if current and current.refresh_token:
                db_supabase.save_session(self.session_file, current.access_token, current.refresh_token)
            elif current is None:
                db_supabase.clear_saved_session(self.session_file)
        except OSError as e:
            logger.warning("Could not persist session: %s", e)

    def sign_in_with_otp(self, email: str) -> None:
        """Send the magic link / one-time code to `email`."""
        email = (email or "").strip()
        if not email:
            raise AuthError("Please enter your email address")
        try:
            db_supabase.send_magic_link(self.client, email)
        except Exception as e:
            raise AuthError(str(e) or "An error occurred") from e

    def verify_otp(self, email: str, code: str) -> None:
        try:
            sess = db_supabase.verify_email_code(self.client, email.strip(), code.strip())
        except Exception as e:
            raise AuthError(str(e) or "Invalid code") from e
        current = session_from_supabase(sess)
        if current is None:
            raise AuthError("Sign-in failed")
        self._persist(current)
        self._set_state(current)

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.error("Supabase sign-out failed: %s", e)
        db_supabase.clear_saved_session(self.session_file)
        self._set_state(None)


class MockAuthProvider(AuthProvider):
    is_mock = True

    MOCK_USER = User(
        id="mock-user-123",
        email="alex.design@example.com",
        full_name="Alex Johnson",
    )
    MOCK_TOKEN = "mock-token"

    def __init__(self, delay: float = 0.5, reload: Optional[Callable[[], None]] = None):
        super().__init__()
        self.delay = delay
        self._reload = reload or self.start
        self._timer: Optional[threading.Timer] = None
        self._ready = threading.Event()

    def set_reload(self, reload: Callable[[], None]) -> None:
        self._reload = reload

    def start(self) -> None:
        self.stop()
        self._ready.clear()
        self._set_state(None, loading=True)

        if self.delay <= 0:
            self._sign_in_mock()
            return
        self._timer = threading.Timer(self.delay, self._sign_in_mock)
        self._timer.daemon = True
        self._timer.start()

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._ready.wait(timeout)

    def _sign_in_mock(self) -> None:
        self._set_state(AuthSession(access_token=self.MOCK_TOKEN, user=self.MOCK_USER))
        self._ready.set()

    def sign_in_with_otp(self, email: str) -> None:
        # nothing to send in demo mode; reloading brings the mock user back
        self._reload()

    def verify_otp(self, email: str, code: str) -> None:
        self._reload()

    def sign_out(self) -> None:
        self.stop()
        self._set_state(None)
        self._reload()


def build_auth_provider(
    client: Optional[Client],
    session_file: pathlib.Path,
    mock_delay: float = 0.5,
) -> AuthProvider:
    if client is None:
        logger.warning("Supabase not configured. Using Mock Auth.")
        return MockAuthProvider(delay=mock_delay)
    return SupabaseAuthProvider(client, session_file)
