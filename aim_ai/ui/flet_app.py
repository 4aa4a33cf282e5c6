# aim_ai/ui/flet_app.py
"""
Aim AI - flet shell.

Owns the page, the current route and the per-user progress snapshot.
The AppContext (config, catalog, auth, progress, tutor) is passed in; the
app subscribes to auth changes when mounted and unsubscribes on close.

Render gate:
    auth loading      -> spinner
    no user           -> sign-in view
    progress loading  -> spinner
    otherwise         -> layout + routed view
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import flet as ft

from aim_ai.bootstrap import AppContext, build_context
from aim_ai.config import AppConfig
from aim_ai.modules.catalog import minutes_learned
from aim_ai.ui import routes
from aim_ai.ui.auth_view import AuthView
from aim_ai.ui.course_details import build_course_details
from aim_ai.ui.course_player import CoursePlayerView
from aim_ai.ui.courses_view import CoursesView
from aim_ai.ui.dashboard import build_dashboard
from aim_ai.ui.settings_view import SettingsView
from aim_ai.ui.widgets import (
    BG, BORDER, INDIGO, INDIGO_LIGHT, MUTED, SLATE,
    PadAll, PadOnly, PadSymmetric, emoji_badge, spinner,
)

logger = logging.getLogger(__name__)

NAV_ITEMS = [
    ("/", "📊", "Dashboard", routes.DASHBOARD),
    ("/courses", "📚", "My Courses", routes.COURSES),
    ("/settings", "⚙️", "Settings", routes.SETTINGS),
]


class AimAIApp:
    def __init__(self, page: ft.Page, ctx: AppContext):
        self.page = page
        self.ctx = ctx

        self.route = routes.Route(routes.DASHBOARD)
        self.progress: dict[str, int] = {}
        self.minutes_learned = 0
        self.progress_loading = True
        self._progress_user: Optional[str] = None

        self.auth_view: Optional[AuthView] = None
        self.courses_view: Optional[CoursesView] = None
        self.settings_view: Optional[SettingsView] = None
        self.player: Optional[CoursePlayerView] = None

        # Page setup
        self.page.title = "Aim AI"
        self.page.theme_mode = ft.ThemeMode.LIGHT
        self.page.padding = 0
        self.page.spacing = 0
        self.page.bgcolor = BG
        self.page.on_disconnect = self.dispose

        self._unsubscribe = ctx.auth.subscribe(self.on_auth_change)
        if ctx.is_mock:
            ctx.auth.set_reload(self.reload)

        self.render()
        ctx.auth.start()

    # ============================================
    # STATE
    # ============================================
    def on_auth_change(self, auth):
        user = auth.user
        if auth.loading or user is None:
            self._progress_user = None
            self.progress = {}
            self.progress_loading = True
            self.render()
            return

        if user.id != self._progress_user:
            self._progress_user = user.id
            self.progress_loading = True
            self.render()
            self.page.run_task(self.refresh_progress)

    async def refresh_progress(self):
        user = self.ctx.auth.user
        if user is None:
            return
        loop = asyncio.get_event_loop()
        progress, pairs = await loop.run_in_executor(None, self.ctx.progress.get_progress_snapshot, user.id)

        self.progress = progress
        self.minutes_learned = minutes_learned(self.ctx.catalog, pairs)
        self.progress_loading = False
        self.render()

    def navigate(self, path: str):
        self.route = routes.resolve_route(path)
        if self.route.name == routes.COURSE_PLAYER:
            if self.player is None or self.player.course is None or self.player.course.id != self.route.course_id:
                self.player = CoursePlayerView(self, self.route.course_id)
                self.page.run_task(self.player.load_completed)
        self.render()

    def reload(self):
        """Start over from "no user", the way a browser reload would."""
        logger.info("Reloading app state")
        self.route = routes.Route(routes.DASHBOARD)
        self.progress = {}
        self.minutes_learned = 0
        self.progress_loading = True
        self._progress_user = None
        self.auth_view = None
        self.courses_view = None
        self.settings_view = None
        self.player = None
        self.ctx.auth.start()

    async def sign_out(self, e):
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self.ctx.auth.sign_out)

    def dispose(self, e=None):
        self._unsubscribe()
        self.ctx.auth.stop()

    # ============================================
    # UI BUILD
    # ============================================
    def render(self):
        auth = self.ctx.auth
        self.page.controls.clear()

        if auth.loading:
            self.page.add(spinner())
        elif auth.user is None:
            if self.auth_view is None:
                self.auth_view = AuthView(self)
            self.page.add(self.auth_view.build())
        elif self.progress_loading:
            self.page.add(spinner())
        elif self.route.uses_sidebar:
            self.page.add(self.sidebar_layout(self.current_view()))
        else:
            self.page.add(self.header_layout(self.current_view()))

        self.page.update()

    def current_view(self):
        name = self.route.name
        if name == routes.DASHBOARD:
            return build_dashboard(self)
        if name == routes.COURSES:
            if self.courses_view is None:
                self.courses_view = CoursesView(self)
            return self.courses_view.build()
        if name == routes.SETTINGS:
            if self.settings_view is None:
                self.settings_view = SettingsView(self)
            return self.settings_view.build()
        if name == routes.COURSE_DETAILS:
            return build_course_details(self, self.route.course_id)
        if name == routes.COURSE_PLAYER and self.player is not None:
            return self.player.build()
        return ft.Container(
            content=ft.Text("Page under construction", color=MUTED),
            alignment=ft.Alignment(0, 0),
            padding=PadAll(32),
            expand=True,
        )

    def brand(self):
        return ft.Container(
            content=ft.Row(
                [
                    emoji_badge("🎓", INDIGO, size=16, box=34),
                    ft.Text("Aim AI", size=20, weight=ft.FontWeight.BOLD, color=SLATE),
                ],
                spacing=8,
            ),
            on_click=lambda e: self.navigate("/"),
        )

    def user_chip(self):
        user = self.ctx.auth.user
        return ft.Row(
            [
                ft.Text(user.display_name if user else "Student", size=13, color=SLATE, weight=ft.FontWeight.W_500),
                ft.Container(
                    content=ft.Image(src=user.avatar_url, width=32, height=32) if user else None,
                    width=32,
                    height=32,
                    border_radius=16,
                    bgcolor=INDIGO_LIGHT,
                ),
            ],
            spacing=10,
        )

    def nav_item(self, path: str, emoji: str, label: str, route_name: str):
        active = self.route.name == route_name
        return ft.Container(
            content=ft.Row(
                [
                    ft.Text(emoji, size=16),
                    ft.Text(label, size=14, color=INDIGO if active else MUTED,
                            weight=ft.FontWeight.W_600 if active else ft.FontWeight.W_400),
                ],
                spacing=12,
            ),
            bgcolor=INDIGO_LIGHT if active else "transparent",
            border_radius=10,
            padding=PadSymmetric(horizontal=12, vertical=10),
            on_click=lambda e, p=path: self.navigate(p),
        )

    def sidebar_layout(self, content):
        footer = []
        if self.ctx.is_mock:
            footer.append(
                ft.Container(
                    content=ft.Text("Using Mock Data", size=11, color="#b45309"),
                    bgcolor="#fffbeb",
                    border=ft.border.all(1, "#fef3c7"),
                    border_radius=6,
                    padding=PadSymmetric(horizontal=10, vertical=6),
                )
            )
        footer.append(
            ft.Container(
                content=ft.Row([ft.Text("🚪", size=16), ft.Text("Sign Out", color=MUTED)], spacing=12),
                padding=PadAll(10),
                border_radius=10,
                on_click=self.sign_out,
            )
        )

        sidebar = ft.Container(
            content=ft.Column(
                [
                    self.brand(),
                    ft.Container(height=16),
                    *[self.nav_item(*item) for item in NAV_ITEMS],
                    ft.Container(expand=True),
                    ft.Divider(color=BORDER),
                    *footer,
                ],
                spacing=4,
            ),
            width=240,
            bgcolor="white",
            padding=PadAll(16),
            border=ft.border.only(right=ft.BorderSide(1, BORDER)),
        )

        header = ft.Container(
            content=ft.Row(
                [
                    ft.Text("Student Portal", size=15, weight=ft.FontWeight.W_600, color=SLATE),
                    ft.Container(expand=True),
                    self.user_chip(),
                ],
            ),
            height=64,
            bgcolor="white",
            padding=PadSymmetric(horizontal=24),
            border=ft.border.only(bottom=ft.BorderSide(1, BORDER)),
        )

        return ft.Row(
            [
                sidebar,
                ft.Column(
                    [header, ft.Container(content=content, padding=PadOnly(left=32, top=24, right=32, bottom=24),
                                          expand=True)],
                    spacing=0,
                    expand=True,
                ),
            ],
            spacing=0,
            expand=True,
        )

    def header_layout(self, content):
        header = ft.Container(
            content=ft.Row([self.brand(), ft.Container(expand=True), self.user_chip()]),
            height=64,
            bgcolor="white",
            padding=PadSymmetric(horizontal=24),
            border=ft.border.only(bottom=ft.BorderSide(1, BORDER)),
        )
        return ft.Column([header, ft.Container(content=content, expand=True)], spacing=0, expand=True)


def make_target(config: AppConfig):
    """flet entry point; every page (browser tab) gets its own AppContext."""
    def main(page: ft.Page):
        AimAIApp(page, build_context(config))
    return main
