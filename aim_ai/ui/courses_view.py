# aim_ai/ui/courses_view.py
from __future__ import annotations

import flet as ft

from aim_ai.modules.catalog import filter_courses
from aim_ai.ui import routes
from aim_ai.ui.widgets import (
    BORDER, INDIGO, INDIGO_LIGHT, MUTED, SLATE,
    PadSymmetric, card, level_chip, link_button, page_title, progress_bar,
)

FILTERS = ("all", "active", "completed")


class CoursesView:
    """Course catalog with title search and an all/active/completed filter."""

    def __init__(self, app):
        self.app = app
        self.filter = "all"
        self.search = ""
        self.grid = ft.Column(spacing=12)

        self.search_field = ft.TextField(
            hint_text="Search courses...",
            prefix_text="🔍 ",
            border_radius=12,
            bgcolor="white",
            border_color=BORDER,
            focused_border_color=INDIGO,
            width=320,
            on_change=self.on_search,
        )
        self.filter_row = ft.Row(spacing=4)

    def on_search(self, e):
        self.search = self.search_field.value or ""
        self.refresh()

    def set_filter(self, value: str):
        self.filter = value
        self.refresh()

    def visible_courses(self):
        return filter_courses(self.app.ctx.catalog, self.app.progress, self.filter, self.search)

    def course_card(self, course):
        pct = self.app.progress.get(course.id, 0)
        if pct:
            footer = ft.Row(
                [
                    ft.Container(progress_bar(pct), expand=True),
                    link_button("Continue", lambda e, cid=course.id: self.app.navigate(routes.course_player_path(cid)),
                                primary=True),
                ],
            )
        else:
            footer = ft.Row(
                [
                    ft.Text(f"{course.total_students:,} students", size=12, color=MUTED),
                    ft.Container(expand=True),
                    link_button("Details →", lambda e, cid=course.id: self.app.navigate(routes.course_details_path(cid))),
                ],
            )

        return card(
            ft.Column(
                [
                    ft.Row([level_chip(course), ft.Text(f"{len(course.modules)} modules", size=12, color=MUTED)]),
                    ft.Text(course.title, size=16, weight=ft.FontWeight.W_600, color=SLATE),
                    ft.Text(course.description, size=13, color=MUTED),
                    ft.Text(f"by {course.instructor}", size=12, color=MUTED, italic=True),
                    footer,
                ],
                spacing=8,
            ),
        )

    def refresh(self, update: bool = True):
        self.filter_row.controls = [
            ft.Container(
                content=ft.Text(f.capitalize(), size=13,
                                color=INDIGO if f == self.filter else MUTED,
                                weight=ft.FontWeight.W_600 if f == self.filter else ft.FontWeight.W_400),
                bgcolor=INDIGO_LIGHT if f == self.filter else "transparent",
                border_radius=8,
                padding=PadSymmetric(horizontal=12, vertical=6),
                on_click=lambda e, value=f: self.set_filter(value),
            )
            for f in FILTERS
        ]

        courses = self.visible_courses()
        if courses:
            self.grid.controls = [self.course_card(c) for c in courses]
        else:
            self.grid.controls = [
                card(ft.Text("No courses found matching your criteria.", color=MUTED)),
            ]
        if update:
            self.app.page.update()

    def build(self):
        self.refresh(update=False)
        return ft.Column(
            [
                page_title("My Courses", "Browse and continue your learning journey."),
                ft.Row([self.search_field, ft.Container(expand=True), self.filter_row]),
                self.grid,
            ],
            spacing=20,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )
