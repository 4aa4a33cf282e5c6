# aim_ai/ui/dashboard.py
from __future__ import annotations

import flet as ft

from aim_ai.modules.catalog import active_courses, chart_label, completed_courses
from aim_ai.ui import routes
from aim_ai.ui.widgets import (
    BORDER, INDIGO, INDIGO_LIGHT, MUTED, SLATE,
    PadAll, card, emoji_badge, level_chip, link_button, page_title, progress_bar,
)

CHART_HEIGHT = 160


def stat_tile(emoji: str, label: str, value: str, bg: str):
    return card(
        ft.Row(
            [
                emoji_badge(emoji, bg, size=18, box=44),
                ft.Column(
                    [
                        ft.Text(label, size=12, color=MUTED),
                        ft.Text(value, size=22, weight=ft.FontWeight.BOLD, color=SLATE),
                    ],
                    spacing=2,
                ),
            ],
            spacing=14,
        ),
        expand=True,
    )


def progress_chart(app):
    """One bar per course, height proportional to its percentage."""
    bars = []
    for course in app.ctx.catalog:
        pct = app.progress.get(course.id, 0)
        bars.append(
            ft.Column(
                [
                    ft.Text(f"{pct}%", size=11, color=MUTED),
                    ft.Container(
                        width=36,
                        height=max(4, CHART_HEIGHT * pct // 100),
                        bgcolor=INDIGO if pct else BORDER,
                        border_radius=6,
                        tooltip=course.title,
                    ),
                    ft.Text(chart_label(course), size=10, color=MUTED, width=70,
                            text_align=ft.TextAlign.CENTER),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                alignment=ft.MainAxisAlignment.END,
                spacing=6,
            )
        )
    return card(
        ft.Column(
            [
                ft.Text("Learning Progress", size=16, weight=ft.FontWeight.W_600, color=SLATE),
                ft.Container(
                    content=ft.Row(bars, alignment=ft.MainAxisAlignment.SPACE_AROUND,
                                   vertical_alignment=ft.CrossAxisAlignment.END),
                    height=CHART_HEIGHT + 60,
                ),
            ],
            spacing=12,
        ),
    )


def active_course_row(app, course):
    pct = app.progress.get(course.id, 0)
    return card(
        ft.Row(
            [
                ft.Image(src=course.thumbnail, width=96, height=54, border_radius=8) if course.thumbnail
                else emoji_badge("📘", INDIGO, box=54),
                ft.Column(
                    [
                        ft.Text(course.title, weight=ft.FontWeight.W_600, color=SLATE),
                        ft.Text(course.instructor, size=12, color=MUTED),
                        progress_bar(pct, width=260),
                    ],
                    spacing=4,
                    expand=True,
                ),
                link_button("▶ Resume", lambda e, cid=course.id: app.navigate(routes.course_player_path(cid)),
                            primary=True),
            ],
            spacing=16,
        ),
        padding=14,
    )


def other_course_row(app, course):
    return ft.Container(
        content=ft.Row(
            [
                ft.Column(
                    [
                        ft.Text(course.title, weight=ft.FontWeight.W_600, color=SLATE),
                        ft.Row([level_chip(course), ft.Text(f"{len(course.modules)} modules", size=12, color=MUTED)]),
                    ],
                    spacing=4,
                    expand=True,
                ),
                link_button("Details →", lambda e, cid=course.id: app.navigate(routes.course_details_path(cid))),
            ],
        ),
        padding=PadAll(12),
        border_radius=12,
        bgcolor=INDIGO_LIGHT,
    )


def build_dashboard(app):
    user = app.ctx.auth.user
    courses = app.ctx.catalog.courses
    active = active_courses(courses, app.progress)
    completed = completed_courses(courses, app.progress)

    stats = ft.Row(
        [
            stat_tile("⏱️", "Minutes Learned", str(app.minutes_learned), "#3b82f6"),
            stat_tile("🏆", "Completed", str(len(completed)), "#10b981"),
            stat_tile("📈", "In Progress", str(len(active)), "#f97316"),
        ],
        spacing=16,
    )

    if active:
        active_section = [active_course_row(app, c) for c in active]
    else:
        active_section = [
            card(ft.Text("No courses in progress. Pick one below to get started!", color=MUTED)),
        ]

    others = [other_course_row(app, c) for c in courses if c not in active]

    return ft.Column(
        [
            page_title(
                f"Welcome back, {user.first_name if user else 'Student'}! 👋",
                "Here's what's happening with your learning today.",
            ),
            stats,
            ft.Row(
                [
                    ft.Column(
                        [
                            ft.Text("Continue Learning", size=18, weight=ft.FontWeight.W_600, color=SLATE),
                            *active_section,
                            ft.Text("Explore Courses", size=18, weight=ft.FontWeight.W_600, color=SLATE),
                            *others,
                        ],
                        spacing=12,
                        expand=2,
                    ),
                    ft.Column([progress_chart(app)], expand=1),
                ],
                spacing=20,
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
        ],
        spacing=24,
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
