# aim_ai/ui/course_details.py
from __future__ import annotations

import flet as ft

from aim_ai.ui import routes
from aim_ai.ui.widgets import (
    INDIGO, MUTED, SLATE,
    PadAll, card, emoji_badge, level_chip, link_button,
)

KIND_EMOJI = {"video": "▶️", "text": "📄", "quiz": "❓"}


def course_not_found(app):
    return ft.Container(
        content=ft.Column(
            [
                ft.Text("Course not found", size=18, color=MUTED),
                link_button("← Back to Dashboard", lambda e: app.navigate("/")),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        alignment=ft.Alignment(0, 0),
        padding=PadAll(40),
        expand=True,
    )


def curriculum_row(index: int, module):
    # only the first module is open before enrolling
    unlocked = index == 0
    return ft.Container(
        content=ft.Row(
            [
                ft.Text(str(index + 1), color=MUTED, width=24),
                ft.Column(
                    [
                        ft.Text(module.title, weight=ft.FontWeight.W_600, color=SLATE),
                        ft.Text(f"{module.kind.value} • {module.duration_minutes} min", size=12, color=MUTED),
                    ],
                    spacing=2,
                    expand=True,
                ),
                ft.Text("▶" if unlocked else "🔒", color=INDIGO if unlocked else MUTED),
            ],
        ),
        padding=PadAll(12),
        border=ft.border.only(bottom=ft.BorderSide(1, "#f1f5f9")),
    )


def build_course_details(app, course_id: str):
    course = app.ctx.catalog.get_course(course_id)
    if course is None:
        return course_not_found(app)

    hero = ft.Container(
        content=ft.Column(
            [
                link_button("← Back to Dashboard", lambda e: app.navigate("/")),
                ft.Row([level_chip(course)]),
                ft.Text(course.title, size=30, weight=ft.FontWeight.BOLD, color="white"),
                ft.Text(course.description, size=15, color="#e0e7ff"),
                ft.Row(
                    [
                        ft.Text(f"👥 {course.total_students:,} students", color="#e0e7ff", size=13),
                        ft.Text(f"⏱️ {course.total_minutes} min", color="#e0e7ff", size=13),
                        ft.Text(f"📚 {len(course.modules)} modules", color="#e0e7ff", size=13),
                    ],
                    spacing=18,
                ),
            ],
            spacing=10,
        ),
        padding=PadAll(28),
        border_radius=20,
        gradient=ft.LinearGradient(
            colors=["#312e81", "#4f46e5", "#7c3aed"],
            begin=ft.Alignment(-1, 0),
            end=ft.Alignment(1, 0),
        ),
    )

    curriculum = card(
        ft.Column(
            [ft.Text("Course Content", size=18, weight=ft.FontWeight.W_600, color=SLATE)]
            + [curriculum_row(i, m) for i, m in enumerate(course.modules)],
            spacing=0,
        ),
        padding=16,
    )

    instructor = card(
        ft.Row(
            [
                emoji_badge("🧑‍🏫", INDIGO, box=48),
                ft.Column(
                    [
                        ft.Text("Your Instructor", size=12, color=MUTED),
                        ft.Text(course.instructor, size=16, weight=ft.FontWeight.W_600, color=SLATE),
                    ],
                    spacing=2,
                ),
            ],
            spacing=14,
        ),
    )

    enroll = card(
        ft.Column(
            [
                ft.Text("Ready to start?", size=16, weight=ft.FontWeight.W_600, color=SLATE),
                ft.Text("Jump into the first module now. Your AI tutor comes along.", size=13, color=MUTED),
                link_button(
                    "Start Learning Now",
                    lambda e: app.navigate(routes.course_player_path(course.id)),
                    primary=True,
                ),
            ],
            spacing=10,
        ),
    )

    return ft.Column(
        [
            hero,
            ft.Row(
                [
                    ft.Column([curriculum, instructor], spacing=16, expand=2),
                    ft.Column([enroll], expand=1),
                ],
                spacing=20,
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
        ],
        spacing=20,
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
