# aim_ai/ui/course_player.py
from __future__ import annotations

import asyncio
import logging

import flet as ft

from aim_ai.models import Module, ModuleKind
from aim_ai.modules.catalog import next_module, previous_module
from aim_ai.ui.course_details import KIND_EMOJI, course_not_found
from aim_ai.ui.tutor_panel import TutorPanel
from aim_ai.ui.widgets import (
    BG, BORDER, INDIGO, INDIGO_LIGHT, MUTED, SLATE,
    PadAll, PadSymmetric, card, link_button, progress_bar,
)

logger = logging.getLogger(__name__)


class CoursePlayerView:
    """
    Lesson player for one course: module sidebar, content, prev/complete/next,
    and the AI tutor overlay following the active module.
    """

    def __init__(self, app, course_id: str):
        self.app = app
        self.course = app.ctx.catalog.get_course(course_id)
        self.active: Module | None = self.course.first_module if self.course else None
        self.sidebar_open = True
        self.marking = False
        self.completed: set = set()
        self.tutor = TutorPanel(app, self.context_label) if self.course else None

    @property
    def context_label(self) -> str:
        if self.active is not None:
            return self.active.title
        return self.course.title if self.course else ""

    # ============================================
    # ACTIONS
    # ============================================
    def select(self, module: Module | None):
        if module is None:
            return
        self.active = module
        self.app.render()

    def go_previous(self, e):
        self.select(previous_module(self.course, self.active.id if self.active else None))

    def go_next(self, e):
        self.select(next_module(self.course, self.active.id if self.active else None))

    def toggle_sidebar(self, e):
        self.sidebar_open = not self.sidebar_open
        self.app.render()

    async def load_completed(self):
        user = self.app.ctx.auth.user
        if not user or not self.course:
            return
        loop = asyncio.get_event_loop()
        self.completed = await loop.run_in_executor(
            None, self.app.ctx.progress.get_completed_module_ids, user.id, self.course.id
        )
        self.app.render()

    async def mark_complete(self, e):
        user = self.app.ctx.auth.user
        if not user or not self.active or self.marking:
            return
        self.marking = True
        self.app.render()

        loop = asyncio.get_event_loop()
        ok = await loop.run_in_executor(
            None, self.app.ctx.progress.mark_complete, user.id, self.course.id, self.active.id
        )
        if ok:
            self.completed.add(self.active.id)
            await self.app.refresh_progress()
        else:
            logger.warning("Progress not saved for %s/%s", self.course.id, self.active.id)
            self.app.page.open(ft.SnackBar(ft.Text("Could not save your progress. Try again later.")))

        # keep the spinner visible briefly even when saving locally
        await asyncio.sleep(0.5)
        self.marking = False
        self.app.render()

    # ============================================
    # UI BUILD
    # ============================================
    def module_item(self, idx: int, module: Module):
        is_active = self.active is not None and self.active.id == module.id
        done = module.id in self.completed
        return ft.Container(
            content=ft.Row(
                [
                    ft.Text("✅" if done else KIND_EMOJI.get(module.kind.value, "📄"), size=14),
                    ft.Column(
                        [
                            ft.Text(f"{idx + 1}. {module.title}", size=13, color=SLATE,
                                    weight=ft.FontWeight.W_600 if is_active else ft.FontWeight.W_400),
                            ft.Text(f"{module.duration_minutes} min", size=11, color=MUTED),
                        ],
                        spacing=2,
                        expand=True,
                    ),
                ],
                spacing=10,
            ),
            bgcolor=INDIGO_LIGHT if is_active else "transparent",
            border=ft.border.only(left=ft.BorderSide(4, INDIGO if is_active else "transparent")),
            padding=PadAll(12),
            on_click=lambda e, m=module: self.select(m),
        )

    def sidebar(self):
        pct = self.app.progress.get(self.course.id, 0)
        return ft.Container(
            content=ft.Column(
                [
                    link_button("← Back to Dashboard", lambda e: self.app.navigate("/")),
                    ft.Text(self.course.title, size=16, weight=ft.FontWeight.BOLD, color=SLATE),
                    progress_bar(pct),
                    ft.Divider(color=BORDER),
                    ft.Column(
                        [self.module_item(i, m) for i, m in enumerate(self.course.modules)],
                        spacing=0,
                        scroll=ft.ScrollMode.AUTO,
                        expand=True,
                    ),
                ],
                spacing=10,
            ),
            width=300,
            bgcolor=BG,
            padding=PadAll(16),
            border=ft.border.only(right=ft.BorderSide(1, BORDER)),
            visible=self.sidebar_open,
        )

    def module_content(self, module: Module):
        if module.kind == ModuleKind.VIDEO:
            return ft.Container(
                content=ft.Stack(
                    [
                        ft.Image(src=module.content, width=800, height=450, opacity=0.6),
                        ft.Container(
                            content=ft.Column(
                                [ft.Text("▶", size=48, color="white"), ft.Text("Mock Player", color="white")],
                                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                            ),
                            alignment=ft.Alignment(0, 0),
                            width=800,
                            height=450,
                        ),
                    ]
                ),
                bgcolor="black",
                border_radius=16,
                width=800,
                height=450,
            )
        if module.kind == ModuleKind.QUIZ:
            return card(
                ft.Column(
                    [
                        ft.Text("Quiz", size=12, color=INDIGO, weight=ft.FontWeight.W_600),
                        ft.Text(module.content, size=18, color=SLATE),
                        ft.Text("Stuck? Ask the AI tutor to quiz you on this module.", size=12, color=MUTED),
                    ],
                    spacing=10,
                ),
                padding=28,
            )
        return card(ft.Markdown(module.content, selectable=True), padding=28)

    def action_bar(self):
        course, active_id = self.course, self.active.id
        has_prev = previous_module(course, active_id) is not None
        has_next = next_module(course, active_id) is not None
        done = active_id in self.completed

        if self.marking:
            complete_label = "Saving..."
        elif done:
            complete_label = "✓ Completed"
        else:
            complete_label = "Mark as Complete"

        return ft.Row(
            [
                ft.OutlinedButton("← Previous", on_click=self.go_previous, disabled=not has_prev),
                ft.ElevatedButton(complete_label, on_click=self.mark_complete, disabled=self.marking,
                                  bgcolor="#10b981", color="white"),
                ft.OutlinedButton("Next Module →", on_click=self.go_next, disabled=not has_next),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

    def build(self):
        if self.course is None:
            return course_not_found(self.app)

        self.tutor.set_context(self.context_label)

        main = ft.Column(
            [
                ft.Container(
                    content=ft.Row(
                        [
                            ft.TextButton("☰", on_click=self.toggle_sidebar),
                            ft.Text(self.active.title if self.active else "", size=16,
                                    weight=ft.FontWeight.W_600, color=SLATE),
                        ],
                    ),
                    padding=PadSymmetric(horizontal=16, vertical=8),
                    border=ft.border.only(bottom=ft.BorderSide(1, BORDER)),
                ),
                ft.Container(
                    content=ft.Column(
                        [self.module_content(self.active), self.action_bar()] if self.active
                        else [ft.Text("This course has no modules yet.", color=MUTED)],
                        spacing=24,
                        scroll=ft.ScrollMode.AUTO,
                    ),
                    padding=PadAll(32),
                    expand=True,
                ),
            ],
            spacing=0,
            expand=True,
        )

        return ft.Stack(
            [
                ft.Row([self.sidebar(), main], spacing=0, expand=True,
                       vertical_alignment=ft.CrossAxisAlignment.STRETCH),
                self.tutor.root,
            ],
            expand=True,
        )
