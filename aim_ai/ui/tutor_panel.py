# aim_ai/ui/tutor_panel.py
"""Floating AI tutor chat bound to whatever module is on screen."""

from __future__ import annotations

import asyncio

import flet as ft

from aim_ai.models import ChatMessage
from aim_ai.modules.tutor_chat import TutorConversation
from aim_ai.ui.widgets import (
    BORDER, INDIGO, MUTED, SLATE,
    PadAll, PadOnly, PadSymmetric, emoji_badge, emoji_button,
)


class TutorPanel:
    def __init__(self, app, context_label: str):
        self.app = app
        self.conversation = TutorConversation(app.ctx.tutor, context_label)
        self.is_open = False

        self.chat_list = ft.ListView(expand=True, spacing=8, padding=PadAll(12), auto_scroll=True)

        self.typing_indicator = ft.Container(
            content=ft.Row(
                [
                    emoji_badge("🤖", INDIGO, size=14, box=28),
                    ft.Text("Thinking...", color=INDIGO, italic=True, size=13),
                ],
                spacing=8,
            ),
            visible=False,
            padding=PadOnly(left=12, bottom=6),
        )

        self.msg_input = ft.TextField(
            hint_text="Ask about this topic...",
            border=ft.InputBorder.NONE,
            expand=True,
            text_size=14,
            on_submit=self.send_message,
        )

        self.window = ft.Container(
            content=ft.Column(
                [
                    self._header(),
                    self.chat_list,
                    self.typing_indicator,
                    ft.Container(
                        content=ft.Row(
                            [self.msg_input, emoji_button("📨", "Send", self.send_message, bg=INDIGO, box=40)],
                            spacing=6,
                        ),
                        border=ft.border.only(top=ft.BorderSide(1, BORDER)),
                        padding=PadOnly(left=12, top=6, right=6, bottom=6),
                    ),
                ],
                spacing=0,
            ),
            width=380,
            height=520,
            bgcolor="white",
            border_radius=18,
            border=ft.border.all(1, BORDER),
            shadow=ft.BoxShadow(blur_radius=24, color="#00000026", offset=ft.Offset(0, 6)),
            visible=False,
        )

        self.toggle = emoji_button("✨", "Ask Aim AI", self.toggle_open, bg=INDIGO, box=56)
        self.root = ft.Container(
            content=ft.Column(
                [self.window, self.toggle],
                horizontal_alignment=ft.CrossAxisAlignment.END,
                spacing=10,
                tight=True,
            ),
            right=24,
            bottom=24,
        )
        self._render_messages()

    def _header(self):
        return ft.Container(
            content=ft.Row(
                [
                    emoji_badge("🤖", "#ffffff33", size=16, box=34),
                    ft.Column(
                        [
                            ft.Text("Aim AI Tutor", color="white", weight=ft.FontWeight.BOLD),
                            ft.Text(
                                "Online • Gemini" if self.app.ctx.config.ai_configured else "Offline demo",
                                color="#ffffffcc",
                                size=11,
                            ),
                        ],
                        spacing=0,
                        expand=True,
                    ),
                    emoji_button("✖", "Close", self.toggle_open, bg="#ffffff22", box=30),
                ],
                spacing=10,
            ),
            padding=PadSymmetric(horizontal=14, vertical=10),
            border_radius=ft.border_radius.only(top_left=18, top_right=18),
            gradient=ft.LinearGradient(
                colors=["#4f46e5", "#7c3aed"],
                begin=ft.Alignment(-1, 0),
                end=ft.Alignment(1, 0),
            ),
        )

    # ============================================
    # MESSAGE BUBBLE
    # ============================================
    def create_bubble(self, msg: ChatMessage):
        is_user = msg.role == "user"
        body = [
            ft.Markdown(msg.text, selectable=True) if not is_user
            else ft.Text(msg.text, color="white", size=14, selectable=True),
        ]
        for link in msg.grounding_links:
            is_map = link.source == "map"
            body.append(
                ft.Container(
                    content=ft.Row(
                        [
                            ft.Text("📍" if is_map else "🌐", size=14),
                            ft.Column(
                                [
                                    ft.Text(link.title, size=12, color=SLATE, weight=ft.FontWeight.W_600,
                                            max_lines=1, overflow=ft.TextOverflow.ELLIPSIS),
                                    ft.Text("Open in Google Maps" if is_map else "Visit Website",
                                            size=10, color=MUTED),
                                ],
                                spacing=0,
                                expand=True,
                            ),
                        ],
                        spacing=8,
                    ),
                    bgcolor="#fee2e2" if is_map else "#dbeafe",
                    border_radius=10,
                    padding=PadAll(8),
                    url=link.uri,
                    tooltip=link.uri,
                )
            )
        body.append(ft.Text(msg.timestamp.strftime("%H:%M"), color="#cbd5e1" if is_user else MUTED, size=10))

        bubble = ft.Container(
            content=ft.Column(body, spacing=6),
            bgcolor=INDIGO if is_user else "#f8fafc",
            border_radius=16,
            padding=PadSymmetric(horizontal=12, vertical=10),
            border=None if is_user else ft.border.all(1, BORDER),
            width=280,
        )
        row = [ft.Container(expand=True), bubble] if is_user else [bubble, ft.Container(expand=True)]
        return ft.Row(row)

    def _render_messages(self):
        self.chat_list.controls = [self.create_bubble(m) for m in self.conversation.messages]

    # ============================================
    # ACTIONS
    # ============================================
    def set_context(self, context_label: str):
        if self.conversation.set_context(context_label):
            self.typing_indicator.visible = False
            self._render_messages()

    def toggle_open(self, e):
        self.is_open = not self.is_open
        self.window.visible = self.is_open
        self.toggle.visible = not self.is_open
        self.app.page.update()

    async def send_message(self, e):
        text = (self.msg_input.value or "").strip()
        user_msg = self.conversation.begin(text)
        if user_msg is None:
            return

        self.msg_input.value = ""
        self.chat_list.controls.append(self.create_bubble(user_msg))
        self.typing_indicator.visible = True
        self.app.page.update()

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self.conversation.complete, user_msg)

        self.typing_indicator.visible = False
        self._render_messages()
        self.app.page.update()
