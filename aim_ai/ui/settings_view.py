# aim_ai/ui/settings_view.py
from __future__ import annotations

import flet as ft

from aim_ai.ui.widgets import (
    INDIGO, MUTED, SLATE,
    PadSymmetric, card, emoji_badge, page_title,
)

NOTIFICATION_OPTIONS = [
    "Email me about new courses",
    "Notify me when I complete a module",
    "Weekly progress summary",
]


class SettingsView:
    """Profile card + notification toggles (kept for this session only)."""

    def __init__(self, app):
        self.app = app
        self.notifications = {label: idx != 2 for idx, label in enumerate(NOTIFICATION_OPTIONS)}

    def on_toggle(self, label: str, value: bool):
        self.notifications[label] = bool(value)

    def build(self):
        user = self.app.ctx.auth.user
        email = user.email if user and user.email else ""
        initial = email[:1].upper() or "?"

        profile_rows = [
            ft.Text(user.display_name if user else "Student", size=18, weight=ft.FontWeight.W_600, color=SLATE),
            ft.Text(email, size=13, color=MUTED),
        ]
        if self.app.ctx.is_mock:
            profile_rows.append(
                ft.Container(
                    content=ft.Text("Demo User", size=11, color="#92400e"),
                    bgcolor="#fef3c7",
                    border_radius=6,
                    padding=PadSymmetric(horizontal=8, vertical=2),
                )
            )

        profile = card(
            ft.Row(
                [
                    emoji_badge(initial, INDIGO, size=24, box=64),
                    ft.Column(profile_rows, spacing=4),
                ],
                spacing=18,
            ),
        )

        account = card(
            ft.Column(
                [
                    ft.Text("Account", size=16, weight=ft.FontWeight.W_600, color=SLATE),
                    ft.TextField(label="Email address", value=email, read_only=True, border_radius=10),
                    ft.TextField(label="User ID", value=user.id if user else "", read_only=True, border_radius=10),
                    ft.Text(
                        "Sign-in is passwordless: we e-mail you a magic link each time.",
                        size=12,
                        color=MUTED,
                    ),
                ],
                spacing=12,
            ),
        )

        notifications = card(
            ft.Column(
                [ft.Text("Notifications", size=16, weight=ft.FontWeight.W_600, color=SLATE)]
                + [
                    ft.Switch(
                        label=label,
                        value=self.notifications[label],
                        active_color=INDIGO,
                        on_change=lambda e, lbl=label: self.on_toggle(lbl, e.control.value),
                    )
                    for label in NOTIFICATION_OPTIONS
                ],
                spacing=10,
            ),
        )

        return ft.Column(
            [
                page_title("Settings", "Manage your account and preferences."),
                profile,
                account,
                notifications,
            ],
            spacing=20,
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )
