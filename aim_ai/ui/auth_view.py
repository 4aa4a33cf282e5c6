# aim_ai/ui/auth_view.py
from __future__ import annotations

import asyncio

import flet as ft

from aim_ai.errors import AuthError
from aim_ai.ui.widgets import (
    BG, BORDER, INDIGO, MUTED, SLATE,
    PadAll, card, emoji_badge,
)


class AuthView:
    """
    Passwordless sign-in: e-mail -> magic link / one-time code -> session.
    In demo mode the form just reloads into the mock user.
    """

    def __init__(self, app):
        self.app = app
        self.mode = "signin"
        self.is_sent = False
        self.loading = False

        self.email_field = ft.TextField(
            label="Email address",
            hint_text="you@example.com",
            keyboard_type=ft.KeyboardType.EMAIL,
            border_radius=12,
            bgcolor="white",
            border_color=BORDER,
            focused_border_color=INDIGO,
            on_submit=self.handle_auth,
        )
        self.code_field = ft.TextField(
            label="6-digit code from the e-mail",
            border_radius=12,
            bgcolor="white",
            border_color=BORDER,
            focused_border_color=INDIGO,
            on_submit=self.handle_verify,
        )
        self.error_text = ft.Text("", color="red", size=12)

    # ============================================
    # ACTIONS
    # ============================================
    def toggle_mode(self, e):
        self.mode = "signup" if self.mode == "signin" else "signin"
        self.app.render()

    def try_another_email(self, e):
        self.is_sent = False
        self.code_field.value = ""
        self.error_text.value = ""
        self.app.render()

    async def handle_auth(self, e):
        email = (self.email_field.value or "").strip()
        if not email or self.loading:
            return

        self.loading = True
        self.error_text.value = ""
        self.app.render()

        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, self.app.ctx.auth.sign_in_with_otp, email)
            self.is_sent = not self.app.ctx.is_mock
        except AuthError as ex:
            self.error_text.value = str(ex)[:160] or "An error occurred"
        finally:
            self.loading = False
        self.app.render()

    async def handle_verify(self, e):
        email = (self.email_field.value or "").strip()
        code = (self.code_field.value or "").strip()
        if not code or self.loading:
            return

        self.loading = True
        self.error_text.value = ""
        self.app.render()

        loop = asyncio.get_event_loop()
        try:
            await loop.run_in_executor(None, self.app.ctx.auth.verify_otp, email, code)
        except AuthError as ex:
            self.error_text.value = str(ex)[:160]
        finally:
            self.loading = False
        self.app.render()

    # ============================================
    # UI BUILD
    # ============================================
    def _sent_state(self):
        return ft.Column(
            [
                ft.Text("📬", size=40),
                ft.Text("Check your email", size=18, weight=ft.FontWeight.W_600, color=SLATE),
                ft.Text(
                    f"We sent a magic link to {self.email_field.value}.\n"
                    "Click the link, or enter the code from the e-mail below.",
                    size=13,
                    color=MUTED,
                    text_align=ft.TextAlign.CENTER,
                ),
                self.code_field,
                ft.ElevatedButton(
                    "Verifying..." if self.loading else "Verify code",
                    on_click=self.handle_verify,
                    disabled=self.loading,
                    bgcolor=INDIGO,
                    color="white",
                ),
                self.error_text,
                ft.TextButton("Try another email", on_click=self.try_another_email),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=12,
        )

    def _form_state(self):
        if self.loading:
            label = "Sending..."
        elif self.mode == "signin":
            label = "Sign in with Magic Link"
        else:
            label = "Create Account"

        controls = [
            self.email_field,
            ft.ElevatedButton(label, on_click=self.handle_auth, disabled=self.loading,
                              bgcolor=INDIGO, color="white", width=320),
            self.error_text,
        ]
        if self.app.ctx.is_mock:
            controls.append(
                ft.Container(
                    content=ft.Text(
                        "Supabase is not configured. Continue to sign in as the demo user.",
                        size=12,
                        color="#92400e",
                    ),
                    bgcolor="#fef3c7",
                    border_radius=8,
                    padding=PadAll(10),
                )
            )
        return ft.Column(controls, spacing=12)

    def build(self):
        heading = "Welcome back" if self.mode == "signin" else "Start learning today"
        switch_prompt = "Don't have an account? " if self.mode == "signin" else "Already have an account? "
        switch_label = "Sign up for free" if self.mode == "signin" else "Sign in"

        return ft.Container(
            content=ft.Column(
                [
                    emoji_badge("🎓", INDIGO, size=24, box=56),
                    ft.Text(heading, size=26, weight=ft.FontWeight.BOLD, color=SLATE),
                    ft.Row(
                        [
                            ft.Text(switch_prompt, size=13, color=MUTED),
                            ft.TextButton(switch_label, on_click=self.toggle_mode),
                        ],
                        alignment=ft.MainAxisAlignment.CENTER,
                        spacing=0,
                    ),
                    card(self._sent_state() if self.is_sent else self._form_state(), padding=28),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=14,
                width=420,
            ),
            alignment=ft.Alignment(0, 0),
            bgcolor=BG,
            expand=True,
        )
