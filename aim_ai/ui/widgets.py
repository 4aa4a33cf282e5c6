# aim_ai/ui/widgets.py
"""Small flet helpers shared by all screens."""

from __future__ import annotations

import flet as ft

from aim_ai.models import Course

# ==========================================================
# Padding/Margin compatibility (avoid deprecated helpers)
# ==========================================================
def PadAll(v: int):
    return ft.Padding.all(v) if hasattr(ft, "Padding") else ft.padding.all(v)

def PadOnly(left=None, top=None, right=None, bottom=None):
    if hasattr(ft, "Padding"):
        return ft.Padding(left=left, top=top, right=right, bottom=bottom)
    return ft.padding.only(left=left, top=top, right=right, bottom=bottom)

def PadSymmetric(horizontal: int = 0, vertical: int = 0):
    if hasattr(ft, "Padding"):
        return ft.Padding.symmetric(horizontal=horizontal, vertical=vertical)
    return ft.padding.symmetric(horizontal=horizontal, vertical=vertical)

def MarOnly(left=None, top=None, right=None, bottom=None):
    if hasattr(ft, "Margin"):
        return ft.Margin(left=left, top=top, right=right, bottom=bottom)
    return ft.margin.only(left=left, top=top, right=right, bottom=bottom)


INDIGO = "#4f46e5"
INDIGO_LIGHT = "#eef2ff"
SLATE = "#0f172a"
MUTED = "#64748b"
BORDER = "#e2e8f0"
BG = "#f8fafc"

LEVEL_COLORS = {
    "Beginner": "#10b981",
    "Intermediate": "#f59e0b",
    "Advanced": "#ef4444",
}


# ============================================
# Small UI helpers (emoji icons)
# ============================================
def emoji_badge(emoji: str, bg: str, size: int = 18, box: int = 36):
    return ft.Container(
        content=ft.Text(emoji, size=size, color="white"),
        width=box,
        height=box,
        border_radius=box // 2,
        bgcolor=bg,
        alignment=ft.Alignment(0, 0),
    )


def emoji_button(emoji: str, tooltip: str, on_click, bg: str, fg: str = "white", box: int = 40):
    return ft.Container(
        content=ft.Text(emoji, size=18, color=fg),
        width=box,
        height=box,
        border_radius=box // 2,
        bgcolor=bg,
        alignment=ft.Alignment(0, 0),
        on_click=on_click,
        tooltip=tooltip,
    )


def card(content, padding: int = 20, expand=None):
    return ft.Container(
        content=content,
        bgcolor="white",
        border_radius=16,
        padding=PadAll(padding),
        border=ft.border.all(1, BORDER),
        expand=expand,
    )


def level_chip(course: Course):
    level = course.level.value
    return ft.Container(
        content=ft.Text(level, size=11, color="white", weight=ft.FontWeight.W_600),
        bgcolor=LEVEL_COLORS.get(level, MUTED),
        border_radius=8,
        padding=PadSymmetric(horizontal=8, vertical=3),
    )


def progress_bar(percentage: int, width: int | None = None):
    return ft.Column(
        [
            ft.ProgressBar(value=percentage / 100, color=INDIGO, bgcolor=BORDER, width=width),
            ft.Text(f"{percentage}% complete", size=11, color=MUTED),
        ],
        spacing=4,
    )


def link_button(label: str, on_click, primary: bool = False):
    if primary:
        return ft.ElevatedButton(label, on_click=on_click, bgcolor=INDIGO, color="white")
    return ft.TextButton(label, on_click=on_click)


def spinner():
    return ft.Container(
        content=ft.ProgressRing(color=INDIGO),
        alignment=ft.Alignment(0, 0),
        expand=True,
    )


def page_title(title: str, subtitle: str = ""):
    controls = [ft.Text(title, size=26, weight=ft.FontWeight.BOLD, color=SLATE)]
    if subtitle:
        controls.append(ft.Text(subtitle, size=14, color=MUTED))
    return ft.Column(controls, spacing=4)
