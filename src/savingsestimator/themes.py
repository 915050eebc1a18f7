"""Colour themes shared by the chart and the Tk front end."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Theme:
    name: str
    background: str
    surface: str
    foreground: str
    muted: str
    accent: str
    contributed: str
    warning: str
    confirmation: str
    grid: str


THEMES: Dict[str, Theme] = {
    "dark": Theme(
        name="dark",
        background="#0a0a0a",
        surface="#18181b",
        foreground="#fafafa",
        muted="#a1a1aa",
        accent="#4ade80",
        contributed="#71717a",
        warning="#fbbf24",
        confirmation="#4ade80",
        grid="#27272a",
    ),
    "light": Theme(
        name="light",
        background="#ffffff",
        surface="#f4f4f5",
        foreground="#18181b",
        muted="#52525b",
        accent="#2563eb",
        contributed="#a1a1aa",
        warning="#b45309",
        confirmation="#15803d",
        grid="#e4e4e7",
    ),
}

DEFAULT_THEME = "dark"


def get_theme(name: str) -> Theme:
    try:
        return THEMES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown theme '{name}' (expected {'/'.join(sorted(THEMES))})"
        ) from None


__all__ = ["DEFAULT_THEME", "THEMES", "Theme", "get_theme"]
