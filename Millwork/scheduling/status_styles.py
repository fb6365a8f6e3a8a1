"""Styling helpers for the date columns a job status targets."""

from __future__ import annotations

from .pipeline import Stage

TARGET_TEXT_COLOR = "#ffffff"


def active_columns(stage: Stage | None) -> list[str]:
    """Date columns emphasised while a job sits in ``stage``."""
    if stage is None:
        return []
    return [target.column for target in stage.target_columns]


def column_style(stage: Stage | None, column: str) -> dict[str, str]:
    """Return inline colours for ``column`` or an empty dict when not targeted."""
    if stage is None:
        return {}
    for target in stage.target_columns:
        if target.column == column:
            return {"backgroundColor": target.color, "color": TARGET_TEXT_COLOR}
    return {}


def column_styles(stage: Stage | None) -> dict[str, dict[str, str]]:
    return {column: column_style(stage, column) for column in active_columns(stage)}
