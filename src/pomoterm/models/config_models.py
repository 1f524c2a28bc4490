"""Configuration models.

Durations are stored in seconds; the settings menu and the CLI work in
minutes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, PositiveInt

ThemeName = Literal["default", "dracula", "solarized", "nord"]
THEMES: tuple[ThemeName, ...] = ("default", "dracula", "solarized", "nord")


class TimerSettings(BaseModel):
    """Timer durations and alert preferences."""

    model_config = {"validate_assignment": True}

    work_duration: PositiveInt = Field(default=25 * 60, description="Seconds")
    short_break_duration: PositiveInt = Field(default=5 * 60, description="Seconds")
    long_break_duration: PositiveInt = Field(default=15 * 60, description="Seconds")
    long_break_interval: PositiveInt = Field(
        default=4, description="Work sessions before a long break"
    )
    theme: ThemeName = Field(default="default")
    desktop_notifications: bool = Field(default=True)
    sound: bool = Field(default=True)
    auto_cycle: bool = Field(
        default=True, description="Start the next Work phase when a break ends"
    )


class UIConfig(BaseModel):
    """UI configuration."""

    tick_interval: float = Field(default=0.25, gt=0, le=1.0)


class AppConfig(BaseModel):
    """Main pomoterm configuration."""

    timer: TimerSettings = Field(default_factory=TimerSettings)
    ui: UIConfig = Field(default_factory=UIConfig)
