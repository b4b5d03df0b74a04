"""
Domain models for notificationparser.

This module contains the notification settings record persisted per
application, plus the manifest section names that feed it.

These models are pure data structures with no I/O dependencies.
They are serialized to/from SQLite via the infrastructure layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Toggle(str, Enum):
    """Values a notification setting is expected to hold."""

    ON = "on"
    OFF = "off"


class Section(str, Enum):
    """Manifest `section` attribute values and the record field each one sets."""

    NOTIFICATION = "notification"
    SOUNDS = "sounds"
    CONTENTS = "contents"
    BADGE = "badge"

    @classmethod
    def from_string(cls, value: str | None) -> Section | None:
        """Parse a section attribute; unknown sections yield None."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Applied to any section the manifest leaves out
DEFAULTS: dict[Section, str] = {
    Section.NOTIFICATION: Toggle.ON.value,
    Section.SOUNDS: Toggle.ON.value,
    Section.CONTENTS: Toggle.OFF.value,
    Section.BADGE: Toggle.ON.value,
}


class SettingsRecord(BaseModel):
    """
    Notification settings of one installed application.

    Attributes:
        app_id: Application identifier (primary key)
        notification: Whether notifications are enabled ("on"/"off")
        sounds: Whether notification sounds are enabled
        contents: Whether the contents preview is shown
        badge: Whether the badge is shown
        package_id: Owning package identifier

    The table's reserved1/reserved2 columns are not modelled; they are
    always written as NULL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_id: str = Field(..., min_length=1, description="Application identifier")
    notification: str = Field(DEFAULTS[Section.NOTIFICATION], description="Notifications enabled")
    sounds: str = Field(DEFAULTS[Section.SOUNDS], description="Sounds enabled")
    contents: str = Field(DEFAULTS[Section.CONTENTS], description="Contents preview enabled")
    badge: str = Field(DEFAULTS[Section.BADGE], description="Badge enabled")
    package_id: str = Field(..., min_length=1, description="Owning package identifier")

    @field_validator("notification", "sounds", "contents", "badge", mode="before")
    @classmethod
    def apply_default(cls, v: Optional[str], info) -> str:
        """Replace an unset toggle with its documented default."""
        if v is None:
            return DEFAULTS[Section(info.field_name)]
        return v

    def as_row(self) -> tuple:
        """Bound values for the non-reserved columns, in table order."""
        return (
            self.app_id,
            self.notification,
            self.sounds,
            self.contents,
            self.badge,
            self.package_id,
        )
