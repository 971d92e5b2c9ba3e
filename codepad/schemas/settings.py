"""Settings Schemas — user settings as exchanged with the settings store."""

from pydantic import BaseModel, Field

from codepad.core.domain_types import (
    DEFAULT_FONT_SIZE, MAX_FONT_SIZE, MIN_FONT_SIZE, Theme,
)
from codepad.core.user_settings import UserSettings


class SettingsPayload(BaseModel):
    font_size: int = Field(DEFAULT_FONT_SIZE, ge=MIN_FONT_SIZE, le=MAX_FONT_SIZE)
    theme: Theme = Theme.DARK
    vim_mode: bool = False

    @classmethod
    def from_domain(cls, settings: UserSettings) -> "SettingsPayload":
        return cls(
            font_size=settings.font_size,
            theme=settings.theme,
            vim_mode=settings.vim_mode,
        )
