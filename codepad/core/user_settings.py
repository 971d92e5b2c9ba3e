"""User Settings — editor preferences persisted by the settings store.

Invariants:
    - font_size is bounded MIN_FONT_SIZE..MAX_FONT_SIZE
    - Settings are frozen; changes produce a new value
"""

from dataclasses import dataclass

from codepad.core.domain_types import (
    DEFAULT_FONT_SIZE, MAX_FONT_SIZE, MIN_FONT_SIZE, Theme,
)


@dataclass(frozen=True)
class UserSettings:
    font_size: int = DEFAULT_FONT_SIZE
    theme: Theme = Theme.DARK
    vim_mode: bool = False

    def __post_init__(self):
        bounded = min(MAX_FONT_SIZE, max(MIN_FONT_SIZE, self.font_size))
        object.__setattr__(self, "font_size", bounded)
