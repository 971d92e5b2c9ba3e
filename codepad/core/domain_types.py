"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RevisionId and Token wrap str, never pass bare strings in domain logic
    - Ratio values are bounded 0.0–1.0
    - All valid option sets encoded as Enums; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RevisionId = NewType("RevisionId", str)
Token = NewType("Token", str)


# ─── Value Types ─────────────────────────────────────────────────

Ratio = NewType("Ratio", float)   # 0.0–1.0


# ─── Enums ───────────────────────────────────────────────────────

class Theme(str, Enum):
    """Editor color theme."""
    LIGHT = "light"
    DARK = "dark"


class PaneKind(str, Enum):
    """Side-panel tools. Closed set, see core/action_pane.py."""
    PACKAGES = "packages"
    SETTINGS = "settings"


# ─── Constants ───────────────────────────────────────────────────

MIN_RATIO = 0.0
MAX_RATIO = 1.0
DEFAULT_FONT_SIZE = 14
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 32
