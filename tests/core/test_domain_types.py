"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
"""

from codepad.core.domain_types import PaneKind, Ratio, RevisionId, Theme, Token


def test_identity_types_wrap_str():
    assert RevisionId("abcd1234") == "abcd1234"
    assert Token("tok") == "tok"


def test_ratio_wraps_float():
    assert Ratio(0.25) == 0.25


def test_pane_kind_is_closed_set():
    assert set(PaneKind) == {PaneKind.PACKAGES, PaneKind.SETTINGS}


def test_enums_serialize_to_str():
    assert PaneKind.PACKAGES.value == "packages"
    assert Theme.DARK == "dark"
