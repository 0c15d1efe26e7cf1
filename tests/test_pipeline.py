"""Tests for per-field normalization pipelines (nft_gtfs/pipeline.py).

Covers end-to-end label normalization for stop names, trip headsigns
and route long names, the fixed rule order of every pipeline, and
idempotence of the full pipelines on feed-shaped values.
"""

from __future__ import annotations

import itertools
from typing import Final


import pytest

from nft_gtfs.config import FieldKind, RawField
from nft_gtfs.pipeline import (
    PIPELINES,
    clean_route_long_name,
    clean_stop_name,
    clean_trip_headsign,
    normalize,
    normalize_field,
    pipeline_for,
)

_STOP_NAME_CASES: Final[list[tuple[str, str]]] = [
    ("main st & 1st ave", "Main Street & 1st Avenue"),
    ("MC LEOD RD AT DRUMMOND RD (EB)", "McLeod Road @ Drummond Road (EB)"),
    ("LUNDY'S LN&MONTROSE RD NF", "Lundy's Lane & Montrose Road NF"),
    ("PORTAGE RD SOUTHBOUND @ FIRST AVE", "Portage Road SB @ 1st Avenue"),
    ("  victoria ave/clifton hill  ", "Victoria Avenue/Clifton Hill"),
    ("Stanley Ave. No. 5", "Stanley Avenue #5"),
    ("Portage-at-Main", "Portage-At-Main"),
    ("ST. PAUL AVE", "St. Paul Avenue"),
    ("", ""),
]

_TRIP_HEADSIGN_CASES: Final[list[tuple[str, str]]] = [
    ("101 Main St -> Terminal", "Main Street Bus Terminal"),
    ("104 DUNN ST - DOWNTOWN via VICTORIA AVE", "Downtown"),
    ("113 - TOWN SQAURE", "Town Square"),
    ("Garner Rd and Thorold Stone Rd", "Garner Road & Thorold Stone Road"),
    ("Main >> Falls View", "Falls View"),
    ("Morrison/Dorchester", "Morrison / Dorchester"),
    ("205 EASTBOUND to CHIPPAWA", "Chippawa"),
    ("Main - 3 Points", "3 Points"),
    ("104 - 5 Points", "5 Points"),
    ("Downtown to 7 Points", "7 Points"),
    ("Main >> 3 Points", "3 Points"),
    ("Garner-and-Lundy", "Garner-And-Lundy"),
    ("Main - 213 Dunn St", "Dunn Street"),
    ("", ""),
]

_ROUTE_LONG_NAME_CASES: Final[list[tuple[str, str]]] = [
    ("Route 101 Main Street", "Main Street"),
    ("RTE 104 Dunn", "Dunn"),
    ("Lundy's Lane", "Lundy's Lane"),
]


# ---------------------------------------------------------------------------
# End-to-end labels
# ---------------------------------------------------------------------------


class TestStopNames:
    """Stop name pipeline output."""

    @pytest.mark.parametrize(("raw", "expected"), _STOP_NAME_CASES)
    def test_stop_name(self, raw: str, expected: str) -> None:
        assert clean_stop_name(raw) == expected

    def test_matches_generic_entry_point(self) -> None:
        raw = "main st & 1st ave"
        assert normalize(FieldKind.STOP_NAME, raw) == clean_stop_name(raw)


class TestTripHeadsigns:
    """Trip headsign pipeline output."""

    @pytest.mark.parametrize(("raw", "expected"), _TRIP_HEADSIGN_CASES)
    def test_trip_headsign(self, raw: str, expected: str) -> None:
        assert clean_trip_headsign(raw) == expected


class TestRouteLongNames:
    """Route long name pipeline only strips the route prefix."""

    @pytest.mark.parametrize(("raw", "expected"), _ROUTE_LONG_NAME_CASES)
    def test_route_long_name(self, raw: str, expected: str) -> None:
        assert clean_route_long_name(raw) == expected

    def test_street_types_not_expanded(self) -> None:
        assert clean_route_long_name("Route 101 Dunn St") == "Dunn St"


class TestStopCodes:
    """Stop codes have no label pipeline."""

    def test_stop_code_unchanged(self) -> None:
        assert normalize(FieldKind.STOP_CODE, "12A") == "12A"

    def test_stop_code_pipeline_is_empty(self) -> None:
        assert pipeline_for(FieldKind.STOP_CODE).rules == ()


# ---------------------------------------------------------------------------
# Pipeline structure
# ---------------------------------------------------------------------------


class TestPipelineOrder:
    """Rule order per field kind is fixed."""

    def test_every_field_kind_has_a_pipeline(self) -> None:
        assert set(PIPELINES) == set(FieldKind)
        for kind, pipeline in PIPELINES.items():
            assert pipeline.kind is kind

    def test_stop_name_order(self) -> None:
        assert pipeline_for(FieldKind.STOP_NAME).step_names == (
            "word_casing",
            "mc_case",
            "and_no_space",
            "clean_at",
            "clean_bounds",
            "clean_street_types",
            "clean_numbers",
            "clean_label",
        )

    def test_trip_headsign_order(self) -> None:
        assert pipeline_for(FieldKind.TRIP_HEADSIGN).step_names == (
            "and_no_space",
            "ends_with_arrow_terminal",
            "word_casing",
            "starts_with_route_number",
            "starts_with_dash_prefix",
            "square_misspelling",
            "keep_to_and_remove_via",
            "starts_with_arrows",
            "clean_and",
            "clean_bounds",
            "clean_street_types",
            "clean_slashes",
            "clean_numbers",
            "clean_label",
        )

    def test_route_long_name_order(self) -> None:
        assert pipeline_for(FieldKind.ROUTE_LONG_NAME).step_names == (
            "starts_with_route_prefix",
        )

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            PIPELINES[FieldKind.STOP_NAME] = PIPELINES[FieldKind.TRIP_HEADSIGN]  # type: ignore[index]


class TestTrace:
    """Step-by-step trace of a pipeline run."""

    def test_trace_records_every_step(self) -> None:
        pipeline = pipeline_for(FieldKind.TRIP_HEADSIGN)
        steps = pipeline.trace("101 Main St -> Terminal")

        assert [name for name, _ in steps] == list(pipeline.step_names)
        assert steps[1] == ("ends_with_arrow_terminal", "101 Main St Bus Terminal")
        assert steps[3] == ("starts_with_route_number", "Main St Bus Terminal")
        assert steps[-1][1] == "Main Street Bus Terminal"

    def test_trace_matches_call(self) -> None:
        pipeline = pipeline_for(FieldKind.STOP_NAME)
        raw = "MC LEOD RD AT DRUMMOND RD (EB)"
        assert pipeline.trace(raw)[-1][1] == pipeline(raw)


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------


_IDEMPOTENCE_CASES: Final[list[tuple[FieldKind, str]]] = [
    *((FieldKind.STOP_NAME, raw) for raw, _ in _STOP_NAME_CASES),
    *((FieldKind.TRIP_HEADSIGN, raw) for raw, _ in _TRIP_HEADSIGN_CASES),
    *((FieldKind.ROUTE_LONG_NAME, raw) for raw, _ in _ROUTE_LONG_NAME_CASES),
    (FieldKind.ROUTE_LONG_NAME, "Route 1 Route 2 Main"),
    (FieldKind.STOP_CODE, "NF_A12_45IN"),
]


@pytest.mark.parametrize(("kind", "raw"), _IDEMPOTENCE_CASES)
def test_normalize_is_idempotent(kind: FieldKind, raw: str) -> None:
    once = normalize(kind, raw)
    assert normalize(kind, once) == once


# Labels built from a leading part, a structural separator and a
# destination. A step late in the pipeline must not leave text that an
# earlier step rewrites on the next pass.
_LEADS: Final[tuple[str, ...]] = ("", "104 ", "104 204 ", "- ")
_SEPARATORS: Final[tuple[str, ...]] = (
    " - ",
    " -",
    "- ",
    " to ",
    " >> ",
    "-at-",
    "-and-",
    " at ",
    " and ",
    " & ",
    "&  ",
    " / ",
)
_DESTINATIONS: Final[tuple[str, ...]] = (
    "3 Points",
    "7 Points",
    "213 Main St",
    "Main St",
    "St. Paul Ave",
    "Falls View",
)


@pytest.mark.parametrize("kind", [FieldKind.TRIP_HEADSIGN, FieldKind.STOP_NAME])
def test_structural_separators_are_idempotent(kind: FieldKind) -> None:
    for lead, separator, destination in itertools.product(
        _LEADS, _SEPARATORS, _DESTINATIONS
    ):
        raw = f"{lead}Downtown{separator}{destination}"
        once = normalize(kind, raw)
        assert normalize(kind, once) == once, f"{raw!r} -> {once!r}"


def test_normalize_field_uses_field_kind() -> None:
    field = RawField(kind=FieldKind.TRIP_HEADSIGN, value="113 - TOWN SQAURE")
    assert normalize_field(field) == "Town Square"
