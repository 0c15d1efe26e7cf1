"""Tests for per-record normalization (nft_gtfs/records.py)."""

from __future__ import annotations

import dataclasses

import pytest

from nft_gtfs.errors import UnknownRouteColorError, UnknownStopCodeError
from nft_gtfs.records import (
    NormalizedRoute,
    NormalizedStop,
    NormalizedTrip,
    RawRoute,
    RawStop,
    RawTrip,
    normalize_route,
    normalize_stop,
    normalize_trip,
)


class TestNormalizeRoute:
    """Routes get a cleaned long name and their color."""

    def test_known_route(self) -> None:
        result = normalize_route(RawRoute(short_name="101", long_name="Route 101 Main St"))
        assert result == NormalizedRoute(short_name="101", long_name="Main St", color="F57215")

    def test_unknown_route_notes_record(self) -> None:
        route = RawRoute(short_name="999", long_name="Shuttle")
        with pytest.raises(UnknownRouteColorError) as exc_info:
            normalize_route(route)

        notes = getattr(exc_info.value, "__notes__", [])
        assert any(note.startswith("route:") and "Shuttle" in note for note in notes)


class TestNormalizeTrip:
    def test_headsign_cleaned(self) -> None:
        assert normalize_trip(RawTrip(headsign="113 - TOWN SQAURE")) == NormalizedTrip(
            headsign="Town Square"
        )


class TestNormalizeStop:
    """Stops get a numeric id, public code and cleaned name."""

    def test_placeholder_code_uses_stop_id(self) -> None:
        result = normalize_stop(
            RawStop(code="0", id="NF_A12_45IN", name="main st & 1st ave")
        )
        assert result == NormalizedStop(
            stop_id=5_000_045, code="", name="Main Street & 1st Avenue"
        )

    def test_plain_code(self) -> None:
        result = normalize_stop(RawStop(code="1234", id="NF_A12_1234", name="PORTAGE RD"))
        assert result.stop_id == 1234
        assert result.code == "1234"
        assert result.name == "Portage Road"

    def test_unknown_code_notes_record(self) -> None:
        stop = RawStop(code="99xyz", id="NF_A12_99xyz", name="Main St")
        with pytest.raises(UnknownStopCodeError) as exc_info:
            normalize_stop(stop)

        notes = getattr(exc_info.value, "__notes__", [])
        assert any(note.startswith("stop:") and "99xyz" in note for note in notes)

    def test_records_are_immutable(self) -> None:
        stop = RawStop(code="1", id="1", name="A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            stop.code = "2"  # type: ignore[misc]
