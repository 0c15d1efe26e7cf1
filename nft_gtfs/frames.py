"""Column-wise normalization of GTFS tables held in pandas DataFrames.

The surrounding feed loader reads routes.txt, trips.txt and stops.txt
into DataFrames (all columns as strings). These helpers apply the
per-record normalization to every row and return a copy with the
normalized columns appended; the input frame is never modified.

A fatal data error on any row aborts the whole batch.
"""

from __future__ import annotations

import logging
from typing import Final

import pandas as pd

from nft_gtfs.records import (
    RawRoute,
    RawStop,
    RawTrip,
    normalize_route,
    normalize_stop,
    normalize_trip,
)

logger = logging.getLogger(__name__)

_ROUTE_COLUMNS: Final[tuple[str, ...]] = ("route_short_name", "route_long_name")
_TRIP_COLUMNS: Final[tuple[str, ...]] = ("trip_headsign",)
_STOP_COLUMNS: Final[tuple[str, ...]] = ("stop_id", "stop_code", "stop_name")


def _require_columns(frame: pd.DataFrame, columns: tuple[str, ...], table: str) -> None:
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise KeyError(f"{table} is missing required columns: {', '.join(missing)}")


def _as_text(series: pd.Series) -> pd.Series:
    """Return the column as stripped strings with nulls as ""."""
    return series.fillna("").astype(str).str.strip()


def normalize_routes_frame(routes: pd.DataFrame) -> pd.DataFrame:
    """Append ``route_long_name_clean`` and ``route_color`` columns.

    Args:
        routes: routes.txt rows; other columns are passed through.

    Returns:
        Copy of ``routes`` with the normalized columns.

    Raises:
        KeyError: If a required column is missing.
        UnknownRouteColorError: If any route has no pre-assigned color.
    """
    _require_columns(routes, _ROUTE_COLUMNS, "routes")
    normalized = [
        normalize_route(RawRoute(short_name=rsn, long_name=rln))
        for rsn, rln in zip(
            _as_text(routes["route_short_name"]),
            _as_text(routes["route_long_name"]),
            strict=True,
        )
    ]
    out = routes.copy()
    out["route_long_name_clean"] = [r.long_name for r in normalized]
    out["route_color"] = [r.color for r in normalized]
    logger.info("Normalized %d routes", len(out))
    return out


def normalize_trips_frame(trips: pd.DataFrame) -> pd.DataFrame:
    """Append a ``trip_headsign_clean`` column."""
    _require_columns(trips, _TRIP_COLUMNS, "trips")
    out = trips.copy()
    out["trip_headsign_clean"] = [
        normalize_trip(RawTrip(headsign=h)).headsign
        for h in _as_text(trips["trip_headsign"])
    ]
    logger.info("Normalized %d trip headsigns", len(out))
    return out


def normalize_stops_frame(stops: pd.DataFrame) -> pd.DataFrame:
    """Append ``stop_int_id``, ``stop_code_clean`` and ``stop_name_clean`` columns.

    Args:
        stops: stops.txt rows read with string dtypes.

    Returns:
        Copy of ``stops`` with the normalized columns.

    Raises:
        KeyError: If a required column is missing.
        UnknownStopCodeError: If any stop id cannot be derived.
    """
    _require_columns(stops, _STOP_COLUMNS, "stops")
    normalized = [
        normalize_stop(RawStop(code=code, id=sid, name=name))
        for code, sid, name in zip(
            _as_text(stops["stop_code"]),
            _as_text(stops["stop_id"]),
            _as_text(stops["stop_name"]),
            strict=True,
        )
    ]
    out = stops.copy()
    out["stop_int_id"] = pd.Series([s.stop_id for s in normalized], index=out.index, dtype="int64")
    out["stop_code_clean"] = [s.code for s in normalized]
    out["stop_name_clean"] = [s.name for s in normalized]

    duplicated = out["stop_int_id"].duplicated(keep=False)
    if duplicated.any():
        logger.warning(
            "Stop id collision for %d rows: %s",
            int(duplicated.sum()),
            sorted(set(out.loc[duplicated, "stop_int_id"].tolist())),
        )
    logger.info("Normalized %d stops", len(out))
    return out
