"""Shared pytest fixtures for normalization tests.

Builds small GTFS-shaped tables in memory mirroring the raw Niagara
Falls Transit feed: all-caps stop names, prefixed stop ids, placeholder
"0" stop codes and route-number headsigns.
"""

from __future__ import annotations

import pandas as pd
import pytest

# ---------------------------------------------------------------------------
# GTFS tables
# ---------------------------------------------------------------------------


@pytest.fixture()
def routes_frame() -> pd.DataFrame:
    """routes.txt rows for two colored routes."""
    return pd.DataFrame(
        {
            "route_id": ["NF_101", "NF_209"],
            "agency_id": ["AllNRT_1", "AllNRT_1"],
            "route_short_name": ["101", "209"],
            "route_long_name": ["Route 101 Dunn St", "Rte 209 Thorold Stone"],
        }
    )


@pytest.fixture()
def trips_frame() -> pd.DataFrame:
    """trips.txt rows with route-number and arrow headsigns."""
    return pd.DataFrame(
        {
            "trip_id": ["t1", "t2", "t3"],
            "trip_headsign": [
                "101 Main St -> Terminal",
                "113 - TOWN SQAURE",
                None,
            ],
        }
    )


@pytest.fixture()
def stops_frame() -> pd.DataFrame:
    """stops.txt rows covering plain, suffixed, placeholder and exception codes."""
    return pd.DataFrame(
        {
            "stop_id": ["NF_A12_1234", "NF_A12_12A", "NF_A12_45IN", "Por&Burn"],
            "stop_code": ["1234", "12A", "0", ""],
            "stop_name": [
                "main st & 1st ave",
                "MC LEOD RD AT DRUMMOND RD (EB)",
                "LUNDY'S LN&MONTROSE RD NF",
                None,
            ],
        }
    )


@pytest.fixture()
def bad_stops_frame() -> pd.DataFrame:
    """stops.txt rows where the second stop code has an unknown suffix."""
    return pd.DataFrame(
        {
            "stop_id": ["1", "2"],
            "stop_code": ["1234", "99xyz"],
            "stop_name": ["Main St", "Portage Rd"],
        }
    )
