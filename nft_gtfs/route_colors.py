"""Pre-assigned route colors keyed by numeric route short name, plus the
agency-wide default color.

Colors come from the agency's printed schedules. Every route kept from
the feed must have an entry; a miss means the table is out of date.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from nft_gtfs.config import NIAGARA_FALLS_TRANSIT, AgencyConfig
from nft_gtfs.errors import UnknownRouteColorError

logger = logging.getLogger(__name__)

ROUTE_COLORS: Final[Mapping[int, str]] = MappingProxyType(
    {
        101: "F57215",
        102: "2E3192",
        103: "EC008C",
        104: "19B5F1",
        105: "ED1C24",
        106: "BAA202",
        107: "A05843",
        108: "008940",
        109: "66E530",
        110: "4372C2",
        111: "F24D3E",
        112: "9E50AE",
        113: "724A36",
        114: "B30E8E",
        203: "EC008C",
        204: "19B5F1",
        205: "ED1C24",
        206: "BAA202",
        209: "66C530",
        210: "4372C2",
        211: "F24D3E",
        213: "724A36",
        214: "B30E8E",
    }
)


def agency_color(agency: AgencyConfig = NIAGARA_FALLS_TRANSIT) -> str:
    """Return the agency-wide color written to the agency record."""
    return agency.color


def _parse_short_name(short_name: int | str) -> int | None:
    if isinstance(short_name, int):
        return short_name
    stripped = short_name.strip()
    if stripped.isascii() and stripped.isdigit():
        return int(stripped)
    return None


def lookup_route_color(short_name: int | str) -> str | None:
    """Return the color for a route short name, or None if not in the table."""
    rsn = _parse_short_name(short_name)
    if rsn is None:
        return None
    return ROUTE_COLORS.get(rsn)


def route_color(short_name: int | str) -> str:
    """Return the 6-hex-digit color of a route.

    Args:
        short_name: Route short name, as an int or an all-digit string.

    Returns:
        Color string without a leading '#'.

    Raises:
        UnknownRouteColorError: If the route has no pre-assigned color.
    """
    color = lookup_route_color(short_name)
    if color is None:
        logger.error("Unexpected route color for %r", short_name)
        raise UnknownRouteColorError(short_name)
    return color
