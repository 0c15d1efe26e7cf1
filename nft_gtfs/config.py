"""Agency configuration registry for Niagara Falls Transit feed normalization.

Defines the field kinds handled by the normalization pipelines and the
typed, immutable configuration for the agency: display name, default
color, capitalization ignore-list and the internal stop-id prefix
pattern. Configuration is built once at import time and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class FieldKind(Enum):
    """Classification of a raw feed field selecting its normalization."""

    ROUTE_LONG_NAME = "route_long_name"
    TRIP_HEADSIGN = "trip_headsign"
    STOP_NAME = "stop_name"
    STOP_CODE = "stop_code"


class BoundDirection(Enum):
    """Canonical travel-direction tokens written into labels."""

    EAST = "EB"
    WEST = "WB"
    NORTH = "NB"
    SOUTH = "SB"


@dataclass(frozen=True, slots=True)
class RawField:
    """Immutable raw input string tagged with its field kind."""

    kind: FieldKind
    value: str


@dataclass(frozen=True, slots=True)
class AgencyConfig:
    """Immutable configuration for a single transit agency.

    Attributes:
        name: Human-readable agency name.
        color: Default agency color as 6 hex digits (no leading '#').
        ignore_words: Acronyms kept fully upper-case during word casing.
        stop_id_prefix: Regex source of the agency-internal prefix
            stripped from raw stop codes and stop ids.
    """

    name: str
    color: str
    ignore_words: tuple[str, ...]
    stop_id_prefix: str

    @property
    def ignore_words_upper(self) -> frozenset[str]:
        """Return the ignore-list as an upper-case set for lookups."""
        return frozenset(w.upper() for w in self.ignore_words)


# Green from the PDF service schedule; corporate blue is 233E76
_AGENCY_COLOR_GREEN: Final[str] = "B2DA18"

# Area and direction acronyms: Niagara Falls, Chippawa Blvd, Lundy's Lane,
# and the four intercardinal directions
_IGNORE_WORDS: Final[tuple[str, ...]] = (
    "NF",
    "CB",
    "LL",
    "NW",
    "SW",
    "NE",
    "SE",
)

# Region-wide feed prefixes such as "NF_A12_", "NFT_BC034_NFTSTOP" or "NF_D20STO"
_STOP_ID_PREFIX: Final[str] = r"^(((nf|nft)_[a-z]{1,3}\d{2,4}(_)?)+([a-z]{3}(stop))?(stop|sto)?)"


NIAGARA_FALLS_TRANSIT: Final[AgencyConfig] = AgencyConfig(
    name="Niagara Falls Transit",
    color=_AGENCY_COLOR_GREEN,
    ignore_words=_IGNORE_WORDS,
    stop_id_prefix=_STOP_ID_PREFIX,
)

AGENCIES: Final[tuple[AgencyConfig, ...]] = (NIAGARA_FALLS_TRANSIT,)


def get_agency_by_name(name: str) -> AgencyConfig:
    """Look up an agency configuration by its display name.

    Args:
        name: Agency name matching AgencyConfig.name.

    Returns:
        Matching AgencyConfig instance.

    Raises:
        KeyError: If no agency matches the given name.
    """
    for agency in AGENCIES:
        if agency.name == name:
            return agency
    valid_names = ", ".join(a.name for a in AGENCIES)
    raise KeyError(f"Unknown agency '{name}'. Valid names: {valid_names}")
