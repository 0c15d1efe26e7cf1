"""Numeric stop id derivation from agency stop codes.

Stop codes in the regional feed are mostly plain numbers, but some carry
a suffix family ("12A", "45in", "7out", "3temp10") or are irregular
literals ("Por&Burn"). Each suffix family is re-encoded into its own
disjoint integer bucket so that ids stay unique and stable without a
persisted mapping table:

    digits only        -> digits
    exception literal  -> fixed id
    digits + suffix    -> bucket offset + first digit run

The bucket offsets are frozen: changing them renumbers previously
published stop ids.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from nft_gtfs.config import NIAGARA_FALLS_TRANSIT
from nft_gtfs.errors import UnknownStopCodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StopCodeBucket:
    """Integer range reserved for one stop code suffix family.

    Attributes:
        suffix: Lower-case suffix identifying the family.
        offset: Value added to the code's digits.
    """

    suffix: str
    offset: int


# Checked in order against the end of the lower-cased code
STOP_CODE_BUCKETS: Final[tuple[StopCodeBucket, ...]] = (
    StopCodeBucket("a", 100_000),
    StopCodeBucket("b", 200_000),
    StopCodeBucket("c", 300_000),
    StopCodeBucket("in", 5_000_000),
    StopCodeBucket("out", 5_100_000),
    StopCodeBucket("temp10", 6_100_000),
)

# Historical codes without a usable digit run
STOP_ID_EXCEPTIONS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "Por&Burn": 1_000_001,
        "Por&Mlnd": 1_000_002,
        "Temp": 6_200_000,
    }
)

_PLACEHOLDER_STOP_CODE: Final[str] = "0"

_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_STOP_ID_PREFIX: Final[re.Pattern[str]] = re.compile(
    NIAGARA_FALLS_TRANSIT.stop_id_prefix, re.IGNORECASE
)


def clean_stop_code(stop_code: str) -> str:
    """Return the public stop code, hiding the "0" placeholder."""
    if stop_code == _PLACEHOLDER_STOP_CODE:
        return ""
    return stop_code


def clean_stop_original_id(stop_id: str) -> str:
    """Strip the agency-internal prefix ("NF_A12_", "NFT_BC034_NFTSTOP", ...)."""
    return _STOP_ID_PREFIX.sub("", stop_id)


def _working_code(stop_code: str, fallback_raw_id: str) -> str:
    if not stop_code or stop_code == _PLACEHOLDER_STOP_CODE:
        stop_code = fallback_raw_id
    return clean_stop_original_id(stop_code)


def bucket_for(code: str) -> StopCodeBucket | None:
    """Return the bucket of the code's suffix family, or None if unknown."""
    code_lc = code.lower()
    for bucket in STOP_CODE_BUCKETS:
        if code_lc.endswith(bucket.suffix):
            return bucket
    return None


def lookup_stop_id(stop_code: str, fallback_raw_id: str = "") -> int | None:
    """Derive the numeric stop id, returning None when no rule applies.

    Args:
        stop_code: Raw GTFS stop_code (may be empty or "0").
        fallback_raw_id: Raw GTFS stop_id used when stop_code is unusable.

    Returns:
        The stop id, or None for codes without digits or with an
        unknown suffix.
    """
    code = _working_code(stop_code, fallback_raw_id)
    if _DIGITS.fullmatch(code):
        return int(code)
    if code in STOP_ID_EXCEPTIONS:
        return STOP_ID_EXCEPTIONS[code]
    match = _DIGITS.search(code)
    if match is None:
        return None
    bucket = bucket_for(code)
    if bucket is None:
        return None
    return bucket.offset + int(match.group())


def derive_stop_id(stop_code: str, fallback_raw_id: str = "") -> int:
    """Derive the numeric stop id or fail the run.

    Args:
        stop_code: Raw GTFS stop_code (may be empty or "0").
        fallback_raw_id: Raw GTFS stop_id used when stop_code is unusable.

    Returns:
        Stop id, unique across suffix families.

    Raises:
        UnknownStopCodeError: If the code has no digits and no exception
            entry, or ends with an unknown suffix.
    """
    stop_id = lookup_stop_id(stop_code, fallback_raw_id)
    if stop_id is not None:
        return stop_id

    code = _working_code(stop_code, fallback_raw_id)
    reason = "no digits" if _DIGITS.search(code) is None else "unknown suffix"
    raw_value = stop_code if stop_code and stop_code != _PLACEHOLDER_STOP_CODE else fallback_raw_id
    logger.error("Stop doesn't have an ID (%s): raw=%r code=%r", reason, raw_value, code)
    raise UnknownStopCodeError(raw_value, code, reason)
