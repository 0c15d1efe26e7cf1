"""Text transformation rules for feed labels.

A rule is a pure ``str -> str`` transformation: either a compiled regex
substitution or a named cleaning function. Rules never raise on string
input and are idempotent: applying a rule to its own output returns the
same string. Rules are combined into ordered pipelines in pipeline.py.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from nft_gtfs.config import BoundDirection

Transform = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class TextTransformRule:
    """A single named label transformation.

    Exactly one of ``pattern`` or ``function`` is set. Pattern rules
    substitute every match with ``replacement`` (a template string or a
    match callback); function rules delegate to ``function``.
    """

    name: str
    pattern: re.Pattern[str] | None = None
    replacement: str | Callable[[re.Match[str]], str] = ""
    function: Transform | None = None

    def __post_init__(self) -> None:
        if (self.pattern is None) == (self.function is None):
            msg = f"Rule '{self.name}' needs exactly one of pattern or function"
            raise ValueError(msg)

    def apply(self, text: str) -> str:
        """Return ``text`` transformed by this rule."""
        if self.pattern is not None:
            return self.pattern.sub(self.replacement, text)
        assert self.function is not None
        return self.function(text)

    def __call__(self, text: str) -> str:
        return self.apply(text)


def regex_rule(
    name: str,
    pattern: str,
    replacement: str | Callable[[re.Match[str]], str] = "",
    flags: int = re.IGNORECASE,
) -> TextTransformRule:
    """Compile ``pattern`` into a substitution rule (case-insensitive by default)."""
    return TextTransformRule(
        name=name,
        pattern=re.compile(pattern, flags),
        replacement=replacement,
    )


def function_rule(name: str, function: Transform) -> TextTransformRule:
    """Wrap a cleaning function as a rule."""
    return TextTransformRule(name=name, function=function)


# ---------------------------------------------------------------------------
# Word casing
# ---------------------------------------------------------------------------

# A word is a run of word characters, optionally joined by apostrophes
# so that "LUNDY'S" is cased as a single word.
_WORD: Final[re.Pattern[str]] = re.compile(r"\w+(?:['’]\w+)*")


def _case_word(match: re.Match[str], ignore_words: frozenset[str]) -> str:
    word = match.group()
    upper = word.upper()
    if upper in ignore_words:
        return upper
    # Mixed-case words are already cased by the agency (e.g. "McDonald")
    if word.isupper() or word.islower():
        return word[0].upper() + word[1:].lower()
    return word


def to_lower_upper_case_words(text: str, ignore_words: frozenset[str]) -> str:
    """Title-case all-upper and all-lower words, keeping ignore-list acronyms upper.

    Args:
        text: Raw label.
        ignore_words: Upper-case acronyms that always stay upper-case.

    Returns:
        Label with every single-case word capitalized.
    """
    return _WORD.sub(functools.partial(_case_word, ignore_words=ignore_words), text)


def word_casing_rule(ignore_words: frozenset[str]) -> TextTransformRule:
    """Build the word-casing rule for an agency ignore-list."""
    return function_rule(
        "word_casing",
        functools.partial(to_lower_upper_case_words, ignore_words=ignore_words),
    )


_MC_PREFIX: Final[re.Pattern[str]] = re.compile(r"\b(mc)\s?([a-z])", re.IGNORECASE)


def fix_mc_case(text: str) -> str:
    """Join and case "Mc" surnames: "Mc donald", "MCDONALD" -> "McDonald"."""
    return _MC_PREFIX.sub(lambda m: "Mc" + m.group(2).upper(), text)


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------

_BOUND_WORDS: Final[dict[BoundDirection, str]] = {
    BoundDirection.EAST: "east",
    BoundDirection.WEST: "west",
    BoundDirection.NORTH: "north",
    BoundDirection.SOUTH: "south",
}

_BOUNDS: Final[tuple[tuple[re.Pattern[str], str], ...]] = tuple(
    (
        re.compile(
            rf"\b(?:{word}\s?bound|{word[0]}/b|{word[0]}b)\b",
            re.IGNORECASE,
        ),
        direction.value,
    )
    for direction, word in _BOUND_WORDS.items()
)


def clean_bounds(text: str) -> str:
    """Replace "Eastbound", "east bound", "E/B" and "eb" forms with "EB" (etc.)."""
    for pattern, replacement in _BOUNDS:
        text = pattern.sub(replacement, text)
    return text


# ---------------------------------------------------------------------------
# Street types
# ---------------------------------------------------------------------------

# Most common abbreviations in this feed first
_STREET_TYPES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("Street", ("st", "str")),
    ("Avenue", ("ave", "av")),
    ("Road", ("rd",)),
    ("Drive", ("dr",)),
    ("Boulevard", ("blvd", "boul")),
    ("Crescent", ("cres", "cr")),
    ("Court", ("crt", "ct")),
    ("Lane", ("ln",)),
    ("Parkway", ("pkwy",)),
    ("Highway", ("hwy",)),
    ("Place", ("pl",)),
    ("Plaza", ("plz",)),
    ("Square", ("sq",)),
    ("Terrace", ("terr", "ter")),
    ("Trail", ("trl",)),
    ("Circle", ("cir",)),
    ("Centre", ("ctr",)),
    ("Heights", ("hts",)),
    ("Gardens", ("gdns",)),
)

# "St." before a capitalized name is Saint: "St. Paul Ave"
_NOT_SAINT: Final[str] = r"(?!\.\s*(?-i:[A-Z]))"

_STREET_TYPE_PATTERNS: Final[tuple[tuple[re.Pattern[str], str], ...]] = tuple(
    (
        re.compile(
            r"\b(?:"
            + "|".join(abbrevs)
            + r")\b"
            + (_NOT_SAINT if full == "Street" else "")
            + r"\.?",
            re.IGNORECASE,
        ),
        full,
    )
    for full, abbrevs in _STREET_TYPES
)


def clean_street_types(text: str) -> str:
    """Expand street-type abbreviations ("St" -> "Street", "Ave." -> "Avenue")."""
    for pattern, full in _STREET_TYPE_PATTERNS:
        text = pattern.sub(full, text)
    return text


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_ORDINAL_WORDS: Final[dict[str, str]] = {
    "first": "1st",
    "second": "2nd",
    "third": "3rd",
    "fourth": "4th",
    "fifth": "5th",
    "sixth": "6th",
    "seventh": "7th",
    "eighth": "8th",
    "ninth": "9th",
    "tenth": "10th",
    "eleventh": "11th",
    "twelfth": "12th",
}

_ORDINAL_WORD: Final[re.Pattern[str]] = re.compile(
    r"\b(" + "|".join(_ORDINAL_WORDS) + r")\b", re.IGNORECASE
)
_ORDINAL_SUFFIX: Final[re.Pattern[str]] = re.compile(
    r"\b(\d+)(st|nd|rd|th)\b", re.IGNORECASE
)
_NUMBER_SIGN: Final[re.Pattern[str]] = re.compile(
    r"\b(?:no\.?|num\.?|number)\s*(\d+)\b", re.IGNORECASE
)


def clean_numbers(text: str) -> str:
    """Normalize numeric tokens: "First" -> "1st", "2ND" -> "2nd", "No. 5" -> "#5"."""
    text = _ORDINAL_WORD.sub(lambda m: _ORDINAL_WORDS[m.group(1).lower()], text)
    text = _ORDINAL_SUFFIX.sub(lambda m: m.group(1) + m.group(2).lower(), text)
    return _NUMBER_SIGN.sub(r"#\1", text)


# ---------------------------------------------------------------------------
# Label cleanup
# ---------------------------------------------------------------------------

_EMPTY_PARENS: Final[re.Pattern[str]] = re.compile(r"\(\s*\)")
_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")
_SPACE_BEFORE_CLOSE: Final[re.Pattern[str]] = re.compile(r"\s+([,.;:!?)\]])")
_SPACE_AFTER_OPEN: Final[re.Pattern[str]] = re.compile(r"([(\[])\s+")
_EDGE_CHARS: Final[str] = " -–,;:/&@>"


def clean_label(text: str) -> str:
    """Trim, collapse whitespace and drop stray punctuation at the edges."""
    text = _EMPTY_PARENS.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    text = _SPACE_BEFORE_CLOSE.sub(r"\1", text)
    text = _SPACE_AFTER_OPEN.sub(r"\1", text)
    return text.strip(_EDGE_CHARS)


# ---------------------------------------------------------------------------
# Headsign destination
# ---------------------------------------------------------------------------

# Route short names run 100-299. Edge punctuation in front of a route
# number goes with it, otherwise clean_label would expose the number.
_ROUTE_NUMBER: Final[str] = (
    r"(?:[\s" + re.escape(_EDGE_CHARS.strip()) + r"]*\b[12]\d{2}\b\s*)"
)

_KEEP_TO: Final[re.Pattern[str]] = re.compile(
    rf"^.*\bto\s+(?=\S){_ROUTE_NUMBER}*", re.IGNORECASE
)
_REMOVE_VIA: Final[re.Pattern[str]] = re.compile(r"\s+via\s+\S.*$", re.IGNORECASE)


def keep_to_and_remove_via(text: str) -> str:
    """Reduce "A to B via C" to "B"."""
    text = _KEEP_TO.sub("", text)
    return _REMOVE_VIA.sub("", text)


# ---------------------------------------------------------------------------
# Shared rule instances
# ---------------------------------------------------------------------------

SQUARE: Final[str] = "Square"
BUS_TERMINAL: Final[str] = "Bus Terminal"

AND_NO_SPACE: Final[TextTransformRule] = regex_rule(
    "and_no_space", r"(?<=\S)\s*([&@])\s*(?=\S)", r" \1 "
)
# Only as a connector between two words: "Portage-at-Main" is a name
CLEAN_AT: Final[TextTransformRule] = regex_rule(
    "clean_at", r"(?<=\S)\s+at\s+(?=\S)", " @ "
)
CLEAN_AND: Final[TextTransformRule] = regex_rule(
    "clean_and", r"(?<=\S)\s+and\s+(?=\S)", " & "
)
ENDS_WITH_ARROW_TERMINAL: Final[TextTransformRule] = regex_rule(
    "ends_with_arrow_terminal", r"\s*->\s*terminal\s*$", " " + BUS_TERMINAL
)
STARTS_WITH_ROUTE_NUMBER: Final[TextTransformRule] = regex_rule(
    "starts_with_route_number", rf"^{_ROUTE_NUMBER}+"
)
# Separator dashes only: hyphenated names such as "Niagara-on-the-Lake" are kept
STARTS_WITH_DASH_PREFIX: Final[TextTransformRule] = regex_rule(
    "starts_with_dash_prefix", rf"^.*(?:\s-|-\s)\s*{_ROUTE_NUMBER}*"
)
SQUARE_MISSPELLING: Final[TextTransformRule] = regex_rule(
    "square_misspelling", r"\bsqaure\b", SQUARE
)
STARTS_WITH_ARROWS: Final[TextTransformRule] = regex_rule(
    "starts_with_arrows", rf"^(?:.*\s)?>>\s+{_ROUTE_NUMBER}*"
)
SLASHES: Final[TextTransformRule] = regex_rule(
    "clean_slashes", r"(?<=\w)\s*/\s*(?=\w)", " / "
)
STARTS_WITH_ROUTE_PREFIX: Final[TextTransformRule] = regex_rule(
    "starts_with_route_prefix", r"^(?:(?:rte|route)\s+\d+\s*)+"
)

MC_CASE: Final[TextTransformRule] = function_rule("mc_case", fix_mc_case)
BOUNDS: Final[TextTransformRule] = function_rule("clean_bounds", clean_bounds)
STREET_TYPES: Final[TextTransformRule] = function_rule(
    "clean_street_types", clean_street_types
)
NUMBERS: Final[TextTransformRule] = function_rule("clean_numbers", clean_numbers)
KEEP_TO_REMOVE_VIA: Final[TextTransformRule] = function_rule(
    "keep_to_and_remove_via", keep_to_and_remove_via
)
LABEL: Final[TextTransformRule] = function_rule("clean_label", clean_label)
