"""Ordered label normalization pipelines, one per feed field kind.

Pipeline shape:
- each field kind owns a fixed, ordered tuple of rules
- a label flows through the rules left to right
- the order is part of the behavior: later rules expect earlier ones to
  have removed structural noise (route numbers, dashes, arrows)

Pipelines are immutable and built once at import time. Normalization is
total: unmatched rules leave the label unchanged and no input string
raises.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from nft_gtfs.config import NIAGARA_FALLS_TRANSIT, AgencyConfig, FieldKind, RawField
from nft_gtfs.rules import (
    AND_NO_SPACE,
    BOUNDS,
    CLEAN_AND,
    CLEAN_AT,
    ENDS_WITH_ARROW_TERMINAL,
    KEEP_TO_REMOVE_VIA,
    LABEL,
    MC_CASE,
    NUMBERS,
    SLASHES,
    SQUARE_MISSPELLING,
    STARTS_WITH_ARROWS,
    STARTS_WITH_DASH_PREFIX,
    STARTS_WITH_ROUTE_NUMBER,
    STARTS_WITH_ROUTE_PREFIX,
    STREET_TYPES,
    TextTransformRule,
    word_casing_rule,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NormalizationPipeline:
    """Ordered sequence of rules applied to one field kind.

    Attributes:
        kind: Field kind this pipeline normalizes.
        rules: Rules in application order.
    """

    kind: FieldKind
    rules: tuple[TextTransformRule, ...]

    @property
    def step_names(self) -> tuple[str, ...]:
        """Return rule names in application order."""
        return tuple(rule.name for rule in self.rules)

    def __call__(self, text: str) -> str:
        for rule in self.rules:
            text = rule(text)
        return text

    def trace(self, text: str) -> list[tuple[str, str]]:
        """Apply the pipeline, recording the label after every step.

        Returns:
            (rule name, label after that rule) pairs in application order.
        """
        steps: list[tuple[str, str]] = []
        for rule in self.rules:
            text = rule(text)
            steps.append((rule.name, text))
            logger.debug("%s %s -> %r", self.kind.value, rule.name, text)
        return steps


def build_stop_name_pipeline(agency: AgencyConfig) -> NormalizationPipeline:
    """Stop names: casing first, label cleanup last."""
    return NormalizationPipeline(
        kind=FieldKind.STOP_NAME,
        rules=(
            word_casing_rule(agency.ignore_words_upper),
            MC_CASE,
            AND_NO_SPACE,
            CLEAN_AT,
            BOUNDS,
            STREET_TYPES,
            NUMBERS,
            LABEL,
        ),
    )


def build_trip_headsign_pipeline(agency: AgencyConfig) -> NormalizationPipeline:
    """Trip headsigns: structural noise is removed before word-level cleanup."""
    return NormalizationPipeline(
        kind=FieldKind.TRIP_HEADSIGN,
        rules=(
            AND_NO_SPACE,
            ENDS_WITH_ARROW_TERMINAL,
            word_casing_rule(agency.ignore_words_upper),
            STARTS_WITH_ROUTE_NUMBER,
            STARTS_WITH_DASH_PREFIX,
            SQUARE_MISSPELLING,
            KEEP_TO_REMOVE_VIA,
            STARTS_WITH_ARROWS,
            CLEAN_AND,
            BOUNDS,
            STREET_TYPES,
            SLASHES,
            NUMBERS,
            LABEL,
        ),
    )


def build_route_long_name_pipeline() -> NormalizationPipeline:
    return NormalizationPipeline(
        kind=FieldKind.ROUTE_LONG_NAME,
        rules=(STARTS_WITH_ROUTE_PREFIX,),
    )


def build_pipelines(
    agency: AgencyConfig,
) -> Mapping[FieldKind, NormalizationPipeline]:
    """Build the read-only pipeline registry for an agency.

    Stop codes carry no label pipeline; they are mapped to ids by
    stop_ids.derive_stop_id instead.
    """
    return MappingProxyType(
        {
            FieldKind.ROUTE_LONG_NAME: build_route_long_name_pipeline(),
            FieldKind.TRIP_HEADSIGN: build_trip_headsign_pipeline(agency),
            FieldKind.STOP_NAME: build_stop_name_pipeline(agency),
            FieldKind.STOP_CODE: NormalizationPipeline(kind=FieldKind.STOP_CODE, rules=()),
        }
    )


PIPELINES: Final[Mapping[FieldKind, NormalizationPipeline]] = build_pipelines(
    NIAGARA_FALLS_TRANSIT
)


def pipeline_for(kind: FieldKind) -> NormalizationPipeline:
    """Return the configured pipeline for ``kind``."""
    return PIPELINES[kind]


def normalize(kind: FieldKind, text: str) -> str:
    """Normalize a raw label of the given field kind.

    Args:
        kind: Field kind selecting the pipeline.
        text: Raw feed value.

    Returns:
        Normalized label, possibly empty. Never raises for string input.
    """
    return PIPELINES[kind](text)


def clean_route_long_name(route_long_name: str) -> str:
    return normalize(FieldKind.ROUTE_LONG_NAME, route_long_name)


def clean_trip_headsign(trip_headsign: str) -> str:
    return normalize(FieldKind.TRIP_HEADSIGN, trip_headsign)


def clean_stop_name(stop_name: str) -> str:
    return normalize(FieldKind.STOP_NAME, stop_name)


def normalize_field(field: RawField) -> str:
    """Normalize a raw value tagged with its field kind."""
    return normalize(field.kind, field.value)
