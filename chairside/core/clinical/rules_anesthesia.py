"""
Anesthesia Selection: Ordered Override Pipeline

Exactly one protocol is recommended per evaluation.

Pipeline (applied in order, last match wins):
    0. Baseline              : lidocaine 2% with epinephrine 1:100,000
    1. Epinephrine-sensitive : a cardiovascular or beta-blocker alert fired
                               -> mepivacaine 3% plain
    2. Lidocaine allergy     : allergy list mentions lidocaine
                               -> prilocaine 4%

Each override whose predicate matches replaces the accumulated
recommendation outright; nothing is merged.  The lidocaine-allergy step is
last so it always beats the mepivacaine substitution.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .base import Alert, Allergen, AnesthesiaRecommendation, Procedure
from .rules_alerts import matches_any

logger = logging.getLogger(__name__)


# ── Routes ───────────────────────────────────────────────────────────────────

ROUTE_NERVE_BLOCK  = "Inferior alveolar nerve block + buccal infiltration"
ROUTE_INFILTRATION = "Buccal + palatal/lingual infiltration"


def route_for(procedure: Optional[Procedure]) -> str:
    if procedure is Procedure.EXTRACTION:
        return ROUTE_NERVE_BLOCK
    return ROUTE_INFILTRATION


def baseline_recommendation(procedure: Optional[Procedure]) -> AnesthesiaRecommendation:
    return AnesthesiaRecommendation(
        type="Lidocaine 2% with Epinephrine 1:100,000",
        dosage="Max 7 mg/kg (not to exceed 500 mg)",
        route=route_for(procedure),
        precautions=(
            "Aspirate before injection",
            "Inject slowly to minimize discomfort",
            "Monitor patient response",
        ),
        contraindications=(
            "Known lidocaine allergy",
            "Severe cardiovascular disease",
        ),
    )


# ── Overrides ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SelectionContext:
    """What override predicates are allowed to look at."""
    procedure: Optional[Procedure]
    alerts: Tuple[Alert, ...]
    allergies: Tuple[Allergen, ...]


@dataclass(frozen=True)
class AnesthesiaOverride:
    name: str
    applies: Callable[[SelectionContext], bool]
    build: Callable[[AnesthesiaRecommendation], AnesthesiaRecommendation]


EPINEPHRINE_SENSITIVE_MARKERS = ("Cardiovascular", "Beta-blocker")


def _is_epinephrine_sensitive(ctx: SelectionContext) -> bool:
    return any(
        marker in alert.message
        for alert in ctx.alerts
        for marker in EPINEPHRINE_SENSITIVE_MARKERS
    )


def _mepivacaine_plain(current: AnesthesiaRecommendation) -> AnesthesiaRecommendation:
    return AnesthesiaRecommendation(
        type="Mepivacaine 3% plain (no vasoconstrictor)",
        dosage="Max 6.6 mg/kg (not to exceed 400 mg)",
        route=current.route,
        precautions=(
            "Avoid vasoconstrictors",
            "Monitor for signs of anesthetic toxicity",
            "Plan for shorter duration of anesthesia",
        ),
        contraindications=(
            "Severe liver disease (relative)",
        ),
    )


def _has_lidocaine_allergy(ctx: SelectionContext) -> bool:
    return any(matches_any(a.name, ("lidocaine",)) for a in ctx.allergies)


def _prilocaine(current: AnesthesiaRecommendation) -> AnesthesiaRecommendation:
    return AnesthesiaRecommendation(
        type="Prilocaine 4% (felypressin variant may be available)",
        dosage="Max 6 mg/kg (conservative)",
        route=current.route,
        precautions=(
            "Assess methemoglobinemia risk",
            "Avoid in significant anemia or G6PD deficiency",
        ),
        contraindications=(
            "Congenital methemoglobinemia",
            "Severe anemia",
        ),
    )


# Order is significant: later entries replace earlier results.
ANESTHESIA_OVERRIDES: Tuple[AnesthesiaOverride, ...] = (
    AnesthesiaOverride(
        name="epinephrine_sensitive",
        applies=_is_epinephrine_sensitive,
        build=_mepivacaine_plain,
    ),
    AnesthesiaOverride(
        name="lidocaine_allergy",
        applies=_has_lidocaine_allergy,
        build=_prilocaine,
    ),
)


def select_anesthesia(
    procedure: Optional[Procedure],
    alerts: Sequence[Alert],
    allergies: Sequence[Allergen],
    overrides: Sequence[AnesthesiaOverride] = ANESTHESIA_OVERRIDES,
) -> Tuple[AnesthesiaRecommendation, Tuple[str, ...]]:
    """
    Run the override pipeline.

    Returns:
        (recommendation, names of the overrides that fired, in order)
    """
    ctx = SelectionContext(
        procedure=procedure,
        alerts=tuple(alerts),
        allergies=tuple(allergies),
    )

    recommendation = baseline_recommendation(procedure)
    applied: List[str] = []
    for override in overrides:
        if override.applies(ctx):
            recommendation = override.build(recommendation)
            applied.append(override.name)
            logger.debug(f"Anesthesia override '{override.name}' applied → {recommendation.type}")

    return recommendation, tuple(applied)
