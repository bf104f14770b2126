"""
Chairside Safety Alert Rules

Static rule table mapping chart keywords to safety alerts.

Matching:
    Case-insensitive substring containment.  "LIDOCAINE HCl" and
    "Lidocaine-sensitivity" both hit the lidocaine rule.  False positives
    ("non-cardiovascular") are accepted.

Firing:
    Every rule is evaluated independently and every matching rule fires,
    once, no matter how many chart entries match it.  Alerts are emitted
    in table order.

Adding a rule:
    Append an AlertRule to ALERT_RULES.  No control flow changes needed.
    Only allergy, medication and condition rules can be matched; any other
    category is rejected when the rule is built.  Keywords are lowercased.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .base import (
    Alert,
    AlertSeverity,
    AlertType,
    Allergen,
    MedicalCondition,
    Medication,
)


# Chart sections a rule can be matched against
MATCHED_CATEGORIES = (AlertType.ALLERGY, AlertType.MEDICATION, AlertType.CONDITION)


@dataclass(frozen=True)
class AlertRule:
    """One row of the alert table."""
    rule_id: str
    category: AlertType
    keywords: Tuple[str, ...]
    severity: AlertSeverity
    message: str
    recommendation: str

    def __post_init__(self):
        if self.category not in MATCHED_CATEGORIES:
            raise ValueError(
                f"AlertRule {self.rule_id}: category {self.category.value!r} is not matched "
                f"against the chart (expected one of {[c.value for c in MATCHED_CATEGORIES]})"
            )
        object.__setattr__(self, "keywords", tuple(k.lower() for k in self.keywords))

    def matches(self, names: Iterable[str]) -> bool:
        return any(matches_any(name, self.keywords) for name in names)

    def to_alert(self) -> Alert:
        return Alert(
            type=self.category,
            severity=self.severity,
            message=self.message,
            recommendation=self.recommendation,
        )

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "category": self.category.value,
            "keywords": list(self.keywords),
            "severity": self.severity.value,
            "message": self.message,
            "recommendation": self.recommendation,
        }


def matches_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs anywhere in ``text``, ignoring case."""
    lowered = text.lower()
    return any(k.lower() in lowered for k in keywords)


# ── Keyword vocabularies ─────────────────────────────────────────────────────

ANTICOAGULANTS  = ("warfarin", "apixaban", "rivaroxaban", "dabigatran")
BETA_BLOCKERS   = ("propranolol", "metoprolol", "atenolol", "nadolol")
CARDIOVASCULAR  = ("hypertension", "cardiovascular", "arrhythmia")


# ── Rule table ───────────────────────────────────────────────────────────────

ALERT_RULES: Tuple[AlertRule, ...] = (
    AlertRule(
        rule_id="ALG-PENICILLIN",
        category=AlertType.ALLERGY,
        keywords=("penicillin",),
        severity=AlertSeverity.HIGH,
        message="Allergy: Penicillin",
        recommendation="Avoid penicillin-class antibiotics; consider clindamycin",
    ),
    AlertRule(
        rule_id="ALG-LIDOCAINE",
        category=AlertType.ALLERGY,
        keywords=("lidocaine",),
        severity=AlertSeverity.HIGH,
        message="Allergy: Lidocaine",
        recommendation="Use alternative local anesthetic (mepivacaine/prilocaine)",
    ),
    AlertRule(
        rule_id="MED-ANTICOAGULANT",
        category=AlertType.MEDICATION,
        keywords=ANTICOAGULANTS,
        severity=AlertSeverity.MEDIUM,
        message="Anticoagulant therapy",
        recommendation="Expect increased bleeding; local hemostatic measures",
    ),
    AlertRule(
        rule_id="MED-BETA-BLOCKER",
        category=AlertType.MEDICATION,
        keywords=BETA_BLOCKERS,
        severity=AlertSeverity.MEDIUM,
        message="Beta-blocker in use",
        recommendation="Limit epinephrine; monitor BP/HR",
    ),
    AlertRule(
        rule_id="CON-CARDIOVASCULAR",
        category=AlertType.CONDITION,
        keywords=CARDIOVASCULAR,
        severity=AlertSeverity.MEDIUM,
        message="Cardiovascular condition",
        recommendation="Monitor vitals; minimize epinephrine; stress reduction",
    ),
    AlertRule(
        rule_id="CON-ASTHMA",
        category=AlertType.CONDITION,
        keywords=("asthma",),
        severity=AlertSeverity.LOW,
        message="Asthma history",
        recommendation="Bronchodilator available; avoid sulfite-sensitive anesthetics",
    ),
    AlertRule(
        rule_id="CON-DIABETES",
        category=AlertType.CONDITION,
        keywords=("diabetes",),
        severity=AlertSeverity.MEDIUM,
        message="Diabetes",
        recommendation="Confirm meal/insulin timing; watch hypoglycemia",
    ),
)


def evaluate_alerts(
    allergies: Sequence[Allergen],
    medications: Sequence[Medication],
    conditions: Sequence[MedicalCondition],
    rules: Sequence[AlertRule] = ALERT_RULES,
) -> List[Alert]:
    """Run every rule against the chart section named by its category."""
    names_by_category = {
        AlertType.ALLERGY:    [a.name for a in allergies],
        AlertType.MEDICATION: [m.name for m in medications],
        AlertType.CONDITION:  [c.name for c in conditions],
    }

    alerts: List[Alert] = []
    for rule in rules:
        if rule.matches(names_by_category[rule.category]):
            alerts.append(rule.to_alert())
    return alerts
