"""
Unit Tests for Safety Alert Rules

Covers the rule table, keyword matching and additive firing.
"""
import pytest
from dataclasses import FrozenInstanceError

from chairside.core.clinical import (
    Allergen,
    Medication,
    MedicalCondition,
    AlertType,
    AlertSeverity,
)
from chairside.core.clinical.rules_alerts import (
    ALERT_RULES,
    AlertRule,
    evaluate_alerts,
    matches_any,
)


class TestMatching:
    """Tests for case-insensitive substring matching."""

    @pytest.mark.parametrize("name", ["LIDOCAINE HCl", "Lidocaine-sensitivity", "lidocaine"])
    def test_lidocaine_variants_match(self, name):
        assert matches_any(name, ("lidocaine",))

    def test_keyword_case_ignored(self):
        assert matches_any("latex gloves", ("Latex",))
        assert matches_any("LATEX", ("LaTeX",))

    def test_no_match(self):
        assert not matches_any("Latex", ("penicillin", "lidocaine"))

    def test_substring_false_positive_is_kept(self):
        # Existing permissive behaviour: a negated phrase still matches
        alerts = evaluate_alerts([], [], [MedicalCondition("non-cardiovascular-related finding")])
        assert [a.message for a in alerts] == ["Cardiovascular condition"]


class TestRuleTable:
    """Tests for the static rule table."""

    def test_rule_ids_unique(self):
        ids = [r.rule_id for r in ALERT_RULES]
        assert len(ids) == len(set(ids))

    def test_rules_are_immutable(self):
        rule = ALERT_RULES[0]
        with pytest.raises(FrozenInstanceError):
            rule.severity = AlertSeverity.LOW  # type: ignore[misc]
        assert isinstance(ALERT_RULES, tuple)

    def test_catalog_entries(self):
        by_message = {r.message: r for r in ALERT_RULES}
        assert by_message["Allergy: Penicillin"].severity == AlertSeverity.HIGH
        assert by_message["Allergy: Lidocaine"].severity == AlertSeverity.HIGH
        assert by_message["Anticoagulant therapy"].severity == AlertSeverity.MEDIUM
        assert by_message["Beta-blocker in use"].severity == AlertSeverity.MEDIUM
        assert by_message["Cardiovascular condition"].severity == AlertSeverity.MEDIUM
        assert by_message["Asthma history"].severity == AlertSeverity.LOW
        assert by_message["Diabetes"].severity == AlertSeverity.MEDIUM

    def test_keywords_normalised_to_lowercase(self):
        rule = AlertRule(
            rule_id="ALG-LATEX",
            category=AlertType.ALLERGY,
            keywords=("Latex", "NRL"),
            severity=AlertSeverity.HIGH,
            message="Allergy: Latex",
            recommendation="Use nitrile gloves and latex-free dam",
        )
        assert rule.keywords == ("latex", "nrl")
        alerts = evaluate_alerts([Allergen("latex gloves")], [], [], rules=(rule,))
        assert [a.message for a in alerts] == ["Allergy: Latex"]

    @pytest.mark.parametrize("category", [AlertType.ANESTHESIA, AlertType.RISK])
    def test_unmatched_category_rejected(self, category):
        with pytest.raises(ValueError, match="not matched"):
            AlertRule(
                rule_id="BAD-RULE",
                category=category,
                keywords=("anything",),
                severity=AlertSeverity.LOW,
                message="never fires",
                recommendation="n/a",
            )

    def test_to_dict(self):
        data = ALERT_RULES[0].to_dict()
        assert data["category"] == "allergy"
        assert data["keywords"] == ["penicillin"]


class TestEvaluateAlerts:
    """Tests for evaluate_alerts()."""

    def test_empty_chart(self):
        assert evaluate_alerts([], [], []) == []

    def test_penicillin_allergy(self, penicillin_allergy):
        alerts = evaluate_alerts([penicillin_allergy], [], [])
        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.type == AlertType.ALLERGY
        assert alert.severity == AlertSeverity.HIGH
        assert alert.message == "Allergy: Penicillin"
        assert alert.recommendation == "Avoid penicillin-class antibiotics; consider clindamycin"

    @pytest.mark.parametrize("drug", ["Warfarin", "apixaban", "Rivaroxaban 20mg", "DABIGATRAN"])
    def test_anticoagulants(self, drug):
        alerts = evaluate_alerts([], [Medication(drug)], [])
        assert [a.message for a in alerts] == ["Anticoagulant therapy"]
        assert alerts[0].recommendation == "Expect increased bleeding; local hemostatic measures"

    @pytest.mark.parametrize("drug", ["Propranolol", "Metoprolol succinate", "atenolol", "Nadolol"])
    def test_beta_blockers(self, drug):
        alerts = evaluate_alerts([], [Medication(drug)], [])
        assert [a.message for a in alerts] == ["Beta-blocker in use"]
        assert alerts[0].recommendation == "Limit epinephrine; monitor BP/HR"

    @pytest.mark.parametrize("condition", ["Hypertension", "Cardiovascular disease", "Atrial arrhythmia"])
    def test_cardiovascular_conditions(self, condition):
        alerts = evaluate_alerts([], [], [MedicalCondition(condition)])
        assert [a.message for a in alerts] == ["Cardiovascular condition"]

    def test_asthma_is_low(self):
        alerts = evaluate_alerts([], [], [MedicalCondition("Asthma")])
        assert alerts[0].severity == AlertSeverity.LOW
        assert alerts[0].recommendation == "Bronchodilator available; avoid sulfite-sensitive anesthetics"

    def test_diabetes(self, diabetes):
        alerts = evaluate_alerts([], [], [diabetes])
        assert alerts[0].message == "Diabetes"
        assert alerts[0].recommendation == "Confirm meal/insulin timing; watch hypoglycemia"

    def test_rule_fires_once_for_many_matches(self):
        alerts = evaluate_alerts([], [Medication("Warfarin"), Medication("Apixaban")], [])
        assert len(alerts) == 1

    def test_alerts_are_additive(self, penicillin_allergy, diabetes):
        alerts = evaluate_alerts([penicillin_allergy], [], [diabetes])
        assert len(alerts) == 2
        assert {(a.type, a.severity) for a in alerts} == {
            (AlertType.ALLERGY, AlertSeverity.HIGH),
            (AlertType.CONDITION, AlertSeverity.MEDIUM),
        }

    def test_medication_name_does_not_trigger_allergy_rule(self):
        alerts = evaluate_alerts([], [Medication("Penicillin VK")], [])
        assert alerts == []

    def test_status_and_notes_ignored(self):
        med = Medication("Warfarin", status="discontinued", notes="stopped 2019")
        assert len(evaluate_alerts([], [med], [])) == 1

    def test_custom_rule_table(self):
        latex = AlertRule(
            rule_id="ALG-LATEX",
            category=AlertType.ALLERGY,
            keywords=("latex",),
            severity=AlertSeverity.HIGH,
            message="Allergy: Latex",
            recommendation="Use nitrile gloves and latex-free dam",
        )
        alerts = evaluate_alerts([Allergen("Latex")], [], [], rules=ALERT_RULES + (latex,))
        assert [a.message for a in alerts] == ["Allergy: Latex"]
