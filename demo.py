"""
End-to-End Demo Script for the Chairside Assistant

Runs the clinical risk evaluator over:
1. The canonical chart scenarios (baseline, allergy, epinephrine-sensitive,
   lidocaine-allergy precedence)
2. The seeded demo patients for every supported procedure

Run: python demo.py
"""
from chairside.core.clinical import (
    ClinicalRiskEvaluator,
    Allergen,
    Medication,
    MedicalCondition,
    Procedure,
)
from chairside.core.records import InMemoryChartSource
from chairside.utils import setup_logging

SCENARIOS = [
    ("A: extraction, empty chart", "extraction", [], [], []),
    ("B: root canal, penicillin allergy", "root_canal", [Allergen("Penicillin")], [], []),
    (
        "C: crown prep, atenolol + hypertension",
        "crown_prep",
        [],
        [Medication("Atenolol")],
        [MedicalCondition("Hypertension")],
    ),
    (
        "D: filling, lidocaine allergy + propranolol",
        "filling",
        [Allergen("Lidocaine")],
        [Medication("Propranolol")],
        [],
    ),
]


def print_result(title: str, result) -> None:
    alerts, anesthesia, risks = result
    print(f"\n── {title}")
    print(f"   Alerts ({len(alerts)}):")
    for alert in alerts:
        print(f"     [{alert.severity.value.upper():6}] {alert.message}: {alert.recommendation}")
    print(f"   Anesthesia: {anesthesia.type}")
    print(f"     Dosage: {anesthesia.dosage}")
    print(f"     Route:  {anesthesia.route}")
    if result.applied_overrides:
        print(f"     Overrides: {' → '.join(result.applied_overrides)}")
    print(f"   Risks ({len(risks)}):")
    for risk in risks:
        print(f"     - {risk}")


def main() -> None:
    setup_logging("WARNING")
    evaluator = ClinicalRiskEvaluator()

    print("=" * 60)
    print("CHAIRSIDE ASSISTANT - CLINICAL RISK EVALUATOR DEMO")
    print("=" * 60)

    print("\n[1/2] Chart scenarios")
    for title, procedure, allergies, medications, conditions in SCENARIOS:
        print_result(title, evaluator.evaluate(procedure, allergies, medications, conditions))

    print("\n[2/2] Seeded demo patients")
    source = InMemoryChartSource.with_demo_patients()
    for patient_id in source.patient_ids():
        chart = source.get_chart(patient_id)
        for procedure in Procedure:
            result = evaluator.evaluate(
                procedure, chart.allergies, chart.medications, chart.conditions
            )
            print_result(f"{chart.display_name} ({patient_id}) / {procedure.label}", result)


if __name__ == "__main__":
    main()
