"""
Pytest Configuration and Fixtures

Shared fixtures for chairside evaluator tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chairside.core.clinical import (
    ClinicalRiskEvaluator,
    Allergen,
    Medication,
    MedicalCondition,
)


@pytest.fixture
def evaluator() -> ClinicalRiskEvaluator:
    return ClinicalRiskEvaluator()


@pytest.fixture
def lidocaine_allergy() -> Allergen:
    return Allergen("Lidocaine", severity="high")


@pytest.fixture
def penicillin_allergy() -> Allergen:
    return Allergen("Penicillin", severity="high")


@pytest.fixture
def beta_blocker() -> Medication:
    return Medication("Metoprolol", status="active")


@pytest.fixture
def anticoagulant() -> Medication:
    return Medication("Warfarin", status="active", notes="Daily")


@pytest.fixture
def hypertension() -> MedicalCondition:
    return MedicalCondition("Hypertension", status="active")


@pytest.fixture
def diabetes() -> MedicalCondition:
    return MedicalCondition("Type 2 Diabetes", status="active")
