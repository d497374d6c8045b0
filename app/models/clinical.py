"""Clinical data contracts: patient record, medications, AI analysis."""

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Tuple
from app.models.enums import Gender, RiskLevel, Severity, WarningSource
import uuid


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Medication(CamelModel):
    """A single entry of the patient's current medication list."""

    model_config = ConfigDict(frozen=True)

    name: str
    dosage: str = ""
    frequency: str = ""


class PatientRecord(CamelModel):
    """Intake record. Immutable for the lifetime of a review session."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "12345",
                "age": 58,
                "gender": "Male",
                "weightKg": 95,
                "heightCm": 178,
                "systolicBp": 155,
                "diastolicBp": 95,
                "heartRate": 78,
                "smokingStatus": "Former",
                "alcoholConsumption": "Occasional",
                "exerciseFrequency": "Sedentary",
                "allergies": ["Penicillin"],
                "conditions": ["Hypertension", "Type 2 Diabetes", "Angina"],
                "currentMedications": [
                    {"name": "Lisinopril", "dosage": "20mg", "frequency": "Daily"},
                    {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily"},
                    {
                        "name": "Nitroglycerin",
                        "dosage": "0.4mg",
                        "frequency": "PRN for chest pain",
                    },
                ],
                "primaryComplaint": "Erectile Dysfunction",
                "notes": "Patient reports symptoms worsening over the last "
                "6 months. Requesting Viagra.",
            }
        },
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    age: int = Field(..., ge=0, le=130)
    gender: Gender
    weight_kg: float = Field(..., ge=0)
    height_cm: float = Field(..., ge=0)

    # Vitals
    systolic_bp: int = Field(120, ge=0)
    diastolic_bp: int = Field(80, ge=0)
    heart_rate: int = Field(70, ge=0)

    # Lifestyle
    smoking_status: Literal["Never", "Former", "Current"] = "Never"
    alcohol_consumption: Literal["None", "Occasional", "Frequent"] = "None"
    exercise_frequency: Literal["Sedentary", "Light", "Moderate", "Active"] = "Light"

    # Clinical history
    allergies: Tuple[str, ...] = ()
    conditions: Tuple[str, ...] = ()
    current_medications: Tuple[Medication, ...] = ()
    primary_complaint: str = Field(..., min_length=1)
    notes: Optional[str] = None

    @computed_field
    @property
    def bmi(self) -> Optional[float]:
        """Body mass index, or None until both weight and height are known."""
        if not self.weight_kg or not self.height_cm:
            return None
        height_m = self.height_cm / 100
        return round(self.weight_kg / (height_m * height_m), 1)


class InteractionWarning(CamelModel):
    """A drug interaction or safety warning. Never mutated once created."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    description: str
    source: Optional[WarningSource] = None


class TreatmentRecommendation(CamelModel):
    """A proposed treatment; the primary plan or one of its alternatives."""

    medication: str
    dosage: str
    duration: str
    rationale: str
    confidence_score: float = Field(..., ge=0, le=100)


class ClinicalAnalysis(CamelModel):
    """Structured analysis returned by the model for one intake submission."""

    risk_level: RiskLevel
    risk_score: float = Field(..., ge=0, le=100)
    summary: str
    warnings: List[InteractionWarning]
    contraindications: List[str]
    treatment_plan: TreatmentRecommendation
    alternatives: List[TreatmentRecommendation]
    lifestyle_recommendations: List[str]
