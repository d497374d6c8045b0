"""Compliance log and export document schemas."""

from pydantic import ConfigDict, Field
from typing import List
from datetime import datetime
from app.models.clinical import CamelModel, PatientRecord, TreatmentRecommendation
from app.models.enums import AuditAction
import uuid


class AuditLogEntry(CamelModel):
    """One workflow transition. Append-only; never edited after creation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    action: AuditAction
    user: str
    details: str


class ExportMeta(CamelModel):
    """Header block of an exported compliance record."""

    app: str = "MediGuard AI"
    version: str
    exported_at: datetime = Field(default_factory=datetime.utcnow)


class ComplianceRecord(CamelModel):
    """Exported patient record, final plan and audit trail."""

    meta: ExportMeta
    patient: PatientRecord
    final_treatment_plan: TreatmentRecommendation
    compliance_log: List[AuditLogEntry]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "meta": {
                    "app": "MediGuard AI",
                    "version": "1.0",
                    "exportedAt": "2026-10-17T09:30:00",
                },
                "patient": {"id": "12345", "age": 58, "primaryComplaint": "..."},
                "finalTreatmentPlan": {"medication": "Tadalafil", "dosage": "5mg"},
                "complianceLog": [{"action": "PLAN_APPROVED", "user": "Dr. Admin"}],
            }
        }
    )
