"""API request and response models."""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
from app.models.audit import AuditLogEntry
from app.models.clinical import (
    CamelModel,
    ClinicalAnalysis,
    PatientRecord,
    TreatmentRecommendation,
)
from app.models.enums import ChatRole, WorkflowStep


class ChatMessage(CamelModel):
    """Individual message in the clinical assistant transcript."""

    role: ChatRole
    text: str


class ChatRequest(CamelModel):
    """Question for the clinical assistant."""

    message: str = Field(..., min_length=1, max_length=2000, description="Clinician question")


class ChatResponse(CamelModel):
    """Assistant reply."""

    reply: str


class HandoutResponse(CamelModel):
    """Patient handout in markdown."""

    content: str


class RejectResponse(CamelModel):
    """Result of rejecting a plan: the logged entry and the reset session."""

    rejection: AuditLogEntry
    session: "SessionStateResponse"


class SessionStateResponse(CamelModel):
    """Full review session state."""

    session_id: str
    step: WorkflowStep
    clinician: str
    created_at: datetime
    patient: Optional[PatientRecord] = None
    analysis: Optional[ClinicalAnalysis] = None
    final_plan: Optional[TreatmentRecommendation] = None
    audit_log: List[AuditLogEntry] = Field(default_factory=list)
    chat_messages: List[ChatMessage] = Field(default_factory=list)


RejectResponse.model_rebuild()
