"""LangGraph state definition for the intake analysis workflow."""

from typing import TypedDict, List, Optional
from app.models.clinical import ClinicalAnalysis, InteractionWarning, PatientRecord


class IntakeAnalysisState(TypedDict):
    """State passed between the intake analysis nodes."""

    patient: PatientRecord

    # Model output, as validated
    ai_analysis: Optional[ClinicalAnalysis]

    # Deterministic rule-table hits for the proposed medication
    db_warnings: List[InteractionWarning]

    # ai_analysis after merge and escalation
    merged_analysis: Optional[ClinicalAnalysis]
