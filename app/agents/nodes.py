"""LangGraph node functions for the intake analysis workflow."""

from app.agents.state import IntakeAnalysisState
from app.agents.analysis_agent import analyze_patient
from app.services.risk_merge import merge_and_escalate
from app.tools.drug_interactions import check_interactions
import logging

logger = logging.getLogger(__name__)


async def analyze_node(state: IntakeAnalysisState) -> dict:
    """Draft the analysis with the model. Errors propagate to the caller."""
    patient = state["patient"]
    logger.info(f"Analyze node for patient: {patient.id}")

    analysis = await analyze_patient(patient)
    return {"ai_analysis": analysis}


async def interaction_check_node(state: IntakeAnalysisState) -> dict:
    """Cross-check the proposed medication against the rule table."""
    patient = state["patient"]
    proposed = state["ai_analysis"].treatment_plan.medication
    logger.info(f"Interaction check node: {proposed} for patient {patient.id}")

    return {"db_warnings": check_interactions(patient.current_medications, proposed)}


async def merge_node(state: IntakeAnalysisState) -> dict:
    """Merge rule-table warnings into the analysis and escalate risk."""
    merged = merge_and_escalate(state["ai_analysis"], state.get("db_warnings", []))
    return {"merged_analysis": merged}
