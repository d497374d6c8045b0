"""Intake analysis workflow.

Flow: analyze -> interaction_check -> merge -> END
"""

from dataclasses import dataclass
from typing import List
from langgraph.graph import StateGraph, END
from app.agents.state import IntakeAnalysisState
from app.agents.nodes import analyze_node, interaction_check_node, merge_node
from app.models.clinical import ClinicalAnalysis, InteractionWarning, PatientRecord
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeAnalysisResult:
    """Outcome of one intake analysis run."""

    ai_analysis: ClinicalAnalysis
    db_warnings: List[InteractionWarning]
    analysis: ClinicalAnalysis  # merged and escalated; shown to the clinician


def build_intake_graph():
    """Build and compile the intake analysis workflow."""
    workflow = StateGraph(IntakeAnalysisState)

    workflow.add_node("analyze", analyze_node)
    workflow.add_node("interaction_check", interaction_check_node)
    workflow.add_node("merge", merge_node)

    workflow.set_entry_point("analyze")
    workflow.add_edge("analyze", "interaction_check")
    workflow.add_edge("interaction_check", "merge")
    workflow.add_edge("merge", END)

    graph = workflow.compile()
    logger.info("Intake analysis workflow compiled successfully")

    return graph


# Global graph instance
_intake_graph = None


def get_intake_graph():
    """Get or create the compiled intake analysis graph."""
    global _intake_graph
    if _intake_graph is None:
        _intake_graph = build_intake_graph()
    return _intake_graph


async def run_intake_analysis(patient: PatientRecord) -> IntakeAnalysisResult:
    """
    Run the full intake analysis for one patient.

    Raises:
        AnalysisValidationError: Malformed model response
        AnalysisTransportError: Model unreachable or timed out
    """
    initial_state: IntakeAnalysisState = {
        "patient": patient,
        "ai_analysis": None,
        "db_warnings": [],
        "merged_analysis": None,
    }

    result = await get_intake_graph().ainvoke(initial_state)

    return IntakeAnalysisResult(
        ai_analysis=result["ai_analysis"],
        db_warnings=result["db_warnings"],
        analysis=result["merged_analysis"],
    )
