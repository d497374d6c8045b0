"""Intake Analysis Agent.

Sends the patient record to the analysis model and validates the JSON it
returns against the ClinicalAnalysis schema. Either a fully valid analysis
comes back or an error is raised; partial results are never returned.
"""

from app.models.clinical import ClinicalAnalysis, PatientRecord
from app.models.enums import WarningSource
from app.config.llm_config import get_analysis_model
from app.agents.prompts import ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT
from app.services.exceptions import AnalysisTransportError, AnalysisValidationError
from app.utils.llm_helpers import invoke_llm_with_timeout, strip_md_fences
from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import ValidationError
import json
import logging

logger = logging.getLogger(__name__)


def _build_messages(patient: PatientRecord) -> list:
    current_meds = ", ".join(m.name for m in patient.current_medications) or "none"
    prompt = ANALYSIS_USER_PROMPT.format(
        patient_json=patient.model_dump_json(by_alias=True, indent=2),
        primary_complaint=patient.primary_complaint,
        current_medications=current_meds,
    )
    return [SystemMessage(content=ANALYSIS_SYSTEM_PROMPT), HumanMessage(content=prompt)]


def parse_analysis(text: str) -> ClinicalAnalysis:
    """
    Parse and validate a raw model response.

    Args:
        text: Model output, optionally wrapped in markdown fences

    Returns:
        ClinicalAnalysis with every warning tagged as AI_MODEL

    Raises:
        AnalysisValidationError: If the text is not JSON or fails the schema
    """
    try:
        raw = json.loads(strip_md_fences(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse analysis JSON: {text[:500]}")
        raise AnalysisValidationError("AI response was not valid JSON") from e

    try:
        analysis = ClinicalAnalysis.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Schema validation failed: {e}")
        raise AnalysisValidationError(
            "AI response did not match the expected clinical schema."
        ) from e

    analysis.warnings = [
        w.model_copy(update={"source": WarningSource.AI_MODEL})
        for w in analysis.warnings
    ]
    return analysis


async def analyze_patient(patient: PatientRecord) -> ClinicalAnalysis:
    """
    Draft a clinical analysis and treatment plan for a patient.

    Args:
        patient: Submitted intake record

    Returns:
        Validated ClinicalAnalysis (not yet cross-checked against the rule table)

    Raises:
        AnalysisValidationError: Malformed or incomplete model response
        AnalysisTransportError: Model unreachable, timed out, or silent
    """
    logger.info(f"Starting analysis for patient {patient.id}")
    llm = get_analysis_model()

    try:
        text = await invoke_llm_with_timeout(llm, _build_messages(patient))
    except Exception as e:
        raise AnalysisTransportError(f"Analysis request failed: {e}") from e

    if not text:
        raise AnalysisTransportError("No response from AI")

    analysis = parse_analysis(text)
    logger.info(
        f"Analysis for patient {patient.id}: {analysis.treatment_plan.medication} "
        f"(risk {analysis.risk_level.value}/{analysis.risk_score})"
    )
    return analysis
