"""Clinical Assistant Agent.

Answers the reviewing clinician's questions about the current patient and
plan, and writes plain-language patient handouts. Failures here never touch
the analysis or the plan under review.
"""

from typing import List
from app.models.clinical import ClinicalAnalysis, PatientRecord, TreatmentRecommendation
from app.config.llm_config import get_assistant_model, get_handout_model
from app.agents.prompts import (
    ASSISTANT_SYSTEM_PROMPT,
    ASSISTANT_EMPTY_REPLY,
    HANDOUT_PROMPT,
)
from app.services.exceptions import AssistantUnavailableError
from app.tools.drug_interactions import format_interaction_for_display
from app.utils.llm_helpers import invoke_llm_with_timeout
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
import logging

logger = logging.getLogger(__name__)


class ClinicalAssistant:
    """Multi-turn Q&A over a fixed patient + analysis context."""

    def __init__(self, patient: PatientRecord, analysis: ClinicalAnalysis):
        system_prompt = ASSISTANT_SYSTEM_PROMPT.format(
            patient_json=patient.model_dump_json(by_alias=True),
            analysis_json=analysis.model_dump_json(by_alias=True),
            interaction_summary=format_interaction_for_display(analysis.warnings),
        )
        self.history: List[BaseMessage] = [SystemMessage(content=system_prompt)]

    async def send_message(self, message: str) -> str:
        """
        Ask a question and return the assistant's reply.

        The question is only kept in the history once a reply arrives, so a
        failed call can simply be retried.

        Raises:
            AssistantUnavailableError: If the model call fails
        """
        question = HumanMessage(content=message)
        llm = get_assistant_model()

        try:
            text = await invoke_llm_with_timeout(llm, [*self.history, question])
        except Exception as e:
            raise AssistantUnavailableError(f"Assistant request failed: {e}") from e

        reply = text or ASSISTANT_EMPTY_REPLY
        self.history.extend([question, AIMessage(content=reply)])
        return reply


async def generate_patient_handout(
    patient: PatientRecord, plan: TreatmentRecommendation
) -> str:
    """
    Write a markdown handout explaining the given treatment plan.

    Raises:
        AssistantUnavailableError: If the model call fails or returns nothing
    """
    logger.info(f"Generating handout for patient {patient.id}: {plan.medication}")

    prompt = HANDOUT_PROMPT.format(
        medication=plan.medication,
        dosage=plan.dosage,
        duration=plan.duration,
    )
    llm = get_handout_model()

    try:
        text = await invoke_llm_with_timeout(llm, [HumanMessage(content=prompt)])
    except Exception as e:
        raise AssistantUnavailableError(f"Handout generation failed: {e}") from e

    if not text:
        raise AssistantUnavailableError("Handout generation returned no content")
    return text
