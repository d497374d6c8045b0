"""Review session state machine and in-memory session registry."""

from app.models.audit import AuditLogEntry, ComplianceRecord
from app.models.clinical import ClinicalAnalysis, PatientRecord, TreatmentRecommendation
from app.models.enums import AuditAction, WorkflowStep, ChatRole
from app.models.messages import ChatMessage, SessionStateResponse
from app.services.audit_log import append_audit_entry, plan_review_entry
from app.services.export_service import build_compliance_record
from app.services.exceptions import InvalidTransitionError, SessionResetError
from app.agents.intake_workflow import run_intake_analysis
from app.agents.assistant_agent import ClinicalAssistant, generate_patient_handout
from app.agents.prompts import ASSISTANT_GREETING
from app.config.settings import settings
from typing import Dict, List, Optional
from datetime import datetime
import uuid
import logging

logger = logging.getLogger(__name__)

SYSTEM_USER = "System"


class ClinicalReviewSession:
    """
    One intake-to-summary lifecycle.

    Steps: intake -> review -> summary. ``reject`` and ``restart`` return to
    intake and discard everything, including the audit log.
    """

    def __init__(self, clinician: Optional[str] = None, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.clinician = clinician or settings.default_clinician
        self.created_at = datetime.utcnow()
        self._generation = 0
        self._reset()

    def _reset(self) -> None:
        # Bumped on every reset; model results from an older lifecycle are dropped
        self._generation += 1
        self._analysis_pending = False
        self.step = WorkflowStep.INTAKE
        self.patient: Optional[PatientRecord] = None
        self.analysis: Optional[ClinicalAnalysis] = None
        self.final_plan: Optional[TreatmentRecommendation] = None
        self.audit_log: List[AuditLogEntry] = []
        self.chat_messages: List[ChatMessage] = []
        self.handout: Optional[str] = None
        self._assistant: Optional[ClinicalAssistant] = None

    def _require_step(self, operation: str, *allowed: WorkflowStep) -> None:
        if self.step not in allowed:
            raise InvalidTransitionError(operation, self.step.value)

    def _check_generation(self, generation: int, operation: str) -> None:
        if generation != self._generation:
            logger.warning(
                f"Session {self.session_id} was reset during {operation}; result dropped"
            )
            raise SessionResetError(
                f"Session was restarted while {operation} was running"
            )

    def _log(self, action: AuditAction, details: str, user: Optional[str] = None) -> None:
        self.audit_log = append_audit_entry(
            self.audit_log, action, user or self.clinician, details
        )

    async def submit_intake(self, patient: PatientRecord) -> ClinicalAnalysis:
        """
        Submit intake data, run the analysis and move to review.

        On failure the session stays at intake so the clinician can resubmit;
        the INTAKE_SUBMITTED entry is kept.

        Raises:
            InvalidTransitionError: Not at the intake step, or an analysis is pending
            SessionResetError: Session was restarted before the analysis returned
            AnalysisValidationError: Malformed model response
            AnalysisTransportError: Model unreachable or timed out
        """
        self._require_step("submit intake", WorkflowStep.INTAKE)
        if self._analysis_pending:
            raise InvalidTransitionError("submit intake", "intake (analysis pending)")

        generation = self._generation
        self._analysis_pending = True
        self.patient = patient
        self._log(AuditAction.INTAKE_SUBMITTED, f"Patient {patient.id} intake completed.")

        try:
            result = await run_intake_analysis(patient)
        except Exception:
            logger.error(f"Analysis failed for session {self.session_id}")
            if generation == self._generation:
                self.patient = None
                self._analysis_pending = False
            raise

        self._check_generation(generation, "the intake analysis")
        self._analysis_pending = False

        analysis = result.analysis
        self._log(
            AuditAction.ANALYSIS_GENERATED,
            f"AI generated plan for {patient.primary_complaint}. "
            f"Risk: {analysis.risk_level.value} "
            f"({len(result.db_warnings)} drug database flag(s))",
            user=SYSTEM_USER,
        )

        self.analysis = analysis
        self.step = WorkflowStep.REVIEW
        logger.info(f"Session {self.session_id} moved to review")
        return analysis

    def select_alternative(self, index: int) -> TreatmentRecommendation:
        """Return a copy of an alternative plan for use as the primary plan."""
        self._require_step("select an alternative", WorkflowStep.REVIEW)
        if index < 0 or index >= len(self.analysis.alternatives):
            raise IndexError(f"No alternative at index {index}")
        return self.analysis.alternatives[index].model_copy()

    def approve(self, plan: TreatmentRecommendation) -> AuditLogEntry:
        """Finalize a plan, logging any edits against the AI proposal."""
        self._require_step("approve a plan", WorkflowStep.REVIEW)

        self.audit_log = plan_review_entry(
            self.audit_log, self.analysis.treatment_plan, plan, self.clinician
        )
        self.final_plan = plan
        self.handout = None
        self.step = WorkflowStep.SUMMARY
        logger.info(f"Session {self.session_id} moved to summary")
        return self.audit_log[-1]

    def reject(self) -> AuditLogEntry:
        """Reject the plan and restart. Returns the PLAN_REJECTED entry."""
        self._require_step("reject a plan", WorkflowStep.REVIEW)

        complaint = self.patient.primary_complaint if self.patient else "unknown"
        self._log(AuditAction.PLAN_REJECTED, f"Plan for {complaint} rejected by clinician.")
        entry = self.audit_log[-1]
        self.restart()
        return entry

    def restart(self) -> None:
        """Discard all session state and return to intake."""
        logger.info(f"Session {self.session_id} restarted from step {self.step.value}")
        self._reset()

    async def ask_assistant(self, message: str) -> str:
        """
        Ask the clinical assistant about the case under review.

        Raises:
            InvalidTransitionError: Not at the review step
            AssistantUnavailableError: Model call failed; transcript unchanged
            SessionResetError: Session was restarted before the reply arrived
        """
        self._require_step("chat with the assistant", WorkflowStep.REVIEW)
        generation = self._generation

        if self._assistant is None:
            self._assistant = ClinicalAssistant(self.patient, self.analysis)
            self.chat_messages = [ChatMessage(role=ChatRole.MODEL, text=ASSISTANT_GREETING)]

        reply = await self._assistant.send_message(message)
        self._check_generation(generation, "the assistant chat")
        self.chat_messages.extend(
            [
                ChatMessage(role=ChatRole.USER, text=message),
                ChatMessage(role=ChatRole.MODEL, text=reply),
            ]
        )
        return reply

    async def patient_handout(self) -> str:
        """
        Return the patient handout, generating it once per plan.

        Covers the approved plan at summary, the AI primary plan during review.
        """
        self._require_step(
            "generate a handout", WorkflowStep.REVIEW, WorkflowStep.SUMMARY
        )
        if self.handout is None:
            generation = self._generation
            plan = self.final_plan or self.analysis.treatment_plan
            handout = await generate_patient_handout(self.patient, plan)
            self._check_generation(generation, "handout generation")
            self.handout = handout
        return self.handout

    def export_record(self) -> ComplianceRecord:
        """Build the compliance record for the finalized plan."""
        self._require_step("export the record", WorkflowStep.SUMMARY)
        return build_compliance_record(self.patient, self.final_plan, self.audit_log)

    def to_state(self) -> SessionStateResponse:
        """Snapshot for API responses."""
        return SessionStateResponse(
            session_id=self.session_id,
            step=self.step,
            clinician=self.clinician,
            created_at=self.created_at,
            patient=self.patient,
            analysis=self.analysis,
            final_plan=self.final_plan,
            audit_log=self.audit_log,
            chat_messages=self.chat_messages,
        )


class SessionService:
    """In-memory registry of review sessions. Nothing is persisted."""

    def __init__(self):
        self._sessions: Dict[str, ClinicalReviewSession] = {}

    def create_session(self, clinician: Optional[str] = None) -> ClinicalReviewSession:
        """
        Create a new review session.

        Args:
            clinician: Acting clinician name (defaults to settings.default_clinician)

        Returns:
            Created ClinicalReviewSession
        """
        session = ClinicalReviewSession(clinician=clinician)
        self._sessions[session.session_id] = session
        logger.info(f"Created session {session.session_id} for {session.clinician}")
        return session

    def get_session(self, session_id: str) -> Optional[ClinicalReviewSession]:
        """Get a session by ID, or None if not found."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Discard a session. Returns True if it existed."""
        removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info(f"Deleted session {session_id}")
            return True
        return False


# Global service instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
