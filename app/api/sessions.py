"""Review session API endpoints.

Drives one intake-to-summary lifecycle per session:
- Intake: submit patient data; the model drafts a plan, the drug rule table
  cross-checks it and escalates risk where needed
- Review: chat with the assistant, generate a handout, pick an alternative,
  approve (optionally edited) or reject
- Summary: export the compliance record
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from app.api.dependencies import get_clinician, get_review_session
from app.models.audit import ComplianceRecord
from app.models.clinical import PatientRecord, TreatmentRecommendation
from app.models.messages import (
    ChatRequest,
    ChatResponse,
    HandoutResponse,
    RejectResponse,
    SessionStateResponse,
)
from app.services.exceptions import (
    AnalysisTransportError,
    AnalysisValidationError,
    AssistantUnavailableError,
    InvalidTransitionError,
    SessionResetError,
)
from app.services.export_service import export_filename
from app.services.session_service import ClinicalReviewSession, get_session_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["Review Sessions"])

ASSISTANT_FALLBACK = "Error communicating with MediGuard AI."
HANDOUT_FALLBACK = "Failed to generate handout. Please try again."


def _conflict(e: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post(
    "", response_model=SessionStateResponse, status_code=status.HTTP_201_CREATED
)
async def create_session(clinician: str = Depends(get_clinician)):
    """Start a new review session at the intake step."""
    session = get_session_service().create_session(clinician=clinician)
    return session.to_state()


@router.get("/{session_id}", response_model=SessionStateResponse)
async def get_session(session: ClinicalReviewSession = Depends(get_review_session)):
    """Current step, patient, analysis, plan and audit log."""
    return session.to_state()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session: ClinicalReviewSession = Depends(get_review_session)):
    """Discard a session and everything it holds."""
    get_session_service().delete_session(session.session_id)


@router.post("/{session_id}/intake", response_model=SessionStateResponse)
async def submit_intake(
    patient: PatientRecord,
    session: ClinicalReviewSession = Depends(get_review_session),
):
    """
    Submit intake data and generate the reviewed analysis.

    Returns 422 when the model answer fails schema validation and 502 when
    the model service is unreachable; in both cases the session stays at
    intake and the submission can be retried.
    """
    try:
        await session.submit_intake(patient)
    except (InvalidTransitionError, SessionResetError) as e:
        raise _conflict(e)
    except AnalysisValidationError as e:
        logger.error(f"Analysis validation failed for session {session.session_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=f"Analysis failed validation: {e}",
        )
    except AnalysisTransportError as e:
        logger.error(f"Analysis failed for session {session.session_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Analysis failed. Please try again.",
        )

    return session.to_state()


@router.post(
    "/{session_id}/alternatives/{index}/select",
    response_model=TreatmentRecommendation,
)
async def select_alternative(
    index: int, session: ClinicalReviewSession = Depends(get_review_session)
):
    """Copy an alternative into an editable primary plan (not yet approved)."""
    try:
        return session.select_alternative(index)
    except InvalidTransitionError as e:
        raise _conflict(e)
    except IndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{session_id}/approve", response_model=SessionStateResponse)
async def approve_plan(
    plan: TreatmentRecommendation,
    session: ClinicalReviewSession = Depends(get_review_session),
):
    """Approve the (possibly edited) plan and move to the summary step."""
    try:
        session.approve(plan)
    except InvalidTransitionError as e:
        raise _conflict(e)
    return session.to_state()


@router.post("/{session_id}/reject", response_model=RejectResponse)
async def reject_plan(session: ClinicalReviewSession = Depends(get_review_session)):
    """Reject the plan. The session is reset to intake with its log cleared."""
    try:
        entry = session.reject()
    except InvalidTransitionError as e:
        raise _conflict(e)
    return RejectResponse(rejection=entry, session=session.to_state())


@router.post("/{session_id}/restart", response_model=SessionStateResponse)
async def restart_session(session: ClinicalReviewSession = Depends(get_review_session)):
    """Discard all state and begin a fresh intake."""
    session.restart()
    return session.to_state()


@router.post("/{session_id}/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    session: ClinicalReviewSession = Depends(get_review_session),
):
    """Ask the clinical assistant about the case under review."""
    try:
        reply = await session.ask_assistant(request.message)
    except (InvalidTransitionError, SessionResetError) as e:
        raise _conflict(e)
    except AssistantUnavailableError as e:
        logger.error(f"Assistant failed for session {session.session_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=ASSISTANT_FALLBACK
        )
    return ChatResponse(reply=reply)


@router.post("/{session_id}/handout", response_model=HandoutResponse)
async def handout(session: ClinicalReviewSession = Depends(get_review_session)):
    """Patient-readable markdown handout for the approved (or proposed) plan."""
    try:
        content = await session.patient_handout()
    except (InvalidTransitionError, SessionResetError) as e:
        raise _conflict(e)
    except AssistantUnavailableError as e:
        logger.error(f"Handout failed for session {session.session_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=HANDOUT_FALLBACK
        )
    return HandoutResponse(content=content)


@router.get("/{session_id}/export", response_model=ComplianceRecord)
async def export_record(session: ClinicalReviewSession = Depends(get_review_session)):
    """Download the compliance record as a JSON attachment."""
    try:
        record = session.export_record()
    except InvalidTransitionError as e:
        raise _conflict(e)

    return JSONResponse(
        content=record.model_dump(mode="json", by_alias=True),
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(record)}"'
        },
    )
