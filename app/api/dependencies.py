"""FastAPI dependencies for clinician identity and session lookup.

There is no authentication. The acting clinician is taken from the
``X-Clinician-Name`` header when a session is created, falling back to
``settings.default_clinician``.
"""

from typing import Optional

from fastapi import Header, HTTPException, status
from app.config.settings import settings
from app.services.session_service import ClinicalReviewSession, get_session_service
import logging

logger = logging.getLogger(__name__)


async def get_clinician(
    x_clinician_name: Optional[str] = Header(default=None),
) -> str:
    """Return the acting clinician's display name."""
    name = (x_clinician_name or "").strip()
    return name or settings.default_clinician


async def get_review_session(session_id: str) -> ClinicalReviewSession:
    """Resolve the ``session_id`` path parameter.

    Raises:
        HTTP 404 - if no such session exists in this process
    """
    session = get_session_service().get_session(session_id)
    if session is None:
        logger.debug("Session not found: %s", session_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return session
