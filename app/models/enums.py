"""Clinical workflow enums."""

from enum import Enum


class Gender(str, Enum):
    """Patient gender as captured at intake."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class RiskLevel(str, Enum):
    """Overall risk classification of a proposed treatment."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Severity(str, Enum):
    """Severity of a single interaction warning."""

    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class WarningSource(str, Enum):
    """Where an interaction warning came from."""

    AI_MODEL = "AI_MODEL"  # Produced by the analysis model
    DRUG_DB = "DRUG_DB"  # Produced by the deterministic rule table


class AuditAction(str, Enum):
    """Workflow transitions recorded in the compliance log."""

    INTAKE_SUBMITTED = "INTAKE_SUBMITTED"
    ANALYSIS_GENERATED = "ANALYSIS_GENERATED"
    PLAN_MODIFIED = "PLAN_MODIFIED"
    PLAN_APPROVED = "PLAN_APPROVED"
    PLAN_REJECTED = "PLAN_REJECTED"


class WorkflowStep(str, Enum):
    """Review session step."""

    INTAKE = "intake"
    REVIEW = "review"
    SUMMARY = "summary"


class ChatRole(str, Enum):
    """Speaker of a clinical assistant message."""

    USER = "user"
    MODEL = "model"
