"""
Pytest configuration and shared fixtures for MediGuard tests.

This module provides:
- Test environment (dummy model API key) set before any app import
- Sample patient records and model responses
- Fake chat models standing in for the OpenAI client
- FastAPI TestClient with a fresh in-memory session registry
"""

import os

# =============================================================================
# ENABLE TEST MODE BEFORE ANY IMPORTS
# =============================================================================
# Settings() requires an API key at import time
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import asyncio
import json
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from app.models.clinical import (
    ClinicalAnalysis,
    InteractionWarning,
    PatientRecord,
    TreatmentRecommendation,
)
from app.models.enums import Severity, WarningSource
import app.services.session_service as session_service_module


# =============================================================================
# FAKE MODELS
# =============================================================================

class FailingChatModel:
    """Chat model stub whose every call fails like an unreachable endpoint."""

    async def ainvoke(self, messages, *args, **kwargs):
        raise ConnectionError("model endpoint unreachable")


class SlowChatModel:
    """Chat model stub that never answers within a short timeout."""

    async def ainvoke(self, messages, *args, **kwargs):
        await asyncio.sleep(5)


class RecordingChatModel:
    """Chat model stub that replies with fixed text and keeps every prompt."""

    def __init__(self, reply: str):
        self.reply = reply
        self.calls = []

    async def ainvoke(self, messages, *args, **kwargs):
        self.calls.append(list(messages))
        return AIMessage(content=self.reply)


class DelayedChatModel:
    """Chat model stub that replies with fixed text after a short delay."""

    def __init__(self, reply: str, delay: float = 0.05):
        self.reply = reply
        self.delay = delay

    async def ainvoke(self, messages, *args, **kwargs):
        await asyncio.sleep(self.delay)
        return AIMessage(content=self.reply)


def fake_model(*responses: str) -> FakeListChatModel:
    return FakeListChatModel(responses=list(responses))


# =============================================================================
# DATA FIXTURES
# =============================================================================

def make_plan(**overrides) -> TreatmentRecommendation:
    data = {
        "medication": "Sildenafil",
        "dosage": "50mg",
        "duration": "As needed, max once daily",
        "rationale": "First-line PDE5 inhibitor for erectile dysfunction.",
        "confidence_score": 85,
    }
    data.update(overrides)
    return TreatmentRecommendation(**data)


def make_analysis(**overrides) -> ClinicalAnalysis:
    data = {
        "risk_level": "Medium",
        "risk_score": 40,
        "summary": "58-year-old male with ED, hypertension and diabetes.",
        "warnings": [
            InteractionWarning(
                severity=Severity.LOW,
                description="Monitor blood pressure.",
                source=WarningSource.AI_MODEL,
            )
        ],
        "contraindications": [],
        "treatment_plan": make_plan(),
        "alternatives": [
            make_plan(
                medication="Tadalafil",
                dosage="5mg",
                duration="Daily",
                confidence_score=70,
            )
        ],
        "lifestyle_recommendations": ["Increase physical activity"],
    }
    data.update(overrides)
    return ClinicalAnalysis(**data)


@pytest.fixture
def patient_payload() -> Dict[str, Any]:
    """Intake payload as the browser sends it (camelCase)."""
    return {
        "id": "12345",
        "age": 58,
        "gender": "Male",
        "weightKg": 95,
        "heightCm": 178,
        "systolicBp": 155,
        "diastolicBp": 95,
        "heartRate": 78,
        "smokingStatus": "Former",
        "alcoholConsumption": "Occasional",
        "exerciseFrequency": "Sedentary",
        "allergies": ["Penicillin"],
        "conditions": ["Hypertension", "Type 2 Diabetes", "Angina"],
        "currentMedications": [
            {"name": "Lisinopril", "dosage": "20mg", "frequency": "Daily"},
            {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily"},
            {
                "name": "Nitroglycerin",
                "dosage": "0.4mg",
                "frequency": "PRN for chest pain",
            },
        ],
        "primaryComplaint": "Erectile Dysfunction",
        "notes": "Symptoms worsening over the last 6 months. Requesting Viagra.",
    }


@pytest.fixture
def patient(patient_payload) -> PatientRecord:
    return PatientRecord.model_validate(patient_payload)


@pytest.fixture
def analysis_payload() -> Dict[str, Any]:
    """Analysis JSON as the model returns it (no warning sources)."""
    return {
        "riskLevel": "Medium",
        "riskScore": 40,
        "summary": "Patient with ED and cardiovascular comorbidities.",
        "warnings": [
            {"severity": "Moderate", "description": "Use caution with antihypertensives."}
        ],
        "contraindications": ["Severe hypotension"],
        "treatmentPlan": {
            "medication": "Sildenafil",
            "dosage": "50mg",
            "duration": "As needed",
            "rationale": "First-line therapy for ED.",
            "confidenceScore": 80,
        },
        "alternatives": [
            {
                "medication": "Vacuum erection device",
                "dosage": "N/A",
                "duration": "As needed",
                "rationale": "Non-pharmacological option.",
                "confidenceScore": 60,
            }
        ],
        "lifestyleRecommendations": ["Weight loss", "Smoking abstinence"],
    }


@pytest.fixture
def analysis_json(analysis_payload) -> str:
    return json.dumps(analysis_payload)


# =============================================================================
# MODEL PATCHING FIXTURES
# =============================================================================

@pytest.fixture
def use_analysis_model(monkeypatch):
    """Install a chat model for intake analysis: use_analysis_model(model)."""
    def _install(model):
        monkeypatch.setattr(
            "app.agents.analysis_agent.get_analysis_model", lambda: model
        )
        return model
    return _install


@pytest.fixture
def use_assistant_model(monkeypatch):
    """Install a chat model for assistant chat and handouts."""
    def _install(model):
        monkeypatch.setattr(
            "app.agents.assistant_agent.get_assistant_model", lambda: model
        )
        monkeypatch.setattr(
            "app.agents.assistant_agent.get_handout_model", lambda: model
        )
        return model
    return _install


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def client(monkeypatch):
    """TestClient with a fresh in-memory session registry."""
    monkeypatch.setattr(session_service_module, "_session_service", None)

    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/api/v1/sessions", headers={"X-Clinician-Name": "Dr. Smith"})
    assert response.status_code == 201
    return response.json()["sessionId"]
