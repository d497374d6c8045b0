"""LLM configuration for the OpenAI-compatible chat completions API.

Model assignments:
  Intake analysis     -> strict JSON output, low temperature
  Clinical assistant  -> free-form Q&A over the patient + plan context
  Patient handout     -> plain-language markdown
"""

from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from app.config.settings import settings
from pydantic import SecretStr
import logging

logger = logging.getLogger(__name__)


def _create_model(
    model_name: str, temperature: float, json_mode: bool = False
) -> BaseChatModel:
    """Instantiate a ChatOpenAI client for the configured endpoint."""
    logger.info(f"Creating chat model client: {model_name} (json_mode={json_mode})")
    model_kwargs = {}
    if json_mode:
        model_kwargs["response_format"] = {"type": "json_object"}

    return ChatOpenAI(
        base_url=settings.openai_base_url,
        api_key=SecretStr(settings.openai_api_key),
        model=model_name,
        temperature=temperature,
        max_completion_tokens=settings.model_max_tokens,
        model_kwargs=model_kwargs,
    )


def get_analysis_model() -> BaseChatModel:
    """Intake analysis: structured ClinicalAnalysis JSON."""
    return _create_model(
        settings.analysis_model_name,
        settings.analysis_temperature,
        json_mode=True,
    )


def get_assistant_model() -> BaseChatModel:
    """Clinical assistant chat: concise answers to the reviewing clinician."""
    return _create_model(settings.assistant_model_name, settings.assistant_temperature)


def get_handout_model() -> BaseChatModel:
    """Patient handout: plain-language markdown for the primary plan."""
    return _create_model(settings.assistant_model_name, settings.assistant_temperature)
