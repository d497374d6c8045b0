"""Utility functions for LLM invocations with timeout handling."""

import asyncio
import logging
import re
from typing import List, Optional
from langchain_core.messages import BaseMessage
from langchain_core.language_models.chat_models import BaseChatModel
from app.config.settings import settings

logger = logging.getLogger(__name__)


async def invoke_llm_with_timeout(
    llm: BaseChatModel,
    messages: List[BaseMessage],
    timeout: Optional[float] = None,
) -> str:
    """
    Invoke an LLM with timeout protection and return its text content.

    Args:
        llm: The language model to invoke
        messages: List of messages to send to the LLM
        timeout: Timeout in seconds (defaults to settings.llm_invoke_timeout)

    Returns:
        Response content as a string (empty if the model returned nothing)

    Raises:
        asyncio.TimeoutError: If the model does not answer in time
        Exception: Whatever the client raised; never retried here
    """
    if timeout is None:
        timeout = settings.llm_invoke_timeout

    logger.info(f"Invoking LLM with timeout: {timeout}s")

    try:
        response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
        logger.info("LLM responded successfully")

    except asyncio.TimeoutError:
        logger.error(f"LLM invocation timed out after {timeout}s")
        raise

    except Exception as e:
        logger.error(f"LLM invocation failed: {e}", exc_info=True)
        raise

    content = response.content
    if not content:
        return ""
    return content if isinstance(content, str) else str(content)


def strip_md_fences(text: str) -> str:
    """Strip markdown code fences that the LLM sometimes wraps JSON in.

    Handles patterns like:
        ```json\\n{...}\\n```
        ```\\n{...}\\n```
    """
    stripped = text.strip()
    match = re.match(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", stripped, re.DOTALL)
    if match:
        return match.group(1).strip()
    return stripped
