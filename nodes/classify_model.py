import json
import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from anthropic import APIError, APIConnectionError, RateLimitError, APITimeoutError
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import BaseMessage
from langchain_core.runnables import RunnableConfig
from pydantic import ValidationError

from src.errors import ClassifierUnavailable, MalformedResponse
from src.models import (
    ClassificationState, ClassificationResult, ModelReply,
    ModelOutcome, ModelSuccess, ModelFailure,
)
from prompts import CLASSIFIER_SYSTEM_PROMPT, CLASSIFIER_USER_PROMPT
from settings import CLASSIFICATION_MODEL, MAX_OUTPUT_TOKENS, CLASSIFICATION_TIMEOUT_SECONDS
from src.logger import log

NO_EXPLANATION = "No explanation provided"

# Greedy: first "{" through last "}", the model may wrap the object in prose
_JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)

# Checked in order; "response" is the structured field, "text" the generic one
_REPLY_FIELDS = ("response", "content", "text")


def create_capability() -> Optional[ChatAnthropic]:
    """
    Build the text-generation capability, or None when no API key is configured.

    None puts the service in local mode: every request is classified by rules.
    """
    if not os.environ.get("ANTHROPIC_API_KEY"):
        log("ANTHROPIC_API_KEY not set, using rule-based classifier")
        return None

    # Retrying is left to whoever submits the feedback again
    return ChatAnthropic(
        model=CLASSIFICATION_MODEL,
        timeout=CLASSIFICATION_TIMEOUT_SECONDS,
        max_retries=0,
    )


def build_messages(text: str) -> list[dict]:
    return [
        {"role": "system", "content": CLASSIFIER_SYSTEM_PROMPT},
        {"role": "user", "content": CLASSIFIER_USER_PROMPT.format(feedback=text)},
    ]


def _field(reply: Any, name: str) -> Any:
    if isinstance(reply, Mapping):
        return reply.get(name)
    return getattr(reply, name, None)


def _flatten(value: Any) -> Any:
    # Anthropic content blocks: [{"type": "text", "text": "..."}, ...]
    if isinstance(value, list):
        parts = []
        for block in value:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, Mapping) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "".join(parts)
    return value


def extract_reply_text(reply: Any) -> str:
    """
    Pull the text out of a bare string or a structured envelope.

    Falls back to serialising the whole reply so that an envelope which
    already is the classification object can still be parsed.
    """
    if reply is None:
        return ""
    if isinstance(reply, str):
        return reply

    for name in _REPLY_FIELDS:
        value = _flatten(_field(reply, name))
        if isinstance(value, str) and value:
            return value

    # A chat message without text is an empty reply, not something to serialise
    if isinstance(reply, BaseMessage):
        return ""

    try:
        return json.dumps(reply)
    except (TypeError, ValueError):
        return str(reply)


def _is_truthy(value: Any) -> bool:
    # JSON truthiness: empty arrays and objects count as true
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def parse_reply(reply_text: str) -> ModelOutcome:
    """
    Turn the model's text into a validated result or a typed failure.

    Never raises and never returns a half-populated result.
    """
    match = _JSON_SPAN.search(reply_text)
    if not match:
        return ModelFailure(MalformedResponse(f"No JSON found in AI response: {reply_text[:100]}"))

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return ModelFailure(MalformedResponse(f"Invalid JSON in AI response: {e}"))

    if not isinstance(parsed, dict):
        return ModelFailure(MalformedResponse("AI response is not a JSON object"))

    try:
        reply = ModelReply.model_validate(parsed)
    except ValidationError:
        return ModelFailure(MalformedResponse(f"Invalid escalation level: {parsed.get('escalation_level')!r}"))

    explanation = reply.explanation
    if not _is_truthy(explanation) or not str(explanation).strip():
        explanation = NO_EXPLANATION

    return ModelSuccess(ClassificationResult(
        escalation_level=reply.escalation_level,
        explanation=str(explanation),
        easy_win=_is_truthy(reply.easy_win),
    ))


def run_model(text: str, capability: Any) -> ModelOutcome:
    """
    Ask the capability to classify the feedback.

    Returns ModelSuccess with a validated result, or ModelFailure carrying a
    ClassifierUnavailable or MalformedResponse. Makes at most one call.
    """
    if capability is None:
        return ModelFailure(ClassifierUnavailable("AI capability not configured"))

    try:
        reply = capability.invoke(build_messages(text), max_tokens=MAX_OUTPUT_TOKENS)

    except (APIError, APIConnectionError, RateLimitError, APITimeoutError) as e:
        log(f"\n Model classification failed: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")  # Truncate long error messages
        return ModelFailure(ClassifierUnavailable(f"{type(e).__name__}: {str(e)[:200]}"))

    except Exception as e:
        # Anything the capability throws means it is unavailable for this request
        log(f"\n Unexpected model classification error: {type(e).__name__}")
        log(f"    Error: {str(e)[:200]}")
        return ModelFailure(ClassifierUnavailable(f"{type(e).__name__}: {str(e)[:200]}"))

    reply_text = extract_reply_text(reply)
    if not reply_text.strip():
        return ModelFailure(ClassifierUnavailable("Empty AI response"))

    log(f"AI response received: {reply_text[:200]}")
    return parse_reply(reply_text)


def classify_via_model(text: str, capability: Any) -> ClassificationResult:
    """
    Classify with the model only.

    Raises:
        ClassifierUnavailable: capability absent, call failed, or empty reply
        MalformedResponse: no parseable JSON object or invalid escalation_level
    """
    outcome = run_model(text, capability)
    if isinstance(outcome, ModelFailure):
        raise outcome.error
    return outcome.result


def model(state: ClassificationState, config: RunnableConfig) -> dict:
    """Graph node: primary path. Records the failure instead of raising."""
    capability = config.get("configurable", {}).get("capability")
    outcome = run_model(state["text"], capability)

    if isinstance(outcome, ModelFailure):
        return {
            "failure": f"{type(outcome.error).__name__}: {outcome.error}",
        }

    return {
        "result": outcome.result,
        "path": "model",
    }
