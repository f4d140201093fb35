"""
Prompt templates for Feedback Pulse.
"""

from prompts.prompt_classify import CLASSIFIER_SYSTEM_PROMPT, CLASSIFIER_USER_PROMPT

__all__ = [
    "CLASSIFIER_SYSTEM_PROMPT",
    "CLASSIFIER_USER_PROMPT",
]
