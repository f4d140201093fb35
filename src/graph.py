from typing import Any

from langgraph.graph import StateGraph, START, END

from src.models import ClassificationState, ClassificationResult, KeywordSets
from nodes.classify_model import model
from nodes.classify_rules import rules, DEFAULT_KEYWORDS
from src.logger import log


def _route_after_model(state: ClassificationState) -> str:
    return END if state.get("result") is not None else "rules"


def create_graph():
    """
    Create the classification workflow graph.

    model → END when the model produced a valid result,
    model → rules → END otherwise. The rules node cannot fail,
    so every run ends with a result.
    """
    workflow = StateGraph(ClassificationState)

    workflow.add_node("model", model)
    workflow.add_node("rules", rules)

    workflow.add_edge(START, "model")
    workflow.add_conditional_edges(
        "model",
        _route_after_model,
        {END: END, "rules": "rules"},
    )
    workflow.add_edge("rules", END)

    # No checkpointer: a run never pauses and keeps nothing between calls
    return workflow.compile()


# Compiled once; per-call inputs travel in the config
_graph = create_graph()


def classify(text: str, capability: Any = None, keywords: KeywordSets = DEFAULT_KEYWORDS) -> ClassificationResult:
    """
    Classify one piece of feedback. Never raises for classifier problems.

    Args:
        text: Non-empty, already trimmed feedback text
        capability: Text-generation capability (e.g. ChatAnthropic), or None for local mode
        keywords: Keyword sets for the rule-based fallback

    Returns:
        ClassificationResult from the model when it answered correctly,
        otherwise from the rule-based classifier.
    """
    config = {"configurable": {"capability": capability, "keywords": keywords}}
    initial_state = {
        "text": text,
        "result": None,
        "failure": None,
        "path": None,
    }

    final_state = _graph.invoke(initial_state, config)

    if final_state["path"] == "rules":
        log(f"AI classification unavailable, using rule-based classifier: {final_state['failure']}")

    return final_state["result"]
