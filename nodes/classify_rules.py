from langchain_core.runnables import RunnableConfig

from src.models import ClassificationState, ClassificationResult, KeywordSets

DEFAULT_KEYWORDS = KeywordSets(
    # Blocking, security, payment, revenue, outage, cannot access
    red=(
        "cannot access", "broken", "down", "outage", "critical", "security", "vulnerability",
        "payment", "transaction", "revenue", "data loss", "exposed", "authentication failure",
        "threatening to cancel", "major issues", "completely broken", "completely down",
    ),
    # Praise and minor suggestions
    green=(
        "love", "great", "helpful", "nice", "good", "excellent", "awesome", "wonderful",
        "minor suggestion", "could we add", "would love", "maybe we could",
    ),
    # Typos, spelling, small changes, quick fixes
    easy_win=(
        "typo", "spelling", "grammar", "recieve", "recieved", "quick fix", "small change", "small issue",
    ),
)

# One fixed sentence per tier, independent of which keyword matched
EXPLANATIONS = {
    "RED": "Classified as RED due to critical issue indicators (system outage, security concern, or revenue impact).",
    "GREEN": "Classified as GREEN due to positive feedback or low-priority suggestion.",
    "YELLOW": "Classified as YELLOW - important but non-blocking issue or feature request.",
}


def _matches(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_rules(text: str, keywords: KeywordSets = DEFAULT_KEYWORDS) -> ClassificationResult:
    """
    Classify feedback by keyword matching.

    Always succeeds. RED wins over GREEN when both match; YELLOW when neither does.
    easy_win is decided independently of the tier.
    """
    lowered = text.lower()

    if _matches(lowered, keywords.red):
        level = "RED"
    elif _matches(lowered, keywords.green):
        level = "GREEN"
    else:
        level = "YELLOW"

    return ClassificationResult(
        escalation_level=level,
        explanation=EXPLANATIONS[level],
        easy_win=_matches(lowered, keywords.easy_win),
    )


def rules(state: ClassificationState, config: RunnableConfig) -> dict:
    """Graph node: deterministic fallback path."""
    keywords = config.get("configurable", {}).get("keywords") or DEFAULT_KEYWORDS
    result = classify_rules(state["text"], keywords)

    return {
        "result": result,
        "path": "rules",
    }
