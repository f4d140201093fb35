CLASSIFIER_SYSTEM_PROMPT = "You are a helpful assistant that classifies feedback. Always respond with valid JSON only."

# Filled with str.format(feedback=...), literal braces are doubled
CLASSIFIER_USER_PROMPT = """You are a feedback classification system. Analyze the following feedback and classify it into one of three escalation levels:

ESCALATION LEVELS:
- RED: Critical issues requiring immediate attention (bugs, security issues, data loss, service outages, severe user frustration)
- YELLOW: Important issues that should be addressed soon (feature requests, moderate bugs, usability concerns). Important but not blocking.
- GREEN: Low priority items (nice-to-have features, minor suggestions, positive feedback)

EASY WIN:
Also determine if this is an "easy win" - something that can be fixed or implemented quickly with minimal effort (typos, copy changes, small tweaks).

Feedback: "{feedback}"

Respond with a JSON object in this exact format and nothing else:
{{
  "escalation_level": "RED" | "YELLOW" | "GREEN",
  "explanation": "A one-sentence explanation of why this classification was chosen",
  "easy_win": true | false
}}

Use the literal tokens RED, YELLOW or GREEN in upper case for escalation_level.
"""
