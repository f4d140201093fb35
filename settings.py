"""
Configuration for the Feedback Pulse project.
"""

# Model configuration
CLASSIFICATION_MODEL = "claude-haiku-4-5-20251001"  # Tiering a single feedback item is a simple task, a small fast model keeps the submit path responsive
MAX_OUTPUT_TOKENS = 200  # The reply is one small JSON object
CLASSIFICATION_TIMEOUT_SECONDS = 30.0  # A slower model call is treated as unavailable and the rule-based result is used

# Storage
DEFAULT_DATABASE_FILE = "feedback.db"

# Server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8787

# Logging
LOG_FILE = "feedback_pulse.log"
