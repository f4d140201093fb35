"""
SQLite persistence for classified feedback.

A connection is opened per operation, so a FeedbackStore can be shared
between the server's request threads.
"""

import sqlite3
from contextlib import closing

from src.models import ClassificationResult, FeedbackRecord
from settings import DEFAULT_DATABASE_FILE

SCHEMA = """
CREATE TABLE IF NOT EXISTS feedback (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    feedback_text TEXT NOT NULL,
    escalation_level TEXT NOT NULL CHECK(escalation_level IN ('RED', 'YELLOW', 'GREEN')),
    explanation TEXT NOT NULL,
    easy_win INTEGER NOT NULL DEFAULT 0 CHECK(easy_win IN (0, 1)),
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_escalation_level ON feedback(escalation_level);

CREATE INDEX IF NOT EXISTS idx_easy_win ON feedback(easy_win);
"""


class FeedbackStore:
    def __init__(self, path: str = DEFAULT_DATABASE_FILE):
        self.path = path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self.path)
        connection.row_factory = sqlite3.Row
        return connection

    def initialize(self) -> None:
        """Create the feedback table and its indexes if missing."""
        with closing(self._connect()) as connection:
            connection.executescript(SCHEMA)

    def add(self, feedback_text: str, classification: ClassificationResult) -> int:
        """Insert one classified item and return its row id."""
        with closing(self._connect()) as connection:
            with connection:
                cursor = connection.execute(
                    """INSERT INTO feedback (feedback_text, escalation_level, explanation, easy_win)
                       VALUES (?, ?, ?, ?)""",
                    (
                        feedback_text,
                        classification.escalation_level,
                        classification.explanation,
                        1 if classification.easy_win else 0,
                    ),
                )
            return cursor.lastrowid

    def list_feedback(self) -> list[FeedbackRecord]:
        """All feedback, newest first."""
        with closing(self._connect()) as connection:
            rows = connection.execute(
                """SELECT id, feedback_text, escalation_level, explanation, easy_win, created_at
                   FROM feedback
                   ORDER BY created_at DESC, id DESC"""
            ).fetchall()
        return [dict(row) for row in rows]
