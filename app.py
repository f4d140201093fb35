"""
Feedback Pulse HTTP service.

POST /api/feedback classifies and stores one piece of feedback,
GET / renders the dashboard.
"""

import sqlite3
from typing import Any

from flask import Flask, request, jsonify

from src.graph import classify
from src.store import FeedbackStore
from src.dashboard import render_dashboard
from src.logger import log

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def json_response(data: dict, status: int = 200):
    response = jsonify(data)
    response.status_code = status
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def create_app(store: FeedbackStore, capability: Any = None) -> Flask:
    """
    Build the Flask app around a store and an optional classification capability.

    The store's schema is created here, so a fresh database file works.
    """
    app = Flask(__name__)
    store.initialize()

    @app.before_request
    def handle_preflight():
        # Answers preflight for every path, known or not
        if request.method == "OPTIONS":
            return "", 204, CORS_HEADERS
        return None

    @app.route("/api/feedback", methods=["POST"])
    def submit_feedback():
        body = request.get_json(force=True, silent=True)
        feedback = body.get("feedback") if isinstance(body, dict) else None
        feedback_text = feedback.strip() if isinstance(feedback, str) else ""

        if not feedback_text:
            return json_response({"error": "Feedback text is required"}, 400)

        classification = classify(feedback_text, capability)

        try:
            feedback_id = store.add(feedback_text, classification)
        except sqlite3.Error as e:
            log(f"Error processing feedback: {e}")
            return json_response({"error": "Failed to process feedback", "details": str(e)}, 500)

        log(f"✓ Saved: #{feedback_id} → {classification.escalation_level} (Easy Win: {classification.easy_win})")
        return json_response({
            "success": True,
            "id": feedback_id,
            "classification": classification.model_dump(),
        })

    @app.route("/", methods=["GET"])
    def dashboard():
        try:
            items = store.list_feedback()
        except sqlite3.Error as e:
            log(f"Error loading dashboard: {e}")
            return "Error loading dashboard", 500

        return render_dashboard(items), 200, {"Content-Type": "text/html; charset=utf-8"}

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(error):
        return "Not Found", 404

    return app
