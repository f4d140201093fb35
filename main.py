import json
import sys
from dotenv import load_dotenv

load_dotenv()

from src.graph import classify
from src.store import FeedbackStore
from src.dashboard import group_by_level, count_easy_wins
from src.models import ESCALATION_LEVELS
from src.logger import log, log_session_start, log_session_end
from nodes.classify_model import create_capability
from settings import DEFAULT_DATABASE_FILE, DEFAULT_HOST, DEFAULT_PORT

# Sample submissions used by `seed` when no file is given
SAMPLE_FEEDBACK = [
    "Multiple enterprise customers cannot access their accounts due to authentication failures. Revenue is at risk and they are threatening to cancel.",
    "Critical security vulnerability detected - user data is being exposed in API responses without proper authentication checks.",
    "Payment processing is completely down for the past 2 hours. No transactions are going through and customers are unable to complete purchases.",
    "The search functionality is really slow and sometimes returns no results even when I know the data exists. Makes it frustrating to find what I need.",
    "The dashboard is confusing - I cannot figure out how to export my reports. Spent 30 minutes trying to find the export button.",
    "Mobile app crashes whenever I try to upload files larger than 10MB. Need to use desktop version every time which is inconvenient.",
    "Feature request: Would be great to have bulk edit capabilities for managing multiple items at once. Currently have to edit them one by one.",
    "Love the new dark mode feature! It is exactly what we needed and makes working late nights much easier on the eyes.",
    "The onboarding tutorial was really helpful and well-designed. Made it super easy to get started with the platform.",
    "Minor suggestion: Could we add more color themes for the dashboard? The current blue is nice but would love more customization options.",
]


def load_feedback_file(path: str) -> list[str]:
    """
    Load feedback texts from a JSON array.

    Items may be plain strings or objects with a "feedback" field,
    matching the API request body.
    """
    try:
        with open(path) as f:
            items = json.load(f)
    except FileNotFoundError:
        log(f"Error: Input file not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        log(f"Error: Invalid JSON in {path}: {e}")
        sys.exit(1)

    if not isinstance(items, list):
        log(f"Error: {path} must contain a JSON array of feedback items")
        sys.exit(1)

    texts = []
    for i, item in enumerate(items):
        text = item.get("feedback") if isinstance(item, dict) else item
        if not isinstance(text, str) or not text.strip():
            log(f"Error: Item at index {i} has no feedback text")
            sys.exit(1)
        texts.append(text.strip())

    return texts


def run_classify(text: str) -> None:
    text = text.strip()
    if not text:
        log("Error: Feedback text is required")
        sys.exit(1)

    result = classify(text, create_capability())
    log(json.dumps(result.model_dump(), indent=2))


def run_seed(db_path: str, input_path: str = None) -> None:
    texts = load_feedback_file(input_path) if input_path else SAMPLE_FEEDBACK

    store = FeedbackStore(db_path)
    store.initialize()
    capability = create_capability()

    log(f"Submitting {len(texts)} feedback items to {db_path}")
    for i, text in enumerate(texts, 1):
        log(f"\n[{i}/{len(texts)}] {text[:80]}")
        result = classify(text, capability)
        feedback_id = store.add(text, result)
        log(f"  ✓ #{feedback_id} classified as: {result.escalation_level} (Easy Win: {result.easy_win})")

    log(f"\nAll feedback submitted. Run `python main.py serve --db {db_path}` to view the dashboard.")


def run_stats(db_path: str) -> None:
    store = FeedbackStore(db_path)
    store.initialize()
    grouped = group_by_level(store.list_feedback())
    total = sum(len(items) for items in grouped.values())

    if total == 0:
        log("No feedback stored yet.")
        log("\nSubmit some first:")
        log("  python main.py seed")
        return

    log(f"\n{'═' * 50}")
    log(f"FEEDBACK SUMMARY - {db_path}")
    log(f"({total} items)")
    log(f"{'═' * 50}")
    for level in ESCALATION_LEVELS:
        count = len(grouped[level])
        log(f"{level:<8} {count:>4} ({100 * count / total:.1f}%)")
    log(f"{'─' * 50}")
    log(f"Easy wins {count_easy_wins(grouped):>3}")


def run_serve(db_path: str, host: str, port: int) -> None:
    from app import create_app

    app = create_app(FeedbackStore(db_path), create_capability())
    log(f"Dashboard: http://{host}:{port}/")
    log(f"Submit feedback: POST http://{host}:{port}/api/feedback")
    app.run(host=host, port=port, threaded=True)


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description="Classify user feedback into RED / YELLOW / GREEN and flag easy wins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API and dashboard
  python main.py serve --port 8787

  # Classify a single piece of feedback
  python main.py classify "Payment processing is completely down"

  # Store the bundled sample feedback, or your own JSON array
  python main.py seed
  python main.py seed --input feedback.json

  # Counts per escalation level
  python main.py stats
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the feedback API and dashboard")
    serve_parser.add_argument("--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})")
    serve_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})")
    serve_parser.add_argument("--db", default=DEFAULT_DATABASE_FILE, help=f"SQLite file (default: {DEFAULT_DATABASE_FILE})")

    classify_parser = subparsers.add_parser("classify", help="Classify one piece of feedback and print the result")
    classify_parser.add_argument("text", help="Feedback text")

    seed_parser = subparsers.add_parser("seed", help="Classify and store sample feedback")
    seed_parser.add_argument("--input", help="JSON array of feedback (default: bundled samples)")
    seed_parser.add_argument("--db", default=DEFAULT_DATABASE_FILE, help=f"SQLite file (default: {DEFAULT_DATABASE_FILE})")

    stats_parser = subparsers.add_parser("stats", help="Print counts per escalation level")
    stats_parser.add_argument("--db", default=DEFAULT_DATABASE_FILE, help=f"SQLite file (default: {DEFAULT_DATABASE_FILE})")

    args = parser.parse_args()

    if args.command == "classify":
        run_classify(args.text)
        return

    if args.command == "stats":
        run_stats(args.db)
        return

    session = "Feedback Pulse server" if args.command == "serve" else "Feedback seeding"
    log_session_start(session)
    try:
        if args.command == "serve":
            run_serve(args.db, args.host, args.port)
        else:
            run_seed(args.db, args.input)
    finally:
        log_session_end(session)


if __name__ == "__main__":
    main()
