import sys
from datetime import datetime, timezone

from settings import LOG_FILE


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _to_console(text: str, stream=None) -> None:
    """
    Write text to the console without ever raising.

    Feedback and model replies are arbitrary Unicode, so a console that
    cannot encode a character (ascii, cp1252) gets an escaped copy instead.
    """
    stream = stream if stream is not None else sys.stdout
    try:
        stream.write(text)
    except UnicodeEncodeError:
        encoding = getattr(stream, "encoding", None) or "ascii"
        try:
            stream.write(text.encode(encoding, errors="backslashreplace").decode(encoding))
        except (LookupError, OSError, ValueError):
            pass
    except (OSError, ValueError):
        # Closed or detached stream: the file log still gets the line
        pass


def _to_file(text: str) -> None:
    try:
        with open(LOG_FILE, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        _to_console(f"Warning: Failed to write to log file: {e}\n", sys.stderr)


def log(message: str, end: str = "\n") -> None:
    """
    Echo a message to the console and append it, timestamped, to LOG_FILE.

    Logging sits on the classification and submission paths, so it never
    raises: encoding and I/O problems degrade the output, not the caller.
    """
    _to_console(f"{message}{end}")

    # Blank lines stay blank in the file
    stamp = f"[{_now()}] " if message.strip() else ""
    _to_file(f"{stamp}{message}{end}")


def log_separator():
    log("=" * 60)


def log_session_start(name: str):
    log_separator()
    log(f"{name} started: {_now()}")
    log_separator()


def log_session_end(name: str):
    log_separator()
    log(f"{name} ended: {_now()}")
    log_separator()
    log("")
