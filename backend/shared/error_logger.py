"""
Error logging utility for ingestion and notification dispatch.

Logs processing errors to timestamped files for debugging.
"""

import os
import threading
from datetime import datetime
from typing import Any

_write_lock = threading.Lock()


def _log_dir() -> str:
    default_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "logs")
    return os.getenv("ALERTS_LOG_DIR") or default_dir


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log an error to a timestamped file.

    Args:
        error_type: Type of error ('ingestion', 'preferences', 'matching', 'sending', 'events')
        error_message: The error message
        context: Optional dictionary with additional context (publication_number, subscriber_id, etc.)

    Returns:
        Path to the log file written
    """
    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep concurrent sweep workers from sharing a file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"{error_type}_error_{timestamp}.txt")

    with _write_lock, open(filename, "a", encoding="utf-8") as f:
        f.write(f"Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename
