"""
Logging utilities for the BOM availability enricher.

Implements the dual logging pattern:
- User-friendly messages to an optional status callback
- Detailed technical logs to console and file
"""

import logging
from typing import Callable, Optional


_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "debug": logging.DEBUG,
    "info": logging.INFO,
}


def log_and_status(
    status_fn: Optional[Callable],
    msg: str,
    level: str = "info",
    ui_msg: Optional[str] = None
):
    """
    Log to file/console and update the status callback.

    Args:
        status_fn: Status callback function (None for CLI runs)
        msg: Detailed technical message for logs
        level: Log level ("info", "warning", "error", "debug")
        ui_msg: User-friendly message for the callback (defaults to msg)
    """
    if ui_msg is None:
        ui_msg = msg

    logging.log(_LEVELS.get(level, logging.INFO), msg)

    if status_fn:
        try:
            status_fn(ui_msg)
        except Exception as e:
            logging.warning(f"Status update failed: {e}")


def log_section_header(status_fn: Optional[Callable], title: str):
    """
    Log a section header.

    Args:
        status_fn: Status callback function
        title: Section title
    """
    banner = f"{'=' * 60}\n{title}\n{'=' * 60}"
    log_and_status(status_fn, banner, ui_msg=banner)


def log_progress(
    status_fn: Optional[Callable],
    current: int,
    total: int,
    item_name: str,
    details: Optional[str] = None
):
    """
    Log progress update.

    Args:
        status_fn: Status callback function
        current: Current item number (1-based)
        total: Total items
        item_name: Name of item being processed
        details: Additional technical details for logs
    """
    ui_msg = f"[{current}/{total}] {item_name}"
    tech_msg = ui_msg
    if details:
        tech_msg += f" | {details}"

    log_and_status(status_fn, tech_msg, ui_msg=ui_msg)


def log_warning(
    status_fn: Optional[Callable],
    msg: str,
    details: Optional[str] = None
):
    """
    Log warning message.

    Args:
        status_fn: Status callback function
        msg: User-friendly warning message
        details: Additional technical details for logs
    """
    tech_msg = f"WARNING: {msg}"
    if details:
        tech_msg += f" | {details}"

    log_and_status(status_fn, tech_msg, level="warning", ui_msg=f"⚠ {msg}")


def log_error(
    status_fn: Optional[Callable],
    msg: str,
    details: Optional[str] = None,
    exc: Optional[Exception] = None
):
    """
    Log error message.

    Args:
        status_fn: Status callback function
        msg: User-friendly error message
        details: Additional technical details for logs
        exc: Exception object for stack trace logging
    """
    tech_msg = f"ERROR: {msg}"
    if details:
        tech_msg += f" | {details}"
    if exc:
        tech_msg += f" | Exception: {type(exc).__name__}: {exc}"
        logging.error(tech_msg, exc_info=exc)
    else:
        logging.error(tech_msg)

    if status_fn:
        try:
            status_fn(f"❌ {msg}")
        except Exception as e:
            logging.warning(f"Status update failed: {e}")


def log_summary(
    status_fn: Optional[Callable],
    title: str,
    stats: dict
):
    """
    Log completion summary with statistics.

    Args:
        status_fn: Status callback function
        title: Summary title
        stats: Dictionary of statistics to display
    """
    lines = ["=" * 60, title, "=" * 60]
    lines.extend(f"{key}: {value}" for key, value in stats.items())
    lines.append("=" * 60)

    summary_text = "\n".join(lines)
    log_and_status(status_fn, summary_text, ui_msg=summary_text)
