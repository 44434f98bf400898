"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now_exact() -> str:
    """
    Current UTC time in the ISO 8601 form browsers emit for Date.toISOString().

    Example: "2025-11-13T18:45:40.572Z"
    """
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def parse_timestamp(iso_timestamp: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing "Z" for UTC."""
    if iso_timestamp.endswith("Z"):
        iso_timestamp = iso_timestamp[:-1] + "+00:00"
    return datetime.fromisoformat(iso_timestamp)


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572Z")
        # "2025-11-13 18:45:40"

        format_timestamp("2025-11-13T18:45:40.572Z", relative=True)
        # "2h ago"
    """
    try:
        dt = parse_timestamp(iso_timestamp)

        if relative:
            return _format_relative_time(dt)
        else:
            return dt.strftime("%Y-%m-%d %H:%M:%S")

    except (ValueError, AttributeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    diff = datetime.now(dt.tzinfo) - dt

    # Future times
    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"


def format_month(date_string: str) -> str:
    """
    Format a form date as "Mon YYYY" (e.g., "2023-06" or "2023-06-15" -> "Jun 2023").

    Empty input gives ""; unrecognised input is returned unchanged.
    """
    if not date_string:
        return ""

    for fmt in ("%Y-%m-%d", "%Y-%m"):
        try:
            return datetime.strptime(date_string[:10], fmt).strftime("%b %Y")
        except ValueError:
            continue
    return date_string
