"""
Human-readable renderings of byte counts and durations for log lines and the
run summary.
"""

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(bytes_size: float) -> str:
    """Formats a byte count with binary multiples, e.g. 1536 -> '1.5 KB'."""
    if bytes_size <= 0:
        return "0 B"
    size = float(bytes_size)
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def format_duration(seconds: float) -> str:
    """Formats whole seconds as e.g. '1h 2m 5s', dropping zero components."""
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    parts = [f"{value}{unit}" for value, unit in ((hours, "h"), (minutes, "m")) if value]
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
