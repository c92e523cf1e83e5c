"""Formatting utilities for terminal display."""


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Returns:
        Formatted string (e.g., "4.2 GB", "128.0 MB", "1.5 KB").
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.1f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.1f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.1f} KB"
    else:
        return f"{size_bytes} B"


def truncate_filename(filename: str, max_length: int = 40) -> str:
    """Truncate filename preserving start and extension.

    If truncation is needed, shows: beginning…extension

    Examples:
        >>> truncate_filename("01 - some very long track title.flac", 20)
        '01 - some very….flac'
        >>> truncate_filename("short.flac", 40)
        'short.flac'
    """
    if not filename or len(filename) <= max_length:
        return filename

    dot_index = filename.rfind(".")
    if dot_index > 0:
        extension = filename[dot_index:]
        base = filename[:dot_index]
    else:
        extension = ""
        base = filename

    # 1 char for the ellipsis
    available_for_base = max_length - len(extension) - 1

    if available_for_base < 1:
        return filename[: max_length - 1] + "…"

    return base[:available_for_base] + "…" + extension
