"""Human-readable sizes and durations for CLI output"""

_SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB']


def format_file_size(num_bytes: int) -> str:
    """Format a byte count, e.g. 1536 -> '1.5 KB'"""
    if num_bytes <= 0:
        return '0 Bytes'
    k = 1024
    i = 0
    while i < len(_SIZE_UNITS) - 1 and num_bytes >= k ** (i + 1):
        i += 1
    value = round(num_bytes / k ** i, 2)
    # '2 KB' rather than '2.0 KB'
    if value == int(value):
        value = int(value)
    return f"{value} {_SIZE_UNITS[i]}"


def format_duration(seconds: float) -> str:
    """Format seconds as m:ss"""
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"
