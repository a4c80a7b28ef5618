"""Display formatting helpers."""


def format_number(num: float) -> str:
    """Compact display form: 1234567 -> "1.2M", 61000 -> "61.0K"."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}K"
    return str(num)
