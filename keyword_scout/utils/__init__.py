# Utility helpers
from .formatting import format_number

__all__ = ["format_number"]
