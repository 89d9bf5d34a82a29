# patchforge/utils/__init__.py
from .text import cleanup_patch_text, detect_eol, normalize_eol

__all__ = [
    "cleanup_patch_text",
    "detect_eol",
    "normalize_eol",
]
