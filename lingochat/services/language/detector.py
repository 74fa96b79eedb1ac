"""Script-based language detection for the two supported languages."""

import re
from enum import Enum


class Language(str, Enum):
    """Supported language tags."""

    EN = "en"
    TA = "ta"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {Language.EN: "English", Language.TA: "Tamil"}

# Tamil Unicode block.
_TAMIL_RANGE = re.compile(r"[\u0B80-\u0BFF]")


def detect_language(text: str) -> Language:
    """Return ``ta`` if any character falls in the Tamil block, else ``en``."""
    if _TAMIL_RANGE.search(text):
        return Language.TA
    return Language.EN
