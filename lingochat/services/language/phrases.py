"""Static English/Tamil phrase table used by the lookup translator.

The table is immutable and injected into ``LookupTranslator`` at construction;
nothing reads it as module-level mutable state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_PHRASE_PAIRS: tuple[tuple[str, str], ...] = (
    ("hello", "வணக்கம்"),
    ("how are you", "நீங்கள் எப்படி இருக்கிறீர்கள்"),
    ("good morning", "காலை வணக்கம்"),
    ("good night", "இனிய இரவு"),
    ("thank you", "நன்றி"),
    ("welcome", "வரவேற்கிறோம்"),
    ("yes", "ஆம்"),
    ("no", "இல்லை"),
    ("what is your name", "உங்கள் பெயர் என்ன"),
    ("my name is", "என் பெயர்"),
    ("how is the weather", "வானிலை எப்படி உள்ளது"),
    ("i like this app", "எனக்கு இந்த ஆப் பிடித்துள்ளது"),
    ("nice to meet you", "உங்களை சந்தித்ததில் மகிழ்ச்சி"),
    ("what are you doing", "நீங்கள் என்ன செய்கிறீர்கள்"),
    ("i am learning tamil", "நான் தமிழ் கற்றுக்கொள்கிறேன்"),
    ("see you later", "பின்னர் பார்க்கலாம்"),
)


@dataclass(frozen=True)
class PhraseTable:
    """Two independent read-only mappings, one per direction.

    ``en_to_ta`` is keyed on lowercased English; ``ta_to_en`` on exact Tamil.
    """

    en_to_ta: Mapping[str, str]
    ta_to_en: Mapping[str, str]

    @classmethod
    def from_mappings(
        cls, en_to_ta: Mapping[str, str], ta_to_en: Mapping[str, str]
    ) -> PhraseTable:
        return cls(
            en_to_ta=MappingProxyType({k.lower(): v for k, v in en_to_ta.items()}),
            ta_to_en=MappingProxyType(dict(ta_to_en)),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> PhraseTable:
        """Build a symmetric table from (english, tamil) pairs."""
        pairs = list(pairs)
        return cls.from_mappings(
            en_to_ta={en: ta for en, ta in pairs},
            ta_to_en={ta: en for en, ta in pairs},
        )


DEFAULT_PHRASE_TABLE = PhraseTable.from_pairs(DEFAULT_PHRASE_PAIRS)
