"""Leading-consonant (chosung) hints for Hangul words."""
from __future__ import annotations

HANGUL_BASE = 0xAC00
HANGUL_SYLLABLES = 11172
# 21 medial vowels x 28 final consonants per leading consonant
SYLLABLES_PER_INITIAL = 588

CHOSUNG = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)


def initials(word: str) -> str:
    """Collapse each composed Hangul syllable in *word* to its leading consonant.

    Anything outside the syllable block (spaces, punctuation, digits, Latin,
    bare jamo) passes through unchanged, so ``len(initials(w)) == len(w)``.

    >>> initials("사랑")
    'ㅅㄹ'
    """
    out = []
    for ch in word:
        offset = ord(ch) - HANGUL_BASE
        if 0 <= offset < HANGUL_SYLLABLES:
            out.append(CHOSUNG[offset // SYLLABLES_PER_INITIAL])
        else:
            out.append(ch)
    return "".join(out)
