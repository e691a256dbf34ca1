# ABOUTME: Canonicalizes raw game titles into lowercase matching keys.
# ABOUTME: Folds diacritics, strips edition/year noise, and collapses punctuation.

import re

from unidecode import unidecode

# Trademark glyphs, removed before transliteration rewrites them.
_TRADEMARK_GLYPH_RE = re.compile(r"[™®©]")
# ASCII spellings of the same marks, as found in some store listings.
_TRADEMARK_ASCII_RE = re.compile(r"\((?:tm|r|c)\)")

# Parenthetical groups that only describe the edition, e.g. "(Deluxe Edition)".
_EDITION_PAREN_RE = re.compile(
    r"\(([^)]*(edition|remaster|remake|collection)[^)]*)\)", re.IGNORECASE
)

# Characters that separate words inside edition phrases ("Game-of-the-Year").
_WORD_GAP = r"[\s:;,.—–\-]+"

# Standalone edition and quality tokens, optionally followed by "edition"/"collection".
_EDITION_RE = re.compile(
    rf"\b(?:game{_WORD_GAP}of{_WORD_GAP}the{_WORD_GAP}year"
    r"|goty|complete|definitive|ultimate|enhanced|deluxe"
    r"|anniversary|royal|collection|remastered|remake)\b"
    rf"(?:{_WORD_GAP}edition\b|{_WORD_GAP}collection\b)?",
    re.IGNORECASE,
)

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

# Punctuation, dashes, brackets and quotes all become word separators.
_SEPARATOR_RE = re.compile(r"[:;,.—–\-\[\](){}\"'`]")

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Normalize a storefront title into a comparable key.

    Steps run in a fixed order because later ones assume earlier cleanup:
    transliterate and lowercase, strip trademark glyphs, drop edition
    parentheticals, drop edition tokens, drop years, turn punctuation into
    spaces, then collapse whitespace. Never raises; empty input yields "".
    """
    text = title.strip()
    if not text:
        return ""

    text = unidecode(_TRADEMARK_GLYPH_RE.sub("", text)).lower()
    text = _TRADEMARK_ASCII_RE.sub("", text)
    text = _EDITION_PAREN_RE.sub(" ", text)
    text = _EDITION_RE.sub(" ", text)
    text = _YEAR_RE.sub(" ", text)
    text = _SEPARATOR_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_key(title: str) -> str:
    """Cache key for a title.

    Falls back to the trimmed, lowercased raw title when normalization strips
    everything (e.g. "(2019)"), so such titles don't share the empty key.
    """
    key = normalize_title(title)
    if key:
        return key
    return title.strip().lower()
