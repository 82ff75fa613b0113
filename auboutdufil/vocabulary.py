"""Filter vocabulary translation.

Callers use several spellings for the same license or mood (short slugs,
Creative Commons style names with dashes, French words). The catalog only
understands one spelling per value. Lookups are case-insensitive; a value
that isn't in a table is returned unchanged, since the catalog may still
accept it.
"""

LICENSE_ALIASES: dict[str, str] = {
    "by": "cc-by",
    "cc-by": "cc-by",
    "by-sa": "cc-bysa",
    "bysa": "cc-bysa",
    "cc-by-sa": "cc-bysa",
    "cc-bysa": "cc-bysa",
    "by-nd": "cc-bynd",
    "bynd": "cc-bynd",
    "cc-by-nd": "cc-bynd",
    "cc-bynd": "cc-bynd",
    "by-nc": "cc-bync",
    "bync": "cc-bync",
    "cc-by-nc": "cc-bync",
    "cc-bync": "cc-bync",
    "by-nc-sa": "cc-byncsa",
    "byncsa": "cc-byncsa",
    "cc-by-nc-sa": "cc-byncsa",
    "cc-byncsa": "cc-byncsa",
    "by-nc-nd": "cc-byncnd",
    "byncnd": "cc-byncnd",
    "cc-by-nc-nd": "cc-byncnd",
    "cc-byncnd": "cc-byncnd",
    "zero": "cc0",
    "cc-zero": "cc0",
    "cc0": "cc0",
    "pd": "cc0",
    "lal": "art-libre",
    "art-libre": "art-libre",
    "licence-art-libre": "art-libre",
}

MOOD_ALIASES: dict[str, str] = {
    "calme": "calm",
    "chill": "calm",
    "relax": "calm",
    "relaxing": "calm",
    "calm": "calm",
    "triste": "sad",
    "melancholic": "sad",
    "melancolique": "sad",
    "sad": "sad",
    "joyeux": "happy",
    "joyful": "happy",
    "upbeat": "happy",
    "happy": "happy",
    "energique": "energetic",
    "energy": "energetic",
    "energetic": "energetic",
    "sombre": "dark",
    "dark": "dark",
    "romantique": "romantic",
    "romantic": "romantic",
    "epique": "epic",
    "epic": "epic",
}


def _translate(value: str, table: dict[str, str]) -> str:
    return table.get(value.strip().lower(), value)


def canonical_license(value: str) -> str:
    return _translate(value, LICENSE_ALIASES)


def canonical_mood(value: str) -> str:
    return _translate(value, MOOD_ALIASES)
