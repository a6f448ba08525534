"""
Player name helpers: URL slugs and alias variants used to match player
names coming from external sources.
"""
import re
import unicodedata
from typing import Dict, List


def remove_diacritics(text: str) -> str:
    normalized = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in normalized if unicodedata.category(ch) != "Mn")


def create_player_slug(full_name: str) -> str:
    """'Gaël Monfils' -> 'gael-monfils'"""
    slug = remove_diacritics(str(full_name or "")).lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def generate_player_aliases(name: str) -> List[Dict[str, str]]:
    """
    Generate alias payloads for a player's display name.

    Returns a list of {"alias_text": ...} dicts suitable for the alias
    collection, without duplicates and in a stable order.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        return []

    variants = [cleaned, cleaned.lower(), cleaned.upper()]
    plain = remove_diacritics(cleaned)
    variants += [plain, plain.lower()]

    parts = cleaned.split()
    if len(parts) >= 2:
        first, last = parts[0], parts[-1]
        variants += [
            f"{last}, {first}",
            f"{first[0]}. {last}",
            f"{first} {last[0]}.",
            f"{first} {last}",
            "-".join(parts),
            cleaned.replace("-", " "),
        ]

    seen = []
    for variant in variants:
        if variant and variant not in seen:
            seen.append(variant)
    return [{"alias_text": alias} for alias in seen]
