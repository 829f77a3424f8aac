"""Helpers for the Arabic / English / French designation triplets.

French is the canonical language: lookups for an unknown or missing language
fall back to it. Works on any object exposing ``designation_{ar,en,fr}`` and
``acronym_{ar,en,fr}`` attributes (Structure, StructureType).
"""

from typing import Protocol

LANGUAGES: tuple[str, ...] = ("ar", "en", "fr")


class Multilingual(Protocol):
    designation_ar: str | None
    designation_en: str | None
    designation_fr: str | None
    acronym_ar: str | None
    acronym_en: str | None
    acronym_fr: str | None


def _has_text(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def designation_for(entity: Multilingual, language: str | None) -> str | None:
    """Return the designation in ``language``, defaulting to French."""
    if language is None or language.lower() not in LANGUAGES:
        return entity.designation_fr
    return getattr(entity, f"designation_{language.lower()}")


def acronym_for(entity: Multilingual, language: str | None) -> str | None:
    """Return the acronym in ``language``, defaulting to French."""
    if language is None or language.lower() not in LANGUAGES:
        return entity.acronym_fr
    return getattr(entity, f"acronym_{language.lower()}")


def display_text(entity: Multilingual) -> str:
    """First non-blank designation in fr → en → ar order, else ``"N/A"``."""
    for value in (entity.designation_fr, entity.designation_en, entity.designation_ar):
        if _has_text(value):
            return value  # type: ignore[return-value]
    return "N/A"


def available_languages(entity: Multilingual) -> list[str]:
    """Languages for which a non-blank designation is present."""
    return [
        lang for lang in LANGUAGES if _has_text(getattr(entity, f"designation_{lang}"))
    ]


def is_multilingual(entity: Multilingual) -> bool:
    return len(available_languages(entity)) > 1
