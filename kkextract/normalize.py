from __future__ import annotations

from kkextract.vocabulary import (
    CITIZENSHIP_RULES,
    GENDER_RULES,
    MARITAL_RULES,
    RELATION_RULES,
    RELIGION_RULES,
    NormalizationRules,
)


def canonicalize(text: str, rules: NormalizationRules) -> str:
    """Map OCR text to the canonical value of the first matching rule; pass through otherwise."""
    if not text:
        return text
    upper = text.upper()
    for pattern, canonical in rules:
        if pattern.search(upper):
            return canonical
    return text


def normalize_gender(text: str) -> str:
    return canonicalize(text, GENDER_RULES)


def normalize_religion(text: str) -> str:
    return canonicalize(text, RELIGION_RULES)


def normalize_marital_status(text: str) -> str:
    return canonicalize(text, MARITAL_RULES)


def normalize_relation(text: str) -> str:
    return canonicalize(text, RELATION_RULES)


def normalize_citizenship(text: str) -> str:
    return canonicalize(text, CITIZENSHIP_RULES)
