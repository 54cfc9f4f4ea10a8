"""
Utility functions for graphforge.

Includes:
- Case conversion (snake_case -> camelCase / PascalCase, first-letter helpers)
- English pluralization for generated root field and type names
"""

from __future__ import annotations

import re


# =============================================================================
# Case conversion utilities
# =============================================================================

# Pre-compiled regex patterns for better performance
_SNAKE_TO_CAMEL_PATTERN = re.compile(r'_([a-z0-9])')
_CONSTANT_WORD_PATTERN = re.compile(r'(?<!^)(?=[A-Z])')


def upper_first(name: str) -> str:
    """
    Upper-case the first character only.

    Examples:
        actors -> Actors
        actedIn -> ActedIn
    """
    return name[:1].upper() + name[1:]


def lower_first(name: str) -> str:
    """
    Lower-case the first character only.

    Examples:
        Movies -> movies
        CastMembers -> castMembers
    """
    return name[:1].lower() + name[1:]


def to_camel_case(name: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        screen_time -> screenTime
        starts_with -> startsWith
    """
    def replace_underscore(match):
        return match.group(1).upper()

    return _SNAKE_TO_CAMEL_PATTERN.sub(replace_underscore, name)


def to_pascal_case(name: str) -> str:
    """
    Convert snake_case or camelCase to PascalCase.

    Examples:
        acted_in -> ActedIn
        actors -> Actors
    """
    return upper_first(to_camel_case(name))


def to_constant_case(name: str) -> str:
    """
    Convert camelCase to CONSTANT_CASE.

    Examples:
        startsWith -> STARTS_WITH
        averageLength -> AVERAGE_LENGTH
    """
    return _CONSTANT_WORD_PATTERN.sub('_', name).upper()


# =============================================================================
# Pluralization
# =============================================================================

_IRREGULAR_PLURALS = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

_UNCOUNTABLE = {
    "data",
    "equipment",
    "information",
    "metadata",
    "news",
    "series",
    "sheep",
    "species",
}

_WORD_BOUNDARY_PATTERN = re.compile(r'([A-Z]?[a-z0-9]+|[A-Z]+(?![a-z]))$')


def pluralize(name: str) -> str:
    """
    Pluralize the last word of a PascalCase or camelCase name.

    Keeps the casing of the leading part and of the word's first letter.

    Examples:
        Movie -> Movies
        Search -> Searches
        Category -> Categories
        CastMember -> CastMembers
        Person -> People
        Series -> Series
    """
    if not name:
        return name

    match = _WORD_BOUNDARY_PATTERN.search(name)
    if not match:
        return name + "s"

    prefix, word = name[:match.start()], match.group(1)
    lower = word.lower()

    if lower in _UNCOUNTABLE:
        plural = lower
    elif lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
    elif lower.endswith("y") and lower[-2:-1] not in ("a", "e", "i", "o", "u"):
        plural = lower[:-1] + "ies"
    elif lower.endswith(("s", "x", "z", "ch", "sh")):
        plural = lower + "es"
    else:
        plural = lower + "s"

    if word.isupper() and len(word) > 1:
        plural = plural.upper()
    elif word[0].isupper():
        plural = upper_first(plural)

    return prefix + plural
