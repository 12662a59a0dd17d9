from __future__ import annotations

import re

from .models import ElementDescriptor, Reliability

ID_WEIGHT = 100
QUALIFIER_WEIGHT = 10
TAG_WEIGHT = 1

# Hex escapes may swallow one trailing space; both forms stand for a single identifier character.
_CSS_ESCAPE = re.compile(r"\\[0-9a-fA-F]{1,6}\s?|\\.")
_ID_TOKEN = re.compile(r"#")
_QUALIFIER_TOKEN = re.compile(r"[.:\[]")
# A type selector can only open a compound, i.e. follow the start or a combinator.
_TAG_TOKEN = re.compile(r"(?:^|[\s>+~])([A-Za-z][A-Za-z0-9-]*)")


def css_specificity(selector: str) -> int:
    """Heuristic weight of a CSS path: 100 per id, 10 per class/pseudo/attribute, 1 per tag.

    Not the CSS-spec specificity. ``span:nth-child(3)`` scores 11 and
    ``#list > li.item`` scores 111.
    """
    text = _CSS_ESCAPE.sub("_", selector.strip())
    if not text:
        return 0
    ids = len(_ID_TOKEN.findall(text))
    qualifiers = len(_QUALIFIER_TOKEN.findall(text))
    tags = len(_TAG_TOKEN.findall(text))
    return ID_WEIGHT * ids + QUALIFIER_WEIGHT * qualifiers + TAG_WEIGHT * tags


def assess_reliability(descriptor: ElementDescriptor) -> Reliability:
    has_class = any(item for item in descriptor.classes)
    has_name = descriptor.attr("name") is not None
    if descriptor.id:
        return "high"
    if has_class and has_name:
        return "high"
    if has_class:
        return "medium"
    if has_name or descriptor.attr("type") is not None:
        return "medium"
    return "low"
