from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping

from .selector_rules import unescape_string

StrategyType = Literal["role", "testId", "placeholder", "text", "label", "altText", "title", "css"]
Reliability = Literal["high", "medium", "low"]
LabelSource = Literal["for", "nested"]
NameSource = Literal["aria-label", "label", "text", "alt", "title"]

STRATEGY_PRIORITY: dict[str, int] = {
    "role": 1,
    "testId": 2,
    "placeholder": 3,
    "text": 4,
    "label": 5,
    "altText": 6,
    "title": 7,
    "css": 8,
}


def _frozen_mapping(value: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType({str(k): str(v) for k, v in dict(value or {}).items()})


@dataclass(frozen=True, slots=True)
class BoundingBox:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True, slots=True)
class AncestorEntry:
    tag: str
    id: str | None = None
    classes: tuple[str, ...] = ()
    sibling_index: int = 1
    same_tag_count: int = 1


@dataclass(frozen=True, slots=True)
class ElementDescriptor:
    """Point-in-time snapshot of one element.

    ``text_content`` holds only direct text nodes (capped for display).
    ``visible_text`` holds the full rendered text and is what the role, text
    and label strategies read. ``ancestor_chain[0]`` is the element itself and
    the chain stops below ``<body>``.
    """

    tag: str
    id: str | None = None
    classes: tuple[str, ...] = ()
    text_content: str = ""
    visible_text: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    computed_styles: Mapping[str, str] = field(default_factory=dict)
    ancestor_chain: tuple[AncestorEntry, ...] = ()
    label_text: str | None = None
    label_source: LabelSource | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", tuple(self.classes))
        object.__setattr__(self, "ancestor_chain", tuple(self.ancestor_chain))
        object.__setattr__(self, "attributes", _frozen_mapping(self.attributes))
        object.__setattr__(self, "computed_styles", _frozen_mapping(self.computed_styles))

    def attr(self, key: str) -> str | None:
        raw = self.attributes.get(key)
        if raw is None:
            return None
        value = raw.strip()
        return value or None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "id": self.id,
            "classes": list(self.classes),
            "textContent": self.text_content,
            "visibleText": self.visible_text,
            "attributes": dict(self.attributes),
            "boundingBox": {
                "x": self.bounding_box.x,
                "y": self.bounding_box.y,
                "width": self.bounding_box.width,
                "height": self.bounding_box.height,
            },
            "computedStyles": dict(self.computed_styles),
            "labelText": self.label_text,
            "labelSource": self.label_source,
        }


@dataclass(frozen=True, slots=True)
class LocatorCandidate:
    """One strategy's output.

    ``value`` and ``name`` are already escaped for single-quoted literals and
    are pasted as-is into a host string. Selectors nested inside that string
    (CSS attribute values, XPath literals) are built from ``raw_value`` and
    ``raw_name`` with their own quoting, then escaped for the host.
    """

    strategy_type: StrategyType
    value: str
    priority: int
    tag: str = "*"
    name: str | None = None
    name_source: NameSource | None = None
    attribute: str | None = None
    xpath: str | None = None
    description: str = ""

    @property
    def raw_value(self) -> str:
        return unescape_string(self.value)

    @property
    def raw_name(self) -> str | None:
        return unescape_string(self.name) if self.name is not None else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "strategyType": self.strategy_type,
            "priority": self.priority,
            "value": self.value,
            "description": self.description,
        }
        if self.name is not None:
            payload["name"] = self.name
        if self.attribute is not None:
            payload["attribute"] = self.attribute
        if self.xpath is not None:
            payload["xpath"] = self.xpath
        return payload


@dataclass(frozen=True, slots=True)
class LocatorSet:
    primary: LocatorCandidate
    alternatives: tuple[LocatorCandidate, ...]
    specificity: int
    reliability: Reliability
    css_path: str = ""
    xpath: str = ""

    def candidate(self, strategy_type: str) -> LocatorCandidate | None:
        return next((item for item in self.alternatives if item.strategy_type == strategy_type), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": self.primary.to_dict(),
            "alternatives": [item.to_dict() for item in self.alternatives],
            "specificity": self.specificity,
            "reliability": self.reliability,
            "cssPath": self.css_path,
            "xpath": self.xpath,
        }


@dataclass(frozen=True, slots=True)
class DialectRendering:
    dialect: str
    recommended: str
    alternatives: tuple[str, ...]
    by_strategy: Mapping[str, str]
    actions: Mapping[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "recommended": self.recommended,
            "alternatives": list(self.alternatives),
            "byStrategy": dict(self.by_strategy),
            "actions": dict(self.actions),
        }


@dataclass(frozen=True, slots=True)
class AccessibilityInfo:
    role: str | None
    aria_label: str | None
    aria_described_by: str | None
    tab_index: int | None
    is_interactive: bool
    has_accessible_name: bool
    issues: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "ariaLabel": self.aria_label,
            "ariaDescribedBy": self.aria_described_by,
            "tabIndex": self.tab_index,
            "isInteractive": self.is_interactive,
            "hasAccessibleName": self.has_accessible_name,
            "issues": list(self.issues),
        }


@dataclass(frozen=True, slots=True)
class PositioningInfo:
    bounding_box: BoundingBox
    center: tuple[float, float]
    area: int
    aspect_ratio: float
    is_in_viewport: bool

    def to_dict(self) -> dict[str, Any]:
        box = self.bounding_box
        return {
            "boundingBox": {"x": box.x, "y": box.y, "width": box.width, "height": box.height},
            "center": list(self.center),
            "area": self.area,
            "aspectRatio": self.aspect_ratio,
            "isInViewport": self.is_in_viewport,
        }


@dataclass(frozen=True, slots=True)
class ElementAnalysis:
    tag: str
    category: str
    css_path: str
    xpath: str
    css_alternatives: tuple[str, ...]
    specificity: int
    reliability: Reliability
    is_visible: bool
    accessibility: AccessibilityInfo
    positioning: PositioningInfo
    suggestions: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "category": self.category,
            "cssPath": self.css_path,
            "xpath": self.xpath,
            "cssAlternatives": list(self.css_alternatives),
            "specificity": self.specificity,
            "reliability": self.reliability,
            "isVisible": self.is_visible,
            "accessibility": self.accessibility.to_dict(),
            "positioning": self.positioning.to_dict(),
            "suggestions": list(self.suggestions),
        }
