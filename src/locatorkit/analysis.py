from __future__ import annotations

from .config import DEFAULT_OPTIONS, SynthesisOptions
from .locator_generator import ensure_element
from .models import AccessibilityInfo, BoundingBox, ElementAnalysis, ElementDescriptor, PositioningInfo
from .path_builder import descriptor_xpath
from .scoring import assess_reliability, css_specificity
from .selector_rules import escape_css_identifier, escape_css_string
from .strategies import accessible_name, css_fallback_path, element_role

INTERACTIVE_TAGS = {"button", "a", "input", "select", "textarea", "details", "summary"}

TAG_CATEGORIES = {
    "div": "container",
    "span": "inline",
    "p": "text",
    "a": "link",
    "img": "media",
    "video": "media",
    "audio": "media",
    "input": "form",
    "button": "form",
    "select": "form",
    "textarea": "form",
    "form": "form",
    "nav": "navigation",
    "header": "semantic",
    "footer": "semantic",
    "article": "semantic",
    "section": "semantic",
    "aside": "semantic",
    "main": "semantic",
    "ul": "list",
    "ol": "list",
    "li": "list",
    "table": "table",
    "tr": "table",
    "td": "table",
    "th": "table",
}


def categorize_tag(tag: str) -> str:
    if tag in {"h1", "h2", "h3", "h4", "h5", "h6"}:
        return "heading"
    return TAG_CATEGORIES.get(tag, "other")


def is_interactive(tag: str) -> bool:
    return tag in INTERACTIVE_TAGS


def css_alternatives(descriptor: ElementDescriptor) -> list[str]:
    alternatives: list[str] = []
    if descriptor.id:
        alternatives.append(f"#{escape_css_identifier(descriptor.id)}")
    classes = [escape_css_identifier(item) for item in descriptor.classes if item]
    if classes:
        alternatives.append("." + ".".join(classes))
        if len(classes) > 1:
            alternatives.append(f".{classes[0]}")
    name = descriptor.attr("name")
    if name:
        alternatives.append(f'[name="{escape_css_string(name)}"]')
    input_type = descriptor.attr("type")
    if input_type:
        alternatives.append(f'{descriptor.tag}[type="{escape_css_string(input_type)}"]')
    alternatives.append(descriptor.tag)
    return alternatives


def accessibility_issues(descriptor: ElementDescriptor) -> list[str]:
    issues: list[str] = []
    tag = descriptor.tag
    if is_interactive(tag) and not descriptor.attr("aria-label") and not descriptor.visible_text:
        issues.append("Interactive element lacks accessible name")
    if tag == "img" and descriptor.attr("alt") is None:
        issues.append("Image missing alt attribute")
    if (
        tag == "input"
        and descriptor.attr("type") != "submit"
        and not descriptor.attr("aria-label")
        and not descriptor.attr("placeholder")
        and descriptor.label_source is None
    ):
        issues.append("Form input lacks label")
    return issues


def suggest_improvements(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> list[str]:
    suggestions: list[str] = []
    tag = descriptor.tag
    if not descriptor.id and tag not in {"div", "span"}:
        suggestions.append("Consider adding an 'id' attribute for better targeting")
    if not descriptor.classes:
        suggestions.append("Consider adding CSS classes for styling and selection")
    if is_interactive(tag) and not descriptor.attr("aria-label") and not descriptor.visible_text:
        suggestions.append("Add 'aria-label' for better accessibility")
    if tag == "input" and not descriptor.attr("name"):
        suggestions.append("Add 'name' attribute for form handling")
    if tag == "a" and not descriptor.attr("title"):
        suggestions.append("Consider adding 'title' attribute for better UX")
    if tag == "img" and not descriptor.attr("alt"):
        suggestions.append("Add 'alt' attribute for accessibility")
    if not any(descriptor.attr(attr) for attr in options.test_id_attributes):
        suggestions.append("Add a 'data-testid' attribute for stable test locators")
    return suggestions


def is_in_viewport(box: BoundingBox, viewport: tuple[int, int]) -> bool:
    width, height = viewport
    return box.x >= 0 and box.y >= 0 and box.x + box.width <= width and box.y + box.height <= height


def is_visible(descriptor: ElementDescriptor) -> bool:
    styles = descriptor.computed_styles
    return (
        styles.get("display") != "none"
        and styles.get("visibility") != "hidden"
        and styles.get("opacity") != "0"
    )


def _accessibility(descriptor: ElementDescriptor, options: SynthesisOptions) -> AccessibilityInfo:
    role, _explicit = element_role(descriptor)
    raw_tab_index = descriptor.attr("tabindex")
    try:
        tab_index = int(raw_tab_index) if raw_tab_index is not None else None
    except ValueError:
        tab_index = None
    return AccessibilityInfo(
        role=role,
        aria_label=descriptor.attr("aria-label"),
        aria_described_by=descriptor.attr("aria-describedby"),
        tab_index=tab_index,
        is_interactive=is_interactive(descriptor.tag),
        has_accessible_name=accessible_name(descriptor, options) is not None or bool(descriptor.visible_text),
        issues=tuple(accessibility_issues(descriptor)),
    )


def _positioning(descriptor: ElementDescriptor, options: SynthesisOptions) -> PositioningInfo:
    box = descriptor.bounding_box
    return PositioningInfo(
        bounding_box=box,
        center=box.center,
        area=box.area,
        aspect_ratio=(box.width / box.height) if box.height else 0.0,
        is_in_viewport=is_in_viewport(box, options.viewport),
    )


def analyze_element(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> ElementAnalysis:
    ensure_element(descriptor)
    css_path = css_fallback_path(descriptor, options)
    return ElementAnalysis(
        tag=descriptor.tag,
        category=categorize_tag(descriptor.tag),
        css_path=css_path,
        xpath=descriptor_xpath(descriptor),
        css_alternatives=tuple(css_alternatives(descriptor)),
        specificity=css_specificity(css_path),
        reliability=assess_reliability(descriptor),
        is_visible=is_visible(descriptor),
        accessibility=_accessibility(descriptor, options),
        positioning=_positioning(descriptor, options),
        suggestions=tuple(suggest_improvements(descriptor, options)),
    )
