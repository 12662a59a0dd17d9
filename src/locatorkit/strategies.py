"""Per-strategy locator generators.

Every generator takes a descriptor and returns a candidate or ``None``; none
of them looks at another's result. Text sources:

* role: ``visible_text`` as accessible name for buttons and links
* text: ``visible_text``
* label: ``label_text`` captured from the associated ``<label>``

``text_content`` is display-only and never read here.
"""

from __future__ import annotations

from typing import Callable

from .config import DEFAULT_OPTIONS, SynthesisOptions
from .models import STRATEGY_PRIORITY, ElementDescriptor, LocatorCandidate, NameSource
from .path_builder import descriptor_css_path, descriptor_xpath
from .selector_rules import escape_string, is_anchor_id, normalize_space

Generator = Callable[[ElementDescriptor, SynthesisOptions], LocatorCandidate | None]

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}

_INPUT_ROLES = {
    "button": "button",
    "submit": "button",
    "reset": "button",
    "checkbox": "checkbox",
    "radio": "radio",
    "text": "textbox",
    "password": "textbox",
    "email": "textbox",
    "search": "searchbox",
}

_DESCRIPTIONS = {
    "role": "By ARIA role (most accessible)",
    "testId": "By test ID (most stable)",
    "placeholder": "By placeholder text",
    "text": "By visible text",
    "label": "By associated label",
    "altText": "By alt text",
    "title": "By title attribute",
    "css": "By CSS selector",
}


def implicit_role(descriptor: ElementDescriptor) -> str | None:
    tag = descriptor.tag
    if tag == "button":
        return "button"
    if tag == "a":
        return "link" if descriptor.attr("href") else None
    if tag == "input":
        input_type = (descriptor.attr("type") or "text").lower()
        return _INPUT_ROLES.get(input_type, "textbox")
    if tag == "textarea":
        return "textbox"
    if tag == "select":
        return "combobox"
    if tag in HEADING_TAGS:
        return "heading"
    return None


def element_role(descriptor: ElementDescriptor) -> tuple[str | None, bool]:
    """Return ``(role, explicit)``; an explicit ``role`` attribute wins."""
    explicit = descriptor.attr("role")
    if explicit:
        return explicit.split()[0], True
    return implicit_role(descriptor), False


def readable_text(value: str | None, limit: int) -> str | None:
    text = normalize_space(value)
    if not text or len(text) > limit:
        return None
    return text


def label_text(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> str | None:
    if descriptor.label_source is None:
        return None
    return readable_text(descriptor.label_text, options.accessible_text_max_length)


def accessible_name(
    descriptor: ElementDescriptor,
    options: SynthesisOptions = DEFAULT_OPTIONS,
) -> tuple[str, NameSource] | None:
    aria_label = descriptor.attr("aria-label")
    if aria_label:
        return aria_label, "aria-label"

    label = label_text(descriptor, options)
    if label:
        return label, "label"

    if descriptor.tag in {"button", "a"}:
        text = readable_text(descriptor.visible_text, options.accessible_text_max_length)
        if text:
            return text, "text"

    if descriptor.tag == "img":
        alt = descriptor.attr("alt")
        if alt:
            return alt, "alt"

    title = descriptor.attr("title")
    if title:
        return title, "title"
    return None


def _candidate(
    strategy_type: str,
    descriptor: ElementDescriptor,
    value: str,
    **extra: str | None,
) -> LocatorCandidate:
    return LocatorCandidate(
        strategy_type=strategy_type,  # type: ignore[arg-type]
        value=escape_string(value),
        priority=STRATEGY_PRIORITY[strategy_type],
        tag=descriptor.tag,
        description=_DESCRIPTIONS[strategy_type],
        **extra,  # type: ignore[arg-type]
    )


def role_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate | None:
    role, explicit = element_role(descriptor)
    if not role:
        return None

    name = accessible_name(descriptor, options)
    return _candidate(
        "role",
        descriptor,
        role,
        name=escape_string(name[0]) if name else None,
        name_source=name[1] if name else None,
        attribute="role" if explicit else None,
    )


def testid_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate | None:
    for attr in options.test_id_attributes:
        value = descriptor.attr(attr)
        if value:
            return _candidate("testId", descriptor, value, attribute=attr)
    return None


def placeholder_strategy(
    descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS
) -> LocatorCandidate | None:
    if descriptor.tag not in {"input", "textarea"}:
        return None
    placeholder = descriptor.attr("placeholder")
    if not placeholder:
        return None
    return _candidate("placeholder", descriptor, placeholder, attribute="placeholder")


def text_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate | None:
    text = readable_text(descriptor.visible_text, options.text_max_length)
    if not text:
        return None
    return _candidate("text", descriptor, text)


def label_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate | None:
    text = label_text(descriptor, options)
    if not text:
        return None
    return _candidate("label", descriptor, text, name_source="label", attribute=descriptor.label_source)


def alt_text_strategy(
    descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS
) -> LocatorCandidate | None:
    if descriptor.tag != "img":
        return None
    alt = descriptor.attr("alt")
    if not alt:
        return None
    return _candidate("altText", descriptor, alt, attribute="alt")


def title_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate | None:
    title = descriptor.attr("title")
    if not title:
        return None
    return _candidate("title", descriptor, title, attribute="title")


def css_fallback_path(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> str:
    if is_anchor_id(descriptor.id, strict=options.strict_ids):
        return f"#{descriptor.id}"
    return descriptor_css_path(
        descriptor,
        strict_ids=options.strict_ids,
        max_depth=options.css_path_max_depth,
    )


def css_strategy(descriptor: ElementDescriptor, options: SynthesisOptions = DEFAULT_OPTIONS) -> LocatorCandidate:
    path = css_fallback_path(descriptor, options)
    xpath = descriptor_xpath(descriptor)
    return _candidate(
        "css",
        descriptor,
        path,
        attribute="id" if path == f"#{descriptor.id}" else None,
        xpath=escape_string(xpath) if xpath else None,
    )


STRATEGY_GENERATORS: tuple[tuple[str, Generator], ...] = (
    ("role", role_strategy),
    ("testId", testid_strategy),
    ("placeholder", placeholder_strategy),
    ("text", text_strategy),
    ("label", label_strategy),
    ("altText", alt_text_strategy),
    ("title", title_strategy),
    ("css", css_strategy),
)
