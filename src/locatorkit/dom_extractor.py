from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from .errors import InvalidDescriptorError
from .models import AncestorEntry, BoundingBox, ElementDescriptor
from .selector_rules import cap_text, normalize_space

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

STYLE_ALLOW_LIST = (
    "display",
    "position",
    "width",
    "height",
    "margin",
    "padding",
    "border",
    "background",
    "color",
    "font-size",
    "font-family",
    "text-align",
    "vertical-align",
    "line-height",
    "z-index",
    "opacity",
    "visibility",
    "overflow",
    "float",
    "clear",
)

logger = logging.getLogger("locatorkit.capture")

_EXTRACT_SCRIPT = """
(el, styleNames) => {
  if (!el || el.nodeType !== Node.ELEMENT_NODE) {
    return { isElement: false };
  }

  const attrs = {};
  for (const attr of el.attributes) {
    attrs[attr.name] = attr.value;
  }

  const directText = Array.from(el.childNodes)
    .filter((node) => node.nodeType === Node.TEXT_NODE)
    .map((node) => node.textContent || '')
    .join(' ');

  const rect = el.getBoundingClientRect();
  const computed = window.getComputedStyle(el);
  const styles = {};
  for (const prop of styleNames) {
    const value = computed.getPropertyValue(prop);
    if (value) styles[prop] = value;
  }

  const ancestors = [];
  let current = el;
  while (current && current.nodeType === Node.ELEMENT_NODE && current !== document.body) {
    let index = 1;
    let sibling = current.previousElementSibling;
    while (sibling) {
      if (sibling.tagName === current.tagName) index += 1;
      sibling = sibling.previousElementSibling;
    }
    const parent = current.parentElement;
    const sameTag = parent
      ? Array.from(parent.children).filter((child) => child.tagName === current.tagName).length
      : 1;
    ancestors.push({
      tag: current.tagName.toLowerCase(),
      id: current.id || null,
      classes: Array.from(current.classList || []),
      siblingIndex: index,
      sameTagCount: sameTag,
    });
    current = parent;
  }

  let labelText = null;
  let labelSource = null;
  if (el.id) {
    const forLabel = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
    if (forLabel) {
      labelText = forLabel.innerText || forLabel.textContent || '';
      labelSource = 'for';
    }
  }
  if (labelSource === null) {
    const parentLabel = el.closest('label');
    if (parentLabel && parentLabel !== el) {
      labelText = parentLabel.innerText || parentLabel.textContent || '';
      labelSource = 'nested';
    }
  }

  return {
    isElement: true,
    tag: el.tagName.toLowerCase(),
    id: el.id || null,
    classes: Array.from(el.classList || []),
    textContent: directText,
    visibleText: el.innerText || el.textContent || '',
    attributes: attrs,
    boundingBox: {
      x: Math.round(rect.x),
      y: Math.round(rect.y),
      width: Math.round(rect.width),
      height: Math.round(rect.height),
    },
    computedStyles: styles,
    ancestorChain: ancestors,
    labelText,
    labelSource,
  };
}
"""


def is_capturable_attribute(name: str) -> bool:
    lowered = name.strip().lower()
    if not lowered:
        return False
    if lowered.startswith("on"):
        return False
    return not lowered.startswith("data-v-")


def _as_int(value: Any) -> int:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def _mapping_field(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    raw = payload.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise InvalidDescriptorError(f"{key!r} must be an object, got {type(raw).__name__}.")
    return raw


def _list_field(payload: Mapping[str, Any], key: str) -> list[Any]:
    raw = payload.get(key)
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise InvalidDescriptorError(f"{key!r} must be a list, got {type(raw).__name__}.")
    return list(raw)


def _string_list(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        items = raw.split()
    elif isinstance(raw, (list, tuple)):
        items = [item for item in raw if isinstance(item, str)]
    else:
        raise InvalidDescriptorError(f"Class list must be a string or a list, got {type(raw).__name__}.")
    return tuple(item.strip() for item in items if item.strip())


def _ancestor_from_payload(item: Mapping[str, Any]) -> AncestorEntry:
    return AncestorEntry(
        tag=str(item.get("tag") or "").strip().lower(),
        id=str(item.get("id") or "").strip() or None,
        classes=_string_list(item.get("classes")),
        sibling_index=max(1, _as_int(item.get("siblingIndex", 1))),
        same_tag_count=max(1, _as_int(item.get("sameTagCount", 1))),
    )


def descriptor_from_payload(payload: Mapping[str, Any]) -> ElementDescriptor:
    """Build a descriptor from the plain mapping produced in the browser.

    The same shape is accepted from JSON files, so the CLI and the live
    capture path share this single boundary.
    """
    if not isinstance(payload, Mapping):
        raise InvalidDescriptorError(f"Descriptor payload must be a mapping, got {type(payload).__name__}.")
    if payload.get("isElement") is False:
        raise InvalidDescriptorError("Cannot describe a non-element node.")

    tag = str(payload.get("tag") or "").strip().lower()
    if not tag:
        raise InvalidDescriptorError("Descriptor payload has no tag name.")

    attributes = {
        str(key): str(value)
        for key, value in _mapping_field(payload, "attributes").items()
        if value is not None and is_capturable_attribute(str(key))
    }
    raw_id = str(payload.get("id") or attributes.get("id") or "").strip()
    classes = _string_list(payload.get("classes") or attributes.get("class"))

    box = _mapping_field(payload, "boundingBox")
    chain = _list_field(payload, "ancestorChain")
    if not all(isinstance(item, Mapping) for item in chain):
        raise InvalidDescriptorError("'ancestorChain' entries must be objects.")
    ancestors = [_ancestor_from_payload(item) for item in chain if item.get("tag")]

    label_source = payload.get("labelSource")
    label_text = normalize_space(payload.get("labelText")) or None
    if label_source not in ("for", "nested") or label_text is None:
        label_source = None
        label_text = None

    visible_text = payload.get("visibleText")
    if visible_text is None:
        visible_text = payload.get("textContent")

    return ElementDescriptor(
        tag=tag,
        id=raw_id or None,
        classes=classes,
        text_content=cap_text(payload.get("textContent")),
        visible_text=normalize_space(visible_text),
        attributes=attributes,
        bounding_box=BoundingBox(
            x=_as_int(box.get("x")),
            y=_as_int(box.get("y")),
            width=_as_int(box.get("width")),
            height=_as_int(box.get("height")),
        ),
        computed_styles={
            str(key): str(value)
            for key, value in _mapping_field(payload, "computedStyles").items()
            if key in STYLE_ALLOW_LIST and value
        },
        ancestor_chain=tuple(ancestors),
        label_text=label_text,
        label_source=label_source,
    )


def extract_element_descriptor(element: ElementHandle) -> ElementDescriptor:
    payload = element.evaluate(_EXTRACT_SCRIPT, list(STYLE_ALLOW_LIST))
    descriptor = descriptor_from_payload(payload)
    logger.debug(
        "Captured <%s> id=%s with %d ancestors",
        descriptor.tag,
        descriptor.id,
        len(descriptor.ancestor_chain),
    )
    return descriptor


def extract_descriptor_for_selector(page: Page, selector: str) -> ElementDescriptor | None:
    element = page.query_selector(selector)
    if element is None:
        logger.info("No element matched %r", selector)
        return None
    return extract_element_descriptor(element)
