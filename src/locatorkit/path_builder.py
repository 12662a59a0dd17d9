from __future__ import annotations

from typing import Sequence

from .models import AncestorEntry, ElementDescriptor
from .selector_rules import escape_css_identifier, is_anchor_id


def css_segment(entry: AncestorEntry) -> str:
    segment = entry.tag
    for class_name in entry.classes:
        if class_name:
            segment += f".{escape_css_identifier(class_name)}"
    if entry.same_tag_count >= 2:
        # Position among same-tag siblings, not the literal DOM position.
        segment += f":nth-child({entry.sibling_index})"
    return segment


def build_css_path(
    chain: Sequence[AncestorEntry],
    *,
    strict_ids: bool = False,
    max_depth: int | None = None,
) -> str:
    """Walk element-first up to (excluding) body and join ancestor-first."""
    parts: list[str] = []
    for entry in chain:
        if is_anchor_id(entry.id, strict=strict_ids):
            parts.insert(0, f"#{entry.id}")
            break
        parts.insert(0, css_segment(entry))
        if max_depth is not None and len(parts) >= max_depth:
            break
    return " > ".join(parts)


def build_xpath(chain: Sequence[AncestorEntry]) -> str:
    if not chain:
        return ""
    parts = [f"{entry.tag}[{entry.sibling_index}]" for entry in reversed(chain)]
    return "/" + "/".join(parts)


def descriptor_css_path(
    descriptor: ElementDescriptor,
    *,
    strict_ids: bool = False,
    max_depth: int | None = None,
) -> str:
    """CSS path for a descriptor, falling back to the bare tag name."""
    path = build_css_path(descriptor.ancestor_chain, strict_ids=strict_ids, max_depth=max_depth)
    return path or descriptor.tag


def descriptor_xpath(descriptor: ElementDescriptor) -> str:
    return build_xpath(descriptor.ancestor_chain)
