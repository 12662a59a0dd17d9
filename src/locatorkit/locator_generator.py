from __future__ import annotations

from typing import Iterable

from .config import DEFAULT_OPTIONS, SynthesisOptions
from .dialects import render_locator_set
from .errors import InvalidDescriptorError
from .models import DialectRendering, ElementDescriptor, LocatorCandidate, LocatorSet
from .path_builder import descriptor_xpath
from .ranking import rank_candidates
from .scoring import assess_reliability, css_specificity
from .strategies import STRATEGY_GENERATORS, css_fallback_path


def ensure_element(descriptor: ElementDescriptor) -> None:
    if not isinstance(descriptor, ElementDescriptor):
        raise InvalidDescriptorError(f"Expected ElementDescriptor, got {type(descriptor).__name__}.")
    if not descriptor.tag or not descriptor.tag.strip():
        raise InvalidDescriptorError("Element descriptor has no tag name.")


def generate_candidates(
    descriptor: ElementDescriptor,
    options: SynthesisOptions = DEFAULT_OPTIONS,
) -> list[LocatorCandidate]:
    ensure_element(descriptor)
    candidates: list[LocatorCandidate] = []
    for _strategy, generator in STRATEGY_GENERATORS:
        candidate = generator(descriptor, options)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def synthesize_locators(
    descriptor: ElementDescriptor,
    options: SynthesisOptions = DEFAULT_OPTIONS,
) -> LocatorSet:
    candidates = generate_candidates(descriptor, options)
    primary, alternatives = rank_candidates(candidates)
    css_path = css_fallback_path(descriptor, options)
    return LocatorSet(
        primary=primary,
        alternatives=alternatives,
        specificity=css_specificity(css_path),
        reliability=assess_reliability(descriptor),
        css_path=css_path,
        xpath=descriptor_xpath(descriptor),
    )


def synthesize_and_render(
    descriptor: ElementDescriptor,
    dialects: Iterable[str] | None = None,
    options: SynthesisOptions = DEFAULT_OPTIONS,
) -> tuple[LocatorSet, dict[str, DialectRendering]]:
    locator_set = synthesize_locators(descriptor, options)
    requested = tuple(dialects) if dialects is not None else options.dialects
    return locator_set, render_locator_set(locator_set, requested)
