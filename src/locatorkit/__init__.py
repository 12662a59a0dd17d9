from __future__ import annotations

from .config import SynthesisOptions
from .dialects import SUPPORTED_DIALECTS, render_candidate, render_locator_set
from .dom_extractor import descriptor_from_payload, extract_element_descriptor
from .errors import CaptureError, InvalidDescriptorError, LocatorError, UnsupportedDialectError
from .locator_generator import synthesize_and_render, synthesize_locators
from .models import AncestorEntry, BoundingBox, ElementDescriptor, LocatorCandidate, LocatorSet

__version__ = "0.1.0"

__all__ = [
    "AncestorEntry",
    "BoundingBox",
    "CaptureError",
    "ElementDescriptor",
    "InvalidDescriptorError",
    "LocatorCandidate",
    "LocatorError",
    "LocatorSet",
    "SUPPORTED_DIALECTS",
    "SynthesisOptions",
    "UnsupportedDialectError",
    "descriptor_from_payload",
    "extract_element_descriptor",
    "render_candidate",
    "render_locator_set",
    "synthesize_and_render",
    "synthesize_locators",
]
