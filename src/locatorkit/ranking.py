from __future__ import annotations

from typing import Iterable

from .errors import InvalidDescriptorError
from .models import LocatorCandidate


def rank_candidates(candidates: Iterable[LocatorCandidate | None]) -> tuple[LocatorCandidate, tuple[LocatorCandidate, ...]]:
    """Return ``(primary, alternatives)`` ordered by ascending priority.

    Abstaining generators show up as ``None`` and are skipped. Priorities are
    distinct per strategy, so the order is total.
    """
    ordered = sorted(
        (candidate for candidate in candidates if candidate is not None),
        key=lambda item: item.priority,
    )
    if not ordered:
        raise InvalidDescriptorError("No locator candidates to rank; the css strategy must always produce one.")
    return ordered[0], tuple(ordered)


def select_primary(candidates: Iterable[LocatorCandidate | None]) -> LocatorCandidate:
    primary, _alternatives = rank_candidates(candidates)
    return primary
