"""Weighted selection and spawn-eligibility filters.

``weighted_choice`` is the single cumulative-weight primitive used by every
random pick in the engine: reader archetypes, VIP types, floors, weather
transitions, event types and donation sources.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

from simlibrary.core.enums import Domain

if TYPE_CHECKING:
    from simlibrary.core.models import Floor
    from simlibrary.systems.rng import DeterministicRNG

T = TypeVar("T")


def weighted_choice(
    candidates: Sequence[T],
    weight: Callable[[T], float],
    roll: float,
    total: float | None = None,
) -> T | None:
    """Pick the first candidate whose cumulative weight exceeds ``roll * total``.

    *roll* is a uniform draw in [0, 1). *total* defaults to the sum of all
    weights; passing a larger total (e.g. 1.0 for chances that sum below 1)
    leaves room for no candidate to be hit, in which case the first
    candidate is returned. Returns None only for an empty sequence.
    """
    if not candidates:
        return None
    if total is None:
        total = sum(max(0.0, weight(c)) for c in candidates)
    target = roll * total
    cumulative = 0.0
    for candidate in candidates:
        cumulative += max(0.0, weight(candidate))
        if cumulative > target:
            return candidate
    return candidates[0]


def uniform_choice(candidates: Sequence[T], rng: DeterministicRNG, domain: Domain) -> T | None:
    """Equal-weight pick via ``weighted_choice``."""
    if not candidates:
        return None
    return weighted_choice(candidates, lambda _c: 1.0, rng.next_float(domain))


def eligible_floors(floors: Sequence[Floor]) -> list[Floor]:
    """Ready standard floors that are not fully trashed and have no active incident."""
    return [
        f for f in floors
        if f.is_standard and f.ready and f.trash < 100 and not f.incidents
    ]


def preferred_floors(
    eligible: Sequence[Floor],
    preferred_types: Sequence[str],
    rng: DeterministicRNG,
    restrict_chance: float,
) -> list[Floor]:
    """Narrow *eligible* to the archetype's preferred types with ``restrict_chance``.

    Falls back to the unrestricted set when the roll fails, the archetype has
    no preferences, or no eligible floor matches them.
    """
    if not preferred_types:
        return list(eligible)
    if not rng.next_bool(Domain.FLOOR, restrict_chance):
        return list(eligible)
    wanted = set(preferred_types)
    narrowed = [f for f in eligible if f.type_id in wanted]
    return narrowed or list(eligible)
