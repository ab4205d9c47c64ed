"""
Random derangements for the secret friend draw.

A derangement assigns every giver exactly one receiver, every receiver
exactly one giver, and nobody to themselves. Shuffling with rejection gives
a uniform derangement (about 37% of shuffles qualify for any N >= 2); when
the retry budget runs out, a random partition into cycles of length two or
more always produces a valid result.
"""

import secrets
from collections.abc import Hashable
from collections.abc import Iterable
from random import Random

DEFAULT_MAX_ATTEMPTS = 100


class InvalidDerangementError(ValueError):
    pass


def generate_derangement(
    ids: Iterable[Hashable],
    rng: Random | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> dict:
    """
    Build a giver -> receiver mapping over ids with no fixed points.

    Args:
        ids: Distinct participant identifiers, at least two
        rng: Random source; defaults to the OS CSPRNG
        max_attempts: Shuffles tried before falling back to the cycle partition

    Raises:
        ValueError: fewer than two ids, or duplicates
    """
    givers = sorted(ids)
    if len(givers) < 2:
        raise ValueError('A derangement needs at least two participants')
    if len(set(givers)) != len(givers):
        raise ValueError('Participant ids must be distinct')

    rng = rng or secrets.SystemRandom()
    receivers = list(givers)

    for _ in range(max_attempts):
        rng.shuffle(receivers)
        if all(giver != receiver for giver, receiver in zip(givers, receivers)):
            return dict(zip(givers, receivers))

    return _cycle_partition(givers, rng)


def _cycle_partition(givers: list, rng: Random) -> dict:
    """Split a shuffled copy of givers into cycles (each >= 2) and chain each cycle."""
    order = list(givers)
    rng.shuffle(order)

    assignment = {}
    start = 0
    remaining = len(order)
    while remaining:
        # A leftover of one could not form a cycle
        sizes = [size for size in range(2, remaining + 1) if remaining - size != 1]
        size = rng.choice(sizes)

        cycle = order[start : start + size]
        for index, giver in enumerate(cycle):
            assignment[giver] = cycle[(index + 1) % size]

        start += size
        remaining -= size

    return assignment


def validate_derangement(ids: Iterable[Hashable], assignment: dict) -> None:
    """
    Raises:
        InvalidDerangementError: assignment is not a fixed-point-free bijection over ids
    """
    expected = set(ids)

    if set(assignment) != expected:
        raise InvalidDerangementError('Every participant must give exactly one gift')
    if sorted(assignment.values()) != sorted(expected):
        raise InvalidDerangementError('Every participant must receive exactly one gift')

    self_assigned = [giver for giver, receiver in assignment.items() if giver == receiver]
    if self_assigned:
        raise InvalidDerangementError(f'Participants drew themselves: {self_assigned}')
