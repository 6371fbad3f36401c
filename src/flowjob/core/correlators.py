"""Validation of symmetric-cumulant correlator sets.

A correlator is an ordered sequence of signed harmonics, e.g. (-2, 2) for the
two-particle correlator of the second harmonic. The harmonics of a physical
correlator add up to zero; unbalanced ones are rejected unless the caller
explicitly opts out.
"""

import logging

logger = logging.getLogger(__name__)


def validate_correlators(correlators, require_zero_sum: bool = True) -> tuple[tuple[int, ...], ...]:
    """Check a correlator set and return it as a tuple of int tuples, order preserved."""
    result = []
    for index, correlator in enumerate(correlators):
        harmonics = tuple(int(h) for h in correlator)
        if not harmonics:
            raise ValueError(f"correlator #{index} is empty")
        if 0 in harmonics:
            raise ValueError(f"correlator #{index} {list(harmonics)} contains a zero harmonic")
        if sum(harmonics) != 0:
            if require_zero_sum:
                raise ValueError(
                    f"correlator #{index} {list(harmonics)} has net harmonic {sum(harmonics)}, expected 0"
                )
            logger.warning(
                "Correlator %s has net harmonic %d", list(harmonics), sum(harmonics),
            )
        result.append(harmonics)
    if not result:
        raise ValueError("at least one correlator is required")
    return tuple(result)
