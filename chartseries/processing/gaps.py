"""Zero insertion for series with missing slots at their regular spacing."""
from __future__ import annotations

import logging
from typing import List, Sequence

from .models import Sample

logger = logging.getLogger(__name__)


def guess_point_distance(samples: Sequence[Sample]) -> float:
    """Return the first timestamp delta seen twice in a row, or 0 if none repeats."""
    prev_dist = 0.0
    same_count = 0
    for index in range(1, len(samples)):
        current_dist = samples[index].timestamp - samples[index - 1].timestamp
        if current_dist == prev_dist:
            same_count += 1
        else:
            prev_dist = current_dist
            same_count = 1
        if same_count == 2:
            return prev_dist
    return 0.0


def fill_missing_with_zero(samples: Sequence[Sample]) -> List[Sample]:
    """Pad every gap wider than the guessed spacing with zero-valued samples.

    The input is never modified. When no spacing can be guessed the samples are
    returned unchanged (as a new list).
    """
    point_dist = guess_point_distance(samples)
    if point_dist == 0:
        logger.info("Cannot guess point distance, aborting zero insert attempt")
        return list(samples)

    filled: List[Sample] = [samples[0]]
    for index in range(1, len(samples)):
        base = samples[index - 1].timestamp
        current_dist = samples[index].timestamp - base
        while current_dist > point_dist:
            base += point_dist
            current_dist -= point_dist
            filled.append(Sample(0.0, base))
        filled.append(samples[index])

    inserted = len(filled) - len(samples)
    if inserted:
        logger.debug("Inserted %d zero samples at spacing %s", inserted, point_dist)
    return filled
