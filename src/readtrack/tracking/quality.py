"""Data quality checks on a read tracking table.

Copyright © 2023 Pixelgen Technologies AB.
"""

from __future__ import annotations

import dataclasses
import logging

from readtrack.stages import Stage
from readtrack.tracking.table import TrackingTable

logger = logging.getLogger(__name__)


# (upstream, downstream) pairs: the downstream count should never exceed
# the upstream count in a healthy run
DECAY_CHAIN: tuple[tuple[Stage, Stage], ...] = (
    (Stage.INPUT, Stage.FILTERED),
    (Stage.FILTERED, Stage.DENOISED_FORWARD),
    (Stage.FILTERED, Stage.DENOISED_REVERSE),
    (Stage.DENOISED_FORWARD, Stage.MERGED),
    (Stage.DENOISED_REVERSE, Stage.MERGED),
    (Stage.MERGED, Stage.NONCHIM),
)


@dataclasses.dataclass(frozen=True)
class DecayViolation:
    """A stage that reports more reads than the stage it consumed.

    :ivar sample_id: the affected sample
    :ivar upstream: the earlier stage
    :ivar downstream: the later stage
    :ivar upstream_count: the read count of the earlier stage
    :ivar downstream_count: the read count of the later stage
    """

    sample_id: str
    upstream: Stage
    downstream: Stage
    upstream_count: int
    downstream_count: int

    def __str__(self) -> str:
        return (
            f'Sample "{self.sample_id}" has more reads at stage '
            f'"{self.downstream.value}" ({self.downstream_count}) than at stage '
            f'"{self.upstream.value}" ({self.upstream_count})'
        )


def find_decay_violations(table: TrackingTable) -> list[DecayViolation]:
    """Return every place where read counts grow from one stage to the next.

    The expected decay is
    `nonchim <= merged <= min(denoisedF, denoisedR) <= filtered <= input`.
    A violation points at a problem upstream of the tracker, it does not
    make the table invalid.

    :param table: the tracking table to check
    :returns: the violations in row order, empty for a healthy run
    """
    violations = []
    for row in table:
        for upstream, downstream in DECAY_CHAIN:
            upstream_count = row.count(upstream)
            downstream_count = row.count(downstream)
            if downstream_count > upstream_count:
                violations.append(
                    DecayViolation(
                        sample_id=row.sample_id,
                        upstream=upstream,
                        downstream=downstream,
                        upstream_count=upstream_count,
                        downstream_count=downstream_count,
                    )
                )

    if violations:
        logger.debug("Found %s read count decay violations", len(violations))
    return violations
