"""Post-processing utilities: division and conference views, schedule grid."""

from __future__ import annotations

from cfb_rankings.postprocess.rankings import (
    filter_division,
    group_by_conference,
    partition_by_division,
)
from cfb_rankings.postprocess.schedule import build_schedule_matrix

__all__ = [
    "build_schedule_matrix",
    "filter_division",
    "group_by_conference",
    "partition_by_division",
]
