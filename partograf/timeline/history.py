"""
Tabular observation history.

The non-bucketed listing of one category, as shown under each chart. Unlike
the grid, nothing is dropped here: entries beyond the grid horizon (or before
the start time) are listed with their real elapsed time.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

import pandas as pd

from partograf.data.models import entry_to_dict
from partograf.timeline.anchor import minutes_from_start
from partograf.utils.time_utils import format_datetime_label


BASE_COLUMNS: List[str] = [
    'index', 'timestamp', 'time_label', 'minutes_from_start', 'hours_from_start'
]


def history_frame(entries: Sequence, start_time: datetime) -> pd.DataFrame:
    """
    Build the history table of one observation category.

    Args:
        entries: Entries in insertion order.
        start_time: Timeline anchor.

    Returns:
        DataFrame sorted by timestamp. ``index`` is the insertion index used
        for editing and deleting; enum fields are rendered as their values.

    Example:
        >>> df = history_frame(episode.fetal.entries, episode.start_time())
        >>> df[['minutes_from_start', 'heart_rate']]
    """
    rows = []
    for i, entry in enumerate(entries):
        row = entry_to_dict(entry)
        minutes = minutes_from_start(entry.timestamp, start_time)
        row['index'] = i
        row['time_label'] = format_datetime_label(entry.timestamp)
        row['minutes_from_start'] = minutes
        row['hours_from_start'] = round((entry.timestamp - start_time).total_seconds() / 3600, 1)
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=BASE_COLUMNS)

    df = pd.DataFrame(rows)
    field_columns = [c for c in df.columns if c not in BASE_COLUMNS]
    df = df[BASE_COLUMNS + field_columns]
    return df.sort_values('timestamp', kind='stable').reset_index(drop=True)


__all__ = ['history_frame']
