"""
Labor Episode aggregate.

An ``Episode`` owns the six observation stores of one labor event and is the
only object the presentation layer talks to. Derived views (start time, grid
buckets, reference lines, clinical alerts, history tables) are recomputed
from the raw lists on every call; nothing derived is cached.

Edit sessions:
    Each category has at most one open edit session, pointing at the entry
    currently shown in its form. ``commit`` updates that entry and closes the
    session, or appends a new entry when no session is open. Deleting the
    edited entry closes its session; deleting an earlier entry moves the
    session index down so it keeps pointing at the same entry.

Example:
    >>> episode = Episode()
    >>> episode.add(Category.FETAL, {'heart_rate': 190})
    >>> episode.alerts()
    ['DJJ 190 bpm di luar rentang 100–180']
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

import pandas as pd

from partograf.analysis.alerts import ClinicalAlert, check_clinical_alerts, evaluate_alerts
from partograf.config import GRID
from partograf.data.models import ENTRY_TYPES, Category
from partograf.data.store import MutationResult, ObservationStore
from partograf.data.validation import TIMESTAMP_REQUIRED, VALIDATORS
from partograf.errors import IndexOutOfRange
from partograf.rules.reference_lines import ReferenceLines, calculate_reference_lines
from partograf.timeline.anchor import resolve_start_time
from partograf.timeline.buckets import Bucket, bucketize
from partograf.timeline.history import history_frame

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditSession:
    """The entry of ``category`` currently open for editing."""

    category: Category
    index: int


class Episode:
    """
    Observation streams of a single labor episode.

    Attributes:
        fetal: Fetal heart rate readings.
        labor: Cervical dilation / descent examinations.
        maternal: Maternal vital signs.
        urine: Urine output entries.
        therapy: Fluids and drugs given.
        contractions: Contraction pattern entries.
    """

    def __init__(self, now: Callable[[], datetime] = datetime.now) -> None:
        """
        Start an empty episode.

        Args:
            now: Clock used for default timestamps and the empty-timeline
                anchor.
        """
        self._now = now
        self._stores: Dict[Category, ObservationStore] = {
            category: ObservationStore(
                ENTRY_TYPES[category],
                VALIDATORS[category],
                name=category.value,
                now=now,
                timestamp_required=category in TIMESTAMP_REQUIRED
            )
            for category in Category
        }
        self._edits: Dict[Category, EditSession] = {}

    # ------------------------------------------------------------------
    # Stores
    # ------------------------------------------------------------------

    def store(self, category: Category) -> ObservationStore:
        return self._stores[Category(category)]

    @property
    def fetal(self) -> ObservationStore:
        return self._stores[Category.FETAL]

    @property
    def labor(self) -> ObservationStore:
        return self._stores[Category.LABOR]

    @property
    def maternal(self) -> ObservationStore:
        return self._stores[Category.MATERNAL]

    @property
    def urine(self) -> ObservationStore:
        return self._stores[Category.URINE]

    @property
    def therapy(self) -> ObservationStore:
        return self._stores[Category.THERAPY]

    @property
    def contractions(self) -> ObservationStore:
        return self._stores[Category.CONTRACTION]

    def streams(self) -> List[List[Any]]:
        """Entry lists of all six categories."""
        return [store.entries for store in self._stores.values()]

    @property
    def is_empty(self) -> bool:
        return all(len(store) == 0 for store in self._stores.values())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        category: Category,
        partial: Mapping[str, Any],
        at: Optional[datetime] = None
    ) -> MutationResult:
        """Append an entry to ``category``; see ``ObservationStore.add``."""
        return self.store(category).add(partial, at)

    def update_at(
        self,
        category: Category,
        index: int,
        partial: Mapping[str, Any],
        at: Optional[datetime] = None
    ) -> MutationResult:
        """Update an entry of ``category``; see ``ObservationStore.update_at``."""
        return self.store(category).update_at(index, partial, at)

    def delete_at(self, category: Category, index: int) -> MutationResult:
        """
        Delete an entry of ``category`` and keep its edit session consistent.
        """
        category = Category(category)
        result = self.store(category).delete_at(index)
        if result.accepted:
            session = self._edits.get(category)
            if session is not None:
                if session.index == index:
                    logger.info(f"{category.value}: edited entry #{index} deleted, closing edit session")
                    del self._edits[category]
                elif session.index > index:
                    self._edits[category] = EditSession(category, session.index - 1)
        return result

    # ------------------------------------------------------------------
    # Edit sessions
    # ------------------------------------------------------------------

    def begin_edit(self, category: Category, index: int) -> MutationResult:
        """
        Open ``index`` of ``category`` for editing.

        Any session already open for the category is discarded first.

        Returns:
            MutationResult carrying the entry to load into the form, or an
            IndexOutOfRange rejection (the previous session is kept).
        """
        category = Category(category)
        store = self.store(category)
        if not (0 <= index < len(store)):
            error = IndexOutOfRange(index, len(store))
            logger.warning(f"{category.value}: cannot edit entry #{index}: {error}")
            return MutationResult(accepted=False, index=index, error=error)

        self._edits[category] = EditSession(category, index)
        return MutationResult(accepted=True, index=index, entry=store[index])

    def cancel_edit(self, category: Category) -> None:
        self._edits.pop(Category(category), None)

    def edit_session(self, category: Category) -> Optional[EditSession]:
        return self._edits.get(Category(category))

    def commit(
        self,
        category: Category,
        partial: Mapping[str, Any],
        at: Optional[datetime] = None
    ) -> MutationResult:
        """
        Save the form of ``category``.

        Updates the entry under edit when a session is open (closing the
        session on success), appends a new entry otherwise. A rejected
        update keeps the session open so the form can be corrected.
        """
        category = Category(category)
        session = self._edits.get(category)
        if session is None:
            return self.add(category, partial, at)

        result = self.update_at(category, session.index, partial, at)
        if result.accepted or isinstance(result.error, IndexOutOfRange):
            del self._edits[category]
        return result

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def start_time(self) -> datetime:
        """Shared zero point of every relative-time display."""
        return resolve_start_time(self.streams(), now=self._now)

    def fhr_buckets(
        self,
        step: int = GRID.STEP_MINUTES,
        horizon: int = GRID.HORIZON_MINUTES
    ) -> List[Bucket]:
        """Fetal heart rate on the fixed display grid."""
        return bucketize(
            self.fetal.entries, self.start_time(), step, horizon,
            value=lambda reading: reading.heart_rate
        )

    def contraction_buckets(
        self,
        step: int = GRID.STEP_MINUTES,
        horizon: int = GRID.HORIZON_MINUTES
    ) -> List[Bucket]:
        """Contractions per 10 minutes on the fixed display grid."""
        return bucketize(
            self.contractions.entries, self.start_time(), step, horizon,
            value=lambda entry: entry.frequency_per_10min
        )

    def reference_lines(self) -> ReferenceLines:
        """Alert and action lines at every labor-progress examination."""
        return calculate_reference_lines(self.labor.entries, self.start_time())

    def clinical_alerts(self) -> List[ClinicalAlert]:
        return check_clinical_alerts(self)

    def alerts(self) -> List[str]:
        """Current clinical warning messages."""
        return evaluate_alerts(self)

    def history(self, category: Category) -> pd.DataFrame:
        """Non-bucketed history table of ``category``."""
        return history_frame(self.store(category).entries, self.start_time())

    def __repr__(self) -> str:
        counts = ', '.join(
            f"{category.value}={len(store)}" for category, store in self._stores.items()
        )
        return f"Episode({counts})"


__all__ = [
    'EditSession',
    'Episode',
]
