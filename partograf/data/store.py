"""
Observation Store.

One generic append/update/delete container, parameterized by entry type and
an injected validator. Every observation category of an episode is one
``ObservationStore``.

Behavior:
    - ``add`` appends; entries are never sorted on insertion.
    - ``update_at`` replaces the given fields in place and keeps the list
      position; the timestamp changes only when a new one is given.
    - ``delete_at`` removes the entry and shifts later indices down.
    - Validation runs before any mutation. A rejected mutation leaves the
      list untouched and is reported through ``MutationResult``; no
      ``PartografError`` escapes these operations.
    - Out-of-range indices are no-ops, because indices shift between the
      time a caller reads them and issues the mutation.

Example:
    >>> store = ObservationStore(FetalReading, validate_fetal)
    >>> result = store.add({'heart_rate': 140})
    >>> result.accepted
    True
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from numbers import Integral
from typing import Any, Callable, Generic, Iterator, List, Mapping, Optional, TypeVar

from partograf.data.validation import Validator
from partograf.errors import IndexOutOfRange, MissingRequiredField, PartografError

# Configure module logger
logger = logging.getLogger(__name__)


E = TypeVar('E')


@dataclass
class MutationResult(Generic[E]):
    """
    Outcome of a store mutation.

    Attributes:
        accepted: True if the store was changed.
        index: Index of the affected entry (position before a delete).
        entry: The stored, updated or removed entry; None if rejected.
        error: The rejection reason; None if accepted.
    """

    accepted: bool
    index: Optional[int] = None
    entry: Optional[E] = None
    error: Optional[PartografError] = None

    @property
    def message(self) -> str:
        """Localized failure message, empty when accepted."""
        return str(self.error) if self.error is not None else ''

    def __bool__(self) -> bool:
        return self.accepted

    def __repr__(self) -> str:
        status = "accepted" if self.accepted else f"rejected: {self.message}"
        return f"MutationResult({status}, index={self.index})"


class ObservationStore(Generic[E]):
    """
    Ordered, append-biased list of observations of one category.

    Attributes:
        entry_type: Dataclass built for every entry.
        validator: Field-mapping validator run before each mutation.
        name: Category name used in log messages.
        timestamp_required: If True, ``add`` does not default the time to now.
    """

    def __init__(
        self,
        entry_type: type,
        validator: Validator,
        name: Optional[str] = None,
        now: Callable[[], datetime] = datetime.now,
        timestamp_required: bool = False
    ) -> None:
        self.entry_type = entry_type
        self.validator = validator
        self.name = name or entry_type.__name__
        self.timestamp_required = timestamp_required
        self._now = now
        self._items: List[E] = []

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        partial: Mapping[str, Any],
        at: Optional[datetime] = None
    ) -> MutationResult[E]:
        """
        Append a new entry.

        Args:
            partial: Entry fields without the timestamp.
            at: Time of the observation; defaults to now unless the store
                requires an explicit time.

        Returns:
            MutationResult with the stored entry, or the rejection reason.
        """
        values = dict(partial)
        if at is None:
            at = values.pop('timestamp', None)
        if at is None:
            if self.timestamp_required:
                return self._reject(MissingRequiredField('timestamp'))
            at = self._now()
        values['timestamp'] = at

        try:
            entry = self.entry_type(**self.validator(values))
        except PartografError as e:
            return self._reject(e)

        self._items.append(entry)
        logger.debug(f"{self.name}: added entry #{len(self._items) - 1} at {at}")
        return MutationResult(accepted=True, index=len(self._items) - 1, entry=entry)

    def update_at(
        self,
        index: int,
        partial: Mapping[str, Any],
        at: Optional[datetime] = None
    ) -> MutationResult[E]:
        """
        Replace fields of the entry at ``index``, keeping omitted fields.

        Args:
            index: Position of the entry to update.
            partial: Fields to replace.
            at: New timestamp; the existing one is kept when omitted.

        Returns:
            MutationResult with the updated entry, or the rejection reason.
        """
        if not self._in_range(index):
            return self._reject(IndexOutOfRange(index, len(self._items)))

        values = asdict(self._items[index])
        changes = dict(partial)
        if at is None:
            at = changes.pop('timestamp', None)
        else:
            changes.pop('timestamp', None)
        values.update(changes)
        if at is not None:
            values['timestamp'] = at

        try:
            entry = self.entry_type(**self.validator(values))
        except PartografError as e:
            return self._reject(e, index=index)

        self._items[index] = entry
        logger.debug(f"{self.name}: updated entry #{index}")
        return MutationResult(accepted=True, index=index, entry=entry)

    def delete_at(self, index: int) -> MutationResult[E]:
        """
        Remove the entry at ``index``; later entries shift down by one.

        Returns:
            MutationResult carrying the removed entry.
        """
        if not self._in_range(index):
            return self._reject(IndexOutOfRange(index, len(self._items)))

        entry = self._items.pop(index)
        logger.debug(f"{self.name}: deleted entry #{index}")
        return MutationResult(accepted=True, index=index, entry=entry)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def entries(self) -> List[E]:
        """Entries in insertion order (a copy)."""
        return list(self._items)

    def sorted_entries(self) -> List[E]:
        """Entries ordered by timestamp; ties keep insertion order."""
        return sorted(self._items, key=lambda e: e.timestamp)

    def latest(self) -> Optional[E]:
        """The most recently inserted entry, or None if empty."""
        return self._items[-1] if self._items else None

    def first(self) -> Optional[E]:
        """The first inserted entry, or None if empty."""
        return self._items[0] if self._items else None

    def _in_range(self, index: int) -> bool:
        return isinstance(index, Integral) and 0 <= index < len(self._items)

    def _reject(
        self,
        error: PartografError,
        index: Optional[int] = None
    ) -> MutationResult[E]:
        logger.warning(f"{self.name}: mutation rejected ({type(error).__name__}): {error}")
        return MutationResult(accepted=False, index=index, error=error)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> E:
        return self._items[index]

    def __repr__(self) -> str:
        return f"ObservationStore({self.name}, entries={len(self._items)})"


__all__ = [
    'MutationResult',
    'ObservationStore',
]
