"""
Episode data modules for Partograf.

Modules:
    models: Observation entry types and enums
    validation: Per-category validation rules
    store: Generic ObservationStore and MutationResult
    episode: Episode aggregate and edit sessions
    demo: Example episode

Usage:
    >>> from partograf.data import Episode, Category
    >>> episode = Episode()
    >>> result = episode.add(Category.FETAL, {'heart_rate': 140})
"""

from .models import (
    Category,
    AmnioticFluid,
    MoldingDegree,
    ContractionDuration,
    FetalReading,
    LaborProgress,
    MaternalVital,
    UrineEntry,
    Therapy,
    ContractionEntry,
)
from .validation import VALIDATORS
from .store import ObservationStore, MutationResult
from .episode import Episode, EditSession

__all__ = [
    "Category",
    "AmnioticFluid",
    "MoldingDegree",
    "ContractionDuration",
    "FetalReading",
    "LaborProgress",
    "MaternalVital",
    "UrineEntry",
    "Therapy",
    "ContractionEntry",
    "VALIDATORS",
    "ObservationStore",
    "MutationResult",
    "Episode",
    "EditSession",
]
