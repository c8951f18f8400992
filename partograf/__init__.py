"""
Partograf - Digital partograph engine for labor monitoring.

Tracks one labor episode as six irregularly-sampled observation streams and
derives the views of the WHO-style partograph:
- Shared relative time axis anchored at the earliest observation
- Fixed 30-minute display grid for fetal heart rate and contractions
- Alert and action reference lines over cervical dilation
- Clinical warnings from the latest readings

Modules:
    config: Centralized configuration constants
    errors: Validation and index error types
    data: Entry types, validation, observation stores and the Episode
    timeline: Start-time anchor, grid bucketizer, history tables
    rules: Partograph alert/action lines
    analysis: Clinical alert engine
    ui: Plotly partograph figures
    utils: Time helpers

Quick Start:
    >>> from partograf import Episode, Category
    >>> episode = Episode()
    >>> episode.add(Category.MATERNAL, {'systolic': 150, 'diastolic': 95,
    ...                                 'pulse': 90, 'temperature': 37.0})
    >>> episode.alerts()
    ['Tekanan darah tinggi: 150/95 mmHg']
"""

__version__ = "1.0.0"

# Expose main configuration
from partograf.config import GRID, LIMITS, THRESHOLDS, COLORS, MESSAGES
from partograf.data.episode import Episode, EditSession
from partograf.data.models import Category

__all__ = [
    '__version__',
    'GRID',
    'LIMITS',
    'THRESHOLDS',
    'COLORS',
    'MESSAGES',
    'Episode',
    'EditSession',
    'Category',
]
