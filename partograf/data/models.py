"""
Observation entry types for a labor episode.

Each of the six observation categories has its own immutable entry type.
All of them carry an absolute ``timestamp``; the remaining fields follow the
paper partograph form.

Example:
    >>> reading = FetalReading(timestamp=datetime.now(), heart_rate=140)
    >>> reading.amniotic_fluid
    <AmnioticFluid.CLEAR: 'clear'>
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Optional


class Category(Enum):
    """The six observation streams of an episode."""

    FETAL = 'fetal'
    LABOR = 'labor'
    MATERNAL = 'maternal'
    URINE = 'urine'
    THERAPY = 'therapy'
    CONTRACTION = 'contraction'


class AmnioticFluid(Enum):
    """Condition of the amniotic fluid (air ketuban)."""

    INTACT = 'intact'
    CLEAR = 'clear'
    MECONIUM = 'meconium'
    BLOOD_STAINED = 'blood-stained'


class MoldingDegree(Enum):
    """Degree of fetal skull molding (molase)."""

    NONE = 'none'
    ONE = '1'
    TWO = '2'
    THREE = '3'


class ContractionDuration(Enum):
    """Duration class of uterine contractions, in seconds."""

    SHORT = '≤20'
    MEDIUM = '20–40'
    LONG = '>40'


@dataclass(frozen=True)
class FetalReading:
    """
    Fetal heart rate observation.

    Attributes:
        timestamp: Time of the reading.
        heart_rate: Fetal heart rate (DJJ) in bpm.
        amniotic_fluid: Condition of the amniotic fluid.
        molding: Skull molding degree.
    """

    timestamp: datetime
    heart_rate: float
    amniotic_fluid: AmnioticFluid = AmnioticFluid.CLEAR
    molding: MoldingDegree = MoldingDegree.NONE


@dataclass(frozen=True)
class LaborProgress:
    """
    Cervical dilation and descent observation.

    Attributes:
        timestamp: Time of the vaginal examination.
        dilation: Cervical dilation in cm (pembukaan).
        station: Descent of the fetal head, 0-5.
        contraction_freq: Contractions per 10 minutes.
        contraction_duration: Duration class of the contractions.
    """

    timestamp: datetime
    dilation: float
    station: int
    contraction_freq: int = 0
    contraction_duration: ContractionDuration = ContractionDuration.SHORT


@dataclass(frozen=True)
class MaternalVital:
    """Maternal vital signs (TTV)."""

    timestamp: datetime
    systolic: float
    diastolic: float
    pulse: float
    temperature: float
    resp_rate: Optional[float] = None
    spo2: Optional[float] = None


@dataclass(frozen=True)
class UrineEntry:
    """Urine output with optional protein and acetone results."""

    timestamp: datetime
    volume: Optional[float] = None
    protein: Optional[str] = None
    acetone: Optional[str] = None


@dataclass(frozen=True)
class Therapy:
    """IV fluids, oxytocin and other drugs given during labor."""

    timestamp: datetime
    iv_fluid: Optional[str] = None
    oxytocin_dose: Optional[str] = None
    oxytocin_start: Optional[str] = None
    other_drug: Optional[str] = None
    drops_per_minute: Optional[int] = None


@dataclass(frozen=True)
class ContractionEntry:
    """Contraction pattern charted on the contraction grid."""

    timestamp: datetime
    frequency_per_10min: int
    duration: ContractionDuration = ContractionDuration.SHORT


ENTRY_TYPES = {
    Category.FETAL: FetalReading,
    Category.LABOR: LaborProgress,
    Category.MATERNAL: MaternalVital,
    Category.URINE: UrineEntry,
    Category.THERAPY: Therapy,
    Category.CONTRACTION: ContractionEntry,
}


def entry_to_dict(entry) -> dict:
    """
    Convert an entry to a flat dict with enum members replaced by their values.

    Args:
        entry: Any observation entry.

    Returns:
        Dict of field name to plain value.
    """
    row = {}
    for f in fields(entry):
        value = getattr(entry, f.name)
        row[f.name] = value.value if isinstance(value, Enum) else value
    return row


__all__ = [
    'Category',
    'AmnioticFluid',
    'MoldingDegree',
    'ContractionDuration',
    'FetalReading',
    'LaborProgress',
    'MaternalVital',
    'UrineEntry',
    'Therapy',
    'ContractionEntry',
    'ENTRY_TYPES',
    'entry_to_dict',
]
