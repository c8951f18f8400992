"""
Entry Validation Rules.

Every entry is checked at the call boundary, before it reaches a store.
Each validator receives the complete field mapping of the entry it is about
to build (for an update: the existing fields merged with the partial update)
and returns a new mapping with coerced values.

Rules:
    - Fetal heart rate:          80-200 bpm
    - Cervical dilation:         0-10 cm
    - Station:                   0-5
    - Maternal temperature:      30-40 °C
    - Infusion drip rate:        1-60 drops/minute (when given)
    - Contraction frequency:     1-5 per 10 minutes

Raises:
    RangeViolation: Numeric value outside its bound, or unknown choice.
    MissingRequiredField: Required field absent or empty.
"""

from __future__ import annotations

import math
from dataclasses import MISSING, fields
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Type

from partograf.config import LIMITS, MESSAGES
from partograf.data.models import (
    AmnioticFluid,
    Category,
    ContractionDuration,
    ContractionEntry,
    FetalReading,
    LaborProgress,
    MaternalVital,
    MoldingDegree,
    Therapy,
    UrineEntry,
)
from partograf.errors import MissingRequiredField, RangeViolation, ValidationError


Validator = Callable[[Mapping[str, Any]], Dict[str, Any]]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == '')


def _number(
    values: Dict[str, Any],
    name: str,
    low: Optional[float] = None,
    high: Optional[float] = None,
    required: bool = True,
    integer: bool = False
) -> None:
    """
    Coerce ``values[name]`` to a finite number and check its bounds in place.

    Form inputs arrive as strings, so numeric strings are accepted.
    """
    raw = values.get(name)
    if _is_blank(raw):
        if required:
            raise MissingRequiredField(name)
        values[name] = None
        return

    if isinstance(raw, bool):
        raise RangeViolation(name, raw, low, high)
    try:
        number = float(raw)
    except (TypeError, ValueError):
        raise RangeViolation(name, raw, low, high)

    if not math.isfinite(number):
        raise RangeViolation(name, raw, low, high)
    if low is not None and number < low:
        raise RangeViolation(name, raw, low, high)
    if high is not None and number > high:
        raise RangeViolation(name, raw, low, high)

    if integer:
        if not number.is_integer():
            raise RangeViolation(name, raw, low, high)
        values[name] = int(number)
    elif isinstance(raw, (int, float)):
        values[name] = raw
    else:
        values[name] = number


def _choice(
    values: Dict[str, Any],
    name: str,
    enum_type: Type[Enum],
    required: bool = True
) -> None:
    """Coerce ``values[name]`` to a member of ``enum_type`` in place."""
    raw = values.get(name)
    if _is_blank(raw):
        if required:
            raise MissingRequiredField(name)
        values.pop(name, None)
        return
    if isinstance(raw, enum_type):
        return
    try:
        values[name] = enum_type(raw)
    except ValueError:
        raise RangeViolation(name, raw)


def _text(values: Dict[str, Any], *names: str) -> None:
    """Normalize optional free-text fields: blank strings become None."""
    for name in names:
        raw = values.get(name)
        if _is_blank(raw):
            values[name] = None
        else:
            values[name] = str(raw).strip()


def _prepare(entry_type: type, raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy the raw mapping, rejecting unknown fields and checking the timestamp.
    """
    known = {f.name for f in fields(entry_type)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValidationError(
            MESSAGES.UNKNOWN_FIELD.format(field=unknown[0]), field=unknown[0]
        )

    values = dict(raw)
    timestamp = values.get('timestamp')
    if timestamp is None:
        raise MissingRequiredField('timestamp')
    if not isinstance(timestamp, datetime):
        raise RangeViolation('timestamp', timestamp)
    if timestamp.tzinfo is not None:
        # Stored times are naive local time, like the default clock
        values['timestamp'] = timestamp.astimezone().replace(tzinfo=None)
    return values


def _drop_unset_defaults(entry_type: type, values: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None values for fields whose dataclass default is not None."""
    for f in fields(entry_type):
        if f.name in values and values[f.name] is None and f.default is not MISSING \
                and f.default is not None:
            del values[f.name]
    return values


def validate_fetal(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a fetal heart rate reading."""
    values = _prepare(FetalReading, raw)
    _number(values, 'heart_rate', LIMITS.HEART_RATE_MIN, LIMITS.HEART_RATE_MAX)
    _choice(values, 'amniotic_fluid', AmnioticFluid, required=False)
    _choice(values, 'molding', MoldingDegree, required=False)
    return values


def validate_labor(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a cervical dilation / descent examination."""
    values = _prepare(LaborProgress, raw)
    _number(values, 'dilation', LIMITS.DILATION_MIN, LIMITS.DILATION_MAX)
    _number(
        values, 'station', LIMITS.STATION_MIN, LIMITS.STATION_MAX, integer=True
    )
    _number(values, 'contraction_freq', low=0, required=False, integer=True)
    _choice(
        values, 'contraction_duration', ContractionDuration, required=False
    )
    return _drop_unset_defaults(LaborProgress, values)


def validate_maternal(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate maternal vital signs; respiration and SpO2 are optional."""
    values = _prepare(MaternalVital, raw)
    _number(values, 'systolic')
    _number(values, 'diastolic')
    _number(values, 'pulse')
    _number(
        values, 'temperature', LIMITS.TEMPERATURE_MIN, LIMITS.TEMPERATURE_MAX
    )
    _number(values, 'resp_rate', required=False)
    _number(values, 'spo2', required=False)
    return values


def validate_urine(raw: Mapping[str, Any]) -> Dict[str, Any]:
    values = _prepare(UrineEntry, raw)
    _number(values, 'volume', low=0, required=False)
    _text(values, 'protein', 'acetone')
    return values


def validate_therapy(raw: Mapping[str, Any]) -> Dict[str, Any]:
    values = _prepare(Therapy, raw)
    _text(values, 'iv_fluid', 'oxytocin_dose', 'oxytocin_start', 'other_drug')
    _number(
        values, 'drops_per_minute', LIMITS.DROPS_MIN, LIMITS.DROPS_MAX,
        required=False, integer=True
    )
    return values


def validate_contraction(raw: Mapping[str, Any]) -> Dict[str, Any]:
    values = _prepare(ContractionEntry, raw)
    _number(
        values, 'frequency_per_10min',
        LIMITS.CONTRACTION_FREQ_MIN, LIMITS.CONTRACTION_FREQ_MAX,
        integer=True
    )
    _choice(values, 'duration', ContractionDuration, required=False)
    return values


VALIDATORS: Dict[Category, Validator] = {
    Category.FETAL: validate_fetal,
    Category.LABOR: validate_labor,
    Category.MATERNAL: validate_maternal,
    Category.URINE: validate_urine,
    Category.THERAPY: validate_therapy,
    Category.CONTRACTION: validate_contraction,
}

# Categories whose entries must carry an explicit time instead of "now"
TIMESTAMP_REQUIRED = frozenset({Category.LABOR})


__all__ = [
    'Validator',
    'validate_fetal',
    'validate_labor',
    'validate_maternal',
    'validate_urine',
    'validate_therapy',
    'validate_contraction',
    'VALIDATORS',
    'TIMESTAMP_REQUIRED',
]
