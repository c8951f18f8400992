"""
Centralized configuration for Partograf.

Grid geometry, entry limits, clinical alert thresholds, chart colors and the
Indonesian user-facing messages of the partograph engine.

Usage:
    from partograf.config import GRID, LIMITS, THRESHOLDS, MESSAGES

    step = GRID.STEP_MINUTES
    fever = THRESHOLDS.FEVER_TEMPERATURE
"""

from dataclasses import dataclass
from typing import Dict, Final


# =============================================================================
# Display Grid Configuration
# =============================================================================

@dataclass(frozen=True)
class GridConfig:
    """Fixed relative-time grid used by the bucketed charts and tables."""

    STEP_MINUTES: int = 30       # Bucket width
    HORIZON_MINUTES: int = 960   # 16 hours of labor

    # Partograph x-axis ticks
    TICK_MINUTES: int = 60

    @property
    def n_buckets(self) -> int:
        """Number of buckets on the grid, both ends included."""
        return self.HORIZON_MINUTES // self.STEP_MINUTES + 1


GRID: Final[GridConfig] = GridConfig()


# =============================================================================
# Entry Validation Limits
# =============================================================================

@dataclass(frozen=True)
class EntryLimits:
    """Accepted ranges checked before any entry reaches a store."""

    # Fetal heart rate (bpm)
    HEART_RATE_MIN: float = 80.0
    HEART_RATE_MAX: float = 200.0

    # Cervical dilation (cm) and head station
    DILATION_MIN: float = 0.0
    DILATION_MAX: float = 10.0
    STATION_MIN: int = 0
    STATION_MAX: int = 5

    # Maternal temperature (°C)
    TEMPERATURE_MIN: float = 30.0
    TEMPERATURE_MAX: float = 40.0

    # Infusion drip rate (drops/minute)
    DROPS_MIN: int = 1
    DROPS_MAX: int = 60

    # Contractions per 10 minutes
    CONTRACTION_FREQ_MIN: int = 1
    CONTRACTION_FREQ_MAX: int = 5


LIMITS: Final[EntryLimits] = EntryLimits()


# =============================================================================
# Clinical Thresholds
# =============================================================================

@dataclass(frozen=True)
class ClinicalThresholds:
    """Threshold values for the clinical alert rules and reference lines."""

    # FHR alert range (bpm)
    FHR_MIN: float = 100.0
    FHR_MAX: float = 180.0

    # FHR range drawn as "normal" on the charts
    FHR_NORMAL_BAND_MIN: float = 120.0
    FHR_NORMAL_BAND_MAX: float = 160.0

    # Hypertension (mmHg)
    SYSTOLIC_HIGH: float = 140.0
    DIASTOLIC_HIGH: float = 90.0

    # Fever (°C)
    FEVER_TEMPERATURE: float = 38.0

    # WHO partograph reference lines
    ALERT_LINE_BASELINE_CM: float = 2.0
    DILATION_RATE_CM_PER_HOUR: float = 1.0
    ACTION_LINE_OFFSET_CM: float = 4.0


THRESHOLDS: Final[ClinicalThresholds] = ClinicalThresholds()


# =============================================================================
# UI Colors
# =============================================================================

@dataclass(frozen=True)
class UIColors:
    """Color scheme for the partograph charts."""

    FHR: str = '#1E90FF'           # Dodger Blue
    DILATION: str = '#111827'
    STATION: str = '#6B7280'
    ALERT_LINE: str = '#F59E0B'    # Amber
    ACTION_LINE: str = '#DC2626'   # Red
    FHR_NORMAL_BAND: str = 'rgba(0, 255, 0, 0.1)'

    # Contraction bars by duration
    CONTRACTION_SHORT: str = '#FFA500'
    CONTRACTION_MEDIUM: str = '#FFD700'
    CONTRACTION_LONG: str = '#FF0000'

    GRID: str = '#E5E5E5'
    BACKGROUND: str = '#FAFAFA'

    @property
    def contraction_colors(self) -> Dict[str, str]:
        """Get color mapping for contraction durations."""
        return {
            '≤20': self.CONTRACTION_SHORT,
            '20–40': self.CONTRACTION_MEDIUM,
            '>40': self.CONTRACTION_LONG,
        }


COLORS: Final[UIColors] = UIColors()


# =============================================================================
# Indonesian Strings (alerts and validation feedback)
# =============================================================================

@dataclass(frozen=True)
class IndonesianStrings:
    """Localized message templates shown to the midwife."""

    # Clinical alerts
    ALERT_FHR_OUT_OF_RANGE: str = "DJJ {value} bpm di luar rentang 100–180"
    ALERT_HYPERTENSION: str = "Tekanan darah tinggi: {systolic}/{diastolic} mmHg"
    ALERT_FEVER: str = "Suhu tinggi: {value:.1f}°C"
    ALERT_ACTION_LINE: str = "Kemajuan pembukaan melewati action line"

    # Validation feedback
    INVALID_RANGE: str = "{field} harus antara {low}–{high}."
    INVALID_CHOICE: str = "Nilai {field} tidak valid: {value}."
    MISSING_FIELD: str = "{field} harus diisi."
    UNKNOWN_FIELD: str = "Kolom {field} tidak dikenal."
    INDEX_OUT_OF_RANGE: str = "Data ke-{index} tidak ditemukan."

    # Field labels
    FIELD_LABELS: tuple = (
        ('heart_rate', 'DJJ'),
        ('amniotic_fluid', 'Air ketuban'),
        ('molding', 'Molase'),
        ('dilation', 'Pembukaan'),
        ('station', 'Turunnya kepala (station)'),
        ('contraction_freq', 'Kontraksi /10 menit'),
        ('contraction_duration', 'Durasi kontraksi'),
        ('systolic', 'Sistolik'),
        ('diastolic', 'Diastolik'),
        ('pulse', 'Nadi'),
        ('temperature', 'Suhu'),
        ('resp_rate', 'Pernapasan'),
        ('spo2', 'SpO2'),
        ('volume', 'Volume urine'),
        ('drops_per_minute', 'Jumlah tetes/menit'),
        ('frequency_per_10min', 'Kontraksi /10 menit'),
        ('duration', 'Durasi kontraksi'),
        ('timestamp', 'Waktu'),
    )

    def label(self, field_name: str) -> str:
        """Return the display label for a field, falling back to its name."""
        return dict(self.FIELD_LABELS).get(field_name, field_name)


MESSAGES: Final[IndonesianStrings] = IndonesianStrings()


# =============================================================================
# Convenience Exports
# =============================================================================

__all__ = [
    'GRID',
    'LIMITS',
    'THRESHOLDS',
    'COLORS',
    'MESSAGES',
    'GridConfig',
    'EntryLimits',
    'ClinicalThresholds',
    'UIColors',
    'IndonesianStrings',
]
