"""
Partograph Visualization Utilities.

Plotly figures built from the derived views of an episode:
- Cervical dilation with alert and action lines
- Fetal heart rate on the 30-minute grid, with the normal band
- Contractions per 10 minutes, bars colored by duration
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import plotly.graph_objects as go

from partograf.config import COLORS, GRID, THRESHOLDS
from partograf.timeline.anchor import minutes_from_start
from partograf.timeline.buckets import Bucket

if TYPE_CHECKING:
    from partograf.data.episode import Episode


def _grid_ticks() -> List[int]:
    return list(range(0, GRID.HORIZON_MINUTES + 1, GRID.TICK_MINUTES))


def create_partograph_plot(
    episode: Episode,
    title: str = "Kemajuan Persalinan",
    height: int = 450
) -> go.Figure:
    """
    Create the cervical dilation chart with alert and action lines.

    Args:
        episode: The labor episode.
        title: Plot title.
        height: Plot height in pixels.

    Returns:
        Plotly Figure with dilation, station, alert-line and action-line
        traces (the last two only when there are examinations).
    """
    start = episode.start_time()
    entries = episode.labor.sorted_entries()
    minutes = [minutes_from_start(e.timestamp, start) for e in entries]

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=minutes,
        y=[e.dilation for e in entries],
        mode='lines+markers',
        name='Pembukaan (cm)',
        line=dict(color=COLORS.DILATION, width=2),
        marker=dict(symbol='x', size=10),
        hovertemplate='Menit: %{x}<br>Pembukaan: %{y} cm<extra></extra>'
    ))

    fig.add_trace(go.Scatter(
        x=minutes,
        y=[e.station for e in entries],
        mode='markers',
        name='Station',
        marker=dict(color=COLORS.STATION, symbol='circle-open', size=9),
        hovertemplate='Menit: %{x}<br>Station: %{y}<extra></extra>'
    ))

    lines = episode.reference_lines()
    if len(lines) > 0:
        fig.add_trace(go.Scatter(
            x=lines.offsets,
            y=lines.alert,
            mode='lines',
            name='Alert line',
            line=dict(color=COLORS.ALERT_LINE, width=2, dash='dash')
        ))
        fig.add_trace(go.Scatter(
            x=lines.offsets,
            y=lines.action,
            mode='lines',
            name='Action line',
            line=dict(color=COLORS.ACTION_LINE, width=2, dash='dash')
        ))

    fig.update_layout(
        title=dict(text=title, x=0.5),
        height=height,
        hovermode='x unified',
        paper_bgcolor=COLORS.BACKGROUND,
        plot_bgcolor='white'
    )
    fig.update_xaxes(
        title_text='Waktu (menit)',
        range=[0, GRID.HORIZON_MINUTES],
        tickvals=_grid_ticks(),
        gridcolor=COLORS.GRID
    )
    fig.update_yaxes(
        title_text='cm',
        range=[0, 10],
        dtick=1,
        gridcolor=COLORS.GRID
    )
    return fig


def create_fhr_plot(
    buckets: List[Bucket],
    title: str = "Denyut Jantung Janin (DJJ)",
    height: int = 350
) -> go.Figure:
    """
    Create the fetal heart rate chart from grid buckets.

    Empty buckets are drawn as gaps.
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[b.offset_minutes for b in buckets],
        y=[b.value for b in buckets],
        mode='lines+markers',
        name='DJJ',
        connectgaps=False,
        line=dict(color=COLORS.FHR, width=1.5),
        hovertemplate='Menit: %{x}<br>DJJ: %{y:.0f} bpm<extra></extra>'
    ))

    fig.add_hrect(
        y0=THRESHOLDS.FHR_NORMAL_BAND_MIN,
        y1=THRESHOLDS.FHR_NORMAL_BAND_MAX,
        fillcolor=COLORS.FHR_NORMAL_BAND,
        line_width=0,
        annotation_text='Normal',
        annotation_position='top right'
    )

    fig.update_layout(
        title=dict(text=title, x=0.5),
        height=height,
        paper_bgcolor=COLORS.BACKGROUND,
        plot_bgcolor='white'
    )
    fig.update_xaxes(
        title_text='Waktu (menit)',
        range=[0, GRID.HORIZON_MINUTES],
        tickvals=_grid_ticks(),
        gridcolor=COLORS.GRID
    )
    fig.update_yaxes(title_text='bpm', range=[80, 200], dtick=20, gridcolor=COLORS.GRID)
    return fig


def create_contraction_plot(
    buckets: List[Bucket],
    title: str = "Kontraksi per 10 menit",
    height: int = 300
) -> go.Figure:
    """
    Create the contraction bar chart from grid buckets.

    Bars are colored by contraction duration (≤20, 20–40, >40 seconds).
    """
    filled = [b for b in buckets if not b.is_empty]
    colors = COLORS.contraction_colors

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[b.offset_minutes for b in filled],
        y=[b.value for b in filled],
        name='Kontraksi/10m',
        marker_color=[colors[b.entry.duration.value] for b in filled],
        text=[b.entry.duration.value for b in filled],
        hovertemplate='Menit: %{x}<br>Kontraksi: %{y}<br>Durasi: %{text} detik<extra></extra>'
    ))

    fig.update_layout(
        title=dict(text=title, x=0.5),
        height=height,
        showlegend=False,
        paper_bgcolor=COLORS.BACKGROUND,
        plot_bgcolor='white'
    )
    fig.update_xaxes(
        title_text='Waktu (menit)',
        range=[0, GRID.HORIZON_MINUTES],
        tickvals=_grid_ticks(),
        gridcolor=COLORS.GRID
    )
    fig.update_yaxes(range=[0, 5], dtick=1, gridcolor=COLORS.GRID)
    return fig


__all__ = [
    'create_partograph_plot',
    'create_fhr_plot',
    'create_contraction_plot',
]
