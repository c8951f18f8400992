"""
UI module for Partograf.

Contains Plotly figure builders for the partograph charts.
"""
