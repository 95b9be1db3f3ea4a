"""Consumers of generated events: CSV, iCalendar and text grids."""

from .csv_export import to_csv
from .grid import group_by_day, render_month, render_year
from .ics_export import to_ics

__all__ = ["to_csv", "to_ics", "group_by_day", "render_month", "render_year"]
