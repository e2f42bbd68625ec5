"""Monthly mileage totals scraped from public Runkeeper activity pages."""

from runkeeper_miles.stats.monthly import MonthlyMilesCalculator, monthly_miles

__all__ = [
    "MonthlyMilesCalculator",
    "monthly_miles",
]
