"""
OFSL League Schedule Service.
Week selection, game format catalog and tier format management for the
weekly league schedule.
"""

__version__ = "1.0.0"
