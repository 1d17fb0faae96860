"""
freeslots - free meeting slots from an iCalendar feed.
"""

__version__ = "0.1.0"
