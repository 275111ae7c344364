"""
Elpris dashboard API: Swedish day-ahead spot prices for an hourly dashboard.
"""

__version__ = "1.0.0"
