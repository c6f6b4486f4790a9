"""Reporting and organization chart views built from HR roster exports."""

__version__ = "0.4.0"
