"""Technician portal list-view service"""

__version__ = "1.0.0"
