"""TorqueHub service quote rendering."""

__version__ = "1.4.0"
