"""Interactive simulator of a 5-axis gantry scanner."""
__version__ = "0.1.0"
