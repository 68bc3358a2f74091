"""FAERS Dashboard: adverse-event search, metrics and trends for drugs."""

__version__ = "0.1.0"
