"""Chairside clinical safety-alert and anesthesia-recommendation service."""

__version__ = "1.0.0"
