"""Hostel ledger service: room occupancy and fee billing."""

__version__ = "1.0.0"
