"""
Configuration package for the hostel ledger service.
"""

from app.config.settings import CapacityPolicy, Settings, get_settings, settings

__all__ = ['settings', 'get_settings', 'Settings', 'CapacityPolicy']
