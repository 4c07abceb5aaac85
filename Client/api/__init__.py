"""
ClockPanel Client - API Package

This package contains the device API communication class.
"""

from .clockpanel_api import ClockPanelAPI

__all__ = ['ClockPanelAPI']
