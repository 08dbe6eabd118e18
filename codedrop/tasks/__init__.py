"""
Background Tasks

In-process periodic tasks for the share relay.
"""

from .cleanup_task import Reaper

__all__ = ['Reaper']
