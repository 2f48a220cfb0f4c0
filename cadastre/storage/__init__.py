"""
Project state persistence
"""

from .project_store import ProjectStore

__all__ = ["ProjectStore"]
