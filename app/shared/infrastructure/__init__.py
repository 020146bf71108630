"""
Infrastructure layer package for PetVally.
Provides database sessions, image storage and external API clients.
"""

__all__ = []
