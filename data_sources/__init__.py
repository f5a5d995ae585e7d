"""
Data sources module for the quote system.
Provides the quote record model and the HTTP quote sources.
"""

__all__ = ['base_source', 'strangerthings_source', 'models']
