"""
Core Domain Components.

Structure:
    models/: Pure data structures (order rows, customers, status enum)
    schema/: Transport boundary (order queue message envelope)
"""

from . import models
from . import schema

__all__ = ['models', 'schema']
