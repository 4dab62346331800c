"""
Core module - Pure domain logic with no external dependencies.

This module contains:
- domain/: Ticket entity, value objects and domain events
- ports/: Abstract interfaces that adapters must implement
"""

from .domain import *
from .ports import *
