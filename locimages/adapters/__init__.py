"""
Adapters package for the different image sources.
"""

from .base import BaseAdapter
from .manager import AdapterManager, KNOWN_SOURCES
from .placeholder import generate_placeholders

__all__ = ['AdapterManager', 'BaseAdapter', 'KNOWN_SOURCES', 'generate_placeholders']
