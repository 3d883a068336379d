"""
Input source implementations.
"""

from slapstick.input.sources.base import InputSource
from slapstick.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']
