"""
Pointer input for Slapstick games.

Sources turn host events into normalized PointerEvents the Game consumes
through receive_input().
"""

from slapstick.input.input_event import PointerEvent, PointerEventType

__all__ = ['PointerEvent', 'PointerEventType']
