"""Promptline - single-line, horizontally scrolling text editing."""

from .line import EditableLine, UnboundedLine, TruncatedLine, ScrollingLine, RenderMode, create_line
from .actions import Action, EditAction, apply_action

__all__ = [
    'EditableLine',
    'UnboundedLine',
    'TruncatedLine',
    'ScrollingLine',
    'RenderMode',
    'create_line',
    'Action',
    'EditAction',
    'apply_action',
]
