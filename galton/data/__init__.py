"""
Data export module for board runs.

Provides functions to snapshot frames and export them as JSONL.
"""

from .exporter import export_session, export_to_dict
from .formats import format_entity, format_frame, format_session_header

__all__ = [
    'export_session',
    'export_to_dict',
    'format_entity',
    'format_frame',
    'format_session_header',
]
