"""
Completion parsing for Viral Studio.
"""

from .parser import (
    extract_script,
    extract_analysis_items,
    extract_aggregate_score,
    find_aggregate_score,
    parse_analysis_line,
    parse_completion
)

__all__ = [
    'extract_script',
    'extract_analysis_items',
    'extract_aggregate_score',
    'find_aggregate_score',
    'parse_analysis_line',
    'parse_completion'
]
