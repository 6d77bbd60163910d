"""
Shared helpers with no dependency on the rule models.
"""

from .date_format import check_date_format, format_directives, parse_with_format, render_with_format

__all__ = ["check_date_format", "format_directives", "parse_with_format", "render_with_format"]
