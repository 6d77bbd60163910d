"""
DateValidator - validates calendar dates, loosely or against an exact format.
"""

from collections.abc import Mapping
from typing import Any

from dateutil import parser as dateutil_parser

from fieldguard.core.models import RuleInstance, RuleKind
from fieldguard.utils.date_format import parse_with_format, render_with_format

from .base_validator import BaseValidator, as_text


class DateValidator(BaseValidator):
    """
    Validates dates.

    - date: the value parses as a calendar date (permissive, via dateutil)
    - date_format: the value parses under the exact format AND rendering the
      parsed date under that format reproduces the value character for
      character ("2024-1-5" fails "Y-m-d" even though it parses)
    """

    kinds = (RuleKind.DATE, RuleKind.DATE_FORMAT)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        text = as_text(value)
        if rule.kind is RuleKind.DATE:
            return self._is_date(text)
        return self._matches_format(text, rule.format)

    @staticmethod
    def _is_date(text: str) -> bool:
        try:
            dateutil_parser.parse(text)
        except (ValueError, OverflowError):
            return False
        return True

    @staticmethod
    def _matches_format(text: str, date_format: str) -> bool:
        try:
            moment = parse_with_format(text, date_format)
        except ValueError:
            return False
        return render_with_format(moment, date_format) == text
