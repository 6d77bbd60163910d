"""
FormatValidator - validates well-known string formats (email, url, domain, ip, json).
"""

import ipaddress
import json
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from fieldguard.core.models import RuleInstance, RuleKind

from .base_validator import BaseValidator, as_text

_HOSTNAME_LABEL = re.compile(r"(?!-)[A-Za-z0-9-]{1,63}(?<!-)")
_URL_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")

# Schemes that address a resource without a host component
_HOSTLESS_SCHEMES = {"mailto", "news", "file", "urn", "tel"}


def is_valid_hostname(value: str) -> bool:
    """Check RFC 1123 hostname syntax (labels of letters, digits and inner hyphens)."""
    hostname = value[:-1] if value.endswith(".") else value
    if not hostname or len(hostname) > 253:
        return False
    return all(_HOSTNAME_LABEL.fullmatch(label) for label in hostname.split("."))


class FormatValidator(BaseValidator):
    """
    Validates that a value, stringified, matches a well-known format.

    - email: RFC 5322 address syntax, via email-validator (no DNS lookup)
    - url: absolute URL with a scheme and, for network schemes, a host
    - domain: hostname syntax
    - ip: IPv4 or IPv6 address
    - json: syntactically valid JSON document
    """

    kinds = (RuleKind.EMAIL, RuleKind.URL, RuleKind.DOMAIN, RuleKind.IP, RuleKind.JSON)

    def passes(self, rule: RuleInstance, value: Any, data: Mapping[str, Any]) -> bool:
        text = as_text(value)
        checks = {
            RuleKind.EMAIL: self._is_email,
            RuleKind.URL: self._is_url,
            RuleKind.DOMAIN: is_valid_hostname,
            RuleKind.IP: self._is_ip,
            RuleKind.JSON: self._is_json,
        }
        return checks[rule.kind](text)

    @staticmethod
    def _is_email(text: str) -> bool:
        try:
            validate_email(text, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    @staticmethod
    def _is_url(text: str) -> bool:
        if any(char.isspace() for char in text):
            return False
        try:
            parsed = urlparse(text)
            # Accessing port validates it
            parsed.port
        except ValueError:
            return False

        if not parsed.scheme or not _URL_SCHEME.fullmatch(parsed.scheme):
            return False
        if parsed.scheme.lower() in _HOSTLESS_SCHEMES:
            return bool(parsed.path or parsed.netloc)
        if not parsed.hostname:
            return False
        return is_valid_hostname(parsed.hostname) or FormatValidator._is_ip(parsed.hostname)

    @staticmethod
    def _is_ip(text: str) -> bool:
        try:
            ipaddress.ip_address(text)
        except ValueError:
            return False
        return True

    @staticmethod
    def _is_json(text: str) -> bool:
        try:
            json.loads(text)
        except (ValueError, RecursionError):
            return False
        return True
