"""String-format rules.

Each rule accepts str / bytes values; absent and empty values pass.

Usage:
    validate(customer.email, Required, Email)
    validate(homepage, URL.error("must be a link to your site"))
"""
from __future__ import annotations

import re
from ipaddress import IPv4Address, IPv6Address, ip_address
from urllib.parse import urlparse
from uuid import UUID as StdUUID

from rulekit.errors import (
    ERR_IS_ALPHA,
    ERR_IS_ALPHANUMERIC,
    ERR_IS_DIGIT,
    ERR_IS_EMAIL,
    ERR_IS_FLOAT,
    ERR_IS_INT,
    ERR_IS_IP,
    ERR_IS_IPV4,
    ERR_IS_IPV6,
    ERR_IS_LOWER_CASE,
    ERR_IS_UPPER_CASE,
    ERR_IS_URL,
    ERR_IS_UUID,
)
from .rules import StringRule

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
INT_PATTERN = re.compile(r"^[+-]?(0|[1-9][0-9]*)$")
FLOAT_PATTERN = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")
ALPHA_PATTERN = re.compile(r"^[a-zA-Z]+$")
ALPHANUMERIC_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
DIGIT_PATTERN = re.compile(r"^[0-9]+$")


# ============================================================================
# Predicates
# ============================================================================

def is_email(value: str) -> bool: return len(value) <= 254 and EMAIL_PATTERN.fullmatch(value) is not None


def is_url(value: str) -> bool:
    """Absolute http(s)/ftp URL with a dotted host (``localhost`` excepted)."""
    try: parsed = urlparse(value)
    except ValueError: return False
    if parsed.scheme not in ("http", "https", "ftp") or not parsed.hostname: return False
    return "." in parsed.hostname or parsed.hostname == "localhost" or _is_ip_literal(parsed.hostname)


def _is_ip_literal(host: str) -> bool:
    try: ip_address(host)
    except ValueError: return False
    return True


def is_uuid(value: str) -> bool:
    try: StdUUID(value)
    except ValueError: return False
    return True


def _parses(value: str, kind: type) -> bool:
    try: kind(value)
    except ValueError: return False
    return True


def is_ip(value: str) -> bool: return _parses(value, IPv4Address) or _parses(value, IPv6Address)


def is_ipv4(value: str) -> bool: return _parses(value, IPv4Address)


def is_ipv6(value: str) -> bool: return _parses(value, IPv6Address)


def is_lower_case(value: str) -> bool: return value == value.lower()


def is_upper_case(value: str) -> bool: return value == value.upper()


# ============================================================================
# Rules
# ============================================================================

Email = StringRule(is_email, ERR_IS_EMAIL)
URL = StringRule(is_url, ERR_IS_URL)
UUID = StringRule(is_uuid, ERR_IS_UUID)
IP = StringRule(is_ip, ERR_IS_IP)
IPv4 = StringRule(is_ipv4, ERR_IS_IPV4)
IPv6 = StringRule(is_ipv6, ERR_IS_IPV6)
Digit = StringRule(lambda s: DIGIT_PATTERN.fullmatch(s) is not None, ERR_IS_DIGIT)
Alpha = StringRule(lambda s: ALPHA_PATTERN.fullmatch(s) is not None, ERR_IS_ALPHA)
Alphanumeric = StringRule(lambda s: ALPHANUMERIC_PATTERN.fullmatch(s) is not None, ERR_IS_ALPHANUMERIC)
LowerCase = StringRule(is_lower_case, ERR_IS_LOWER_CASE)
UpperCase = StringRule(is_upper_case, ERR_IS_UPPER_CASE)
Int = StringRule(lambda s: INT_PATTERN.fullmatch(s) is not None, ERR_IS_INT)
Float = StringRule(lambda s: FLOAT_PATTERN.fullmatch(s) is not None, ERR_IS_FLOAT)
