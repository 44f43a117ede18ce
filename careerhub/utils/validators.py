"""Validators."""

import re
from typing import List, Tuple

HEX_COLOR_PATTERN = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

# Lowercase letters, digits and hyphens; starts with a letter, never ends with a hyphen
COMPANY_SLUG_PATTERN = re.compile(r'^[a-z](?:[a-z0-9-]*[a-z0-9])?$')

URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)

PHONE_PATTERN = re.compile(r'^\+?[\d\s()-]+$')


def validate_hex_color(value: str) -> bool:
    """Validate ``#RGB`` / ``#RRGGBB`` colours."""
    return bool(HEX_COLOR_PATTERN.match(value))


def validate_company_slug(value: str) -> bool:
    return bool(COMPANY_SLUG_PATTERN.match(value))


def validate_url(url: str) -> bool:
    """Validate http(s) URL format."""
    return bool(URL_PATTERN.match(url))


def validate_phone(phone: str) -> bool:
    """Validate phone number (10+ digits, optional +, spaces, dashes, parentheses)."""
    return bool(PHONE_PATTERN.match(phone)) and len(re.sub(r'\D', '', phone)) >= 10


def validate_password_strength(password: str) -> Tuple[bool, List[str]]:
    """Validate password strength."""
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")

    if not re.search(r'[A-Z]', password):
        errors.append("Password must contain at least one uppercase letter")

    if not re.search(r'[a-z]', password):
        errors.append("Password must contain at least one lowercase letter")

    if not re.search(r'\d', password):
        errors.append("Password must contain at least one digit")

    if not re.search(r'[@$!%*?&#_]', password):
        errors.append("Password must contain at least one special character")

    return len(errors) == 0, errors
