"""
Validation Utilities Module

Contains functions for normalizing and validating form input:
- List fields sent repeated or comma-separated
- Remote URL checks
"""

import re
from typing import List, Optional, Union

URL_PATTERN = re.compile(
    r'^(https?://)?(www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)$'
)


def parse_list_field(value: Optional[Union[str, List[str]]]) -> List[str]:
    """
    Normalize a form list field

    Accepts a list of values, a comma-separated string, or a list whose
    entries are themselves comma-separated.

    Args:
        value: Raw form value

    Returns:
        List of trimmed, non-empty entries
    """
    if not value:
        return []

    raw_values = value if isinstance(value, list) else [value]
    items = []
    for raw in raw_values:
        items.extend(part.strip() for part in str(raw).split(','))
    return [item for item in items if item]


def first_value(value: Optional[Union[str, List[str]]]) -> Optional[str]:
    """Return the first entry of a possibly repeated form field"""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def validate_url(url: str) -> bool:
    """
    Validate a URL string

    Args:
        url: URL to validate

    Returns:
        True if the URL looks valid, False otherwise
    """
    if not url:
        return False
    return bool(URL_PATTERN.match(url.strip()))
