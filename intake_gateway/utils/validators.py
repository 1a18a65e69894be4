"""
Input validation utilities
"""
import re
from typing import Optional

SYS_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
CLIENT_MARKER_PATTERN = re.compile(r"Client:\s*([^\n]+)")


def validate_sys_id(sys_id: str) -> bool:
    """
    Validate ServiceNow sys_id format

    Args:
        sys_id: Record identifier to validate

    Returns:
        True if the value is a 32-character lowercase hex string
    """
    return bool(sys_id) and SYS_ID_PATTERN.match(sys_id) is not None


def sanitize_input(text: str, max_length: int = 10000) -> str:
    """
    Sanitize user input

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    # Remove null bytes
    text = text.replace('\x00', '')

    # Truncate to max length
    if len(text) > max_length:
        text = text[:max_length]

    return text.strip()


def extract_client(description: Optional[str]) -> Optional[str]:
    """
    Recover the client name from an incident description

    Args:
        description: Incident long text containing a `Client: <name>` line

    Returns:
        Client name, or None when no marker is present
    """
    if not description:
        return None
    match = CLIENT_MARKER_PATTERN.search(description)
    if not match:
        return None
    return match.group(1).strip() or None
