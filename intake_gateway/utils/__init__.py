"""
Utility functions
"""
from intake_gateway.utils.logger import setup_logger, get_logger
from intake_gateway.utils.validators import (
    validate_sys_id,
    sanitize_input,
    extract_client
)

__all__ = [
    "setup_logger",
    "get_logger",
    "validate_sys_id",
    "sanitize_input",
    "extract_client",
]
