"""
Utility modules for the ModredIP client
- Big integer serialization for JSON responses
- Logging setup
"""

from .bigint_serializer import convert_bigints_to_strings
from .logging_config import configure_logging

__all__ = [
    'convert_bigints_to_strings',
    'configure_logging',
]
