"""
Domain layer package housing value types, errors and listing parsers.
"""

from typing import Final

MAX_CONTAINER_NAME_LENGTH: Final[int] = 256
MAX_OBJECT_NAME_LENGTH: Final[int] = 1024
