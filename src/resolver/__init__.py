"""
Reference resolvers: solution -> project -> metadata-file discovery.
"""

from .base_resolver import BaseReferenceResolver
from .line_scan_resolver import (
    METADATA_REFERENCES,
    PROJECT_EXTENSIONS,
    SOLUTION_EXTENSION,
    LineScanResolver,
    find_case_insensitive,
    reference_to_path,
)

AVAILABLE_RESOLVERS = {
    "line_scan": LineScanResolver,
}


def create_resolver_by_name(resolver_type: str, **options) -> BaseReferenceResolver:
    """Create a resolver by its registered name."""
    if resolver_type not in AVAILABLE_RESOLVERS:
        raise ValueError(f"Unknown resolver type: {resolver_type}")
    return AVAILABLE_RESOLVERS[resolver_type](**options)


__all__ = [
    "AVAILABLE_RESOLVERS",
    "BaseReferenceResolver",
    "LineScanResolver",
    "METADATA_REFERENCES",
    "PROJECT_EXTENSIONS",
    "SOLUTION_EXTENSION",
    "create_resolver_by_name",
    "find_case_insensitive",
    "reference_to_path",
]
