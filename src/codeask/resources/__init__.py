"""Resource reference resolution for codeask."""

from .base import ResourceRegistry, StaticResourceRegistry
from .models import ParsedQuery, Resource
from .resolver import merge_resources, parse_query, resolve_resources

__all__ = [
    "ParsedQuery",
    "Resource",
    "ResourceRegistry",
    "StaticResourceRegistry",
    "merge_resources",
    "parse_query",
    "resolve_resources",
]
