"""Resource reference resolution.

Turns a raw question plus explicitly requested resources into the final
resource set for a turn.
"""

import logging
import re

from ..exceptions import EmptyResourceSetError
from .base import ResourceRegistry
from .models import ParsedQuery

logger = logging.getLogger(__name__)

MENTION_PATTERN = re.compile(r"@(\w+)", re.ASCII)


def parse_query(raw: str) -> ParsedQuery:
    """Extract @mentions from a question.

    Args:
        raw: Question text as typed by the user

    Returns:
        ParsedQuery with the mentions removed from the text and the
        mentioned names collected in order (duplicates kept)

    Examples:
        >>> parse_query("@svelte how do stores work?")
        ParsedQuery(query='how do stores work?', resources=['svelte'])
    """
    resources = MENTION_PATTERN.findall(raw)
    query = MENTION_PATTERN.sub("", raw).strip()
    return ParsedQuery(query=query, resources=resources)


def merge_resources(
    explicit: list[str],
    mentioned: list[str],
    single: str | None = None
) -> list[str]:
    """Merge explicit and mentioned resources, deduplicating.

    Order is explicit names, then mentions, then ``single``, keeping the
    first occurrence of each name.
    """
    names = [*explicit, *mentioned]
    if single:
        names.append(single)
    return list(dict.fromkeys(names))


async def resolve_resources(
    registry: ResourceRegistry,
    names: list[str]
) -> list[str]:
    """Return ``names``, or every registry resource when ``names`` is empty.

    Raises:
        EmptyResourceSetError: If no names were given and the registry is empty
    """
    if names:
        return list(names)

    resources = await registry.list_resources()
    if not resources:
        raise EmptyResourceSetError()

    resolved = [resource.name for resource in resources]
    logger.debug("No resources named, using all %d configured", len(resolved))
    return resolved
