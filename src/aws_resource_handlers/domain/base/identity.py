"""Composite resource identifiers.

Some resources have no single server-issued identifier. Their key fields are
joined into one opaque ID so that a read can rebuild them from state alone,
e.g. a Route 53 CIDR location is identified by ``<collection id>:<name>``.
"""

from typing import List, Sequence

from aws_resource_handlers.domain.core.exceptions import FormatError

RESOURCE_ID_SEPARATOR = ":"


def encode(
    parts: Sequence[str],
    expected_count: int,
    delimiter: str = RESOURCE_ID_SEPARATOR,
    allow_empty_parts: bool = False,
) -> str:
    """
    Join ID parts into a single resource ID.

    Args:
        parts: Ordered ID parts
        expected_count: Number of parts the resource type uses
        delimiter: Separator placed between parts
        allow_empty_parts: Whether blank parts are accepted

    Returns:
        The composite resource ID

    Raises:
        FormatError: If the part count is wrong, a part is blank, or a part
            contains the delimiter
    """
    parts = list(parts)
    if len(parts) != expected_count:
        raise FormatError(
            parts,
            f"unexpected format for ID parts ({parts}), expected {expected_count} parts",
        )

    blank = [i for i, part in enumerate(parts) if part == ""]
    if blank and not allow_empty_parts:
        raise FormatError(
            parts,
            f"unexpected format for ID parts ({parts}), the following id parts indexes are blank ({blank})",
        )

    for part in parts:
        if delimiter in part:
            raise FormatError(
                parts,
                f"unexpected format for ID part ({part}), must not contain ({delimiter})",
            )

    return delimiter.join(parts)


def decode(
    resource_id: str,
    expected_count: int,
    delimiter: str = RESOURCE_ID_SEPARATOR,
    allow_empty_parts: bool = False,
) -> List[str]:
    """
    Split a resource ID produced by :func:`encode` back into its parts.

    Raises:
        FormatError: If the part count is wrong or a part is blank
    """
    parts = resource_id.split(delimiter)
    if len(parts) != expected_count:
        raise FormatError(
            resource_id,
            f"unexpected format for ID ({resource_id}), expected {expected_count} parts "
            f"separated by ({delimiter}), got {len(parts)}",
        )

    if not allow_empty_parts and any(part == "" for part in parts):
        raise FormatError(
            resource_id,
            f"unexpected format for ID ({resource_id}), all parts must be non-empty",
        )

    return parts
