"""
Paginated lookups against AWS listing APIs.

Listing calls are drained lazily through the client's boto3 paginator. Error
codes that mean "the thing you asked about does not exist" are normalized into
NotFoundError so callers can tell a vanished resource from a failed call.
"""

import logging
from typing import Any, Callable, Collection, Dict, Iterator, List, Optional

from botocore.exceptions import ClientError

from aws_resource_handlers.domain.core.exceptions import (
    EmptyResultError,
    NotFoundError,
    TooManyResultsError,
)

logger = logging.getLogger(__name__)


def error_code(error: ClientError) -> str:
    """Return the AWS error code of a ClientError."""
    return error.response.get("Error", {}).get("Code", "Unknown")


def iter_all(
    client: Any,
    operation_name: str,
    result_key: str,
    not_found_codes: Collection[str] = (),
    **params: Any,
) -> Iterator[Dict[str, Any]]:
    """
    Yield every item of every page of a listing operation.

    The generator is finite and cannot be restarted.

    Args:
        client: boto3 client
        operation_name: Paginated operation, e.g. ``list_cidr_blocks``
        result_key: Key of the item list in each page
        not_found_codes: Error codes that mean the listed container is absent
        **params: Request parameters

    Raises:
        NotFoundError: If the service reports one of ``not_found_codes``
        EmptyResultError: If the listing yields no items
        ClientError: For any other API failure
    """
    paginator = client.get_paginator(operation_name)
    count = 0
    try:
        for page_number, page in enumerate(paginator.paginate(**params), start=1):
            items = page.get(result_key, [])
            logger.debug("%s page %d returned %d %s", operation_name, page_number, len(items), result_key)
            for item in items:
                count += 1
                yield item
    except ClientError as e:
        if error_code(e) in not_found_codes:
            raise NotFoundError(last_error=e, last_request=params) from e
        raise

    if count == 0:
        raise EmptyResultError(last_request=params)


def find_all(
    client: Any,
    operation_name: str,
    result_key: str,
    not_found_codes: Collection[str] = (),
    **params: Any,
) -> List[Dict[str, Any]]:
    """Drain :func:`iter_all` into a list."""
    return list(iter_all(client, operation_name, result_key, not_found_codes, **params))


def find_one(
    client: Any,
    operation_name: str,
    result_key: str,
    predicate: Optional[Callable[[Dict[str, Any]], bool]] = None,
    not_found_codes: Collection[str] = (),
    **params: Any,
) -> Dict[str, Any]:
    """
    Return the single item of a listing that matches ``predicate``.

    Raises:
        EmptyResultError: If nothing matches
        TooManyResultsError: If more than one item matches
    """
    matches = [
        item for item in iter_all(client, operation_name, result_key, not_found_codes, **params)
        if predicate is None or predicate(item)
    ]

    if not matches:
        raise EmptyResultError(last_request=params)
    if len(matches) > 1:
        raise TooManyResultsError(len(matches), last_request=params)
    return matches[0]
