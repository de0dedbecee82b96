"""Route 53 CIDR location handler.

A CIDR location is a named list of CIDR blocks inside a CIDR collection. Every
change goes through ChangeCidrCollection, which accepts the collection version
for optimistic locking. The version changes after each successful change, so
only the first change of an operation carries it.
"""
import ipaddress
from typing import Any, Dict, List, Optional

from aws_resource_handlers.domain.base.context import ProviderContext
from aws_resource_handlers.domain.base.reconciliation import diff
from aws_resource_handlers.domain.core.exceptions import NotFoundError, ValidationError
from aws_resource_handlers.domain.resources import CIDRLocation
from aws_resource_handlers.infrastructure.aws.aws_client import AWSClient
from aws_resource_handlers.infrastructure.aws.exceptions import ApiError
from aws_resource_handlers.infrastructure.aws.handlers.base_handler import ResourceHandler
from aws_resource_handlers.infrastructure.aws.pagination import find_one, iter_all

CHANGE_ACTION_PUT = "PUT"
CHANGE_ACTION_DELETE_IF_EXISTS = "DELETE_IF_EXISTS"

NO_SUCH_CIDR_COLLECTION = "NoSuchCidrCollectionException"
NO_SUCH_CIDR_LOCATION = "NoSuchCidrLocationException"


def find_cidr_collection_by_id(client: Any, collection_id: str) -> Dict[str, Any]:
    """
    Find a CIDR collection summary (``Arn``, ``Id``, ``Name``, ``Version``).

    Raises:
        NotFoundError: If no collection has the ID
    """
    return find_one(
        client, 'list_cidr_collections', 'CidrCollections',
        predicate=lambda collection: collection.get('Id') == collection_id,
    )


def find_cidr_location_by_two_part_key(client: Any, collection_id: str,
                                       location_name: str) -> List[str]:
    """
    List the CIDR blocks of a location.

    A missing collection, a missing location and a location without blocks
    all raise NotFoundError.
    """
    blocks = iter_all(
        client, 'list_cidr_blocks', 'CidrBlocks',
        not_found_codes=(NO_SUCH_CIDR_COLLECTION, NO_SUCH_CIDR_LOCATION),
        CollectionId=collection_id,
        LocationName=location_name,
    )
    return [block['CidrBlock'] for block in blocks]


def canonical_cidr_block(block: str) -> str:
    """Canonical form of a CIDR block as returned by Route 53, e.g. ``2001:db8::/32``."""
    return str(ipaddress.ip_network(block, strict=False))


class CIDRLocationHandler(ResourceHandler[CIDRLocation]):
    """Handler for ``aws_route53_cidr_location``."""

    model = CIDRLocation

    def create(self, aws_client: AWSClient, context: ProviderContext,
               plan: CIDRLocation) -> CIDRLocation:
        conn = aws_client.route53_client
        collection = self._find_collection(context, conn, plan.cidr_collection_id)

        self._change(
            context, conn, "creating Route 53 CIDR Location", plan.name,
            collection_id=plan.cidr_collection_id,
            location_name=plan.name,
            action=CHANGE_ACTION_PUT,
            cidr_blocks=plan.cidr_blocks,
            collection_version=collection.get('Version'),
        )

        data = plan.model_copy()
        data.id = data.build_id()
        self._logger.info("Created Route 53 CIDR Location %s", data.id)

        return self._read_after_write(aws_client, context, data, "creating Route 53 CIDR Location")

    def read(self, aws_client: AWSClient, context: ProviderContext,
             state: CIDRLocation) -> Optional[CIDRLocation]:
        data = state.model_copy()
        data.init_from_id()

        context.raise_if_cancelled("reading Route 53 CIDR Location")
        try:
            cidr_blocks = find_cidr_location_by_two_part_key(
                aws_client.route53_client, data.cidr_collection_id, data.name
            )
        except NotFoundError as e:
            self._drop(data, e)
            return None
        except Exception as e:
            raise self._api_error("reading Route 53 CIDR Location", data.id, e) from e

        try:
            data.cidr_blocks = frozenset(canonical_cidr_block(block) for block in cidr_blocks)
        except ValueError as e:
            raise ApiError("reading Route 53 CIDR Location", data.id, e) from e
        return data

    def update(self, aws_client: AWSClient, context: ProviderContext,
               state: CIDRLocation, plan: CIDRLocation) -> CIDRLocation:
        self._reject_replacement_changes(state, plan)

        conn = aws_client.route53_client
        collection = self._find_collection(context, conn, plan.cidr_collection_id)

        resource_id = state.id or plan.build_id()
        delta = diff(state.cidr_blocks, plan.cidr_blocks)
        collection_version = collection.get('Version')

        if delta.additions:
            self._change(
                context, conn, "adding CIDR blocks to Route 53 CIDR Location", resource_id,
                collection_id=plan.cidr_collection_id,
                location_name=plan.name,
                action=CHANGE_ACTION_PUT,
                cidr_blocks=delta.additions,
                collection_version=collection_version,
            )
            # The collection version has moved on after the last change.
            collection_version = None

        if delta.removals:
            self._change(
                context, conn, "removing CIDR blocks from Route 53 CIDR Location", resource_id,
                collection_id=plan.cidr_collection_id,
                location_name=plan.name,
                action=CHANGE_ACTION_DELETE_IF_EXISTS,
                cidr_blocks=delta.removals,
                collection_version=collection_version,
            )

        self._logger.info(
            "Updated Route 53 CIDR Location %s: %d added, %d removed",
            resource_id, len(delta.additions), len(delta.removals)
        )
        return plan.model_copy(update={'id': resource_id})

    def delete(self, aws_client: AWSClient, context: ProviderContext,
               state: CIDRLocation) -> None:
        conn = aws_client.route53_client

        try:
            collection = self._find_collection(context, conn, state.cidr_collection_id)
        except ApiError as e:
            if isinstance(e.cause, NotFoundError):
                self._logger.info(
                    "Route 53 CIDR Collection %s already gone, nothing to delete", state.cidr_collection_id
                )
                return
            raise

        self._logger.debug("deleting Route 53 CIDR Location %s", state.id)

        try:
            self._change(
                context, conn, "deleting Route 53 CIDR Location", state.id or state.name,
                collection_id=state.cidr_collection_id,
                location_name=state.name,
                action=CHANGE_ACTION_DELETE_IF_EXISTS,
                cidr_blocks=state.cidr_blocks,
                collection_version=collection.get('Version'),
            )
        except ApiError as e:
            if e.error_code in (NO_SUCH_CIDR_COLLECTION, NO_SUCH_CIDR_LOCATION):
                self._logger.info("Route 53 CIDR Location %s already gone", state.id)
                return
            raise

    def import_state(self, aws_client: AWSClient, context: ProviderContext,
                     resource_id: str) -> Optional[CIDRLocation]:
        stub = CIDRLocation.model_construct(id=resource_id, cidr_collection_id="", name="",
                                            cidr_blocks=frozenset())
        return self.read(aws_client, context, stub)

    def _find_collection(self, context: ProviderContext, conn: Any,
                         collection_id: str) -> Dict[str, Any]:
        operation = "reading Route 53 CIDR Collection"
        context.raise_if_cancelled(operation)
        try:
            return find_cidr_collection_by_id(conn, collection_id)
        except Exception as e:
            raise self._api_error(operation, collection_id, e) from e

    def _change(self, context: ProviderContext, conn: Any, operation: str, target: str, *,
                collection_id: str, location_name: str, action: str,
                cidr_blocks: Any, collection_version: Optional[int]) -> None:
        params: Dict[str, Any] = {
            'Id': collection_id,
            'Changes': [{
                'LocationName': location_name,
                'Action': action,
                'CidrList': sorted(cidr_blocks),
            }],
        }
        if collection_version is not None:
            params['CollectionVersion'] = collection_version

        self._call(context, operation, target, conn.change_cidr_collection, **params)

    def _reject_replacement_changes(self, state: CIDRLocation, plan: CIDRLocation) -> None:
        changed = state.replacement_fields_changed(plan)
        if changed:
            raise ValidationError(
                f"{', '.join(changed)} of Route 53 CIDR Location ({state.id}) cannot be updated in place",
                {name: "requires replacement" for name in changed},
            )
