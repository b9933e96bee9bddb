"""Azure Resource Manager normalization."""

from __future__ import annotations

import logging
from typing import Any

from ..core.errors import UnmappedResourceTypeError
from ..core.lookups import MappingTables
from ..core.models import AzureResource

logger = logging.getLogger(__name__)


def azure_type_token(resource_type: str, tables: MappingTables) -> str:
    """Look up the azure-native token for an ARM resource type.

    Raises:
        UnmappedResourceTypeError: The type is not in the token table
    """
    token = tables.azure_token(resource_type)
    if token is None:
        raise UnmappedResourceTypeError(resource_type)
    return token


def normalize_generic_resource(resource: Any) -> AzureResource:
    """Convert an ARM `GenericResourceExpanded` into an `AzureResource`.

    The SDK object exposes `id`, `type` and `name` attributes.
    """
    return AzureResource(
        resource_id=str(resource.id),
        resource_type=str(resource.type),
        name=str(resource.name),
    )
