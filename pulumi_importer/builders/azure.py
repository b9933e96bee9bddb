"""Build `pulumi import` manifests for an Azure resource group."""

from __future__ import annotations

from typing import Iterable

from ..constants import AZURE_RESOURCE_GROUP_TOKEN
from ..core.lookups import MappingTables
from ..core.models import AzureResource, ImportEntry, ImportManifest, sanitize_name
from ..normalizers.azure import azure_type_token


def build_azure_manifest(
    group_name: str,
    group_id: str,
    resources: Iterable[AzureResource],
    tables: MappingTables,
) -> ImportManifest:
    """Resource group first, then every resource with the group as ancestor.

    Raises:
        UnmappedResourceTypeError: A resource type has no known token
    """
    manifest = ImportManifest()
    manifest.add(ImportEntry(type=AZURE_RESOURCE_GROUP_TOKEN, id=group_id, name=sanitize_name(group_name)))

    for resource in resources:
        token = azure_type_token(resource.resource_type, tables)
        manifest.add(ImportEntry(type=token, id=resource.resource_id, name=sanitize_name(resource.name)))
        manifest.add_ancestors(token, [AZURE_RESOURCE_GROUP_TOKEN])

    return manifest
