"""Request-level importer operations.

Each operation builds its own clients and lookup structures, returns an
`Ok`/`Err` result and never raises to its caller.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .builders.aws import build_aws_manifest, index_security_group_rules, should_query_security_group_rules
from .builders.azure import build_azure_manifest
from .collectors import aws as aws_collector
from .collectors import azure as azure_collector
from .config import Settings, get_settings
from .core.lookups import MappingTables, load_mapping_tables
from .core.models import (
    AzureAccount,
    AzureResourceGroupResult,
    CallerIdentity,
    ImportPreview,
    SearchResult,
)
from .core.result import Result, capture_errors
from .normalizers.aws import normalize_resources
from .pulumi_cli import import_preview as run_import_preview
from .pulumi_cli import pulumi_version
from .search.query import augment_query

logger = logging.getLogger(__name__)


@capture_errors("get pulumi version")
def get_pulumi_version() -> Result[str]:
    return pulumi_version()


@capture_errors("get aws caller identity")
def get_caller_identity(session: Optional[Any] = None) -> Result[CallerIdentity]:
    session = session or aws_collector.create_session()
    return aws_collector.caller_identity(session)


@capture_errors("search aws")
def search_aws(
    query_string: str,
    tags: str = "",
    session: Optional[Any] = None,
    tables: Optional[MappingTables] = None,
    settings: Optional[Settings] = None,
) -> Result[SearchResult]:
    """Search AWS resources and build their import manifest.

    Args:
        query_string: Resource Explorer query
        tags: `"k1=v1;k2=v2"` tag filters, OR-ed together
        session: boto3 session, created from the environment when omitted
        tables: Mapping tables, the bundled ones when omitted
        settings: Settings, the cached instance when omitted

    Returns:
        Ok(SearchResult) or Err("<ErrorType>: <message>")
    """
    settings = settings or get_settings()
    tables = tables or load_mapping_tables()
    session = session or aws_collector.create_session()

    query = augment_query(query_string, tags)
    logger.info(f"Searching AWS resources: {query!r}")
    raw_resources = aws_collector.search_resources(session, query, settings.search_page_size)

    security_group_rules = {}
    if should_query_security_group_rules(r.get("ResourceType", "") for r in raw_resources):
        security_group_rules = index_security_group_rules(aws_collector.describe_security_group_rules(session))

    resources = normalize_resources(raw_resources, tags)
    manifest = build_aws_manifest(resources, tables, security_group_rules)
    logger.info(f"Built import manifest with {len(manifest.resources)} entries")
    return SearchResult(resources=resources, pulumi_import_json=manifest.to_json())


@capture_errors("get azure resource groups")
def get_resource_groups(client: Optional[Any] = None, settings: Optional[Settings] = None) -> Result[List[str]]:
    if client is None:
        settings = settings or get_settings()
        subscription_id = azure_collector.default_subscription_id(settings.azure_subscription_id)
        client = azure_collector.resource_client(subscription_id)
    return azure_collector.list_resource_groups(client)


@capture_errors("get azure account")
def azure_account() -> Result[AzureAccount]:
    return azure_collector.azure_account()


@capture_errors("get resources under resource group")
def get_resources_under_resource_group(
    resource_group_name: str,
    client: Optional[Any] = None,
    tables: Optional[MappingTables] = None,
    settings: Optional[Settings] = None,
) -> Result[AzureResourceGroupResult]:
    """List a resource group's resources and build their import manifest."""
    tables = tables or load_mapping_tables()
    if client is None:
        settings = settings or get_settings()
        subscription_id = azure_collector.default_subscription_id(settings.azure_subscription_id)
        client = azure_collector.resource_client(subscription_id)

    group = azure_collector.get_resource_group(client, resource_group_name)
    resources = azure_collector.list_group_resources(client, resource_group_name)
    manifest = build_azure_manifest(resource_group_name, str(group.id), resources, tables)
    return AzureResourceGroupResult(azure_resources=resources, pulumi_import_json=manifest.to_json())


@capture_errors("import preview")
def import_preview(
    language: str,
    pulumi_import_json: str,
    settings: Optional[Settings] = None,
) -> Result[ImportPreview]:
    settings = settings or get_settings()
    return run_import_preview(language, pulumi_import_json, settings.pulumi_config_passphrase)
