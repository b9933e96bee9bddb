"""Azure SDK and `az` CLI calls used by the importer."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from azure.core.exceptions import ResourceNotFoundError
from azure.identity import AzureCliCredential
from azure.mgmt.resource import ResourceManagementClient

from ..core.errors import ExternalCommandError, ResourceGroupNotFoundError
from ..core.models import AzureAccount, AzureResource
from ..core.process import run_command
from ..normalizers.azure import normalize_generic_resource

logger = logging.getLogger(__name__)


def az_account_show() -> Dict[str, Any]:
    """Return the parsed output of `az account show`.

    Raises:
        ExternalCommandError: The CLI exited with a non-zero code
    """
    process = run_command(["az", "account", "show"])
    if process.returncode != 0:
        raise ExternalCommandError("az account show", process.stderr, process.returncode)
    return json.loads(process.stdout)


def azure_account() -> AzureAccount:
    account = az_account_show()
    user = account.get("user") or {}
    return AzureAccount(
        subscription_id=account["id"],
        subscription_name=account["name"],
        user_name=user.get("name", "") if isinstance(user, dict) else "",
    )


def default_subscription_id(override: Optional[str] = None) -> str:
    """The configured subscription, or the one `az` is currently using."""
    if override:
        return override
    return az_account_show()["id"]


def resource_client(subscription_id: str) -> ResourceManagementClient:
    return ResourceManagementClient(AzureCliCredential(), subscription_id)


def list_resource_groups(client: ResourceManagementClient) -> List[str]:
    return [group.name for group in client.resource_groups.list()]


def get_resource_group(client: ResourceManagementClient, name: str) -> Any:
    """Fetch a resource group.

    Raises:
        ResourceGroupNotFoundError: No group with that name exists
    """
    try:
        return client.resource_groups.get(name)
    except ResourceNotFoundError as e:
        raise ResourceGroupNotFoundError(name) from e


def list_group_resources(client: ResourceManagementClient, name: str) -> List[AzureResource]:
    """Enumerate every resource of a group, page by page."""
    resources: List[AzureResource] = []
    pager = client.resources.list_by_resource_group(name)
    for page in pager.by_page():
        for resource in page:
            resources.append(normalize_generic_resource(resource))
    logger.info(f"Found {len(resources)} resources in resource group {name}")
    return resources
