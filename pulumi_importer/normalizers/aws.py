"""AWS Resource Explorer normalization.

Turns Resource Explorer search hits into `NormalizedResource` records and
derives the Pulumi type token for each of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..constants import SECURITY_GROUP_EGRESS_RULE_TOKEN, SECURITY_GROUP_INGRESS_RULE_TOKEN
from ..core.lookups import MappingTables
from ..core.models import NormalizedResource, SecurityGroupRuleDetail
from ..search.query import matches_tag_filters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceResourceType:
    """A Resource Explorer type of the form `<service>:<type>`."""
    service: str
    resource_type: str


@dataclass(frozen=True)
class UnparsedResourceType:
    """Any other type string, kept verbatim."""
    raw: str


ResourceType = Union[ServiceResourceType, UnparsedResourceType]


def parse_resource_type(raw: str) -> ResourceType:
    """Split `ec2:security-group` into service and type.

    Defined for every input: strings that do not have exactly one colon
    come back as `UnparsedResourceType`.
    """
    parts = (raw or "").split(":")
    if len(parts) == 2:
        return ServiceResourceType(service=parts[0], resource_type=parts[1])
    return UnparsedResourceType(raw=raw or "")


def capitalize(value: str) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def normalize_type_name(resource_type: str) -> str:
    """`security-group` -> `SecurityGroup`."""
    return "".join(capitalize(part) for part in resource_type.split("-"))


def normalize_module_name(resource_type: str) -> str:
    """`security-group` -> `securityGroup`; single fragments are kept as-is."""
    parts = resource_type.split("-")
    if len(parts) == 1:
        return resource_type
    return parts[0] + "".join(capitalize(part) for part in parts[1:])


def arn_resource(arn: str) -> str:
    """Return the resource component of an ARN.

    `arn:partition:service:region:account:resource` where the resource may
    itself contain colons. Strings that are not ARNs are returned unchanged.
    """
    parts = (arn or "").split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        logger.debug(f"Not an ARN, using it verbatim: {arn!r}")
        return arn or ""
    return parts[5]


def resource_id(arn: str, raw_resource_type: str) -> str:
    """Extract the short resource ID from an ARN.

    Resource Explorer ARNs usually repeat the type in the resource path
    (`.../security-group/sg-123`); that prefix is stripped.

    Example:
        >>> resource_id("arn:aws:ec2:us-east-1:123456789012:security-group/sg-1", "ec2:security-group")
        'sg-1'
    """
    resource = arn_resource(arn)
    parsed = parse_resource_type(raw_resource_type)
    if isinstance(parsed, ServiceResourceType) and parsed.resource_type:
        for separator in ("/", ":"):
            prefix = parsed.resource_type + separator
            if resource.startswith(prefix):
                return resource[len(prefix):]
    return resource


def _property_value(prop: Mapping[str, Any]) -> Any:
    # boto3 returns the property document under "Data"
    if "Data" in prop:
        return prop["Data"]
    return prop.get("Value")


def resource_tags(properties: Optional[Iterable[Mapping[str, Any]]]) -> Dict[str, str]:
    """Collect tags from Resource Explorer properties.

    Only a `tags`/`Tags` property holding a list of `{"Key": str, "Value": str}`
    dictionaries yields tags; any other shape gives an empty map.
    """
    for prop in properties or []:
        if not isinstance(prop, Mapping) or prop.get("Name") not in ("tags", "Tags"):
            continue
        data = _property_value(prop)
        if not isinstance(data, list):
            logger.debug(f"Unrecognized tags property shape: {type(data).__name__}")
            return {}
        tags: Dict[str, str] = {}
        for item in data:
            if not isinstance(item, Mapping):
                continue
            key, value = item.get("Key"), item.get("Value")
            if isinstance(key, str) and isinstance(value, str):
                tags[key] = value
        return tags
    return {}


def pulumi_type(
    raw_resource_type: str,
    short_id: str,
    tables: MappingTables,
    security_group_rules: Optional[Mapping[str, SecurityGroupRuleDetail]] = None,
) -> str:
    """Derive the Pulumi type token for a Resource Explorer resource.

    Resources whose short ID is a known security group rule ID get the
    egress/ingress rule token, whatever their reported type.
    NOTE: that match is purely on the ID string.

    Example:
        >>> pulumi_type("rds:subgrp", "my-group", MappingTables())
        'aws:rds/subnetGroup:SubnetGroup'
    """
    parsed = parse_resource_type(raw_resource_type)
    if isinstance(parsed, UnparsedResourceType):
        return f"aws:{parsed.raw}"

    rule = (security_group_rules or {}).get(short_id)
    if rule is not None:
        return security_group_rule_token(rule)

    service, type_name = tables.type_renames.get(
        (parsed.service, parsed.resource_type),
        (parsed.service, parsed.resource_type),
    )
    return f"aws:{service}/{normalize_module_name(type_name)}:{normalize_type_name(type_name)}"


def security_group_rule_token(rule: SecurityGroupRuleDetail) -> str:
    if rule.is_egress:
        return SECURITY_GROUP_EGRESS_RULE_TOKEN
    return SECURITY_GROUP_INGRESS_RULE_TOKEN


def requires_full_arn(token: str, tables: MappingTables) -> bool:
    """Whether `pulumi import` needs the full ARN as the ID for this type."""
    return token in tables.full_arn_types


def normalize_resource(raw: Mapping[str, Any]) -> NormalizedResource:
    """Convert one Resource Explorer search hit."""
    arn = raw.get("Arn") or ""
    raw_type = raw.get("ResourceType") or ""
    return NormalizedResource(
        resource_type=raw_type,
        resource_id=resource_id(arn, raw_type),
        region=raw.get("Region") or "",
        service=raw.get("Service") or "",
        arn=arn,
        owning_account_id=raw.get("OwningAccountId") or "",
        tags=resource_tags(raw.get("Properties")),
    )


def normalize_resources(raw_resources: Iterable[Mapping[str, Any]], tags: str = "") -> List[NormalizedResource]:
    """Normalize search hits, keeping only tag matches when filters are given."""
    resources: List[NormalizedResource] = []
    for raw in raw_resources:
        resource = normalize_resource(raw)
        if tags and tags.strip() and not matches_tag_filters(resource.tags, tags):
            continue
        resources.append(resource)
    return resources
