"""Build `pulumi import` manifests from normalized AWS resources."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from ..constants import SECURITY_GROUP_RULE_TYPE, SECURITY_GROUP_TYPE
from ..core.lookups import MappingTables
from ..core.models import ImportEntry, ImportManifest, NormalizedResource, SecurityGroupRuleDetail, sanitize_name
from ..normalizers.aws import pulumi_type, requires_full_arn, security_group_rule_token

logger = logging.getLogger(__name__)


def should_query_security_group_rules(resource_types: Iterable[str]) -> bool:
    """Rules are only worth a DescribeSecurityGroupRules call when groups or rules were found."""
    found = set(resource_types)
    return SECURITY_GROUP_RULE_TYPE in found or SECURITY_GROUP_TYPE in found


def index_security_group_rules(rules: Iterable[Mapping[str, Any]]) -> Dict[str, SecurityGroupRuleDetail]:
    """Index EC2 `SecurityGroupRules` records by rule ID."""
    index: Dict[str, SecurityGroupRuleDetail] = {}
    for rule in rules:
        rule_id = rule.get("SecurityGroupRuleId")
        if not rule_id:
            continue
        index[rule_id] = SecurityGroupRuleDetail(
            rule_id=rule_id,
            group_id=rule.get("GroupId") or "",
            is_egress=bool(rule.get("IsEgress", False)),
        )
    return index


def _attach_ancestors(manifest: ImportManifest, token: str, tables: MappingTables) -> None:
    ancestors = tables.ancestors_of(token)
    if ancestors:
        manifest.add_ancestors(token, list(ancestors))


def build_aws_manifest(
    resources: Iterable[NormalizedResource],
    tables: MappingTables,
    security_group_rules: Optional[Mapping[str, SecurityGroupRuleDetail]] = None,
) -> ImportManifest:
    """Assemble the import manifest for a set of AWS resources.

    Every resource becomes one entry. Security group rules are not returned
    by Resource Explorer on their own, so rules whose parent group is in the
    manifest are appended as well; leaving them out would show up as drift
    right after the import.

    Args:
        resources: Normalized search results, in output order
        tables: Mapping tables (renames, full-ARN types, ancestors)
        security_group_rules: Rule index, empty when rules were not queried

    Returns:
        The manifest, resources in input order followed by added rules
    """
    rules = security_group_rules or {}
    manifest = ImportManifest()
    added_ids: Set[str] = set()

    for resource in resources:
        token = pulumi_type(resource.resource_type, resource.resource_id, tables, rules)
        _attach_ancestors(manifest, token, tables)

        if requires_full_arn(token, tables):
            import_id = resource.arn
        else:
            import_id = resource.resource_id
            added_ids.add(resource.resource_id)

        manifest.add(ImportEntry(type=token, id=import_id, name=sanitize_name(resource.resource_id)))

    for rule_id in sorted(rules):
        rule = rules[rule_id]
        if rule_id in added_ids or rule.group_id not in added_ids:
            continue
        token = security_group_rule_token(rule)
        _attach_ancestors(manifest, token, tables)
        manifest.add(ImportEntry(type=token, id=rule_id, name=sanitize_name(rule_id)))
        added_ids.add(rule_id)
        logger.debug(f"Added security group rule {rule_id} of imported group {rule.group_id}")

    return manifest
