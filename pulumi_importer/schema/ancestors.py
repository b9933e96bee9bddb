"""Ancestor type inference from the Pulumi AWS provider schema.

For every resource type in the schema this derives the resource types that
should be imported next to it, for example the VPC of a subnet. The result
is written to `pulumi_importer/data/aws_ancestor_types.json`, which the
search operation reads at runtime.

The inference is a heuristic built from two curated maps: relationships
vetted by hand, and property names that imply a parent type. Missed
ancestors are expected; wrong ones should be rare.

Regenerate with:
    pulumi-importer generate-ancestors --schema-version 6.66.2
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.errors import ExternalCommandError, SchemaLoadError
from ..core.lookups import AWS_ANCESTOR_TYPES_FILE
from ..core.process import run_command

logger = logging.getLogger(__name__)

KNOWN_ANCESTOR_TYPES: Mapping[str, Sequence[str]] = {
    "aws:lb/loadBalancer:LoadBalancer": [
        "aws:ec2/vpc:Vpc",
        "aws:ec2/securityGroup:SecurityGroup",
    ],
    "aws:lb/listener:Listener": [
        "aws:lb/targetGroup:TargetGroup",
    ],
}

ANCESTOR_TYPES_BY_PROPERTY: Mapping[str, str] = {
    "vpcId": "aws:ec2/vpc:Vpc",
    "loadBalancerArn": "aws:lb/loadBalancer:LoadBalancer",
    "securityGroups": "aws:ec2/securityGroup:SecurityGroup",
}

GENERATED_NOTICE = (
    "This file is auto generated, do not edit it directly. "
    "To regenerate it, run `pulumi-importer generate-ancestors --schema-version <version>`."
)


def load_schema(schema_version: Optional[str] = None, schema_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the AWS provider schema.

    Reads `schema_file` when given, otherwise asks the Pulumi CLI for the
    schema of `aws@<schema_version>`.

    Raises:
        SchemaLoadError: Neither source produced a valid schema
    """
    if schema_file is not None:
        try:
            with Path(schema_file).open("r", encoding="utf-8") as f:
                return _validate_schema(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            raise SchemaLoadError(f"Could not read schema file {schema_file}: {e}") from e

    if not schema_version:
        raise SchemaLoadError("Either a schema version or a schema file is required")

    package = f"aws@{schema_version}"
    process = run_command(["pulumi", "package", "get-schema", package])
    if process.returncode != 0:
        error = ExternalCommandError(f"pulumi package get-schema {package}", process.stderr, process.returncode)
        raise SchemaLoadError(f"Error while loading AWS schema version {schema_version}: {error}") from error
    try:
        return _validate_schema(json.loads(process.stdout))
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"AWS schema version {schema_version} is not valid JSON: {e}") from e


def _validate_schema(schema: Any) -> Dict[str, Any]:
    if not isinstance(schema, dict) or not isinstance(schema.get("resources"), dict):
        raise SchemaLoadError("Schema has no 'resources' section")
    return schema


def infer_ancestor_types(
    schema: Mapping[str, Any],
    known_ancestor_types: Mapping[str, Sequence[str]] = KNOWN_ANCESTOR_TYPES,
    ancestor_types_by_property: Mapping[str, str] = ANCESTOR_TYPES_BY_PROPERTY,
) -> Dict[str, List[str]]:
    """Derive resource type -> ancestor types from a provider schema.

    Resource types and property names are visited in sorted order so the
    output only changes when the schema does.

    Args:
        schema: Parsed Pulumi package schema
        known_ancestor_types: Hand-vetted ancestor relationships
        ancestor_types_by_property: Property name -> implied ancestor type

    Returns:
        Ancestor lists, de-duplicated in first-seen order, for every type
        with at least one ancestor
    """
    ancestors_by_type: Dict[str, List[str]] = {}
    resources = schema.get("resources") or {}
    for resource_type in sorted(resources):
        resource_schema = resources[resource_type] or {}
        ancestors: List[str] = list(known_ancestor_types.get(resource_type, []))

        for property_name in sorted(resource_schema.get("properties") or {}):
            ancestor_type = ancestor_types_by_property.get(property_name)
            if ancestor_type is not None:
                ancestors.append(ancestor_type)

        if ancestors:
            ancestors_by_type[resource_type] = list(dict.fromkeys(ancestors))

    logger.info(f"Inferred ancestors for {len(ancestors_by_type)} of {len(resources)} resource types")
    return ancestors_by_type


def render_lookup_table(ancestors_by_type: Mapping[str, Sequence[str]], schema_version: str) -> str:
    """Serialize the ancestor table in the format `core.lookups` reads."""
    document = {
        "_generated": GENERATED_NOTICE,
        "schemaVersion": schema_version,
        "ancestorsByType": {token: list(ancestors) for token, ancestors in ancestors_by_type.items()},
    }
    return json.dumps(document, indent=2) + "\n"


def generate_lookup_table(
    schema_version: str,
    output: Path = AWS_ANCESTOR_TYPES_FILE,
    schema_file: Optional[Path] = None,
) -> Path:
    """Load the schema, infer ancestors and write the lookup table."""
    schema = load_schema(schema_version, schema_file)
    table = infer_ancestor_types(schema)
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_lookup_table(table, schema_version), encoding="utf-8")
    logger.info(f"Wrote {len(table)} ancestor entries to {output}")
    return output
