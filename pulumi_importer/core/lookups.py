"""Static lookup tables used to map cloud resources to Pulumi tokens.

The tables are loaded once and handed to the normalizers and builders
explicitly, so those stay pure functions of their inputs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
AWS_ANCESTOR_TYPES_FILE = DATA_DIR / "aws_ancestor_types.json"
AZURE_RESOURCE_TOKENS_FILE = DATA_DIR / "azure_resource_tokens.json"

# (service, resource type) as reported by Resource Explorer -> Pulumi (module, resource)
AWS_TYPE_RENAMES: Mapping[Tuple[str, str], Tuple[str, str]] = MappingProxyType({
    ("rds", "subgrp"): ("rds", "subnetGroup"),
    ("ec2", "volume"): ("ebs", "volume"),
    ("ec2", "elastic-ip"): ("ec2", "eip"),
    ("logs", "log-group"): ("cloudwatch", "logGroup"),
})

# Types whose short ID is ambiguous for `pulumi import`
FULL_ARN_TYPES: FrozenSet[str] = frozenset({
    "aws:iam/policy:Policy",
})


@dataclass(frozen=True)
class MappingTables:
    """Immutable mapping data shared by one process.

    Attributes:
        type_renames: Resource Explorer (service, type) corrections
        full_arn_types: Tokens imported by ARN instead of short ID
        aws_ancestors: Pulumi token -> ancestor tokens (generated from the schema)
        azure_tokens: Lower-cased Azure resource type -> Pulumi token
    """
    type_renames: Mapping[Tuple[str, str], Tuple[str, str]] = field(default_factory=lambda: AWS_TYPE_RENAMES)
    full_arn_types: FrozenSet[str] = FULL_ARN_TYPES
    aws_ancestors: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    azure_tokens: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def ancestors_of(self, token: str) -> Optional[Tuple[str, ...]]:
        return self.aws_ancestors.get(token)

    def azure_token(self, resource_type: str) -> Optional[str]:
        return self.azure_tokens.get(resource_type.lower())


def read_ancestor_table(path: Path) -> Mapping[str, Tuple[str, ...]]:
    """Read an ancestor table written by `pulumi-importer generate-ancestors`."""
    with path.open("r", encoding="utf-8") as f:
        document = json.load(f)
    table = document.get("ancestorsByType", {})
    return MappingProxyType({token: tuple(ancestors) for token, ancestors in table.items()})


def read_azure_tokens(path: Path) -> Mapping[str, str]:
    with path.open("r", encoding="utf-8") as f:
        document: Dict[str, str] = json.load(f)
    return MappingProxyType({
        resource_type.lower(): token
        for resource_type, token in document.items()
        if not resource_type.startswith("_")
    })


@lru_cache()
def load_mapping_tables() -> MappingTables:
    """Load the bundled tables once per process."""
    tables = MappingTables(
        aws_ancestors=read_ancestor_table(AWS_ANCESTOR_TYPES_FILE),
        azure_tokens=read_azure_tokens(AZURE_RESOURCE_TOKENS_FILE),
    )
    logger.debug(
        "Loaded %d AWS ancestor entries and %d Azure tokens",
        len(tables.aws_ancestors),
        len(tables.azure_tokens),
    )
    return tables
