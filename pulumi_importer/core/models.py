"""Data model shared by the normalizers, builders and services."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize_name(value: str) -> str:
    """Turn a resource identifier into a valid Pulumi logical name."""
    return _INVALID_NAME_CHARS.sub("_", value)


@dataclass(frozen=True)
class NormalizedResource:
    """A cloud resource returned by Resource Explorer, in provider-neutral form."""
    resource_type: str
    resource_id: str
    region: str
    service: str
    arn: str
    owning_account_id: str
    tags: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceType": self.resource_type,
            "resourceId": self.resource_id,
            "region": self.region,
            "service": self.service,
            "arn": self.arn,
            "owningAccountId": self.owning_account_id,
            "tags": dict(self.tags),
        }


@dataclass(frozen=True)
class SecurityGroupRuleDetail:
    """The parts of an EC2 security group rule the builder needs."""
    rule_id: str
    group_id: str
    is_egress: bool


@dataclass(frozen=True)
class AzureResource:
    resource_id: str
    resource_type: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceId": self.resource_id,
            "resourceType": self.resource_type,
            "name": self.name,
        }


@dataclass(frozen=True)
class ImportEntry:
    """One resource in a `pulumi import --file` document."""
    type: str
    id: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "id": self.id, "name": self.name}


@dataclass
class ImportManifest:
    """Resources to import plus ancestor type hints.

    `ancestor_types` maps a Pulumi type token to the tokens that should be
    imported alongside it. The key is omitted from the serialized document
    when there are no hints.
    """
    resources: List[ImportEntry] = field(default_factory=list)
    ancestor_types: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, entry: ImportEntry) -> None:
        self.resources.append(entry)

    def add_ancestors(self, token: str, ancestors: List[str]) -> bool:
        """Record ancestors for `token` unless already recorded."""
        if token in self.ancestor_types:
            return False
        self.ancestor_types[token] = list(ancestors)
        return True

    def to_dict(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "resources": [entry.to_dict() for entry in self.resources],
        }
        if self.ancestor_types:
            document["ancestorTypes"] = {
                token: list(ancestors) for token, ancestors in self.ancestor_types.items()
            }
        return document

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


@dataclass
class SearchResult:
    resources: List[NormalizedResource]
    pulumi_import_json: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resources": [r.to_dict() for r in self.resources],
            "pulumiImportJson": self.pulumi_import_json,
        }


@dataclass
class AzureResourceGroupResult:
    azure_resources: List[AzureResource]
    pulumi_import_json: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "azureResources": [r.to_dict() for r in self.azure_resources],
            "pulumiImportJson": self.pulumi_import_json,
        }


@dataclass
class CallerIdentity:
    """AWS caller identity information."""
    account_id: str
    user_id: str
    arn: str

    def to_dict(self) -> Dict[str, Any]:
        return {"accountId": self.account_id, "userId": self.user_id, "arn": self.arn}


@dataclass
class AzureAccount:
    """The account the `az` CLI is logged in with."""
    subscription_id: str
    subscription_name: str
    user_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subscriptionId": self.subscription_id,
            "subscriptionName": self.subscription_name,
            "userName": self.user_name,
        }


@dataclass
class ImportPreview:
    """Output of a `pulumi import` run against a throwaway stack."""
    generated_code: str
    stack_state: str
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedCode": self.generated_code,
            "stackState": self.stack_state,
            "warnings": list(self.warnings),
        }
