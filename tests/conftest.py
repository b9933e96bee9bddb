"""Pytest configuration and shared fixtures for Pulumi Importer tests.

This module provides common fixtures used across multiple test modules,
including mock boto3 sessions, Resource Explorer records and mapping tables.
"""

from __future__ import annotations

import os
from types import MappingProxyType
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from pulumi_importer.config import Settings
from pulumi_importer.core.lookups import MappingTables


# ============================================================================
# Custom Pytest Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "aws: marks tests exercising AWS code paths with mocked clients"
    )


# ============================================================================
# Resource Explorer Helpers
# ============================================================================

def make_search_hit(
    arn: str,
    resource_type: str,
    tags: Optional[List[Dict[str, str]]] = None,
    region: str = "us-east-1",
    account: str = "123456789012",
) -> Dict[str, Any]:
    """Build a Resource Explorer `Resources` item as boto3 returns it."""
    properties = []
    if tags is not None:
        properties.append({"Name": "tags", "Data": tags})
    return {
        "Arn": arn,
        "ResourceType": resource_type,
        "Region": region,
        "Service": resource_type.split(":")[0],
        "OwningAccountId": account,
        "Properties": properties,
    }


def make_rule(rule_id: str, group_id: str, is_egress: bool = False) -> Dict[str, Any]:
    """Build a DescribeSecurityGroupRules `SecurityGroupRules` item."""
    return {
        "SecurityGroupRuleId": rule_id,
        "GroupId": group_id,
        "IsEgress": is_egress,
        "IpProtocol": "tcp",
    }


# ============================================================================
# AWS Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_boto3_session() -> MagicMock:
    """Create a mock boto3 Session whose clients are keyed by service name.

    Returns:
        Mock session; `session.clients["ec2"]` is the EC2 client mock
    """
    session = MagicMock()
    session.clients = {
        "resource-explorer-2": MagicMock(),
        "ec2": MagicMock(),
        "sts": MagicMock(),
    }
    session.client.side_effect = lambda name, **kwargs: session.clients[name]
    session.region_name = "us-east-1"
    return session


@pytest.fixture
def sg_vpc_hits() -> List[Dict[str, Any]]:
    """A VPC and a security group, as one Resource Explorer page."""
    return [
        make_search_hit(
            "arn:aws:ec2:us-east-1:123456789012:vpc/vpc-0abc",
            "ec2:vpc",
            tags=[{"Key": "env", "Value": "prod"}],
        ),
        make_search_hit(
            "arn:aws:ec2:us-east-1:123456789012:security-group/sg-0def",
            "ec2:security-group",
            tags=[{"Key": "env", "Value": "prod"}],
        ),
    ]


# ============================================================================
# Lookup Fixtures
# ============================================================================

@pytest.fixture
def tables() -> MappingTables:
    """Mapping tables with a small, known ancestor and Azure token table."""
    return MappingTables(
        aws_ancestors=MappingProxyType({
            "aws:ec2/securityGroup:SecurityGroup": ("aws:ec2/vpc:Vpc",),
            "aws:ec2/subnet:Subnet": ("aws:ec2/vpc:Vpc",),
        }),
        azure_tokens=MappingProxyType({
            "microsoft.storage/storageaccounts": "azure-native:storage:StorageAccount",
            "microsoft.network/virtualnetworks": "azure-native:network:VirtualNetwork",
        }),
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def clean_environment():
    """Fixture that cleans PULUMI_IMPORTER_* environment variables.

    Removes them before the test and restores the originals after.
    """
    saved = {k: v for k, v in os.environ.items() if k.startswith("PULUMI_IMPORTER_")}
    for key in saved:
        del os.environ[key]

    yield

    for key in [k for k in os.environ if k.startswith("PULUMI_IMPORTER_")]:
        del os.environ[key]
    os.environ.update(saved)


@pytest.fixture
def settings() -> Settings:
    """Settings with deterministic values, independent of the environment."""
    return Settings(
        search_page_size=1000,
        azure_subscription_id="00000000-0000-0000-0000-000000000000",
        pulumi_config_passphrase="test-passphrase",
        _env_file=None,
    )
