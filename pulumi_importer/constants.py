"""Pulumi Importer constants and well-known type tokens.

This module centralizes magic strings shared by the normalizers,
builders and the Pulumi CLI runner.
"""

# Resource Explorer types that trigger a DescribeSecurityGroupRules call
SECURITY_GROUP_TYPE = "ec2:security-group"
SECURITY_GROUP_RULE_TYPE = "ec2:security-group-rule"

# Pulumi tokens for security group rules
SECURITY_GROUP_EGRESS_RULE_TOKEN = "aws:vpc/securityGroupEgressRule:SecurityGroupEgressRule"
SECURITY_GROUP_INGRESS_RULE_TOKEN = "aws:vpc/securityGroupIngressRule:SecurityGroupIngressRule"

# Azure
AZURE_RESOURCE_GROUP_TOKEN = "azure-native:resources:ResourceGroup"

# Resource Explorer allows at most 1000 results per page
MAX_SEARCH_PAGE_SIZE = 1000

# Pulumi CLI output markers
PULUMI_ERROR_MARKER = "error:"
PULUMI_WARNING_MARKER = "warning:"
PULUMI_VERSION_PATTERN = r"v[0-9]+\.[0-9]+\.[0-9]+"

# Preview stack layout
PREVIEW_STACK_NAME = "dev"
PREVIEW_STATE_DIR = "state"
PREVIEW_IMPORT_FILE = "import.json"
PREVIEW_GENERATED_FILE = "generated.txt"
PREVIEW_STACK_FILE = "stack.json"
