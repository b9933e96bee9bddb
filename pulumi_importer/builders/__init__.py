"""Import manifest builders."""

from .aws import build_aws_manifest, index_security_group_rules, should_query_security_group_rules
from .azure import build_azure_manifest

__all__ = [
    "build_aws_manifest",
    "build_azure_manifest",
    "index_security_group_rules",
    "should_query_security_group_rules",
]
