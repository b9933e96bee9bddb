"""Pulumi Importer - adopt existing cloud resources into Pulumi.

Discovers resources that already exist in AWS or Azure and turns them into
`pulumi import --file` manifests:
- Searches AWS Resource Explorer and Azure resource groups
- Maps provider resource types to Pulumi type tokens
- Adds ancestor type hints derived from the provider schema
- Previews the import with the Pulumi CLI in a throwaway stack
"""

__version__ = "0.1.0"

from pulumi_importer.core.models import (
    AzureResource,
    ImportEntry,
    ImportManifest,
    NormalizedResource,
    SecurityGroupRuleDetail,
)
from pulumi_importer.core.result import Err, Ok

__all__ = [
    # Version info
    "__version__",
    # Data model
    "AzureResource",
    "ImportEntry",
    "ImportManifest",
    "NormalizedResource",
    "SecurityGroupRuleDetail",
    # Results
    "Ok",
    "Err",
]
