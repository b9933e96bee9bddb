"""Exception hierarchy for Pulumi Importer."""

from __future__ import annotations

from typing import Optional


class PulumiImporterError(Exception):
    """Base exception for all Pulumi Importer errors."""


class UnmappedResourceTypeError(PulumiImporterError):
    """Raised when an Azure resource type has no Pulumi type token.

    Guessing a token would put a bogus type into the import manifest, so
    the whole resource group request fails instead.
    """

    def __init__(self, resource_type: str):
        super().__init__(f"No Pulumi type token is known for Azure resource type '{resource_type}'")
        self.resource_type = resource_type


class ResourceGroupNotFoundError(PulumiImporterError):
    """Raised when the requested Azure resource group does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Could not find the resource group '{name}'")
        self.name = name


class SchemaLoadError(PulumiImporterError):
    """Raised when a provider schema cannot be loaded or parsed."""


class ExternalCommandError(PulumiImporterError):
    """Raised when a `pulumi` or `az` invocation fails.

    Attributes:
        command: The command line that failed
        output: Captured stderr (or stdout, for `pulumi import`)
    """

    def __init__(self, command: str, output: str, exit_code: Optional[int] = None):
        super().__init__(f"Error occurred while running '{command}' command: {output}")
        self.command = command
        self.output = output
        self.exit_code = exit_code
