"""Normalizers that map raw cloud resources to Pulumi type tokens."""

from . import aws, azure

__all__ = ["aws", "azure"]
