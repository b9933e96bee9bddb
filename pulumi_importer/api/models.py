"""Pydantic request models for the importer API.

Provides input validation for API endpoints.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# Azure resource group names: letters, digits, underscores, hyphens, periods and parentheses
RESOURCE_GROUP_NAME_PATTERN = re.compile(r'^[\w\-\.\(\)]{1,90}$')
PULUMI_LANGUAGE_PATTERN = re.compile(r'^[a-z][a-z0-9\-]{0,49}$')


class AwsSearchRequest(BaseModel):
    """Request model for AWS resource search."""

    queryString: str = Field(default="", max_length=2048)
    tags: str = Field(default="", max_length=2048)


class ResourceGroupRequest(BaseModel):
    """Request model for listing the resources of a resource group."""

    resourceGroupName: str = Field(..., min_length=1, max_length=90)

    @field_validator("resourceGroupName")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not RESOURCE_GROUP_NAME_PATTERN.match(v):
            raise ValueError(
                "Resource group name must be 1-90 characters: "
                "alphanumerics, underscores, hyphens, periods and parentheses"
            )
        return v


class ImportPreviewRequest(BaseModel):
    """Request model for an import preview."""

    language: str = Field(..., min_length=1, max_length=50)
    pulumiImportJson: str = Field(..., min_length=2)

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        if not PULUMI_LANGUAGE_PATTERN.match(v):
            raise ValueError("Language must be a Pulumi template name such as 'typescript'")
        return v
