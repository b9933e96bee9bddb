"""AWS SDK calls used by the importer.

Thin wrappers over Resource Explorer 2, EC2 and STS. Client errors are
logged with their error code and re-raised; the service layer turns
them into error results.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from ..constants import MAX_SEARCH_PAGE_SIZE
from ..core.models import CallerIdentity

logger = logging.getLogger(__name__)


def error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "Unknown")


def create_session(profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session.

    Credentials come from the usual boto3 chain, environment variables first.
    """
    return boto3.Session(profile_name=profile, region_name=region)


def search_resources(
    session: boto3.Session,
    query_string: str,
    page_size: int = MAX_SEARCH_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Run a Resource Explorer search and return every page of results.

    Pages are requested one after another until the response carries no
    NextToken.
    """
    client = session.client("resource-explorer-2")
    request: Dict[str, Any] = {
        "QueryString": query_string,
        "MaxResults": min(page_size, MAX_SEARCH_PAGE_SIZE),
    }
    resources: List[Dict[str, Any]] = []
    pages = 0
    while True:
        try:
            response = client.search(**request)
        except ClientError as exc:
            logger.error(f"Resource Explorer search failed on page {pages + 1}: {error_code(exc)}")
            raise
        resources.extend(response.get("Resources", []))
        pages += 1
        next_token = response.get("NextToken")
        if not next_token:
            break
        request["NextToken"] = next_token
    logger.info(f"Resource Explorer returned {len(resources)} resources in {pages} page(s)")
    return resources


def describe_security_group_rules(session: boto3.Session) -> List[Dict[str, Any]]:
    """List every security group rule visible to the session."""
    ec2 = session.client("ec2")
    paginator = ec2.get_paginator("describe_security_group_rules")
    rules: List[Dict[str, Any]] = []
    try:
        for page in paginator.paginate():
            rules.extend(page.get("SecurityGroupRules", []))
    except ClientError as exc:
        logger.error(f"DescribeSecurityGroupRules failed: {error_code(exc)}")
        raise
    logger.debug(f"Described {len(rules)} security group rules")
    return rules


def caller_identity(session: boto3.Session) -> CallerIdentity:
    """Call STS GetCallerIdentity."""
    sts = session.client("sts")
    response = sts.get_caller_identity()
    return CallerIdentity(
        account_id=response["Account"],
        user_id=response["UserId"],
        arn=response["Arn"],
    )
