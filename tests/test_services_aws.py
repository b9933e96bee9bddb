"""Tests for the AWS operations in pulumi_importer.services."""

import json

import pytest
from botocore.exceptions import ClientError

from pulumi_importer import services
from tests.conftest import make_rule, make_search_hit


def client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.mark.aws
class TestSearchAws:
    """Tests for the end-to-end AWS search operation."""

    def test_single_page(self, mock_boto3_session, tables, settings, sg_vpc_hits):
        explorer = mock_boto3_session.clients["resource-explorer-2"]
        explorer.search.return_value = {"Resources": sg_vpc_hits}
        ec2 = mock_boto3_session.clients["ec2"]
        ec2.get_paginator.return_value.paginate.return_value = [
            {"SecurityGroupRules": [make_rule("sgr-1", "sg-0def", is_egress=True)]},
        ]

        result = services.search_aws("service:ec2", "", session=mock_boto3_session, tables=tables, settings=settings)

        assert result.is_ok
        explorer.search.assert_called_once_with(QueryString="service:ec2", MaxResults=1000)
        document = json.loads(result.value.pulumi_import_json)
        assert [r["id"] for r in document["resources"]] == ["vpc-0abc", "sg-0def", "sgr-1"]
        assert document["resources"][2]["type"] == "aws:vpc/securityGroupEgressRule:SecurityGroupEgressRule"
        assert document["ancestorTypes"] == {"aws:ec2/securityGroup:SecurityGroup": ["aws:ec2/vpc:Vpc"]}

    def test_follows_next_token(self, mock_boto3_session, tables, settings):
        explorer = mock_boto3_session.clients["resource-explorer-2"]
        explorer.search.side_effect = [
            {"Resources": [make_search_hit("arn:aws:s3:::a", "s3:bucket")], "NextToken": "t1"},
            {"Resources": [make_search_hit("arn:aws:s3:::b", "s3:bucket")], "NextToken": "t2"},
            {"Resources": [make_search_hit("arn:aws:s3:::c", "s3:bucket")]},
        ]

        result = services.search_aws("service:s3", "", session=mock_boto3_session, tables=tables, settings=settings)

        assert [r.resource_id for r in result.value.resources] == ["a", "b", "c"]
        assert explorer.search.call_count == 3
        assert explorer.search.call_args_list[1].kwargs["NextToken"] == "t1"
        assert explorer.search.call_args_list[2].kwargs["NextToken"] == "t2"

    def test_rules_not_queried_without_security_groups(self, mock_boto3_session, tables, settings):
        explorer = mock_boto3_session.clients["resource-explorer-2"]
        explorer.search.return_value = {"Resources": [make_search_hit("arn:aws:s3:::a", "s3:bucket")]}

        services.search_aws("service:s3", "", session=mock_boto3_session, tables=tables, settings=settings)

        mock_boto3_session.clients["ec2"].get_paginator.assert_not_called()

    def test_tag_filters_augment_query_and_filter_results(self, mock_boto3_session, tables, settings):
        explorer = mock_boto3_session.clients["resource-explorer-2"]
        explorer.search.return_value = {
            "Resources": [
                make_search_hit("arn:aws:s3:::a", "s3:bucket", tags=[{"Key": "env", "Value": "prod"}]),
                make_search_hit("arn:aws:s3:::b", "s3:bucket", tags=[{"Key": "env", "Value": "dev"}]),
            ]
        }

        result = services.search_aws("service:s3", "env=prod", session=mock_boto3_session, tables=tables, settings=settings)

        assert explorer.search.call_args.kwargs["QueryString"] == "tag.env=prod service:s3"
        assert [r.resource_id for r in result.value.resources] == ["a"]
        assert [r["id"] for r in json.loads(result.value.pulumi_import_json)["resources"]] == ["a"]

    def test_empty_results(self, mock_boto3_session, tables, settings):
        mock_boto3_session.clients["resource-explorer-2"].search.return_value = {"Resources": []}

        result = services.search_aws("nothing", "", session=mock_boto3_session, tables=tables, settings=settings)

        assert result.value.resources == []
        assert json.loads(result.value.pulumi_import_json) == {"resources": []}

    def test_provider_error_becomes_error_result(self, mock_boto3_session, tables, settings):
        explorer = mock_boto3_session.clients["resource-explorer-2"]
        explorer.search.side_effect = client_error("UnauthorizedException", "No index", "Search")

        result = services.search_aws("x", "", session=mock_boto3_session, tables=tables, settings=settings)

        assert not result.is_ok
        assert result.error.startswith("ClientError: ")
        assert "UnauthorizedException" in result.error
        assert result.to_dict() == {"error": result.error}

    def test_rule_query_error_becomes_error_result(self, mock_boto3_session, tables, settings, sg_vpc_hits):
        mock_boto3_session.clients["resource-explorer-2"].search.return_value = {"Resources": sg_vpc_hits}
        paginator = mock_boto3_session.clients["ec2"].get_paginator.return_value
        paginator.paginate.side_effect = client_error("UnauthorizedOperation", "denied", "DescribeSecurityGroupRules")

        result = services.search_aws("x", "", session=mock_boto3_session, tables=tables, settings=settings)

        assert result.error.startswith("ClientError: ")


@pytest.mark.aws
class TestGetCallerIdentity:
    """Tests for the STS caller identity operation."""

    def test_success(self, mock_boto3_session):
        mock_boto3_session.clients["sts"].get_caller_identity.return_value = {
            "Account": "123456789012",
            "UserId": "AIDAEXAMPLE",
            "Arn": "arn:aws:iam::123456789012:user/dev",
        }

        result = services.get_caller_identity(session=mock_boto3_session)

        assert result.to_dict() == {
            "ok": {
                "accountId": "123456789012",
                "userId": "AIDAEXAMPLE",
                "arn": "arn:aws:iam::123456789012:user/dev",
            }
        }

    def test_failure(self, mock_boto3_session):
        mock_boto3_session.clients["sts"].get_caller_identity.side_effect = client_error(
            "ExpiredToken", "expired", "GetCallerIdentity"
        )
        result = services.get_caller_identity(session=mock_boto3_session)
        assert result.error.startswith("ClientError: ")
