"""Tests for pulumi_importer.core modules."""

import json

import pytest

from pulumi_importer.core.lookups import (
    AWS_TYPE_RENAMES,
    FULL_ARN_TYPES,
    MappingTables,
    load_mapping_tables,
    read_azure_tokens,
)
from pulumi_importer.core.models import ImportEntry, ImportManifest, sanitize_name
from pulumi_importer.core.result import Err, Ok, capture_errors
from pulumi_importer.normalizers.aws import normalize_module_name, normalize_type_name


class TestSanitizeName:
    """Tests for Pulumi logical name sanitization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("sg-0abc", "sg_0abc"),
            ("my.bucket-name", "my_bucket_name"),
            ("team/ReadOnly", "team_ReadOnly"),
            ("plain_name1", "plain_name1"),
        ],
    )
    def test_sanitize(self, value, expected):
        assert sanitize_name(value) == expected


class TestImportManifest:
    """Tests for manifest serialization."""

    def test_ancestors_only_recorded_once(self):
        manifest = ImportManifest()
        assert manifest.add_ancestors("a", ["b"]) is True
        assert manifest.add_ancestors("a", ["c"]) is False
        assert manifest.ancestor_types == {"a": ["b"]}

    def test_json_shape(self):
        manifest = ImportManifest()
        manifest.add(ImportEntry(type="aws:s3/bucket:Bucket", id="b", name="b"))
        manifest.add_ancestors("aws:s3/bucket:Bucket", ["aws:kms/key:Key"])
        assert json.loads(manifest.to_json()) == {
            "resources": [{"type": "aws:s3/bucket:Bucket", "id": "b", "name": "b"}],
            "ancestorTypes": {"aws:s3/bucket:Bucket": ["aws:kms/key:Key"]},
        }


class TestBundledTables:
    """Tests for the lookup data shipped with the package."""

    def test_tables_load(self):
        tables = load_mapping_tables()
        assert tables.ancestors_of("aws:ec2/subnet:Subnet") == ("aws:ec2/vpc:Vpc",)
        assert tables.azure_token("Microsoft.Storage/storageAccounts") == "azure-native:storage:StorageAccount"

    def test_comment_keys_skipped(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"_comment": "x", "A/b": "azure-native:a:B"}), encoding="utf-8")
        assert dict(read_azure_tokens(path)) == {"a/b": "azure-native:a:B"}

    def test_ancestor_tokens_are_well_formed(self):
        """Every token in the table has the provider:module/name:Type shape."""
        tables = load_mapping_tables()
        for token, ancestors in tables.aws_ancestors.items():
            for value in (token, *ancestors):
                provider, module_path, type_name = value.split(":")
                module, resource = module_path.split("/")
                assert provider == "aws"
                assert type_name == normalize_type_name(resource)
                assert resource == normalize_module_name(resource)

    def test_tables_build_without_arguments(self):
        tables = MappingTables()
        assert tables.type_renames is AWS_TYPE_RENAMES
        assert tables.type_renames[("ec2", "volume")] == ("ebs", "volume")
        assert tables.ancestors_of("aws:ec2/subnet:Subnet") is None
        assert tables.azure_token("Microsoft.Storage/storageAccounts") is None

    def test_full_arn_defaults(self):
        assert MappingTables().full_arn_types == FULL_ARN_TYPES
        assert "aws:iam/policy:Policy" in FULL_ARN_TYPES


class TestCaptureErrors:
    """Tests for converting exceptions into error results."""

    def test_plain_value_wrapped(self):
        @capture_errors("op")
        def op():
            return 42

        assert op() == Ok(42)

    def test_result_passed_through(self):
        @capture_errors("op")
        def op():
            return Err("nope")

        assert op() == Err("nope")

    def test_exception_converted(self):
        @capture_errors("op")
        def op():
            raise KeyError("missing")

        result = op()
        assert result == Err("KeyError: 'missing'")
        assert result.to_dict() == {"error": "KeyError: 'missing'"}

    def test_ok_to_dict_serializes_lists(self):
        assert Ok(["a", "b"]).to_dict() == {"ok": ["a", "b"]}
