"""Command line entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .core.lookups import AWS_ANCESTOR_TYPES_FILE

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Generate Pulumi import manifests for existing cloud resources")
    parser.add_argument("--log-level", default=settings.log_level, help="logging level (default: %(default)s)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="run the importer API server")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)

    generate = subparsers.add_parser("generate-ancestors", help="regenerate the AWS ancestor type table")
    generate.add_argument("--schema-version", required=True, help="pulumi-aws schema version, e.g. 6.66.2")
    generate.add_argument("--schema-file", type=Path, help="read the schema from a file instead of the pulumi CLI")
    generate.add_argument("--output", type=Path, default=AWS_ANCESTOR_TYPES_FILE, help="output path (default: %(default)s)")

    search = subparsers.add_parser("search-aws", help="search AWS and print the import manifest")
    search.add_argument("query", help="Resource Explorer query string")
    search.add_argument("--tags", default="", help='tag filters, e.g. "env=prod;team=web"')

    azure = subparsers.add_parser("azure-group", help="print the import manifest of an Azure resource group")
    azure.add_argument("resource_group", help="resource group name")

    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_serve(args: argparse.Namespace) -> int:
    from .api.server import create_app

    app = create_app()
    print(f"Pulumi Importer started, navigate to http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port)
    return 0


def run_generate(args: argparse.Namespace) -> int:
    from .core.errors import SchemaLoadError
    from .schema.ancestors import generate_lookup_table

    try:
        output = generate_lookup_table(args.schema_version, output=args.output, schema_file=args.schema_file)
    except SchemaLoadError as e:
        logger.error(str(e))
        return 1
    print(json.dumps({"output": str(output), "schemaVersion": args.schema_version}, indent=2))
    return 0


def _print_result(result) -> int:
    if not result.is_ok:
        print(result.error, file=sys.stderr)
        return 1
    print(result.value.pulumi_import_json)
    return 0


def run_search(args: argparse.Namespace) -> int:
    from .services import search_aws

    return _print_result(search_aws(args.query, args.tags))


def run_azure_group(args: argparse.Namespace) -> int:
    from .services import get_resources_under_resource_group

    return _print_result(get_resources_under_resource_group(args.resource_group))


COMMANDS = {
    "serve": run_serve,
    "generate-ancestors": run_generate,
    "search-aws": run_search,
    "azure-group": run_azure_group,
}


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)
    raise SystemExit(COMMANDS[args.command](args))


if __name__ == "__main__":
    main()
