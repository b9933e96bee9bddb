"""Pulumi CLI integration.

Locates the `pulumi` binary and previews an import manifest by running
`pulumi import` against a throwaway file-backed stack.
"""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from .constants import (
    PREVIEW_GENERATED_FILE,
    PREVIEW_IMPORT_FILE,
    PREVIEW_STACK_FILE,
    PREVIEW_STACK_NAME,
    PREVIEW_STATE_DIR,
    PULUMI_ERROR_MARKER,
    PULUMI_VERSION_PATTERN,
    PULUMI_WARNING_MARKER,
)
from .core.errors import ExternalCommandError
from .core.models import ImportPreview
from .core.process import run_command

logger = logging.getLogger(__name__)

VERSION_REGEX = re.compile(PULUMI_VERSION_PATTERN)


def dev_binary_path(home: Optional[Path] = None) -> Path:
    """Where `make install` in the pulumi repository puts its build."""
    return (home or Path.home()) / ".pulumi-dev" / "bin" / "pulumi"


def pulumi_cli_binary(home: Optional[Path] = None) -> str:
    """Return the pulumi binary to use.

    An installed `pulumi` wins when `pulumi version` prints a release
    version. Otherwise a development build under `~/.pulumi-dev/bin` is used
    if present, and plain `pulumi` as a last resort.
    """
    try:
        process = run_command(["pulumi", "version"])
        if VERSION_REGEX.search(process.stdout.strip()):
            return "pulumi"
    except OSError as e:
        logger.debug(f"pulumi not found on PATH: {e}")

    dev_binary = dev_binary_path(home)
    if dev_binary.is_file():
        return str(dev_binary)
    windows_binary = dev_binary.with_name("pulumi.exe")
    if windows_binary.is_file():
        return str(windows_binary)
    return "pulumi"


def pulumi_version() -> str:
    process = run_command([pulumi_cli_binary(), "version"])
    if process.returncode != 0:
        raise ExternalCommandError("pulumi version", process.stderr, process.returncode)
    return process.stdout


def warning_lines(output: str) -> List[str]:
    return [line for line in output.split("\n") if PULUMI_WARNING_MARKER in line]


class PreviewWorkspace:
    """Runs pulumi commands inside one temporary project directory."""

    def __init__(self, binary: str, directory: Path, passphrase: str):
        self.binary = binary
        self.directory = directory
        self.env: Dict[str, str] = {"PULUMI_CONFIG_PASSPHRASE": passphrase}

    def run(self, *args: str):
        return run_command([self.binary, *args], cwd=self.directory, env=self.env)

    def run_checked(self, *args: str):
        """Run a command, raising on a non-zero exit code."""
        process = self.run(*args)
        if process.returncode != 0:
            raise ExternalCommandError(f"pulumi {' '.join(args)}", process.stderr, process.returncode)
        return process


def import_preview(
    language: str,
    pulumi_import_json: str,
    passphrase: str,
    binary: Optional[str] = None,
) -> ImportPreview:
    """Preview an import manifest with the Pulumi CLI.

    Creates a project for `language`, logs in to a local file backend,
    imports the manifest into a fresh stack and exports the stack state.
    The temporary directory is removed whether or not a step fails.

    Args:
        language: Pulumi template name, e.g. "typescript" or "python"
        pulumi_import_json: Manifest produced by a search operation
        passphrase: Value for PULUMI_CONFIG_PASSPHRASE
        binary: Pulumi binary, looked up when not given

    Returns:
        Generated code, exported stack state and warning lines

    Raises:
        ExternalCommandError: A pulumi command failed
    """
    binary = binary or pulumi_cli_binary()
    with tempfile.TemporaryDirectory(prefix="pulumi-import-") as temp_dir:
        workspace = PreviewWorkspace(binary, Path(temp_dir), passphrase)

        workspace.run_checked("new", language, "--yes", "--generate-only")
        (workspace.directory / PREVIEW_STATE_DIR).mkdir(exist_ok=True)
        workspace.run_checked("login", f"file://./{PREVIEW_STATE_DIR}")
        workspace.run_checked("stack", "init", PREVIEW_STACK_NAME)

        import_file = workspace.directory / PREVIEW_IMPORT_FILE
        import_file.write_text(pulumi_import_json, encoding="utf-8")
        generated_file = workspace.directory / PREVIEW_GENERATED_FILE

        imported = workspace.run("import", "--file", str(import_file), "--yes", "--out", str(generated_file))
        # pulumi import can exit 0 and still report errors on stdout
        if imported.returncode != 0 or PULUMI_ERROR_MARKER in imported.stdout:
            raise ExternalCommandError(
                f"pulumi import --file <tempDir>/{PREVIEW_IMPORT_FILE} --yes --out <tempDir>/{PREVIEW_GENERATED_FILE}",
                imported.stdout,
                imported.returncode,
            )
        generated_code = generated_file.read_text(encoding="utf-8")

        stack_file = workspace.directory / PREVIEW_STACK_FILE
        workspace.run_checked("stack", "export", "--file", str(stack_file))
        stack_state = stack_file.read_text(encoding="utf-8")

        warnings = warning_lines(imported.stdout)
        logger.info(f"Import preview finished with {len(warnings)} warning(s)")
        return ImportPreview(generated_code=generated_code, stack_state=stack_state, warnings=warnings)
