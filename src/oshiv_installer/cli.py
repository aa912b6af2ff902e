"""
Command line entry point: oshiv-installer.
"""

import dataclasses
import logging
import sys
from typing import NoReturn, Optional

import click

from oshiv_installer.installer_config import InstallerConfig
from oshiv_installer.installer_exceptions import (
    InstallError,
    InstallerConfigurationError,
)
from oshiv_installer.installer_logger import InstallerLogger
from oshiv_installer.installer_utils import PlatformUtils
from oshiv_installer.release_config import ArtifactResolver
from oshiv_installer.release_installer import ArtifactInstaller

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

EXIT_INSTALL_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _load_config(config_path: Optional[str]) -> InstallerConfig:
    if config_path is not None:
        return InstallerConfig.from_toml(config_path)
    return InstallerConfig.discover()


def _fail(message: str, exit_code: int) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(exit_code)


def _configure_logging(config: InstallerConfig) -> InstallerLogger:
    logging.basicConfig(stream=sys.stderr, format="%(message)s")
    return InstallerLogger(config.log_level_value)


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="installer.toml to read (default: ./installer.toml when present)",
)


@click.group(context_settings=CONTEXT_SETTINGS)
def cli() -> None:
    """Install the prebuilt oshiv release for this machine."""


@cli.command("install")
@click.option(
    "--bin-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to place the oshiv executable in",
)
@config_option
def install_cmd(bin_dir: Optional[str], config_path: Optional[str]) -> None:
    """Download, verify and install oshiv for the detected platform."""
    try:
        config = _load_config(config_path)
        if bin_dir is not None:
            config = dataclasses.replace(config, bin_dir=bin_dir)
        logger = _configure_logging(config)
        resolver = ArtifactResolver.from_path(config.manifest_path)
    except InstallerConfigurationError as e:
        _fail(e.message, EXIT_CONFIG_ERROR)

    platform = PlatformUtils.detect_platform()
    try:
        installed = ArtifactInstaller(resolver, config, logger).install(platform)
    except InstallError as e:
        _fail(e.message, EXIT_INSTALL_ERROR)

    click.echo(installed.path)


@cli.command("resolve")
@config_option
def resolve_cmd(config_path: Optional[str]) -> None:
    """Show the release artifact for this machine without downloading it."""
    try:
        config = _load_config(config_path)
        resolver = ArtifactResolver.from_path(config.manifest_path)
    except InstallerConfigurationError as e:
        _fail(e.message, EXIT_CONFIG_ERROR)

    platform = PlatformUtils.detect_platform()
    try:
        target_id = resolver.resolve_target(platform)
    except InstallError as e:
        _fail(e.message, EXIT_INSTALL_ERROR)

    artifact = resolver.manifest.artifacts[target_id]
    click.echo(f"platform: {platform.describe()}")
    click.echo(f"target: {target_id}")
    click.echo(f"url: {artifact.url}")
    click.echo(f"sha256: {artifact.sha256}")


@cli.command("targets")
@config_option
def targets_cmd(config_path: Optional[str]) -> None:
    """List the targets the release manifest publishes."""
    try:
        config = _load_config(config_path)
        resolver = ArtifactResolver.from_path(config.manifest_path)
    except InstallerConfigurationError as e:
        _fail(e.message, EXIT_CONFIG_ERROR)

    for target_id, selector in resolver.describe_targets().items():
        click.echo(f"{target_id}\t{selector}")


@cli.command("version")
@config_option
def version_cmd(config_path: Optional[str]) -> None:
    """Print the oshiv version this installer delivers."""
    try:
        config = _load_config(config_path)
        resolver = ArtifactResolver.from_path(config.manifest_path)
    except InstallerConfigurationError as e:
        _fail(e.message, EXIT_CONFIG_ERROR)

    click.echo(f"{resolver.manifest.name} version: {resolver.manifest.version}")


def main() -> None:
    cli()
