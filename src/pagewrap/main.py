from pathlib import Path

import click
import toml
from loguru import logger

from pagewrap.config import (
    ALLOWED_SOURCES,
    ALLOWED_THEMES,
    CONFIG_FILE_PATH,
    PagewrapConfig,
    load_config,
    merge_config_with_cli_args,
    save_config,
)
from pagewrap.gateways.s3 import S3
from pagewrap.services.demo_source import DemoFoodSource
from pagewrap.services.s3_source import S3ObjectSource
from pagewrap.ui.app import PagewrapApp


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--source",
    type=click.Choice(ALLOWED_SOURCES, case_sensitive=False),
    help="Where pages come from: the built-in demo list or an S3 prefix",
    default=None,
)
@click.option(
    "--s3-uri",
    type=str,
    help="S3 location to list when --source is s3 (e.g., s3://bucket/prefix/)",
    default=None,
)
@click.option("--page-size", type=click.IntRange(min=1), help="Number of items per page", default=None)
@click.option("--latency", type=click.FloatRange(min=0), help="Simulated demo latency in seconds", default=None)
@click.option(
    "--error-rate",
    type=click.FloatRange(0, 1),
    help="Fraction of demo page fetches that fail",
    default=None,
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option("--profile-name", type=str, help="AWS profile name to use for authentication", default=None)
@click.option(
    "--endpoint-url",
    type=str,
    help="Custom S3 endpoint URL (e.g., for S3-compatible services like MinIO)",
    default=None,
)
@click.option(
    "--region-name",
    type=str,
    help="AWS region name (required when using custom endpoint-url)",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.pagewrap.config)",
    default=None,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=str),
    help="Write logs to this file (nothing is logged otherwise)",
    default=None,
)
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Minimum level written to --log-file",
    default="INFO",
)
def cli(
    ctx,
    source: str | None = None,
    s3_uri: str | None = None,
    page_size: int | None = None,
    latency: float | None = None,
    error_rate: float | None = None,
    theme: str | None = None,
    profile_name: str | None = None,
    endpoint_url: str | None = None,
    region_name: str | None = None,
    config: str | None = None,
    log_file: str | None = None,
    log_level: str = "INFO",
):
    """Paginated list browser - load a list page by page as you scroll."""
    if ctx.invoked_subcommand is None:
        main(
            source=source,
            s3_uri=s3_uri,
            page_size=page_size,
            latency=latency,
            error_rate=error_rate,
            theme=theme,
            profile_name=profile_name,
            endpoint_url=endpoint_url,
            region_name=region_name,
            config=config,
            log_file=log_file,
            log_level=log_level,
        )


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.pagewrap.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup for pagewrap"""
    config_path = Path(config) if config else CONFIG_FILE_PATH

    click.echo("pagewrap Configuration Setup")
    click.echo("=" * 28)
    click.echo("Leave fields empty to use defaults or skip optional settings.")
    click.echo()

    existing_config = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                existing_config = toml.load(f)
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
        except (OSError, toml.TomlDecodeError) as e:
            click.echo(f"Ignoring unreadable configuration at {config_path}: {e}")

    new_config = {}

    # Source Configuration
    click.echo("Source Configuration:")
    click.echo("-" * 21)

    source = click.prompt(
        "Source",
        default=existing_config.get("source", "demo"),
        type=click.Choice(ALLOWED_SOURCES, case_sensitive=False),
    )
    new_config["source"] = source

    new_config["page_size"] = click.prompt(
        "Page size", default=existing_config.get("page_size", 10), type=click.IntRange(min=1)
    )

    if source == "s3":
        current = existing_config.get("s3_uri", "")
        new_config["s3_uri"] = click.prompt(
            "S3 URI (s3://bucket/prefix/)", default=current or None, type=str
        ).strip()

        current = existing_config.get("profile_name", "")
        profile_name = click.prompt("AWS Profile Name", default=current, show_default=bool(current), type=str).strip()
        if profile_name:
            new_config["profile_name"] = profile_name

        current = existing_config.get("endpoint_url", "")
        endpoint_url = click.prompt(
            "Endpoint URL (for S3-compatible services like MinIO)", default=current, show_default=bool(current), type=str
        ).strip()
        if endpoint_url:
            new_config["endpoint_url"] = endpoint_url

        current = existing_config.get("region_name", "")
        region_name = click.prompt("AWS Region Name", default=current, show_default=bool(current), type=str).strip()
        if region_name:
            new_config["region_name"] = region_name
    else:
        new_config["latency"] = click.prompt(
            "Simulated latency (seconds)", default=existing_config.get("latency", 0.5), type=click.FloatRange(min=0)
        )
        new_config["error_rate"] = click.prompt(
            "Simulated error rate (0-1)", default=existing_config.get("error_rate", 0.0), type=click.FloatRange(0, 1)
        )

    # Theme Configuration
    click.echo()
    click.echo("Theme Configuration:")
    click.echo("-" * 20)

    current_theme = existing_config.get("theme", "textual-dark")
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == current_theme else ""
        click.echo(f"  {i}. {theme}{marker}")

    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(current_theme) + 1 if current_theme in ALLOWED_THEMES else 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )
    new_config["theme"] = ALLOWED_THEMES[theme_choice - 1]

    # Validate configuration
    click.echo()
    try:
        PagewrapConfig(**new_config)
        click.echo("✓ Configuration validated successfully!")
    except ValueError as e:
        click.echo(f"✗ Configuration validation failed: {e}")
        if not click.confirm("Save configuration anyway?"):
            click.echo("Configuration cancelled.")
            return

    click.echo()
    try:
        saved_path = save_config(new_config, str(config_path))
        click.echo(f"✓ Configuration saved to {saved_path}")
    except OSError as e:
        raise click.ClickException(f"Failed to save configuration: {e}")


def configure_logging(log_file: str | None, log_level: str = "INFO") -> None:
    """Route loguru output to a file; the TUI owns the terminal."""
    logger.remove()
    if log_file:
        logger.add(log_file, level=log_level.upper(), rotation="10 MB", enqueue=False)


def build_source(config: PagewrapConfig):
    """Create the page source described by the configuration."""
    if config.source == "s3":
        S3.set_endpoint_url(config.endpoint_url)
        S3.set_region_name(config.region_name)
        S3.set_profile_name(config.profile_name)
        return S3ObjectSource(config.s3_uri, page_size=config.page_size)

    return DemoFoodSource(page_size=config.page_size, latency=config.latency, error_rate=config.error_rate)


def main(
    source: str | None = None,
    s3_uri: str | None = None,
    page_size: int | None = None,
    latency: float | None = None,
    error_rate: float | None = None,
    theme: str | None = None,
    profile_name: str | None = None,
    endpoint_url: str | None = None,
    region_name: str | None = None,
    config: str | None = None,
    log_file: str | None = None,
    log_level: str = "INFO",
):
    """Paginated list browser - load a list page by page as you scroll."""
    configure_logging(log_file, log_level)

    try:
        config_obj = load_config(config)

        # Merge with CLI arguments (CLI takes priority)
        config_obj = merge_config_with_cli_args(
            config_obj,
            source=source.lower() if source else None,
            s3_uri=s3_uri,
            page_size=page_size,
            latency=latency,
            error_rate=error_rate,
            theme=theme.lower() if theme else None,
            profile_name=profile_name,
            endpoint_url=endpoint_url,
            region_name=region_name,
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    logger.info(f"Starting with source '{config_obj.source}' and page size {config_obj.page_size}")
    app = PagewrapApp(build_source(config_obj), theme_name=config_obj.theme)
    app.run()


if __name__ == "__main__":
    cli()
