"""Configuration management commands."""

import click


@click.group()
def config() -> None:
    """Configuration commands."""
    pass


@config.command("show")
@click.option("--config", "config_path", default=None, type=click.Path(), help="Config file path")
def config_show(config_path: str) -> None:
    """Show the active configuration."""
    from bandvocoder.cli.progress import console
    from bandvocoder.cli.service_helpers import config_service, handle_result

    config_obj = handle_result(config_service().get_config(config_path))

    console.print("\n[bold]Current Configuration[/bold]")
    if config_obj._source and config_obj._source != "defaults":
        console.print(f"[dim]Source: {config_obj._source}[/dim]\n")
    else:
        console.print("[dim]Source: defaults (no config file found)[/dim]\n")

    for section_name in config_obj.sections:
        section = getattr(config_obj, section_name, {})
        if section:
            console.print(f"[bold blue]\\[{section_name}][/bold blue]")
            for key, value in section.items():
                console.print(f"  {key} = {value}")
            console.print()


@config.command("init")
@click.option("--output", "-o", default="bandvocoder.toml", help="Output file path")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing file")
def config_init(output: str, force: bool) -> None:
    """Create a default configuration file."""
    from bandvocoder.cli.progress import print_error, print_success
    from bandvocoder.cli.service_helpers import config_service

    result = config_service().create_default_config(output, force=force)

    if not result.success:
        print_error(result.error)
        if "already exists" in result.error:
            click.echo("Use --force to overwrite.")
        raise SystemExit(1)

    print_success(f"Created configuration file: {output}")


@config.command("path")
def config_path() -> None:
    """Show configuration file search paths."""
    from pathlib import Path

    from bandvocoder.cli.progress import console
    from bandvocoder.cli.service_helpers import config_service, handle_result

    service = config_service()

    console.print("\n[bold]Configuration File Search Paths[/bold]\n")
    console.print("Files are merged in reverse order (first listed wins):\n")

    active = service.find_config_file().data
    active_config = Path(active) if active else None

    locations = [Path(loc) for loc in handle_result(service.get_config_locations())]
    for i, location in enumerate(locations, 1):
        status = (
            "[green]✓ ACTIVE[/green]"
            if location == active_config
            else ("[dim]exists[/dim]" if location.exists() else "[dim]not found[/dim]")
        )
        console.print(f"  {i}. {location} {status}")

    console.print()
