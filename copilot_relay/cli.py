"""Command-line entry point for the Copilot relay."""

from __future__ import annotations

import typer

from copilot_relay import opts
from copilot_relay.config import LogMode, RelaySettings, load_config
from copilot_relay.core.utils import console, print_command_line_args, setup_rich_logging

app = typer.Typer(
    name="copilot-relay",
    help="A GitHub Copilot extension that reviews code through the Copilot LLM.",
    add_completion=True,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
) -> None:
    """A GitHub Copilot extension relay."""
    if ctx.invoked_subcommand is None:
        console.print("[bold red]No command specified.[/bold red]")
        console.print("[bold yellow]Running --help for your convenience.[/bold yellow]")
        console.print(ctx.get_help())
        raise typer.Exit
    import dotenv  # noqa: PLC0415

    dotenv.load_dotenv()


def set_config_defaults(ctx: typer.Context, config_file: str | None) -> None:
    """Set the default values for the CLI based on the config file."""
    config = load_config(config_file)
    wildcard_config = config.get("defaults", {})
    subcommand = ctx.command.name

    if not subcommand:
        ctx.default_map = wildcard_config
        return

    command_config = config.get(subcommand, {})
    ctx.default_map = {**wildcard_config, **command_config}


def _config_callback(ctx: typer.Context, value: str | None) -> str | None:
    set_config_defaults(ctx, value)
    return value


CONFIG_FILE = typer.Option(
    None,
    "--config",
    help="Path to a TOML configuration file.",
    is_eager=True,
    callback=_config_callback,
    rich_help_panel="General Options",
)


@app.command("serve")
def serve(
    host: str = opts.HOST,
    port: int = opts.PORT,
    github_api_url: str = opts.GITHUB_API_URL,
    copilot_api_url: str = opts.COPILOT_API_URL,
    request_timeout: float = opts.REQUEST_TIMEOUT,
    persona_prompt: str | None = opts.PERSONA_PROMPT,
    log_mode: LogMode = opts.LOG_MODE,
    log_level: str = opts.LOG_LEVEL,
    config_file: str | None = CONFIG_FILE,  # noqa: ARG001
    print_args: bool = opts.PRINT_ARGS,
) -> None:
    """Start the Copilot extension relay.

    Every POST to `/` resolves the caller from its `X-GitHub-Token`, prepends
    the reviewer instructions to the conversation, and streams the Copilot
    completion back unchanged.
    """
    if print_args:
        print_command_line_args(locals())

    setup_rich_logging(log_level, console=console)

    import uvicorn  # noqa: PLC0415

    from copilot_relay.api import create_app  # noqa: PLC0415

    settings_kwargs = {
        "host": host,
        "port": port,
        "log_mode": log_mode,
        "github_api_url": github_api_url,
        "copilot_api_url": copilot_api_url,
        "request_timeout": request_timeout,
    }
    if persona_prompt:
        settings_kwargs["persona_prompt"] = persona_prompt
    settings = RelaySettings(**settings_kwargs)

    console.print(f"[bold green]Starting Copilot relay on {host}:{port}[/bold green]")
    console.print(f"  🪪 Identity: [blue]{settings.github_api_url}[/blue]")
    console.print(f"  🤖 Completions: [blue]{settings.copilot_api_url}[/blue]")
    console.print(f"  📝 Log mode: [blue]{settings.log_mode}[/blue]")

    uvicorn.run(create_app(settings, console=console), host=host, port=port, log_config=None)
