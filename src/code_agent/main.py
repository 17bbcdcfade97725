"""Main CLI entry point for the code agent."""

import logging
from pathlib import Path
from typing import Optional
import click
from rich.console import Console
from rich.markup import escape
from .agent import CodeAgent
from .config import PROVIDER_DEFAULTS, PROVIDERS, Config, ConfigError, load_config, save_config
from .llm.provider import ProviderError, create_llm_provider
from .models import AgentReply

console = Console(soft_wrap=True)


@click.group()
@click.option("--provider", type=click.Choice(PROVIDERS), help="Override the configured provider")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, provider: Optional[str], verbose: bool):
    """Code Agent - AI-powered coding agent for your codebase."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"provider": provider}


def _load_effective_config(ctx: click.Context) -> Config:
    override = ctx.obj.get("provider") if ctx.obj else None
    return load_config().with_env_overrides(provider_override=override)


def _build_agent(ctx: click.Context, path: str) -> CodeAgent:
    try:
        config = _load_effective_config(ctx)
        llm = create_llm_provider(config)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        ctx.exit(1)
    return CodeAgent(Path(path).resolve(), config, llm)


def _print_response(title: str, text: str) -> None:
    console.print(f"\n[bold blue]{title}[/bold blue]\n")
    console.print(text, markup=False, highlight=False)


def _offer_changes(agent: CodeAgent, reply: AgentReply, question: str, default: bool, assume_yes: bool) -> None:
    """Ask before writing a reply's file blocks."""
    if not reply.file_blocks:
        return
    if not (assume_yes or click.confirm(question, default=default)):
        return
    written = agent.apply(reply)
    for path in written:
        console.print(f"  [green]wrote[/green] {escape(path)}")
    console.print(f"[green]✓ Applied {len(written)} file(s)[/green]\n")


@cli.command()
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Path to codebase")
@click.pass_context
def chat(ctx: click.Context, path: str):
    """Start interactive chat with the agent."""
    agent = _build_agent(ctx, path)

    console.print("\n[bold blue]🤖 Code Agent - Interactive Mode[/bold blue]\n")
    console.print('[dim]Type "exit" to quit, "clear" to reset conversation[/dim]\n')

    try:
        with console.status("Indexing codebase..."):
            count = agent.index()
    except OSError as e:
        console.print(f"[red]✗ Indexing failed: {escape(str(e))}[/red]")
        ctx.exit(1)
    console.print(f"[green]✓ Indexed {count} files[/green]\n")

    while True:
        try:
            message = click.prompt("You", prompt_suffix=": ", default="", show_default=False)
        except click.Abort:
            break

        command = message.strip().lower()
        if command == "exit":
            break
        if command == "clear":
            agent.clear_history()
            console.print("[yellow]Conversation cleared[/yellow]\n")
            continue
        if not command:
            continue

        try:
            with console.status("Thinking..."):
                reply = agent.chat(message)
            _print_response("🤖 Agent:", reply.text)
            if reply.proposes_changes:
                _offer_changes(agent, reply, "Execute suggested changes?", default=False, assume_yes=False)
        except (ProviderError, OSError) as e:
            console.print(f"[red]✗ Error: {escape(str(e))}[/red]\n")


@cli.command()
@click.argument("files", nargs=-1)
@click.option("--all", "-a", "review_all", is_flag=True, help="Review entire codebase")
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Path to codebase")
@click.pass_context
def review(ctx: click.Context, files: tuple[str, ...], review_all: bool, path: str):
    """Review specific files or entire codebase."""
    agent = _build_agent(ctx, path)
    targets = None if review_all or not files else list(files)

    try:
        with console.status("Analyzing code..."):
            reply = agent.review(targets)
    except (ProviderError, OSError) as e:
        console.print(f"[red]✗ Review failed: {escape(str(e))}[/red]")
        ctx.exit(1)

    console.print("[green]✓ Review complete[/green]")
    _print_response("📋 Code Review:", reply.text)


@cli.command()
@click.argument("file")
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Path to codebase")
@click.option("--yes", "-y", is_flag=True, help="Apply fixes without asking")
@click.pass_context
def fix(ctx: click.Context, file: str, path: str, yes: bool):
    """Fix bugs in a specific file."""
    agent = _build_agent(ctx, path)

    try:
        with console.status(f"Analyzing {file}..."):
            reply = agent.fix(file)
        console.print("[green]✓ Analysis complete[/green]")
        _print_response("🔧 Suggested Fixes:", reply.text)
        _offer_changes(agent, reply, "Apply fixes?", default=False, assume_yes=yes)
    except (ProviderError, OSError) as e:
        console.print(f"[red]✗ Fix failed: {escape(str(e))}[/red]")
        ctx.exit(1)


@cli.command()
@click.argument("file")
@click.option("--suggestion", "-s", help="Specific refactoring suggestion")
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Path to codebase")
@click.option("--yes", "-y", is_flag=True, help="Apply refactoring without asking")
@click.pass_context
def refactor(ctx: click.Context, file: str, suggestion: Optional[str], path: str, yes: bool):
    """Refactor code in a specific file."""
    agent = _build_agent(ctx, path)

    try:
        with console.status(f"Refactoring {file}..."):
            reply = agent.refactor(file, suggestion)
        console.print("[green]✓ Refactoring complete[/green]")
        _print_response("♻️  Refactored Code:", reply.text)
        _offer_changes(agent, reply, "Apply refactoring?", default=False, assume_yes=yes)
    except (ProviderError, OSError) as e:
        console.print(f"[red]✗ Refactoring failed: {escape(str(e))}[/red]")
        ctx.exit(1)


@cli.command()
@click.argument("description")
@click.option("--type", "-t", "kind", default="app", help="Type of generation (app, component, function, test)")
@click.option("--framework", "-f", help="Framework to use (react, vue, express, fastapi, etc.)")
@click.option("--path", "-p", type=click.Path(exists=True, file_okay=False), default=".", help="Path to codebase")
@click.option("--yes", "-y", is_flag=True, help="Create files without asking")
@click.pass_context
def generate(ctx: click.Context, description: str, kind: str, framework: Optional[str], path: str, yes: bool):
    """Generate new code, files, or entire applications.

    Examples:
        code-agent generate "todo REST API" --type app --framework fastapi
    """
    agent = _build_agent(ctx, path)

    try:
        with console.status("Generating code..."):
            reply = agent.generate(description, kind=kind, framework=framework)
        console.print("[green]✓ Generation complete[/green]")
        _print_response("🚀 Generated Code:", reply.text)
        _offer_changes(agent, reply, "Create these files?", default=True, assume_yes=yes)
    except (ProviderError, OSError) as e:
        console.print(f"[red]✗ Generation failed: {escape(str(e))}[/red]")
        ctx.exit(1)


@cli.command()
def config():
    """Configure AI provider settings."""
    provider = click.prompt("Select AI provider", type=click.Choice(PROVIDERS), default="ollama")
    defaults = PROVIDER_DEFAULTS[provider]

    url = None
    api_key = None
    if provider != "gemini":
        url = click.prompt("API URL", default=defaults["url"])
    model = click.prompt("Model name", default=defaults["model"])
    if provider == "gemini":
        api_key = click.prompt("API Key", hide_input=True)

    path = save_config(Config(provider=provider, url=url, model=model, api_key=api_key))
    console.print(f"[green]✓ Configuration saved to {path}[/green]")


if __name__ == "__main__":
    cli()
