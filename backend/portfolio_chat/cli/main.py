"""CLI entrypoint for the portfolio research chat."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import orjson
import typer
import uvicorn

from portfolio_chat.chat.session import ChatSession
from portfolio_chat.chat.transport import ChatTransport
from portfolio_chat.content.assembler import build_research_context
from portfolio_chat.content.loaders import aggregate, format_documents_for_context
from portfolio_chat.core.config import Settings

app = typer.Typer(name="pfchat", help="Portfolio research chat command-line interface")

EXIT_COMMANDS = {"exit", "quit", ":q"}


def _local_settings(config: Optional[Path], content_root: Optional[Path]) -> Settings:
    settings = Settings.from_yaml(config)
    if content_root is not None:
        settings.content_root = content_root
    return settings


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Ask a single question against a running server."""
    session = ChatSession()
    reply = session.ask(question, ChatTransport(host))
    if reply is None:
        typer.echo("Question is required", err=True)
        raise typer.Exit(code=2)
    typer.echo(reply.content)
    if session.last_error is not None:
        raise typer.Exit(code=1)


@app.command()
def chat(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Interactive conversation; history is kept for the lifetime of the process."""
    session = ChatSession()
    transport = ChatTransport(host)
    typer.echo("Ask anything about my research. Type 'exit' to leave.")
    while True:
        try:
            question = typer.prompt("you", default="", show_default=False)
        except (EOFError, typer.Abort):
            break
        if question.strip().lower() in EXIT_COMMANDS:
            break
        reply = session.ask(question, transport)
        if reply is not None:
            typer.echo(f"assistant: {reply.content}")


@app.command()
def context(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config YAML"),
    content_root: Optional[Path] = typer.Option(None, "--content-root", help="Override content root"),
) -> None:
    """Print the research context that would be sent to the model."""
    typer.echo(build_research_context(_local_settings(config, content_root)))


@app.command()
def documents(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config YAML"),
    content_root: Optional[Path] = typer.Option(None, "--content-root", help="Override content root"),
    as_json: bool = typer.Option(False, "--json", help="Emit documents as JSON"),
) -> None:
    """List the aggregated content documents."""
    docs = aggregate(_local_settings(config, content_root))
    if as_json:
        typer.echo(orjson.dumps(docs, option=orjson.OPT_INDENT_2).decode("utf-8"))
    else:
        typer.echo(format_documents_for_context(docs))


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(5173, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the chat API with uvicorn."""
    uvicorn.run("portfolio_chat.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
