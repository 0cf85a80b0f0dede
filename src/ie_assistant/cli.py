"""Command line entry point: `ie-assistant`."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from dotenv import load_dotenv

from ie_assistant.app import AssistantApp
from ie_assistant.config import Settings
from ie_assistant.core.controller import SessionController
from ie_assistant.logging_setup import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Launch the Innovation Engine assistant for generating executable documents.",
)


@contextmanager
def working_directory(path: Path) -> Iterator[None]:
    """Run inside ``path`` and restore the previous working directory afterwards."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(previous)


def build_app(settings: Settings, environment: str) -> AssistantApp:
    controller = SessionController(
        environment=environment,
        char_limit=settings.char_limit,
        input_height=settings.input_height,
        show_full_help=settings.show_full_help,
    )
    return AssistantApp(controller, blink_interval=settings.blink_interval)


@app.command()
def run(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Execution environment tag passed through to generated documents."
    ),
    working_dir: Path = typer.Option(
        Path("."),
        "--working-directory",
        help="Working directory for the session. Restored when the assistant exits.",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
) -> None:
    """Ask natural-language questions and receive step-by-step executable documents."""

    settings = Settings()
    configure_logging(settings)
    env = environment or settings.environment

    assistant = build_app(settings, env)
    logger.info("launching assistant (environment=%s, working_directory=%s)", env, working_dir)
    with working_directory(working_dir):
        assistant.run()


def main() -> None:
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
