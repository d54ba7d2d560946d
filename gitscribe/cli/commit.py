"""CLI command for generating a message and committing with it."""

import logging
from pathlib import Path
from typing import Optional

import typer

from gitscribe.config import PromptVariant
from gitscribe.editor import ExternalEditor
from gitscribe.generator import MessageGenerator
from gitscribe.git import (
    AllFilesIgnoredError,
    CommitError,
    GitError,
    GitRepository,
    NoStagedChangesError,
)
from gitscribe.global_config import ConfigError, load_settings
from gitscribe.llm import CompletionClient, LLMError, MissingAPIKeyError
from gitscribe.workflow import ConfirmationLoop
from gitscribe.cli.utils import configure_logging


def commit_command(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Path to the git repository (defaults to the current directory)",
    ),
    rich: bool = typer.Option(
        False,
        "--rich",
        "-r",
        help="Generate a detailed Conventional Commits message with a bulleted body",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default is ~/.config/gitscribe/config.yaml)",
    ),
    local: bool = typer.Option(
        False,
        "--local",
        "-l",
        help="Use the repository-local config in .git/gitscribe.yaml",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print debug output, including HTTP request and response metadata",
    ),
) -> None:
    """Generate a commit message for the staged changes and commit with it.

    The generated message is shown for confirmation; it can be accepted,
    regenerated, edited, or rejected.
    """
    logger = configure_logging(verbose)

    try:
        repo = GitRepository(path, logger=logger.getChild("git"))
        settings = load_settings(config_path=config, repo_root=repo.root, local=local)
        client_config = settings.client
        if verbose or settings.verbose:
            logger.setLevel(logging.DEBUG)
            client_config = client_config.model_copy(update={"debug": True})
        logger.debug("Repository root: %s", repo.root)

        client = CompletionClient(client_config, logger=logger.getChild("llm"))
        generator = MessageGenerator(
            source=repo,
            client=client,
            ignore_patterns=settings.file_ignore,
            variant=PromptVariant.RICH if rich else PromptVariant.PLAIN,
            logger=logger.getChild("generator"),
        )
        loop = ConfirmationLoop(
            generator=generator,
            sink=repo,
            editor=ExternalEditor(),
            logger=logger.getChild("workflow"),
        )
        result = loop.run()

    except NoStagedChangesError:
        # Display a git-style message for no staged changes
        typer.echo("nothing to commit (no changes staged for commit)", err=True)
        typer.echo("", err=True)
        typer.echo("Stage your changes first with:", err=True)
        typer.echo("  git add <file>...", err=True)
        raise typer.Exit(1)
    except AllFilesIgnoredError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except (ConfigError, MissingAPIKeyError) as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
    except CommitError as e:
        typer.echo("Commit failed!", err=True)
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)

    if result.committed:
        typer.echo("Commit successful!", err=True)
    else:
        typer.echo("Commit cancelled.", err=True)
