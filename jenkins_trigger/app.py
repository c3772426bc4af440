"""
Command line entry point.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer
from pydantic import ValidationError

from jenkins_trigger.core.config import Settings, get_settings
from jenkins_trigger.core.exceptions import JenkinsError
from jenkins_trigger.core.logging import get_logger, setup_logging
from jenkins_trigger.models.queue import Executable
from jenkins_trigger.services.jenkins import JenkinsClient

logger = get_logger(__name__)

app = typer.Typer(
    name="jenkins-trigger",
    help="Trigger parameterized Jenkins builds and wait for their build numbers.",
    no_args_is_help=True,
)


def parse_params(values: list[str]) -> dict[str, str]:
    """Turn repeated KEY=VALUE options into a parameter mapping."""
    params: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="'--param'")
        if key in params:
            raise typer.BadParameter(f"duplicate parameter {key!r}", param_hint="'--param'")
        params[key] = value
    return params


async def run_build(
    settings: Settings,
    job: str,
    params: dict[str, str],
    *,
    wait: bool = True,
    timeout: float | None = None,
    max_attempts: int | None = None,
) -> tuple[str, Executable | None]:
    """Trigger ``job`` and, if ``wait``, resolve its queue item."""
    overrides: dict[str, float | int] = {}
    if timeout is not None:
        overrides["poll_timeout"] = timeout
    if max_attempts is not None:
        overrides["poll_max_attempts"] = max_attempts

    async with JenkinsClient.from_settings(settings, **overrides) as client:
        location = await client.trigger(job, params)
        if not wait:
            return location, None
        return location, await client.resolve(location)


@app.callback()
def main() -> None:
    """Jenkins build trigger."""


@app.command()
def build(
    job: Annotated[str, typer.Argument(help="Job name")],
    param: Annotated[
        list[str] | None,
        typer.Option("--param", "-p", help="Build parameter as KEY=VALUE, repeatable"),
    ] = None,
    wait: Annotated[
        bool,
        typer.Option("--wait/--no-wait", help="Wait for the build number"),
    ] = True,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", min=0.001, help="Stop polling the queue after this many seconds"),
    ] = None,
    max_attempts: Annotated[
        int | None,
        typer.Option("--max-attempts", min=1, help="Stop polling the queue after this many polls"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every queue poll"),
    ] = False,
) -> None:
    """Trigger a build of JOB and print its build number."""
    params = parse_params(param or [])

    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration:\n{exc}", err=True)
        raise typer.Exit(1) from None

    setup_logging(logging.DEBUG if verbose else settings.log_level)

    try:
        location, executable = asyncio.run(
            run_build(
                settings,
                job,
                params,
                wait=wait,
                timeout=timeout,
                max_attempts=max_attempts,
            )
        )
    except JenkinsError as exc:
        logger.debug("build %s failed", job, exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Queued: {location}")
    if executable is not None:
        typer.echo(f"Build #{executable.number}: {executable.url}")
