"""CLI entry point for contentlinks."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import replace

import click

from contentlinks.config import Config
from contentlinks.handlers import LinkServices, get_all_handlers
from contentlinks.messages import MessagesService
from contentlinks.models import NavigationAction
from contentlinks.navigation import HistoryNavigator
from contentlinks.router import LinkDispatcher
from contentlinks.sites import RemoteAccountDirectory, StaticAccountDirectory


def _build_dispatcher(config: Config) -> LinkDispatcher:
    """Build a LinkDispatcher with all available handlers registered."""
    if not config.accounts_file:
        raise click.UsageError("No accounts file given (--accounts-file or CONTENTLINKS_ACCOUNTS).")

    directory: StaticAccountDirectory
    try:
        if config.remote:
            directory = RemoteAccountDirectory.from_file(
                config.accounts_file, timeout=config.http_timeout
            )
        else:
            directory = StaticAccountDirectory.from_file(config.accounts_file)
    except (OSError, ValueError) as e:
        raise click.UsageError(f"Cannot load accounts: {e}") from e

    services = LinkServices(directory=directory, messages=MessagesService(directory))
    dispatcher = LinkDispatcher(directory)
    for handler in get_all_handlers(services):
        dispatcher.register(handler)
    return dispatcher


async def _run(
    dispatcher: LinkDispatcher,
    url: str,
    course_id: int | None,
    username: str | None,
    go: bool,
) -> tuple[list[NavigationAction], HistoryNavigator | None]:
    actions = await dispatcher.get_actions_for(url, course_id, username)
    if not go:
        return actions, None

    navigator = HistoryNavigator()
    action = dispatcher.first_valid_action(actions)
    if action is not None:
        await action.action(action.sites[0], navigator)
    return actions, navigator


@click.command()
@click.argument("url")
@click.option("--accounts-file", "-a", type=click.Path(exists=True), help="JSON file with the stored accounts")
@click.option("--course-id", "-c", type=int, default=None, help="Course the link relates to")
@click.option("--username", "-u", default=None, help="Only consider accounts with this username")
@click.option("--remote", is_flag=True, help="Refresh accounts from their sites")
@click.option("--go", is_flag=True, help="Run the first valid action")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    url: str,
    accounts_file: str | None,
    course_id: int | None,
    username: str | None,
    remote: bool,
    go: bool,
    verbose: bool,
) -> None:
    """contentlinks — resolve a link into in-app navigation."""
    config = Config.from_env()
    overrides: dict[str, object] = {}
    if accounts_file:
        overrides["accounts_file"] = accounts_file
    if remote:
        overrides["remote"] = True
    if verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        config = replace(config, **overrides)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatcher = _build_dispatcher(config)
    actions, navigator = asyncio.run(_run(dispatcher, url, course_id, username, go))

    if not actions:
        click.echo(f"No handler can open {url}")
        sys.exit(1)

    for i, action in enumerate(actions, 1):
        click.echo(f"  {i}. {action.message} ({action.icon}) -> {', '.join(action.sites)}")

    if navigator is None:
        return
    for request in navigator.history:
        mode = "redirect" if request.redirect else "push"
        click.echo(f"  ✓ [{request.account_id}] {mode} {request.page} {request.params}")
    for request, reason in navigator.failures:
        click.echo(f"  ✗ {request.page}: {reason}", err=True)


if __name__ == "__main__":
    main()
