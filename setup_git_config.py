#!/usr/bin/env python3
"""
setup-git-config - set the git user.name / user.email identity.

Values come from --name/--email, the GIT_USER_NAME/GIT_USER_EMAIL environment
variables, or an interactive prompt, and are written with `git config` at
global (~/.gitconfig) or local (.git/config) scope.
"""

import logging
import sys

import click
from colorama import Fore, Style, init

from git_identity import (
    EMAIL_KEY,
    NAME_KEY,
    GitConfigStore,
    GitIdentityError,
    Identity,
    Scope,
    ensure_git,
    validate_identity,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    """Configure logging with timestamps and colors."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format=f'{Fore.GREEN}%(asctime)s{Style.RESET_ALL} - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger().setLevel(level)


def print_color(message, color, err=False):
    """Print a message with the specified color."""
    click.echo(f"{color}{message}{Style.RESET_ALL}", err=err)


def info(message):
    print_color(message, Fore.BLUE)


def ok(message):
    print_color(message, Fore.GREEN)


def warn(message):
    print_color(message, Fore.YELLOW, err=True)


def error(message):
    print_color(message, Fore.RED, err=True)


def ask(text):
    """Prompt for a value; end of input counts as an empty answer."""
    try:
        return input(f"{text}: ")
    except EOFError:
        click.echo(err=True)
        return ""


def confirm(text, assume_yes=False):
    """Ask a y/N question. Only 'y' or 'yes' accept."""
    if assume_yes:
        return True
    answer = ask(f"{text} [y/N]")
    return answer.strip().lower() in ("y", "yes")


def show_identity(store):
    """Print the identity stored at the store's scope."""
    current = store.read_identity()
    info(f"Current git config ({store.scope.label}):")
    click.echo(f"  user.name : {current.name}")
    click.echo(f"  user.email: {current.email}")


def needs_confirmation(current: Identity, desired: Identity) -> bool:
    """True when an existing non-empty value would be overwritten."""
    name_changes = bool(current.name) and current.name != desired.name
    email_changes = bool(current.email) and current.email != desired.email
    return name_changes or email_changes


def apply_identity(store, name, email, assume_yes=False):
    """
    Validate and write the identity at the store's scope.

    Args:
        store: GitConfigStore for the selected scope
        name: Desired user.name, prompted for when empty
        email: Desired user.email, prompted for when empty
        assume_yes: Skip the overwrite confirmation

    Returns:
        True if the identity was written, False if nothing changed
    """
    if not name:
        name = ask("Enter your name (e.g. Hong Gil-dong)")
    if not email:
        email = ask("Enter your email (e.g. dev@company.com)")

    desired = validate_identity(name, email)
    current = store.read_identity()

    info(f"Scope: {store.scope.label}")
    click.echo(f"  current user.name : {current.name or '<unset>'}")
    click.echo(f"  current user.email: {current.email or '<unset>'}")
    click.echo(f"  new user.name     : {desired.name}")
    click.echo(f"  new user.email    : {desired.email}")

    if current == desired:
        ok("Already set to the same values, nothing to change.")
        return False

    if needs_confirmation(current, desired):
        if not confirm("Overwrite existing values with the new ones?", assume_yes):
            warn("Aborted at user request.")
            return False

    store.write_identity(desired)

    written = store.read_identity()
    ok("Your information has been set as follows:")
    click.echo(f"\n  {NAME_KEY} : {written.name}")
    click.echo(f"  {EMAIL_KEY}: {written.email}")
    click.echo("\nAll setup complete.")
    return True


class GitCommand(click.Command):
    """Command that refuses to run, even for --help, when git is missing."""

    def parse_args(self, ctx, args):
        if not ctx.resilient_parsing:
            try:
                ensure_git()
            except GitIdentityError as e:
                error(str(e))
                ctx.exit(e.exit_code)
        return super().parse_args(ctx, args)


@click.command(cls=GitCommand, context_settings=dict(help_option_names=['-h', '--help']))
@click.option('--name', envvar='GIT_USER_NAME', default="", show_envvar=True,
              help='user.name to set')
@click.option('--email', envvar='GIT_USER_EMAIL', default="", show_envvar=True,
              help='user.email to set')
@click.option('--global', 'scope', flag_value='global', default=True,
              help='Apply to the global config (~/.gitconfig) [default]')
@click.option('--local', 'scope', flag_value='local',
              help='Apply to the current repository (.git/config)')
@click.option('--yes', 'assume_yes', is_flag=True,
              help='Do not ask before overwriting (non-interactive, CI)')
@click.option('--show-only', is_flag=True, help='Only print the current values')
@click.option('--verbose', '-v', is_flag=True, help='Log every git invocation')
def cli(name, email, scope, assume_yes, show_only, verbose):
    """Set git user.name and user.email.

    Missing values are prompted for interactively.

    Examples:

      # Non-interactive global setup
      setup-git-config --name "Hong Gil-dong" --email dev@company.com --global --yes

      # Prompt for the local repository identity
      setup-git-config --local

      # Show the current global identity
      setup-git-config --show-only --global
    """
    setup_logging(verbose)

    try:
        store = GitConfigStore(Scope[scope.upper()])
        logger.debug("Using %s scope in %s", store.scope.label, store.cwd)

        if show_only:
            show_identity(store)
            return

        apply_identity(store, name, email, assume_yes=assume_yes)
    except GitIdentityError as e:
        error(str(e))
        sys.exit(e.exit_code)


def main():
    init(autoreset=True)
    cli()


if __name__ == "__main__":
    main()
