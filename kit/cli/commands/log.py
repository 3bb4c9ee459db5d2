"""Log command - show commit history."""

import click
from colorama import Fore, Style
from kit.core.errors import KitError
from kit.core.repository import Repository
from kit.cli.output import error


@click.command('log')
@click.option('--oneline', is_flag=True, help='Show one commit per line')
@click.option('-n', '--max-count', type=int, help='Limit the number of commits')
@click.argument('start', required=False)
def log_cmd(oneline, max_count, start):
    """
    Show commit history, newest first.

    START is a branch, tag or commit hash (defaults to HEAD).

    Examples:
        kit log
        kit log --oneline -n 5
        kit log v1.0
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a kit repository"))
        raise click.Abort()

    try:
        start_hash = None
        if start:
            start_hash = repo.refs.get_ref(start).commit_hash or start

        for count, (commit_hash, commit) in enumerate(repo.revisions.iter_history(start_hash)):
            if max_count is not None and count >= max_count:
                break

            if oneline:
                first_line = commit.message.split('\n')[0]
                click.echo(f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {first_line}")
                continue

            click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}")
            click.echo(f"Author: {commit.author}")
            click.echo(f"Date:   {commit.metadata.timestamp}")
            click.echo()
            for line in commit.message.split('\n'):
                click.echo(f"    {line}")
            click.echo()
    except KitError as e:
        click.echo(error(f"Cannot read history: {e}"))
        raise click.Abort()
