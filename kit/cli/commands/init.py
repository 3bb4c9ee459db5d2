"""Initialize a new Kit repository."""

import click
from pathlib import Path
from kit.core.errors import KitError
from kit.core.remote import init_repo
from kit.core.repository import Repository
from kit.cli.output import success, error, info, short


@click.command('init')
@click.argument('path', default='.')
@click.option('--name', help='Repository name (defaults to the directory name)')
@click.option('--branch', '-b', 'default_branch', default='main', show_default=True,
              help='Name of the initial branch')
def init_cmd(path, name, default_branch):
    """
    Initialize a new Kit repository.

    Creates a .kit directory with an object store, a ref store and an empty
    index, records an initial empty commit, and points the initial branch
    and HEAD at it.

    Examples:
        kit init                    # Initialize in current directory
        kit init my-project         # Initialize in my-project directory
        kit init -b trunk           # Use 'trunk' as the initial branch
    """
    repo_path = Path(path).resolve()

    try:
        repo_config = init_repo(name or repo_path.name, repo_path, default_branch)
    except KitError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    head = Repository(repo_path).refs.get_head()

    click.echo(success(f"Initialized Kit repository '{repo_config.name}' in {repo_path / '.kit'}"))
    click.echo(info(f"Branch '{repo_config.default_branch}' at {short(head)}"))
