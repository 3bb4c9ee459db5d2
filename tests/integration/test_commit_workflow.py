"""Integration tests for add and commit workflow."""

from pathlib import Path
from click.testing import CliRunner

from kit.cli.main import cli
from kit.core.repository import Repository


def test_add_and_commit(tmp_path, monkeypatch):
    """Test staging and committing a file."""
    monkeypatch.setenv('KIT_AUTHOR_NAME', 'Test User')
    monkeypatch.setenv('KIT_AUTHOR_EMAIL', 'test@example.com')
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ['init'])
        Path('file.txt').write_text('content')

        result = runner.invoke(cli, ['add', 'file.txt'])
        assert result.exit_code == 0
        assert 'Added file.txt' in result.output

        result = runner.invoke(cli, ['commit', '-m', 'Add file'])
        assert result.exit_code == 0
        assert 'Add file' in result.output

        repo = Repository('.')
        commit = repo.revisions.read_commit(repo.refs.get_head())
        assert commit.author == 'Test User <test@example.com>'
        assert [e.path for e in commit.snapshot] == ['file.txt']
        assert repo.refs.get_ref('main').commit_hash == repo.refs.get_head()


def test_add_directory(tmp_path):
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ['init'])
        Path('src/pkg').mkdir(parents=True)
        Path('src/a.py').write_text('a')
        Path('src/pkg/b.py').write_text('b')

        result = runner.invoke(cli, ['add', 'src'])

        assert result.exit_code == 0
        assert Repository('.').index.get_staged_files() == ['src/a.py', 'src/pkg/b.py']


def test_add_missing_file(tmp_path):
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ['init'])
        result = runner.invoke(cli, ['add', 'missing.txt'])

        assert result.exit_code != 0
        assert 'Skipped missing.txt' in result.output


def test_commit_with_empty_index(tmp_path):
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ['init'])
        result = runner.invoke(cli, ['commit', '-m', 'Nothing'])

        assert result.exit_code != 0
        assert 'Nothing staged' in result.output


def test_commit_outside_repository(tmp_path):
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(cli, ['commit', '-m', 'x'])

        assert result.exit_code != 0
        assert 'Not a kit repository' in result.output


def test_log(tmp_path):
    """Test log lists commits newest first."""
    runner = CliRunner()

    with runner.isolated_filesystem(temp_dir=tmp_path):
        runner.invoke(cli, ['init'])
        for i in range(2):
            Path('file.txt').write_text(f'v{i}')
            runner.invoke(cli, ['add', 'file.txt'])
            runner.invoke(cli, ['commit', '-m', f'Commit {i}', '--author', 'Jo <jo@example.com>'])

        result = runner.invoke(cli, ['log', '--oneline'])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert 'Commit 1' in lines[0]
        assert 'Initial commit' in lines[2]

        result = runner.invoke(cli, ['log', '-n', '1'])
        assert 'Author: Jo <jo@example.com>' in result.output
        assert 'Commit 0' not in result.output
