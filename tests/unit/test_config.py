"""Unit tests for configuration management."""

import pytest
from kit.core.config import Config, get_config, read_repository_config, write_repository_config
from kit.core.errors import NotFoundError, SerializationError
from kit.core.objects import RepositoryConfig


def test_repository_config_round_trip(tmp_path):
    path = tmp_path / 'config'
    write_repository_config(path, RepositoryConfig('Demo', 'main'))
    assert read_repository_config(path) == RepositoryConfig('Demo', 'main')
    assert '[core]' in path.read_text()


def test_repository_config_missing(tmp_path):
    with pytest.raises(NotFoundError):
        read_repository_config(tmp_path / 'config')


def test_repository_config_incomplete(tmp_path):
    path = tmp_path / 'config'
    path.write_text('[core]\nname = Demo\n')
    with pytest.raises(SerializationError):
        read_repository_config(path)


def test_get_precedence(repo, monkeypatch):
    """Test env > repository > global > fallback."""
    config = get_config(repo)
    assert config.get('user', 'name', fallback='fb') == 'fb'

    Config().set('user', 'name', 'Global', global_config=True)
    assert get_config(repo).get('user', 'name') == 'Global'

    config.set('user', 'name', 'Local')
    assert get_config(repo).get('user', 'name') == 'Local'

    monkeypatch.setenv('KIT_USER_NAME', 'Env')
    assert get_config(repo).get('user', 'name') == 'Env'


def test_unset(repo):
    config = get_config(repo)
    config.set('user', 'email', 'a@example.com')
    assert config.unset('user', 'email')
    assert not config.unset('user', 'email')
    assert get_config(repo).get('user', 'email') is None


def test_set_without_repo():
    with pytest.raises(ValueError):
        Config().set('user', 'name', 'x')


def test_list_all(repo):
    Config().set('user', 'name', 'Global', global_config=True)
    listing = get_config(repo).list_all()
    assert listing['user']['name (global)'] == 'Global'
    assert listing['core']['name'] == 'Demo'


def test_get_author(repo, monkeypatch):
    config = get_config(repo)
    assert config.get_author() == 'Unknown'

    config.set('user', 'name', 'Jo')
    config.set('user', 'email', 'jo@example.com')
    assert get_config(repo).get_author() == 'Jo <jo@example.com>'

    monkeypatch.setenv('KIT_AUTHOR_NAME', 'Env Author')
    assert get_config(repo).get_author() == 'Env Author <jo@example.com>'
