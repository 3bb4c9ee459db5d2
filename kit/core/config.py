"""Configuration for Kit.

Settings live in INI files read with configparser. Lookups go through
three layers, highest first: KIT_<SECTION>_<KEY> environment variables,
the repository's .kit/config, then ~/.kitconfig. The repository identity
written at init time is kept in the [core] section of .kit/config.
"""

import os
import configparser
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from .errors import IoFailureError, NotFoundError, SerializationError
from .objects import RepositoryConfig

CORE_SECTION = 'core'
DEFAULT_AUTHOR = 'Unknown'


class ConfigFile:
    """One INI file, parsed on first access."""

    def __init__(self, path: Path):
        self.path = path
        self._parser = None

    @property
    def parser(self) -> configparser.ConfigParser:
        if self._parser is None:
            parser = configparser.ConfigParser()
            if self.path.exists():
                try:
                    parser.read(self.path, encoding='utf-8')
                except configparser.Error as e:
                    raise SerializationError(f"config: cannot parse {self.path}: {e}") from e
            self._parser = parser
        return self._parser

    def lookup(self, section: str, key: str) -> Optional[str]:
        if self.parser.has_option(section, key):
            return self.parser.get(section, key)
        return None

    def items(self) -> Iterator[Tuple[str, Dict[str, str]]]:
        for section in self.parser.sections():
            yield section, dict(self.parser.items(section))

    def save(self) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                self.parser.write(f)
        except OSError as e:
            raise IoFailureError(f"config: cannot write {self.path}: {e}") from e


class Config:
    """
    Layered view over the global and repository config files.

    Writes go to the repository file unless global_config is requested.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.kitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        self.global_file = ConfigFile(self.GLOBAL_CONFIG_PATH)
        self.repo_file = ConfigFile(repo_config_path) if repo_config_path else None

    def _layers(self) -> Iterator[ConfigFile]:
        if self.repo_file is not None:
            yield self.repo_file
        yield self.global_file

    def _writable(self, global_config: bool) -> ConfigFile:
        if global_config:
            return self.global_file
        if self.repo_file is None:
            raise ValueError("Not inside a repository; use global_config=True")
        return self.repo_file

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up section.key.

        The environment variable KIT_<SECTION>_<KEY> wins over both files;
        fallback is returned when no layer defines the key.
        """
        env_value = os.environ.get(f"KIT_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        for layer in self._layers():
            value = layer.lookup(section, key)
            if value is not None:
                return value
        return fallback

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """Write section.key to the repository file, or the global file."""
        target = self._writable(global_config)
        if not target.parser.has_section(section):
            target.parser.add_section(section)
        target.parser.set(section, key, value)
        target.save()

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Drop section.key, removing the section once it is empty.

        Returns:
            False if the key was not set
        """
        target = self._writable(global_config)
        parser = target.parser
        if not parser.has_option(section, key):
            return False

        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)
        target.save()
        return True

    def remove_section(self, section: str) -> bool:
        """Drop a whole section from the repository file."""
        target = self._writable(False)
        if not target.parser.remove_section(section):
            return False
        target.save()
        return True

    def sections(self, prefix: str = '') -> Dict[str, Dict[str, str]]:
        """Repository sections whose names start with prefix."""
        if self.repo_file is None:
            return {}
        return {name: values for name, values in self.repo_file.items() if name.startswith(prefix)}

    def list_all(self, global_only: bool = False, repo_only: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Merge every layer into one mapping.

        Global keys are suffixed with ' (global)' so both values stay
        visible when a repository overrides one.
        """
        merged: Dict[str, Dict[str, str]] = {}

        if not repo_only:
            for section, values in self.global_file.items():
                bucket = merged.setdefault(section, {})
                bucket.update({f"{key} (global)": value for key, value in values.items()})

        if not global_only and self.repo_file is not None:
            for section, values in self.repo_file.items():
                merged.setdefault(section, {}).update(values)

        return merged

    def get_user_identity(self) -> Tuple[Optional[str], Optional[str]]:
        """(name, email) for commit authorship; KIT_AUTHOR_* overrides user.*."""
        name = os.environ.get('KIT_AUTHOR_NAME') or self.get('user', 'name')
        email = os.environ.get('KIT_AUTHOR_EMAIL') or self.get('user', 'email')
        return name, email

    def get_author(self) -> str:
        """Format the commit author as 'Name <email>'."""
        name, email = self.get_user_identity()
        name = name or DEFAULT_AUTHOR
        return f"{name} <{email}>" if email else name


def get_config(repo=None) -> Config:
    """Config for a repository, or the global file alone when repo is None."""
    return Config(repo.config_file) if repo else Config()


def write_repository_config(config_path: Path, repo_config: RepositoryConfig) -> None:
    """Persist repository identity under the [core] section."""
    config_file = ConfigFile(config_path)
    parser = config_file.parser
    if not parser.has_section(CORE_SECTION):
        parser.add_section(CORE_SECTION)
    parser.set(CORE_SECTION, 'name', repo_config.name)
    parser.set(CORE_SECTION, 'default_branch', repo_config.default_branch)
    config_file.save()


def read_repository_config(config_path: Path) -> RepositoryConfig:
    """
    Load repository identity.

    Raises:
        NotFoundError: If the config file is missing
        SerializationError: If the [core] section is incomplete
    """
    if not config_path.exists():
        raise NotFoundError(f"Repository config not found: {config_path}")
    parser = ConfigFile(config_path).parser
    try:
        return RepositoryConfig(
            name=parser.get(CORE_SECTION, 'name'),
            default_branch=parser.get(CORE_SECTION, 'default_branch'),
        )
    except configparser.Error as e:
        raise SerializationError(f"config: invalid repository config {config_path}: {e}") from e
