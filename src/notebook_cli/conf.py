from __future__ import annotations
from dataclasses import dataclass, asdict
import logging
import os
import os.path
import yaml
from notebook_cli.errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_EDITOR = 'vim'
DEFAULT_PAGER = 'less'


def notes_root_path() -> str:
    """Returns the directory holding all notes and folders, ``~/.notes``."""
    return os.path.expanduser(os.path.join('~', '.notes'))


def config_path() -> str:
    """Returns the path of the user's configuration file, ``~/.notebook.yaml``."""
    return os.path.expanduser(os.path.join('~', '.notebook.yaml'))


@dataclass
class NotebookConf:
    editor: str
    """Command used to create and edit notes, and to edit this configuration.

    It may include arguments, such as ``code --wait``; the path being edited is always passed as a separate,
    final argument.
    """

    pager: str
    """Command used by ``view`` to display a note."""

    @classmethod
    def from_environment(cls) -> NotebookConf:
        """Builds the defaults used on first run from ``$EDITOR`` and ``$PAGER``."""
        return cls(editor=os.environ.get('EDITOR') or DEFAULT_EDITOR,
                   pager=os.environ.get('PAGER') or DEFAULT_PAGER)

    @classmethod
    def load(cls, path: str) -> NotebookConf:
        """Decodes the configuration file at the given path.

        Raises :exc:`notebook_cli.errors.ConfigurationError` if the file cannot be read, is not valid YAML,
        or does not define both ``editor`` and ``pager`` as strings.
        """
        try:
            with open(path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)
        except OSError as e:
            raise ConfigurationError(f'Cannot read config file {path}: {e.strerror}', path, e) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f'Cannot parse config file {path}: {e}', path, e) from e
        if not isinstance(data, dict):
            raise ConfigurationError(f'Config file {path} must contain a mapping with "editor" and "pager"', path)
        for key in ('editor', 'pager'):
            if not isinstance(data.get(key), str):
                raise ConfigurationError(f'Config file {path} must set "{key}" to a string', path)
        return cls(editor=data['editor'], pager=data['pager'])

    def save(self, path: str) -> None:
        with open(path, 'w', encoding='utf-8') as file:
            yaml.safe_dump(asdict(self), file, default_flow_style=False)

    @classmethod
    def for_user(cls) -> NotebookConf:
        """Loads the user's configuration, creating ``~/.notebook.yaml`` with environment defaults if it is missing.

        An existing file is returned exactly as written; defaults are never merged into it.
        """
        path = config_path()
        if os.path.exists(path):
            conf = cls.load(path)
            logger.debug('Loaded configuration from %s', path)
            return conf
        conf = cls.from_environment()
        try:
            conf.save(path)
        except OSError as e:
            raise ConfigurationError(f'Cannot create config file {path}: {e.strerror}', path, e) from e
        logger.debug('Created configuration at %s: %s', path, conf)
        return conf
