import collections.abc
import configparser
import json
import logging
import os
import pathlib

from physunits.core import iotools


# read version from installed package
from importlib.metadata import PackageNotFoundError, version
try:
    __version__ = version("physunits")
except PackageNotFoundError:
    __version__ = "0+unknown"


logging.getLogger(__name__).addHandler(logging.NullHandler())
logger = logging.getLogger(__name__)


DEFAULTS = {
    'precision': '34',
    'model': 'standard',
}
"""Values to use for keys that no configuration file sets."""


class Environment(collections.abc.Mapping):
    """A collection of environmental settings."""

    def __init__(self, name: str='physunits') -> None:
        self.name = name
        """The name of the configuration section to select."""
        home = pathlib.Path('~').expanduser()
        paths = [
            pathlib.Path.cwd(), # The current working directory
            home, # The user's home directory
            home / '.config', # Linux standard (local)
            '/etc/physunits', # Linux standard (global)
            os.environ.get('PHYSUNITS_INI'), # A known environment variable
            pathlib.Path(__file__).parent, # The package top
        ]
        config = configparser.ConfigParser()
        config.read_dict({self.name: DEFAULTS})
        path = iotools.search(paths, 'physunits.ini')
        if path is not None:
            config.read(path)
            logger.debug("Read %s settings from %s", self.name, path)
        self._config = config[self.name]
        self.path = path

    def __len__(self) -> int:
        """The number of available parameter values."""
        return len(self._config)

    def __iter__(self):
        """Iterate over available parameter values."""
        yield from self._config

    def __getitem__(self, key: str):
        """Access parameter values by mapping key."""
        if key in self._config:
            return self._config[key]
        raise KeyError(
            f"{self.name} has no value for {key!r}"
        ) from None

    def getint(self, key: str) -> int:
        """Access a parameter value as an integer."""
        try:
            return self._config.getint(key)
        except ValueError as err:
            raise ValueError(
                f"{self.name} value for {key!r} is not an integer"
            ) from err

    def __str__(self) -> str:
        return json.dumps(
            dict(self._config),
            indent=4,
            sort_keys=True,
        )

    def __repr__(self) -> str:
        return f"{self.name}({self.path}):\n{self}"


environment = Environment()
"""The settings in effect for this process."""
