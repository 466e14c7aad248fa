import collections.abc
import math
import typing

from physunits.core import iterables


_metadata = {
    'c': {
        'info': "Speed of light in a vacuum.",
        'unit': 'm / s',
        'value': 299792458,
    },
    'h': {
        'info': "Planck's constant.",
        'unit': 'J s',
        'value': 6.62607015e-34,
    },
    'k': {
        'info': "Boltzmann's constant.",
        'unit': 'J / K',
        'value': 1.380649e-23,
    },
    'e': {
        'info': "Elementary charge.",
        'unit': 'C',
        'value': 1.602176634e-19,
    },
    'G': {
        'info': "Gravitational constant.",
        'unit': 'm^3 / (s^2 kg)',
        'value': 6.67430e-11,
    },
    'mu0': {
        'info': "Permeability of free space.",
        'unit': 'H / m',
        'value': 1.25663706212e-6,
    },
    'epsilon0': {
        'info': "Permittivity of free space.",
        'unit': 'F / m',
        'value': 8.8541878128e-12,
    },
    'eV': {
        'info': "Energy associated with 1 eV.",
        'unit': 'J',
        'value': 1.602176634e-19,
    },
    'amu': {
        'info': "Atomic mass unit.",
        'unit': 'kg',
        'value': 1.66053906660e-27,
    },
    'au': {
        'info': "Astronomical unit.",
        'unit': 'm',
        'value': 149597870700,
    },
}
_metadata['hbar'] = {
    'info': "Reduced Planck's constant.",
    'unit': 'J s',
    'value': _metadata['h']['value'] / (2 * math.pi),
}


class Constant(typing.NamedTuple):
    """A single physical constant in SI units."""

    info: str
    value: float
    unit: str


class Constants(collections.abc.Mapping, iterables.ReprStrMixin):
    """A read-only collection of physical constants."""

    def __init__(self, metadata: typing.Mapping[str, dict]) -> None:
        self._mapping = {
            name: Constant(**definition)
            for name, definition in metadata.items()
        }

    def __len__(self) -> int:
        return len(self._mapping)

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._mapping)

    def __getitem__(self, name: str) -> Constant:
        """Get the named constant or raise an error."""
        if name in self._mapping:
            return self._mapping[name]
        raise KeyError(f"No constant named {name!r}") from None

    def __str__(self) -> str:
        return ', '.join(self._mapping)


CODATA = Constants(_metadata)
"""CODATA 2018 values of fundamental physical constants."""


def _value(name: str) -> float:
    return CODATA[name].value


c = _value('c')
h = _value('h')
hbar = _value('hbar')
k = _value('k')
e = _value('e')
G = _value('G')
mu0 = _value('mu0')
epsilon0 = _value('epsilon0')


PLANCK_LENGTH = math.sqrt(hbar * G / c**3)
"""The Planck length, in metres."""

PLANCK_MASS = math.sqrt(hbar * c / G)
"""The Planck mass, in kilograms."""

PLANCK_TIME = PLANCK_LENGTH / c
"""The Planck time, in seconds."""

PLANCK_TEMPERATURE = PLANCK_MASS * c**2 / k
"""The Planck temperature, in kelvin."""

PLANCK_CURRENT = math.sqrt(4 * math.pi * epsilon0 * c**6 / G)
"""The Planck current, in amperes."""
