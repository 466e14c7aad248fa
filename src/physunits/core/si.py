"""
The units of the International System (SI) and units accepted for use with it.
"""

import collections.abc
import logging
import math
import typing

from physunits.core import constants
from physunits.core import converters
from physunits.core import dimensions
from physunits.core import iterables
from physunits.core import units


logger = logging.getLogger(__name__)


class System(collections.abc.Mapping, iterables.ReprStrMixin):
    """A system of units.

    Instances map the name of a physical quantity (e.g., ``'length'``) to the
    system unit for that quantity. They also keep track of every unit that
    belongs to the system, including units that do not represent a named
    quantity.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        """The name of this system of units."""
        self._quantities = {}
        self._units = []

    def add(self, unit: units.Unit, quantity: str=None) -> units.Unit:
        """Register `unit`, optionally as the unit of `quantity`.

        Returns `unit` to support module-level definitions.
        """
        if unit not in self._units:
            self._units.append(unit)
        if quantity is not None:
            self._quantities[quantity] = unit
        return unit

    @property
    def members(self) -> typing.Tuple[units.Unit, ...]:
        """All units in this system, in order of definition."""
        return tuple(self._units)

    def units_of(self, dimension: dimensions.Dimension) -> typing.List[units.Unit]:
        """All units in this system with the given dimension."""
        return [unit for unit in self._units if unit.dimension == dimension]

    def dimension_of(self, quantity: str) -> typing.Optional[dimensions.Dimension]:
        """The dimension of a named quantity, if this system defines it."""
        if quantity in self._quantities:
            return self._quantities[quantity].dimension
        logger.warning("%s defines no quantity called %r", self.name, quantity)
        return None

    def __len__(self) -> int:
        """The number of named quantities in this system."""
        return len(self._quantities)

    def __iter__(self) -> typing.Iterator[str]:
        """Iterate over the names of quantities in this system."""
        return iter(self._quantities)

    def __getitem__(self, quantity: str) -> units.Unit:
        """Get the system unit of a named quantity."""
        if quantity in self._quantities:
            return self._quantities[quantity]
        raise KeyError(f"No known quantity called {quantity!r}") from None

    def __str__(self) -> str:
        return self.name


SI = System('SI')
"""The International System of Units."""


ONE = SI.add(units.ONE, 'dimensionless')

# Base units
AMPERE = SI.add(
    units.BaseUnit('A', dimensions.ELECTRIC_CURRENT),
    'electric current',
)
CANDELA = SI.add(
    units.BaseUnit('cd', dimensions.LUMINOUS_INTENSITY),
    'luminous intensity',
)
KELVIN = SI.add(
    units.BaseUnit('K', dimensions.TEMPERATURE),
    'temperature',
)
KILOGRAM = SI.add(
    units.BaseUnit('kg', dimensions.MASS),
    'mass',
)
METRE = SI.add(
    units.BaseUnit('m', dimensions.LENGTH),
    'length',
)
MOLE = SI.add(
    units.BaseUnit('mol', dimensions.AMOUNT_OF_SUBSTANCE),
    'amount of substance',
)
SECOND = SI.add(
    units.BaseUnit('s', dimensions.TIME),
    'time',
)

# Derived units with special names
AMPERE_TURN = SI.add(AMPERE.alternate('At'), 'magnetomotive force')
GRAM = SI.add(KILOGRAM.transform(converters.RationalConverter(1, 1000), 'g'))
RADIAN = SI.add(ONE.alternate('rad'), 'angle')
STERADIAN = SI.add(ONE.alternate('sr'), 'solid angle')
BIT = SI.add(ONE.alternate('bit'), 'information')
HERTZ = SI.add((ONE / SECOND).alternate('Hz'), 'frequency')
NEWTON = SI.add(
    (METRE * KILOGRAM / SECOND ** 2).alternate('N'),
    'force',
)
PASCAL = SI.add((NEWTON / METRE ** 2).alternate('Pa'), 'pressure')
JOULE = SI.add((NEWTON * METRE).alternate('J'), 'energy')
WATT = SI.add((JOULE / SECOND).alternate('W'), 'power')
COULOMB = SI.add((SECOND * AMPERE).alternate('C'), 'electric charge')
VOLT = SI.add((WATT / AMPERE).alternate('V'), 'electric potential')
FARAD = SI.add((COULOMB / VOLT).alternate('F'), 'electric capacitance')
OHM = SI.add((VOLT / AMPERE).alternate('Ω'), 'electric resistance')
SIEMENS = SI.add((AMPERE / VOLT).alternate('S'), 'electric conductance')
WEBER = SI.add((VOLT * SECOND).alternate('Wb'), 'magnetic flux')
TESLA = SI.add((WEBER / METRE ** 2).alternate('T'), 'magnetic flux density')
HENRY = SI.add((WEBER / AMPERE).alternate('H'), 'electric inductance')
CELSIUS = SI.add(KELVIN.transform(converters.AddConverter(273.15), '℃'))
LUMEN = SI.add((CANDELA * STERADIAN).alternate('lm'), 'luminous flux')
LUX = SI.add((LUMEN / METRE ** 2).alternate('lx'), 'illuminance')
BECQUEREL = SI.add(
    (ONE / SECOND).alternate('Bq'),
    'radioactive activity',
)
GRAY = SI.add(
    (JOULE / KILOGRAM).alternate('Gy'),
    'radiation dose absorbed',
)
SIEVERT = SI.add(
    (JOULE / KILOGRAM).alternate('Sv'),
    'radiation dose effective',
)
KATAL = SI.add((MOLE / SECOND).alternate('kat'), 'catalytic activity')

# Derived product units
METRES_PER_SECOND = SI.add(METRE / SECOND, 'velocity')
METRES_PER_SQUARE_SECOND = SI.add(METRES_PER_SECOND / SECOND, 'acceleration')
SQUARE_METRE = SI.add(METRE * METRE, 'area')
CUBIC_METRE = SI.add(SQUARE_METRE * METRE, 'volume')
JOULE_SECOND = SI.add(JOULE * SECOND, 'action')
FARADS_PER_METRE = SI.add(FARAD / METRE, 'electric permittivity')
NEWTONS_PER_SQUARE_AMPERE = SI.add(
    NEWTON / AMPERE ** 2,
    'magnetic permeability',
)
RECIPROCAL_METRE = SI.add(METRE ** -1, 'wave number')
PASCAL_SECOND = SI.add(PASCAL * SECOND, 'dynamic viscosity')
CANDELAS_PER_SQUARE_METRE = SI.add(CANDELA / SQUARE_METRE, 'luminance')
SQUARE_METRES_PER_SECOND = SI.add(
    SQUARE_METRE / SECOND,
    'kinematic viscosity',
)
AMPERES_PER_METRE = SI.add(AMPERE / METRE, 'magnetic field strength')
COULOMBS_PER_KILOGRAM = SI.add(COULOMB / KILOGRAM, 'ionizing radiation')
BITS_PER_SECOND = SI.add(BIT / SECOND, 'information rate')

# Units outside the SI that are accepted for use with the SI
PERCENT = SI.add(ONE.transform(converters.RationalConverter(1, 100), '%'))
MINUTE = SI.add(SECOND.transform(converters.RationalConverter(60), 'min'))
HOUR = SI.add(SECOND.transform(converters.RationalConverter(60 * 60), 'h'))
DAY = SI.add(SECOND.transform(converters.RationalConverter(24 * 60 * 60), 'd'))
DEGREE_ANGLE = SI.add(
    RADIAN.transform(
        converters.PiMultiplierConverter().concatenate(
            converters.RationalConverter(1, 180)
        ),
        '°',
    )
)
MINUTE_ANGLE = SI.add(
    RADIAN.transform(
        converters.PiMultiplierConverter().concatenate(
            converters.RationalConverter(1, 180 * 60)
        ),
        "'",
    )
)
SECOND_ANGLE = SI.add(
    RADIAN.transform(
        converters.PiMultiplierConverter().concatenate(
            converters.RationalConverter(1, 180 * 60 * 60)
        ),
        '"',
    )
)
LITRE = SI.add(
    CUBIC_METRE.transform(converters.RationalConverter(1, 1000), 'L')
)
TONNE = SI.add(KILOGRAM.transform(converters.RationalConverter(1000), 't'))
NEPER = SI.add(ONE.transform(converters.LogConverter(math.e).inverse(), 'Np'))
BEL = SI.add(ONE.transform(converters.LogConverter(10).inverse(), 'B'))
ELECTRON_VOLT = SI.add(
    JOULE.transform(
        converters.MultiplyConverter(constants.CODATA['eV'].value),
        'eV',
    )
)
UNIFIED_ATOMIC_MASS = SI.add(
    KILOGRAM.transform(
        converters.MultiplyConverter(constants.CODATA['amu'].value),
        'u',
    )
)
ASTRONOMICAL_UNIT = SI.add(
    METRE.transform(
        converters.RationalConverter(constants.CODATA['au'].value),
        'au',
    )
)
REVOLUTION = SI.add(
    RADIAN.transform(
        converters.PiMultiplierConverter().concatenate(
            converters.RationalConverter(2)
        ),
        'rev',
    )
)
HECTARE = SI.add(
    SQUARE_METRE.transform(converters.RationalConverter(10000), 'ha')
)
