import typing

from physunits.core import converters
from physunits.core import units


class Prefix(typing.NamedTuple):
    """Metadata for a metric order-of-magnitude prefix.

    Calling a prefix on a unit creates the prefixed unit::

        >>> prefixes.KILO(si.METRE)
        core.units.TransformedUnit(km)
    """

    symbol: str
    name: str
    converter: converters.Converter

    def __call__(self, unit: units.Unit) -> units.Unit:
        """Apply this prefix to `unit`."""
        symbol = f"{self.symbol}{unit.symbol}" if unit.symbol else None
        return unit.transform(self.converter, symbol=symbol)


def _decimal(symbol: str, name: str, exponent: int) -> Prefix:
    """Create the prefix for a power of ten."""
    if exponent > 0:
        converter = converters.RationalConverter(10**exponent)
    else:
        converter = converters.RationalConverter(1, 10**-exponent)
    return Prefix(symbol, name, converter)


def _binary(symbol: str, name: str, exponent: int) -> Prefix:
    """Create the prefix for a power of 1024."""
    return Prefix(symbol, name, converters.RationalConverter(1024**exponent))


YOTTA = _decimal('Y', 'yotta', 24)
ZETTA = _decimal('Z', 'zetta', 21)
EXA = _decimal('E', 'exa', 18)
PETA = _decimal('P', 'peta', 15)
TERA = _decimal('T', 'tera', 12)
GIGA = _decimal('G', 'giga', 9)
MEGA = _decimal('M', 'mega', 6)
KILO = _decimal('k', 'kilo', 3)
HECTO = _decimal('h', 'hecto', 2)
DEKA = _decimal('da', 'deka', 1)
DECI = _decimal('d', 'deci', -1)
CENTI = _decimal('c', 'centi', -2)
MILLI = _decimal('m', 'milli', -3)
MICRO = _decimal('μ', 'micro', -6)
NANO = _decimal('n', 'nano', -9)
PICO = _decimal('p', 'pico', -12)
FEMTO = _decimal('f', 'femto', -15)
ATTO = _decimal('a', 'atto', -18)
ZEPTO = _decimal('z', 'zepto', -21)
YOCTO = _decimal('y', 'yocto', -24)

SI = (
    YOTTA, ZETTA, EXA, PETA, TERA, GIGA, MEGA, KILO, HECTO, DEKA,
    DECI, CENTI, MILLI, MICRO, NANO, PICO, FEMTO, ATTO, ZEPTO, YOCTO,
)
"""The SI decimal prefixes, from largest to smallest."""

KIBI = _binary('Ki', 'kibi', 1)
MEBI = _binary('Mi', 'mebi', 2)
GIBI = _binary('Gi', 'gibi', 3)
TEBI = _binary('Ti', 'tebi', 4)
PEBI = _binary('Pi', 'pebi', 5)
EXBI = _binary('Ei', 'exbi', 6)

BINARY = (KIBI, MEBI, GIBI, TEBI, PEBI, EXBI)
"""The IEC binary prefixes, from smallest to largest."""
