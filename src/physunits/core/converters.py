"""
Immutable numerical transformations between units.

Every converter maps numbers in one unit to numbers in another. Converters
support a floating-point path (`~converters.Converter.convert`), which also
accepts ``numpy`` arrays, and an exact path
(`~converters.Converter.convert_exact`) over ``decimal.Decimal`` values.
Concatenating two converters of the same kind collapses them algebraically;
the identity converter is the only representation of "no conversion".
"""

import abc
import decimal
import fractions
import functools
import math
import numbers
import typing

import numpy
import numpy.typing

import physunits
from physunits.core import iterables


class InvalidConstructionError(ValueError):
    """The requested object would be degenerate or ill-defined."""


class UnsupportedOperationError(Exception):
    """Individually valid inputs can't be combined as requested."""


Real = typing.Union[numbers.Real, numpy.typing.ArrayLike]


GUARD_DIGITS = 10
"""Extra digits carried by intermediate steps of an exact conversion."""


def default_precision() -> int:
    """The configured number of digits for exact conversions."""
    return physunits.environment.getint('precision')


@functools.lru_cache(maxsize=None)
def pi(digits: int) -> decimal.Decimal:
    """Compute pi to `digits` significant digits with Machin's formula.

    Notes
    -----
    Machin's formula states that ``pi/4 = 4 arccot(5) - arccot(239)``. This
    function evaluates it with `GUARD_DIGITS` extra digits, then rounds to
    `digits`.
    """
    if digits <= 0:
        raise ValueError(f"Can't compute pi to {digits} digits")
    with decimal.localcontext() as context:
        context.prec = digits + GUARD_DIGITS
        value = 4 * (4 * _arccot(5) - _arccot(239))
    with decimal.localcontext() as context:
        context.prec = digits
        return +value


def _arccot(x: int) -> decimal.Decimal:
    """Sum the Taylor series of arccot(x) at the current precision."""
    x = decimal.Decimal(x)
    xsquared = x * x
    power = 1 / x
    total = power
    n = 3
    sign = -1
    while True:
        power /= xsquared
        previous = total
        total += sign * power / n
        if total == previous:
            return total
        sign = -sign
        n += 2


def as_decimal(value: fractions.Fraction) -> decimal.Decimal:
    """Convert a rational number into an exactly equal decimal number.

    Raises
    ------
    ArithmeticError
        The decimal expansion of `value` does not terminate.
    """
    denominator = value.denominator
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        raise ArithmeticError(
            f"Non-terminating decimal expansion of {value}"
        ) from None
    scale = max(twos, fives)
    digits = value.numerator * 10**scale // value.denominator
    return decimal.Decimal(f"{digits}E-{scale}")


def _finite(value: numbers.Real, name: str) -> float:
    """Cast `value` to a finite float or raise an exception."""
    try:
        result = float(value)
    except (TypeError, ValueError) as err:
        raise TypeError(f"The {name} must be a real number") from err
    if not math.isfinite(result):
        raise InvalidConstructionError(f"The {name} must be finite")
    return result


class Converter(abc.ABC, iterables.ReprStrMixin):
    """Base class for all unit converters."""

    @property
    def is_identity(self) -> bool:
        """True if this converter leaves all values unchanged."""
        return False

    @property
    @abc.abstractmethod
    def is_linear(self) -> bool:
        """True if this converter is an affine or rational scaling."""
        raise NotImplementedError

    @abc.abstractmethod
    def convert(self, value: Real) -> Real:
        """Convert a floating-point value or array."""
        raise NotImplementedError

    def __call__(self, value: Real) -> Real:
        """Called for self(value); equivalent to `convert`."""
        return self.convert(value)

    def convert_exact(
        self,
        value: typing.Union[decimal.Decimal, str, numbers.Real],
        precision: int=None,
    ) -> decimal.Decimal:
        """Convert an arbitrary-precision decimal value.

        Parameters
        ----------
        value : decimal, string, or real number
            The value to convert. Any object that ``decimal.Decimal`` accepts
            is valid. Strings and decimals are exact; floats carry their full
            binary expansion.

        precision : int, optional
            The number of significant digits in the result. The default value
            comes from the ``precision`` configuration key. A value of 0
            requests unlimited precision.

        Notes
        -----
        Non-linear converters fall back to the floating-point path, so their
        results are only as precise as a float.
        """
        value = decimal.Decimal(value)
        if precision is None:
            precision = default_precision()
        if precision < 0:
            raise ValueError(
                f"Precision must be non-negative, not {precision}"
            ) from None
        if precision == 0:
            return self._convert_unlimited(value)
        with decimal.localcontext() as context:
            context.prec = precision
            return self._convert_decimal(value)

    @abc.abstractmethod
    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        """Convert `value` at the precision of the current decimal context."""
        raise NotImplementedError

    @abc.abstractmethod
    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        """Convert `value` without rounding."""
        raise NotImplementedError

    def concatenate(self, other: 'Converter') -> 'Converter':
        """Combine this converter with `other`.

        The resulting converter is equivalent to first converting by `other`
        (the right converter) and then converting by this converter (the left
        converter).
        """
        if not isinstance(other, Converter):
            raise TypeError(
                f"Can't concatenate {self!r} with {other!r}"
            ) from None
        if other.is_identity:
            return self
        return Compound(self, other)

    _inverse: typing.Optional['Converter'] = None

    def inverse(self) -> 'Converter':
        """The converter that undoes this one.

        Inversion is an involution: ``c.inverse().inverse()`` is ``c``, even
        when the floating-point reciprocal of a factor would not round-trip.
        """
        if self._inverse is None:
            result = self._invert()
            result._inverse = self
            self._inverse = result
        return self._inverse

    @abc.abstractmethod
    def _invert(self) -> 'Converter':
        """Create the converter that undoes this one."""
        raise NotImplementedError

    @property
    def compound_converters(self) -> typing.Tuple['Converter', ...]:
        """The simple converters in this converter, left to right."""
        return (self,)

    @abc.abstractmethod
    def __eq__(self, other) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def __hash__(self) -> int:
        raise NotImplementedError


class Identity(iterables.Singleton, Converter):
    """The converter that leaves every value unchanged (singleton)."""

    @property
    def is_identity(self) -> bool:
        return True

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        return value

    def concatenate(self, other: Converter) -> Converter:
        if not isinstance(other, Converter):
            raise TypeError(
                f"Can't concatenate {self!r} with {other!r}"
            ) from None
        return other

    def _invert(self) -> 'Identity':
        return self

    def __eq__(self, other) -> bool:
        return isinstance(other, Identity)

    def __hash__(self) -> int:
        return 0

    def __str__(self) -> str:
        return '1'


IDENTITY = Identity()
"""The identity converter."""


class Compound(Converter):
    """A converter made of two others, in matrix notation ``left x right``.

    Users should not need to create instances of this class directly. Use
    `~converters.Converter.concatenate` instead, which simplifies where
    possible.
    """

    def __init__(self, left: Converter, right: Converter) -> None:
        self.left = left
        """The converter to apply last."""
        self.right = right
        """The converter to apply first."""

    @property
    def is_linear(self) -> bool:
        return self.left.is_linear and self.right.is_linear

    def convert(self, value: Real) -> Real:
        return self.left.convert(self.right.convert(value))

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        # Round once, at the end, to the caller's precision.
        with decimal.localcontext() as context:
            context.prec += GUARD_DIGITS
            converted = self.right._convert_decimal(value)
            result = self.left._convert_decimal(converted)
        return +result

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        converted = self.right._convert_unlimited(value)
        return self.left._convert_unlimited(converted)

    def _invert(self) -> 'Compound':
        return Compound(self.right.inverse(), self.left.inverse())

    @property
    def compound_converters(self) -> typing.Tuple[Converter, ...]:
        return self.left.compound_converters + self.right.compound_converters

    def __eq__(self, other) -> bool:
        if not isinstance(other, Compound):
            return False
        return self.left == other.left and self.right == other.right

    def __hash__(self) -> int:
        return hash((self.left, self.right))

    def __str__(self) -> str:
        return f"{self.left} o {self.right}"


class AddConverter(Converter):
    """A converter that adds a constant offset."""

    def __init__(self, offset: numbers.Real) -> None:
        offset = _finite(offset, 'offset')
        if offset == 0.0:
            raise InvalidConstructionError(
                "Would result in identity converter"
            ) from None
        self.offset = offset
        """The value to add."""

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value + self.offset

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value + decimal.Decimal(repr(self.offset))

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        offset = fractions.Fraction(repr(self.offset))
        return as_decimal(fractions.Fraction(value) + offset)

    def concatenate(self, other: Converter) -> Converter:
        if not isinstance(other, AddConverter):
            return super().concatenate(other)
        offset = self.offset + other.offset
        return IDENTITY if offset == 0.0 else AddConverter(offset)

    def _invert(self) -> 'AddConverter':
        return AddConverter(-self.offset)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AddConverter):
            return False
        return self.offset == other.offset

    def __hash__(self) -> int:
        return hash(('add', self.offset))

    def __str__(self) -> str:
        sign = '+' if self.offset > 0 else '-'
        return f"({sign}{abs(self.offset)})"


class MultiplyConverter(Converter):
    """A converter that multiplies by a floating-point factor."""

    def __init__(self, factor: numbers.Real) -> None:
        factor = _finite(factor, 'factor')
        if factor == 1.0:
            raise InvalidConstructionError(
                "Would result in identity converter"
            ) from None
        if factor == 0.0:
            raise InvalidConstructionError(
                "A factor of zero is not invertible"
            ) from None
        self.factor = factor
        """The value by which to multiply."""

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value * self.factor

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value * decimal.Decimal(repr(self.factor))

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        factor = fractions.Fraction(repr(self.factor))
        return as_decimal(fractions.Fraction(value) * factor)

    def concatenate(self, other: Converter) -> Converter:
        if not isinstance(other, MultiplyConverter):
            return super().concatenate(other)
        factor = self.factor * other.factor
        return IDENTITY if factor == 1.0 else MultiplyConverter(factor)

    def _invert(self) -> 'MultiplyConverter':
        return MultiplyConverter(1.0 / self.factor)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultiplyConverter):
            return False
        return self.factor == other.factor

    def __hash__(self) -> int:
        return hash(('multiply', self.factor))

    def __str__(self) -> str:
        return f"(*{self.factor})"


class RationalConverter(Converter):
    """A converter that multiplies by an exact ratio of integers.

    The ratio is reduced by the greatest common divisor of its dividend and
    divisor when the instance is created. The divisor is always positive.
    """

    def __init__(self, dividend: int, divisor: int=1) -> None:
        if not all(isinstance(i, numbers.Integral) for i in (dividend, divisor)):
            raise TypeError(
                f"Can't create a rational converter from {dividend!r}"
                f" and {divisor!r}"
            ) from None
        if divisor <= 0:
            raise InvalidConstructionError(
                "Negative or zero divisor"
            ) from None
        if dividend == 0:
            raise InvalidConstructionError(
                "A dividend of zero is not invertible"
            ) from None
        ratio = fractions.Fraction(int(dividend), int(divisor))
        if ratio == 1:
            raise InvalidConstructionError(
                "Would result in identity converter"
            ) from None
        self._ratio = ratio

    @property
    def dividend(self) -> int:
        """The integer dividend of this converter."""
        return self._ratio.numerator

    @property
    def divisor(self) -> int:
        """The (positive) integer divisor of this converter."""
        return self._ratio.denominator

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value * float(self.dividend) / float(self.divisor)

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value * decimal.Decimal(self.dividend) / self.divisor

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        return as_decimal(fractions.Fraction(value) * self._ratio)

    def concatenate(self, other: Converter) -> Converter:
        if not isinstance(other, RationalConverter):
            return super().concatenate(other)
        ratio = self._ratio * other._ratio
        if ratio == 1:
            return IDENTITY
        return RationalConverter(ratio.numerator, ratio.denominator)

    def _invert(self) -> 'RationalConverter':
        if self.dividend < 0:
            return RationalConverter(-self.divisor, -self.dividend)
        return RationalConverter(self.divisor, self.dividend)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RationalConverter):
            return False
        return self._ratio == other._ratio

    def __hash__(self) -> int:
        return hash(('rational', self.dividend, self.divisor))

    def __str__(self) -> str:
        if self.divisor == 1:
            return f"(*{self.dividend})"
        return f"(*{self.dividend}/{self.divisor})"


def _logarithmic_base(base: numbers.Real) -> float:
    """Validate the base of a logarithm or exponential."""
    base = _finite(base, 'base')
    if base <= 0.0 or base == 1.0:
        raise InvalidConstructionError(
            f"Can't use {base} as a logarithmic base"
        ) from None
    return base


def _float_fallback(converter: Converter, value: decimal.Decimal):
    """Convert a decimal value by way of the floating-point path."""
    return decimal.Decimal(repr(float(converter.convert(float(value)))))


class LogConverter(Converter):
    """A converter that takes the logarithm in a given base."""

    def __init__(self, base: numbers.Real) -> None:
        self.base = _logarithmic_base(base)
        """The base of the logarithm (e.g., `math.e`)."""
        self._log_of_base = math.log(self.base)

    @property
    def is_linear(self) -> bool:
        return False

    def convert(self, value: Real) -> Real:
        return numpy.log(value) / self._log_of_base

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return +_float_fallback(self, value)

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        return _float_fallback(self, value)

    def _invert(self) -> 'ExpConverter':
        return ExpConverter(self.base)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LogConverter):
            return False
        return self.base == other.base

    def __hash__(self) -> int:
        return hash(('log', self.base))

    def __str__(self) -> str:
        return "ln" if self.base == math.e else f"log({self.base})"


class ExpConverter(Converter):
    """A converter that exponentiates a given base."""

    def __init__(self, base: numbers.Real) -> None:
        self.base = _logarithmic_base(base)
        """The base of the exponential (e.g., `math.e`)."""
        self._log_of_base = math.log(self.base)

    @property
    def is_linear(self) -> bool:
        return False

    def convert(self, value: Real) -> Real:
        return numpy.exp(self._log_of_base * value)

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return +_float_fallback(self, value)

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        return _float_fallback(self, value)

    def _invert(self) -> LogConverter:
        return LogConverter(self.base)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExpConverter):
            return False
        return self.base == other.base

    def __hash__(self) -> int:
        return hash(('exp', self.base))

    def __str__(self) -> str:
        return "e" if self.base == math.e else f"exp({self.base})"


class PiMultiplierConverter(Converter):
    """A converter that multiplies by pi.

    Each exact conversion is rounded to the requested precision, so applying
    this converter and then its inverse in two separate exact conversions
    recovers the original value only to within the last digits. Concatenate
    the two converters to round once instead.
    """

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value * numpy.pi

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value * pi(decimal.getcontext().prec + GUARD_DIGITS)

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        raise UnsupportedOperationError(
            "Pi multiplication with unlimited precision"
        ) from None

    def _invert(self) -> 'PiDivisorConverter':
        return PiDivisorConverter()

    def __eq__(self, other) -> bool:
        return isinstance(other, PiMultiplierConverter)

    def __hash__(self) -> int:
        return hash('pi-multiply')

    def __str__(self) -> str:
        return "(*π)"


class PiDivisorConverter(Converter):
    """A converter that divides by pi."""

    @property
    def is_linear(self) -> bool:
        return True

    def convert(self, value: Real) -> Real:
        return value / numpy.pi

    def _convert_decimal(self, value: decimal.Decimal) -> decimal.Decimal:
        return value / pi(decimal.getcontext().prec + GUARD_DIGITS)

    def _convert_unlimited(self, value: decimal.Decimal) -> decimal.Decimal:
        raise UnsupportedOperationError(
            "Pi division with unlimited precision"
        ) from None

    def _invert(self) -> PiMultiplierConverter:
        return PiMultiplierConverter()

    def __eq__(self, other) -> bool:
        return isinstance(other, PiDivisorConverter)

    def __hash__(self) -> int:
        return hash('pi-divide')

    def __str__(self) -> str:
        return "(/π)"
