"""
Symbolic physical units and conversions between them.

Every unit is an immutable value with a dimension and a converter to its
system unit. Users combine units algebraically::

    >>> from physunits.core import si
    >>> speed = si.METRE / si.SECOND
    >>> speed ** 2
    core.units.ProductUnit(m^2 s^-2)

and request converters between them::

    >>> si.HOUR.get_converter_to(si.MINUTE)(3.0)
    180.0

Conversions between units of different dimensions are possible when the
active dimensional model (see `~physunits.core.models`) declares the
dimensions equivalent.
"""

import abc
import logging
import numbers
import typing

from physunits.core import converters
from physunits.core import dimensions
from physunits.core import iterables
from physunits.core import models
from physunits.core import symbolic


logger = logging.getLogger(__name__)


class IncommensurableError(Exception):
    """The units measure quantities that can't convert to each other."""

    def __init__(self, source: 'Unit', target: 'Unit') -> None:
        self.source = source
        """The unit to convert from."""
        self.target = target
        """The unit to convert to."""

    def __str__(self) -> str:
        return f"{self.source} is not compatible with {self.target}"


def _is_integral(value: numbers.Real) -> bool:
    """True if `value` is a whole number."""
    if isinstance(value, numbers.Integral):
        return True
    return float(value).is_integer()


class Unit(abc.ABC, iterables.ReprStrMixin):
    """Base class for all physical units."""

    @property
    def symbol(self) -> typing.Optional[str]:
        """The symbol of this unit, if it has one."""
        return None

    @property
    @abc.abstractmethod
    def dimension(self) -> dimensions.Dimension:
        """The physical dimension of this unit."""
        raise NotImplementedError

    @property
    def product_elements(self) -> typing.Optional[typing.Tuple[symbolic.Term, ...]]:
        """The factors of a product unit, or `None` for other units."""
        return None

    @abc.abstractmethod
    def to_system_unit(self) -> 'Unit':
        """The unscaled reference unit with the same dimension as this one."""
        raise NotImplementedError

    @abc.abstractmethod
    def converter_to_system_unit(self) -> converters.Converter:
        """The converter from this unit to its system unit."""
        raise NotImplementedError

    @property
    def is_system_unit(self) -> bool:
        """True if this unit is its own system unit."""
        return self.to_system_unit() == self

    def _factors(self) -> typing.Tuple[symbolic.Term, ...]:
        """The terms that represent this unit in a product."""
        return (symbolic.Term(self),)

    def _unannotated(self) -> 'Unit':
        """This unit without any annotation."""
        return self

    # Algebra

    def multiply(self, other: 'Unit') -> 'Unit':
        """The product of this unit and `other`.

        The dimensionless unit `~units.ONE` is an absorbing element: the
        product of it with another unit is the other unit.
        """
        if not isinstance(other, Unit):
            raise TypeError(f"Can't multiply {self!r} by {other!r}") from None
        if self == ONE:
            return other
        if other == ONE:
            return self
        return _product(self._factors(), other._factors())

    def divide(self, other: 'Unit') -> 'Unit':
        """The quotient of this unit and `other`."""
        if not isinstance(other, Unit):
            raise TypeError(f"Can't divide {self!r} by {other!r}") from None
        return self.multiply(other.inverse())

    def inverse(self) -> 'Unit':
        """The reciprocal of this unit."""
        return _product(symbolic.invert(self._factors()))

    def pow(self, n: int) -> 'Unit':
        """This unit raised to the integral power `n`."""
        if not isinstance(n, numbers.Integral):
            raise TypeError(f"Can't raise a unit to {n!r}") from None
        return _product(symbolic.power(self._factors(), int(n)))

    def root(self, n: int) -> 'Unit':
        """The `n`th root of this unit.

        Raises `ZeroDivisionError` if `n` is zero.
        """
        if not isinstance(n, numbers.Integral):
            raise TypeError(f"Can't take root {n!r} of a unit") from None
        return _product(symbolic.root(self._factors(), int(n)))

    def __mul__(self, other):
        """Called for self * other."""
        if isinstance(other, Unit):
            return self.multiply(other)
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        """Called for other * self."""
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        """Called for self / other."""
        if isinstance(other, Unit):
            return self.divide(other)
        if isinstance(other, numbers.Real):
            return self._reduce(other)
        return NotImplemented

    def __rtruediv__(self, other):
        """Called for other / self."""
        if isinstance(other, numbers.Real):
            return self.inverse().scale(other)
        return NotImplemented

    def __pow__(self, other):
        """Called for self ** other.

        The exponent may be an integer or a `fractions.Fraction`.
        """
        if isinstance(other, numbers.Integral):
            return self.pow(other)
        if isinstance(other, numbers.Rational):
            return self.pow(other.numerator).root(other.denominator)
        return NotImplemented

    def __add__(self, other):
        """Called for self + other."""
        if isinstance(other, numbers.Real):
            return self.shift(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        """Called for self - other."""
        if isinstance(other, numbers.Real):
            return self.shift(-other)
        return NotImplemented

    # Derived units

    def scale(self, factor: numbers.Real) -> 'Unit':
        """Create a unit equal to `factor` times this unit.

        A whole-number factor produces an exact rational converter. Any other
        factor produces a floating-point multiplier.
        """
        if factor == 1:
            return self
        if _is_integral(factor):
            return self.transform(converters.RationalConverter(int(factor)))
        return self.transform(converters.MultiplyConverter(factor))

    def _reduce(self, divisor: numbers.Real) -> 'Unit':
        """Create a unit equal to this unit divided by `divisor`."""
        if divisor == 1:
            return self
        if _is_integral(divisor):
            divisor = int(divisor)
            if divisor == 0:
                raise ZeroDivisionError(f"Can't divide {self} by zero")
            sign = 1 if divisor > 0 else -1
            converter = converters.RationalConverter(sign, abs(divisor))
            return self.transform(converter)
        return self.transform(converters.MultiplyConverter(1.0 / divisor))

    def shift(self, offset: numbers.Real) -> 'Unit':
        """Create a unit whose zero is at `offset` in this unit."""
        if offset == 0:
            return self
        return self.transform(converters.AddConverter(offset))

    def transform(
        self,
        converter: converters.Converter,
        symbol: str=None,
    ) -> 'Unit':
        """Derive a unit from this unit and a converter.

        Parameters
        ----------
        converter : `~converters.Converter`
            The converter from the new unit to this unit.

        symbol : string, optional
            A symbol for the new unit.

        Returns
        -------
        `~units.Unit`
            The system unit of this unit, if the combined converter is the
            identity. Otherwise, a `~units.TransformedUnit`.
        """
        system = self.to_system_unit()
        combined = self.converter_to_system_unit().concatenate(converter)
        if combined.is_identity:
            return system
        return TransformedUnit(system, combined, symbol=symbol)

    def alternate(self, symbol: str) -> 'AlternateUnit':
        """Create a distinct unit with the same dimension as this unit.

        This unit must be a system unit.
        """
        return AlternateUnit(self, symbol)

    def annotate(self, annotation: str) -> 'AnnotatedUnit':
        """Attach an annotation to this unit (e.g., ``'road'``)."""
        return AnnotatedUnit(self, annotation)

    def astype(self, dimension: dimensions.Dimension) -> 'Unit':
        """Assert that this unit measures quantities of `dimension`."""
        if self.dimension != dimension:
            raise TypeError(
                f"The unit {self} is not compatible with"
                f" quantities of dimension {dimension}"
            ) from None
        return self

    # Conversion

    def is_compatible(self, other: 'Unit') -> bool:
        """True if quantities in this unit can convert to `other`.

        Two units are compatible if their dimensions are equal, or if the
        active dimensional model reduces both dimensions to the same
        fundamental dimension.
        """
        if not isinstance(other, Unit):
            return False
        if self == other:
            return True
        this = self.dimension
        that = other.dimension
        if this == that:
            return True
        model = models.current()
        return model.fundamental_dimension(this) == model.fundamental_dimension(that)

    def get_converter_to(self, target: 'Unit') -> converters.Converter:
        """Get the converter from this unit to `target`.

        If the units do not share a system unit, this method delegates to
        `~units.Unit.get_converter_to_any`.
        """
        if not isinstance(target, Unit):
            raise TypeError(
                f"Can't convert {self} to {target!r}"
            ) from None
        if self == target:
            return converters.IDENTITY
        system = target.to_system_unit()
        if self.to_system_unit() != system:
            return self.get_converter_to_any(target)
        if _precedes(target, self):
            return target.get_converter_to(self).inverse()
        this = self.converter_to_system_unit()
        that = target.converter_to_system_unit()
        return that.inverse().concatenate(this)

    def get_converter_to_any(self, target: 'Unit') -> converters.Converter:
        """Get the converter to `target` under the active dimensional model.

        Raises
        ------
        `~units.IncommensurableError`
            The units are not compatible.
        """
        if not self.is_compatible(target):
            raise IncommensurableError(self, target)
        if _precedes(target, self):
            return target.get_converter_to_any(self).inverse()
        model = models.current()
        logger.debug(
            "Converting %s to %s with the %s model",
            self, target, model.name,
        )
        this = model.dimensional_transform(
            self.to_system_unit().dimension
        ).concatenate(self.converter_to_system_unit())
        that = model.dimensional_transform(
            target.to_system_unit().dimension
        ).concatenate(target.converter_to_system_unit())
        return that.inverse().concatenate(this)

    @abc.abstractmethod
    def __eq__(self, other) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def __hash__(self) -> int:
        raise NotImplementedError


def _precedes(this: Unit, that: Unit) -> bool:
    """True if conversions between two units start from `this`.

    Each pair of units has one canonical direction. The reverse converter is
    the inverse of the canonical one, so floating-point factors agree in
    both directions.
    """
    return (repr(this), hash(this)) < (repr(that), hash(that))


def _product(*groups: symbolic.Terms) -> Unit:
    """Create the canonical unit from groups of terms."""
    terms = symbolic.reduce(*groups)
    if not terms:
        return ONE
    if len(terms) == 1 and terms[0].power == terms[0].root:
        return terms[0].base
    return ProductUnit(terms)


class BaseUnit(Unit):
    """An atomic unit with an explicit symbol and dimension."""

    def __init__(self, symbol: str, dimension: dimensions.Dimension) -> None:
        if not isinstance(dimension, dimensions.Dimension):
            raise TypeError(
                f"Can't create a base unit with dimension {dimension!r}"
            ) from None
        self._symbol = symbol
        self._dimension = dimension

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def dimension(self) -> dimensions.Dimension:
        return self._dimension

    def to_system_unit(self) -> 'BaseUnit':
        return self

    def converter_to_system_unit(self) -> converters.Converter:
        return converters.IDENTITY

    def __eq__(self, other) -> bool:
        if not isinstance(other, BaseUnit):
            return False
        return (
            self._symbol == other._symbol
            and self._dimension == other._dimension
        )

    def __hash__(self) -> int:
        return hash((self._symbol, self._dimension))

    def __str__(self) -> str:
        return self._symbol


class AlternateUnit(Unit):
    """A system unit that is distinct from its dimensional equivalent.

    Alternate units allow, for example, hertz and becquerel to be different
    units even though both are reciprocal seconds.
    """

    def __init__(self, parent: Unit, symbol: str) -> None:
        if not isinstance(parent, Unit) or not parent.is_system_unit:
            raise converters.InvalidConstructionError(
                f"The parent of an alternate unit must be a system unit,"
                f" not {parent!r}"
            ) from None
        self._parent = parent
        self._symbol = symbol

    @property
    def parent(self) -> Unit:
        """The system unit from which this unit derives."""
        return self._parent

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def dimension(self) -> dimensions.Dimension:
        return self._parent.dimension

    def to_system_unit(self) -> 'AlternateUnit':
        return self

    def converter_to_system_unit(self) -> converters.Converter:
        return self._parent.converter_to_system_unit()

    def __eq__(self, other) -> bool:
        if not isinstance(other, AlternateUnit):
            return False
        return self._parent == other._parent and self._symbol == other._symbol

    def __hash__(self) -> int:
        return hash((self._parent, self._symbol))

    def __str__(self) -> str:
        return self._symbol


class ProductUnit(Unit):
    """A product of units raised to rational powers.

    Users should create product units through unit algebra rather than by
    instantiating this class, since algebraic operations guarantee canonical
    form: at most one term per unit, no zero powers, and no degenerate
    products.
    """

    def __init__(self, terms: symbolic.Terms=()) -> None:
        self._terms = tuple(terms)

    @property
    def product_elements(self) -> typing.Tuple[symbolic.Term, ...]:
        return self._terms

    def _factors(self) -> typing.Tuple[symbolic.Term, ...]:
        return self._terms

    @property
    def dimension(self) -> dimensions.Dimension:
        result = dimensions.NONE
        for term in self._terms:
            factor = term.base.dimension.pow(term.power).root(term.root)
            result = result.multiply(factor)
        return result

    def to_system_unit(self) -> Unit:
        result = ONE
        for term in self._terms:
            system = term.base.to_system_unit()
            result = result.multiply(system.pow(term.power).root(term.root))
        return result

    def converter_to_system_unit(self) -> converters.Converter:
        """Compose the converters of all elements.

        Raises
        ------
        `~converters.UnsupportedOperationError`
            An element has a non-linear converter, or an element with a
            fractional exponent has a converter other than the identity.
        """
        result = converters.IDENTITY
        for term in self._terms:
            unit, power, root = term
            converter = unit.converter_to_system_unit()
            if not converter.is_linear:
                raise converters.UnsupportedOperationError(
                    f"{unit} is non-linear, cannot convert"
                )
            if converter.is_identity:
                continue
            if root != 1:
                raise converters.UnsupportedOperationError(
                    f"{unit} has a fractional exponent, cannot convert"
                )
            if power < 0:
                converter = converter.inverse()
            for _ in range(abs(power)):
                result = result.concatenate(converter)
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProductUnit):
            return False
        return symbolic.equivalent(self._terms, other._terms)

    def __hash__(self) -> int:
        return hash(frozenset(self._terms))

    def __str__(self) -> str:
        return symbolic.format(self._terms)


class TransformedUnit(Unit):
    """A unit derived from a system unit by a converter.

    Parameters
    ----------
    parent : `~units.Unit`
        The system unit from which this unit derives.

    converter : `~converters.Converter`
        The converter from this unit to `parent`.

    symbol : string, optional
        The symbol of this unit. The symbol does not affect equality.
    """

    def __init__(
        self,
        parent: Unit,
        converter: converters.Converter,
        symbol: str=None,
    ) -> None:
        if not isinstance(parent, Unit) or not parent.is_system_unit:
            raise converters.InvalidConstructionError(
                f"The parent of a transformed unit must be a system unit,"
                f" not {parent!r}"
            ) from None
        if not isinstance(converter, converters.Converter):
            raise TypeError(
                f"Can't transform {parent} with {converter!r}"
            ) from None
        self._parent = parent
        self._converter = converter
        self._symbol = symbol

    @property
    def parent(self) -> Unit:
        """The system unit from which this unit derives."""
        return self._parent

    @property
    def converter(self) -> converters.Converter:
        """The converter from this unit to its parent."""
        return self._converter

    @property
    def symbol(self) -> typing.Optional[str]:
        return self._symbol

    @property
    def dimension(self) -> dimensions.Dimension:
        return self._parent.dimension

    def to_system_unit(self) -> Unit:
        return self._parent

    def converter_to_system_unit(self) -> converters.Converter:
        parent = self._parent.converter_to_system_unit()
        return parent.concatenate(self._converter)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransformedUnit):
            return False
        return (
            self._parent == other._parent
            and self._converter == other._converter
        )

    def __hash__(self) -> int:
        return hash((self._parent, self._converter))

    def __str__(self) -> str:
        if self._symbol is not None:
            return self._symbol
        return f"{self._parent}{self._converter}"


class AnnotatedUnit(Unit):
    """A unit with an attached annotation.

    An annotated unit behaves like the unit it wraps, except that it is equal
    only to annotated units with the same wrapped unit and annotation.
    Annotating an annotated unit replaces the previous annotation.
    """

    def __init__(self, actual: Unit, annotation: str) -> None:
        if not isinstance(actual, Unit):
            raise TypeError(f"Can't annotate {actual!r}") from None
        self._actual = actual._unannotated()
        self._annotation = annotation

    @property
    def actual_unit(self) -> Unit:
        """The unannotated unit."""
        return self._actual

    @property
    def annotation(self) -> str:
        """The annotation on this unit."""
        return self._annotation

    def _unannotated(self) -> Unit:
        return self._actual

    @property
    def symbol(self) -> typing.Optional[str]:
        return self._actual.symbol

    @property
    def dimension(self) -> dimensions.Dimension:
        return self._actual.dimension

    @property
    def product_elements(self):
        return self._actual.product_elements

    def to_system_unit(self) -> Unit:
        return self._actual.to_system_unit()

    def converter_to_system_unit(self) -> converters.Converter:
        return self._actual.converter_to_system_unit()

    def __eq__(self, other) -> bool:
        if not isinstance(other, AnnotatedUnit):
            return False
        return (
            self._actual == other._actual
            and self._annotation == other._annotation
        )

    def __hash__(self) -> int:
        return hash((self._actual, self._annotation))

    def __str__(self) -> str:
        return f"{self._actual}{{{self._annotation}}}"


ONE = ProductUnit()
"""The dimensionless unit."""
