"""
Formal products of fundamental physical dimensions.
"""

import fractions
import numbers
import typing

from physunits.core import converters
from physunits.core import iterables
from physunits.core import symbolic


class Dimension(iterables.ReprStrMixin):
    """The dimension of a physical quantity.

    A dimension is a product of fundamental-dimension symbols, each raised to
    a rational exponent, or the dimensionless identity `~dimensions.NONE`.
    Instances are immutable. Two dimensions are equal if they contain the same
    symbols with the same exponents, regardless of the order in which they
    were combined.

    Parameters
    ----------
    symbol : string, optional
        The symbol of a fundamental dimension (e.g., ``'L'``). Omitting this
        argument creates the dimensionless identity.
    """

    def __init__(self, symbol: str=None) -> None:
        if symbol is None:
            self._terms = ()
        elif isinstance(symbol, str) and symbol:
            self._terms = (symbolic.Term(symbol),)
        else:
            raise converters.InvalidConstructionError(
                f"Can't create a fundamental dimension from {symbol!r}"
            ) from None

    @classmethod
    def _from_terms(cls, terms: symbolic.Terms):
        """Internal helper for creating an instance from canonical terms."""
        new = super().__new__(cls)
        new._terms = tuple(terms)
        return new

    @property
    def is_fundamental(self) -> bool:
        """True if this is a single symbol raised to the first power."""
        if len(self._terms) != 1:
            return False
        term = self._terms[0]
        return term.power == term.root == 1

    @property
    def symbol(self) -> typing.Optional[str]:
        """The symbol of a fundamental dimension, or ``None``."""
        return self._terms[0].base if self.is_fundamental else None

    @property
    def product_dimensions(self):
        """The fundamental factors of this dimension.

        Returns
        -------
        dict or `None`
            `None` if this is a fundamental dimension. Otherwise, a mapping
            from fundamental `~dimensions.Dimension` to its exponent. An
            exponent is an `int` unless the corresponding factor is under a
            root, in which case it is a `fractions.Fraction`. The
            dimensionless identity produces an empty mapping.
        """
        if self.is_fundamental:
            return None
        return {
            type(self)(term.base): (
                term.power if term.root == 1 else term.exponent
            ) for term in self._terms
        }

    def multiply(self, other: 'Dimension') -> 'Dimension':
        """The product of this dimension and `other`."""
        if not isinstance(other, Dimension):
            raise TypeError(
                f"Can't multiply {self!r} by {other!r}"
            ) from None
        return self._from_terms(symbolic.reduce(self._terms, other._terms))

    def divide(self, other: 'Dimension') -> 'Dimension':
        """The quotient of this dimension and `other`."""
        if not isinstance(other, Dimension):
            raise TypeError(
                f"Can't divide {self!r} by {other!r}"
            ) from None
        inverse = symbolic.invert(other._terms)
        return self._from_terms(symbolic.reduce(self._terms, inverse))

    def pow(self, n: int) -> 'Dimension':
        """This dimension raised to the integral power `n`."""
        return self._from_terms(symbolic.power(self._terms, int(n)))

    def root(self, n: int) -> 'Dimension':
        """The `n`th root of this dimension.

        Raises `ZeroDivisionError` if `n` is zero.
        """
        return self._from_terms(symbolic.root(self._terms, int(n)))

    def __mul__(self, other):
        """Called for self * other."""
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other):
        """Called for self / other."""
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, other):
        """Called for self ** other.

        The exponent may be an integer or a rational number.
        """
        if isinstance(other, numbers.Integral):
            return self.pow(other)
        if isinstance(other, fractions.Fraction):
            return self.pow(other.numerator).root(other.denominator)
        return NotImplemented

    def __eq__(self, other) -> bool:
        """True if two dimensions have the same canonical factors."""
        if not isinstance(other, Dimension):
            return NotImplemented
        return symbolic.equivalent(self._terms, other._terms)

    def __hash__(self) -> int:
        return hash(frozenset(self._terms))

    def __str__(self) -> str:
        if not self._terms:
            return '1'
        return ''.join(
            f"[{term.base}]" if term.power == term.root == 1
            else f"[{term.base}]^{term.exponent}"
            for term in self._terms
        )


NONE = Dimension()
"""The dimension of dimensionless quantities."""

LENGTH = Dimension('L')
"""The length dimension."""

MASS = Dimension('M')
"""The mass dimension."""

TIME = Dimension('T')
"""The time dimension."""

ELECTRIC_CURRENT = Dimension('I')
"""The electric-current dimension."""

TEMPERATURE = Dimension('Θ')
"""The temperature dimension."""

AMOUNT_OF_SUBSTANCE = Dimension('N')
"""The amount-of-substance dimension."""

LUMINOUS_INTENSITY = Dimension('J')
"""The luminous-intensity dimension."""

FUNDAMENTAL = (
    LENGTH,
    MASS,
    TIME,
    ELECTRIC_CURRENT,
    TEMPERATURE,
    AMOUNT_OF_SUBSTANCE,
    LUMINOUS_INTENSITY,
)
"""The seven built-in fundamental dimensions."""
