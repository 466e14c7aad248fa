import fractions
import math
import typing

from physunits.core import iterables


class Term(iterables.ReprStrMixin):
    """A single base raised to a rational power.

    A term represents the factor ``base^(power/root)`` in a product of powers.
    The base may be any hashable object. Both `power` and `root` are integers,
    and this class reduces them by their greatest common divisor and
    normalizes the sign so that `root` is always positive. A term with zero
    power always has unit root.

    Instances unpack into ``(base, power, root)``.
    """

    def __init__(self, base: typing.Hashable, power: int=1, root: int=1) -> None:
        power = int(power)
        root = int(root)
        if root == 0:
            raise ZeroDivisionError("Root's order of zero")
        if root < 0:
            power, root = -power, -root
        gcd = math.gcd(power, root)
        self.base = base
        """The object raised to this term's exponent."""
        self.power = power // gcd
        """The numerator of this term's exponent."""
        self.root = root // gcd
        """The (positive) denominator of this term's exponent."""

    @property
    def exponent(self) -> fractions.Fraction:
        """The rational exponent of this term."""
        return fractions.Fraction(self.power, self.root)

    def __iter__(self):
        """Support unpacking via ``base, power, root = term``."""
        yield from (self.base, self.power, self.root)

    def __pow__(self, n: int):
        """Create a new term, raised to the integral power `n`."""
        return type(self)(self.base, self.power * n, self.root)

    def __eq__(self, other) -> bool:
        """True if two terms have equal bases and exponents."""
        if not isinstance(other, Term):
            return NotImplemented
        return (
            self.base == other.base
            and self.power == other.power
            and self.root == other.root
        )

    def __hash__(self) -> int:
        return hash((self.base, self.power, self.root))

    def format(self) -> str:
        """Format this term for printing."""
        if self.power == self.root:
            return str(self.base)
        if self.root == 1:
            return f"{self.base}^{self.power}"
        return f"{self.base}^{self.power}/{self.root}"

    def __str__(self) -> str:
        return self.format()


Terms = typing.Iterable[Term]


def reduce(*groups: Terms) -> typing.List[Term]:
    """Algebraically reduce terms with equal bases.

    Parameters
    ----------
    *groups : tuple of iterables
        One or more iterables of `~symbolic.Term` instances. If there are
        multiple groups, this function will combine all terms it finds in the
        full collection of groups.

    Notes
    -----
    The rational exponents ``p1/r1`` and ``p2/r2`` of two terms with a common
    base combine into ``(p1*r2 + p2*r1) / (r1*r2)``, which `~symbolic.Term`
    reduces. Terms whose combined power is zero do not appear in the result.
    Bases appear in order of their first occurrence.
    """
    reduced = {}
    for term in (term for group in groups for term in group):
        if term.base in reduced:
            current = reduced[term.base]
            power = current.power * term.root + term.power * current.root
            root = current.root * term.root
            reduced[term.base] = Term(term.base, power, root)
        else:
            reduced[term.base] = term
    return [term for term in reduced.values() if term.power != 0]


def power(terms: Terms, n: int) -> typing.List[Term]:
    """Raise every term to the integral power `n`."""
    return [term ** n for term in terms if n != 0]


def root(terms: Terms, n: int) -> typing.List[Term]:
    """Take the `n`th root of every term.

    A negative order computes the root of the inverse. An order of zero raises
    `ZeroDivisionError`.
    """
    if n == 0:
        raise ZeroDivisionError("Root's order of zero")
    if n < 0:
        return invert(root(terms, -n))
    return [Term(term.base, term.power, term.root * n) for term in terms]


def invert(terms: Terms) -> typing.List[Term]:
    """Negate the power of every term."""
    return [Term(term.base, -term.power, term.root) for term in terms]


def equivalent(a: Terms, b: Terms) -> bool:
    """True if two collections contain the same terms, regardless of order."""
    return frozenset(a) == frozenset(b)


def format(terms: Terms, separator: str=' ') -> str:
    """Join symbolic terms into a string."""
    return separator.join(term.format() for term in terms) or '1'
