"""
Dimensional models and the scope in which each one is active.

A dimensional model decides which dimensions are fundamental and supplies the
converters that cross between dimensions under a physical assumption. For
example, the relativistic model sets the speed of light to 1, so that length
is a kind of time:

    >>> from physunits.core import models, si
    >>> with models.using(models.RELATIVISTIC):
    ...     converter = si.KILOGRAM.get_converter_to(si.JOULE)
    ...
    >>> converter(1.0)
    8.987551787368176e+16

The built-in models form a chain in which each model refines its parent:
standard, relativistic, high-energy, quantum, natural.
"""

import contextlib
import contextvars
import logging
import typing

import physunits
from physunits.core import constants
from physunits.core import converters
from physunits.core import dimensions
from physunits.core import iterables


logger = logging.getLogger(__name__)


class Collapse(typing.NamedTuple):
    """The mapping of a fundamental dimension under a model."""

    dimension: dimensions.Dimension
    converter: converters.Converter


class DimensionalModel(iterables.ReprStrMixin):
    """A policy for reducing dimensions to their fundamental form.

    Parameters
    ----------
    name : string
        The name of this model.

    parent : `~models.DimensionalModel`, optional
        The model that handles every fundamental dimension that this model
        does not collapse.

    collapses : mapping, optional
        A mapping from fundamental dimension to the `~models.Collapse` that
        expresses it in terms of other dimensions.
    """

    def __init__(
        self,
        name: str,
        parent: 'DimensionalModel'=None,
        collapses: typing.Mapping[dimensions.Dimension, Collapse]=None,
    ) -> None:
        self.name = name
        """The name of this model."""
        self.parent = parent
        """The model to which this model delegates."""
        self._collapses = dict(collapses or {})
        for dimension in self._collapses:
            if not dimension.is_fundamental:
                raise converters.InvalidConstructionError(
                    f"Can't collapse non-fundamental dimension {dimension}"
                ) from None

    def collapse(self, dimension: dimensions.Dimension) -> Collapse:
        """The mapping of a fundamental dimension under this model."""
        if dimension in self._collapses:
            return self._collapses[dimension]
        if self.parent is not None:
            return self.parent.collapse(dimension)
        return Collapse(dimension, converters.IDENTITY)

    def fundamental_dimension(
        self,
        dimension: dimensions.Dimension,
    ) -> dimensions.Dimension:
        """Reduce `dimension` to the fundamental dimensions of this model.

        This method maps each factor of a product dimension through this
        model, then multiplies the results. A product dimension may therefore
        reduce to fewer factors than it has.
        """
        factors = dimension.product_dimensions
        if factors is None:
            return self.collapse(dimension).dimension
        result = dimensions.NONE
        for factor, exponent in factors.items():
            result = result * self.collapse(factor).dimension ** exponent
        return result

    def dimensional_transform(
        self,
        dimension: dimensions.Dimension,
    ) -> converters.Converter:
        """Get the converter from `dimension` to its fundamental form.

        Raises
        ------
        `~converters.UnsupportedOperationError`
            A constituent transform is non-linear, or a constituent transform
            other than the identity has a fractional exponent.
        """
        factors = dimension.product_dimensions
        if factors is None:
            factors = {dimension: 1}
        result = converters.IDENTITY
        for factor, exponent in factors.items():
            transform = self.collapse(factor).converter
            if transform.is_identity:
                continue
            if not transform.is_linear:
                raise converters.UnsupportedOperationError(
                    f"Non-linear dimensional transform for {factor}"
                ) from None
            if exponent.denominator != 1:
                raise converters.UnsupportedOperationError(
                    f"Can't transform {factor} to the power {exponent}"
                ) from None
            if exponent < 0:
                transform = transform.inverse()
            for _ in range(abs(int(exponent))):
                result = result.concatenate(transform)
        return result

    def __str__(self) -> str:
        return self.name


STANDARD = DimensionalModel('standard')
"""The model in which all seven SI dimensions are independent."""

RELATIVISTIC = DimensionalModel(
    'relativistic',
    parent=STANDARD,
    collapses={
        dimensions.LENGTH: Collapse(
            dimensions.TIME,
            converters.RationalConverter(1, constants.CODATA['c'].value),
        ),
    },
)
"""The model in which the speed of light is 1."""

HIGH_ENERGY = DimensionalModel(
    'high-energy',
    parent=RELATIVISTIC,
    collapses={
        dimensions.TEMPERATURE: Collapse(
            dimensions.MASS,
            converters.MultiplyConverter(constants.k / constants.c**2),
        ),
    },
)
"""The model in which the speed of light and Boltzmann's constant are 1."""

QUANTUM = DimensionalModel(
    'quantum',
    parent=HIGH_ENERGY,
    collapses={
        dimensions.MASS: Collapse(
            dimensions.TIME ** -1,
            converters.MultiplyConverter(constants.c**2 / constants.hbar),
        ),
        dimensions.TEMPERATURE: Collapse(
            dimensions.TIME ** -1,
            converters.MultiplyConverter(constants.k / constants.hbar),
        ),
    },
)
"""The model in which c, Boltzmann's constant, and hbar are 1."""

NATURAL = DimensionalModel(
    'natural',
    parent=QUANTUM,
    collapses={
        dimension: Collapse(
            dimensions.NONE,
            converters.MultiplyConverter(1.0 / scale),
        ) for dimension, scale in (
            (dimensions.LENGTH, constants.PLANCK_LENGTH),
            (dimensions.MASS, constants.PLANCK_MASS),
            (dimensions.TIME, constants.PLANCK_TIME),
            (dimensions.TEMPERATURE, constants.PLANCK_TEMPERATURE),
            (dimensions.ELECTRIC_CURRENT, constants.PLANCK_CURRENT),
        )
    },
)
"""The Planck model, in which c, hbar, G, k, and 4 pi epsilon0 are 1."""


MODELS = {
    model.name: model
    for model in (STANDARD, RELATIVISTIC, HIGH_ENERGY, QUANTUM, NATURAL)
}
"""The built-in dimensional models, by name."""


def get(name: str) -> DimensionalModel:
    """Get a built-in dimensional model by name."""
    key = name.lower().replace('_', '-')
    if key in MODELS:
        return MODELS[key]
    raise ValueError(
        f"Unknown dimensional model {name!r}"
    ) from None


_active = contextvars.ContextVar('physunits.model')


def default() -> DimensionalModel:
    """The model in effect outside of any explicit scope."""
    return get(physunits.environment['model'])


def current() -> DimensionalModel:
    """The active dimensional model in the calling context."""
    try:
        return _active.get()
    except LookupError:
        return default()


@contextlib.contextmanager
def using(model: typing.Union[DimensionalModel, str]):
    """Activate `model` for the enclosed scope.

    Scopes nest. Leaving a scope, normally or by an exception, restores the
    model of the enclosing scope. Each thread and each asyncio task sees its
    own active model.
    """
    if isinstance(model, str):
        model = get(model)
    if not isinstance(model, DimensionalModel):
        raise TypeError(
            f"Can't activate {model!r} as a dimensional model"
        ) from None
    token = _active.set(model)
    logger.debug("Entered %s model scope", model)
    try:
        yield model
    finally:
        _active.reset(token)
        logger.debug("Left %s model scope", model)
