import fractions
import math

import numpy
import pytest

from physunits.core import converters
from physunits.core import dimensions
from physunits.core import models
from physunits.core import prefixes
from physunits.core import si
from physunits.core import symbolic
from physunits.core import units


def test_base_unit():
    """A base unit is its own system unit."""
    assert si.METRE.symbol == 'm'
    assert si.METRE.dimension == dimensions.LENGTH
    assert si.METRE.to_system_unit() is si.METRE
    assert si.METRE.converter_to_system_unit() is converters.IDENTITY
    assert si.METRE.product_elements is None
    assert si.METRE.is_system_unit
    assert si.METRE == units.BaseUnit('m', dimensions.LENGTH)
    assert si.METRE != units.BaseUnit('m', dimensions.TIME)


def test_canonical_products():
    """Unit algebra produces canonical products."""
    a = si.METRE
    b = si.SECOND
    assert (a * b) / a == b
    assert a.pow(2).root(2) == a
    assert isinstance(a.pow(2).root(2), units.BaseUnit)
    assert a * b == b * a
    assert (a * b) * si.KILOGRAM == a * (b * si.KILOGRAM)
    assert a / a is units.ONE
    assert a.pow(0) is units.ONE
    assert a.pow(1) == a


def test_product_elements():
    """Product units expose their factors as terms."""
    unit = si.METRE ** 2 / si.SECOND
    elements = unit.product_elements
    assert set(elements) == {
        symbolic.Term(si.METRE, 2),
        symbolic.Term(si.SECOND, -1),
    }
    assert unit.symbol is None
    assert units.ONE.product_elements == ()
    assert str(unit) == 'm^2 s^-1'
    assert str(units.ONE) == '1'


def test_rational_exponents():
    """Roots produce rational exponents."""
    unit = (si.METRE * si.KILOGRAM).root(2)
    assert set(unit.product_elements) == {
        symbolic.Term(si.METRE, 1, 2),
        symbolic.Term(si.KILOGRAM, 1, 2),
    }
    assert unit ** 2 == si.METRE * si.KILOGRAM
    assert si.METRE ** fractions.Fraction(1, 2) == si.METRE.root(2)
    assert unit.dimension == (dimensions.LENGTH * dimensions.MASS).root(2)
    with pytest.raises(ZeroDivisionError):
        si.METRE.root(0)


def test_one_absorbs():
    """Multiplying by the dimensionless unit changes nothing."""
    assert units.ONE * si.METRE is si.METRE
    assert si.METRE * units.ONE is si.METRE
    assert units.ONE.dimension == dimensions.NONE
    assert units.ONE.is_system_unit


def test_inverse():
    """Invert units algebraically."""
    inverse = si.SECOND.inverse()
    assert inverse == 1 / si.SECOND
    assert inverse == units.ONE / si.SECOND
    assert inverse.inverse() == si.SECOND
    assert inverse.dimension == dimensions.TIME ** -1


def test_alternate_unit():
    """Alternate units are distinct system units."""
    assert si.HERTZ != si.BECQUEREL
    assert si.HERTZ.dimension == si.BECQUEREL.dimension
    assert si.HERTZ.is_system_unit
    assert si.JOULE.parent == si.NEWTON * si.METRE
    assert si.JOULE.converter_to_system_unit() is converters.IDENTITY
    assert si.JOULE.dimension == (
        dimensions.MASS * dimensions.LENGTH ** 2 / dimensions.TIME ** 2
    )
    with pytest.raises(converters.InvalidConstructionError):
        si.GRAM.alternate('x')


def test_transformed_unit():
    """Transformed units convert to their system unit."""
    assert si.GRAM.parent is si.KILOGRAM
    assert si.GRAM.to_system_unit() is si.KILOGRAM
    assert not si.GRAM.is_system_unit
    assert si.GRAM.converter == converters.RationalConverter(1, 1000)
    assert si.GRAM.dimension == dimensions.MASS
    assert str(si.GRAM) == 'g'
    with pytest.raises(converters.InvalidConstructionError):
        units.TransformedUnit(si.GRAM, converters.RationalConverter(2))


def test_transform_to_identity():
    """A transform that cancels out returns the system unit."""
    assert prefixes.KILO(si.GRAM) is si.KILOGRAM
    assert si.CELSIUS.shift(-273.15) is si.KELVIN
    assert si.METRE.transform(converters.IDENTITY) is si.METRE


def test_scalar_operations():
    """Scale and shift units by numbers."""
    kilometre = si.METRE * 1000
    assert kilometre.converter == converters.RationalConverter(1000)
    assert 1000 * si.METRE == kilometre
    assert si.METRE * 1000.0 == kilometre
    assert si.METRE / 1000 == prefixes.MILLI(si.METRE)
    assert (si.METRE / -4).converter == converters.RationalConverter(-1, 4)
    assert (si.METRE * 0.3048).converter == converters.MultiplyConverter(0.3048)
    assert si.KELVIN + 273.15 == si.CELSIUS
    assert si.METRE * 1 is si.METRE
    assert si.METRE + 0 is si.METRE
    assert (2 / si.SECOND) == si.SECOND.inverse().scale(2)
    with pytest.raises(ZeroDivisionError):
        si.METRE / 0


def test_annotated_unit():
    """Annotations create distinct units with the same behavior."""
    road = si.METRE.annotate('road')
    assert road != si.METRE
    assert road == si.METRE.annotate('road')
    assert road != si.METRE.annotate('rail')
    assert road.symbol == 'm'
    assert road.dimension == dimensions.LENGTH
    assert road.to_system_unit() is si.METRE
    assert road.actual_unit is si.METRE
    assert str(road) == 'm{road}'
    assert road.get_converter_to(si.METRE) is converters.IDENTITY


def test_reannotation_flattens():
    """Annotating an annotated unit replaces the annotation."""
    twice = si.METRE.annotate('road').annotate('rail')
    assert twice.actual_unit is si.METRE
    assert twice.annotation == 'rail'
    assert twice == si.METRE.annotate('rail')


def test_annotated_product_elements():
    """Annotated units delegate product elements."""
    unit = (si.METRE / si.SECOND).annotate('wind')
    assert unit.product_elements == (si.METRE / si.SECOND).product_elements
    assert unit.dimension == dimensions.LENGTH / dimensions.TIME


def test_astype():
    """Check that a unit measures the expected kind of quantity."""
    assert si.METRE.astype(dimensions.LENGTH) is si.METRE
    with pytest.raises(TypeError):
        si.METRE.astype(dimensions.TIME)


def test_get_converter_to():
    """Get converters between units with a common system unit."""
    kilometre = prefixes.KILO(si.METRE)
    converter = kilometre.get_converter_to(si.METRE)
    assert converter == converters.RationalConverter(1000)
    assert converter.convert(2.5) == 2500.0
    assert si.METRE.get_converter_to(si.METRE) is converters.IDENTITY
    assert si.HOUR.get_converter_to(si.MINUTE) == converters.RationalConverter(60)
    assert si.CELSIUS.get_converter_to(si.KELVIN)(0.0) == 273.15
    assert si.KELVIN.get_converter_to(si.CELSIUS)(273.15) == 0.0


def test_product_converter():
    """Compose element converters of product units."""
    kmh = prefixes.KILO(si.METRE) / si.HOUR
    converter = kmh.get_converter_to(si.METRE / si.SECOND)
    assert converter == converters.RationalConverter(5, 18)
    assert converter.convert(36.0) == pytest.approx(10.0)
    litre = si.LITRE.get_converter_to(prefixes.CENTI(si.METRE) ** 3)
    assert litre == converters.RationalConverter(1000)


def test_symmetry_law():
    """Forward and reverse converters are mutual inverses."""
    pairs = [
        (prefixes.KILO(si.METRE), prefixes.MILLI(si.METRE)),
        (si.CELSIUS, si.KELVIN),
        (si.HOUR, si.DAY),
        (si.DEGREE_ANGLE, si.RADIAN),
        (si.REVOLUTION, si.RADIAN),
        (si.HECTARE, si.SQUARE_METRE),
        (prefixes.KILO(si.METRE) / si.HOUR, si.METRES_PER_SECOND),
        (si.PERCENT, units.ONE),
    ]
    for a, b in pairs:
        assert a.get_converter_to(b).inverse() == b.get_converter_to(a)


def test_symmetry_law_with_float_factors():
    """Units scaled by floats convert symmetrically, bit for bit."""
    pound = si.KILOGRAM * 0.45359237
    pairs = [
        (pound, si.KILOGRAM * 0.3048),
        (si.KILOGRAM * 1609.344, pound),
        (si.METRE * 0.3048, si.METRE * 1609.344),
        (si.ELECTRON_VOLT, si.JOULE * 4.184),
    ]
    for a, b in pairs:
        assert a.get_converter_to(b).inverse() == b.get_converter_to(a)
        assert b.get_converter_to(a).inverse() == a.get_converter_to(b)


@pytest.mark.model
def test_symmetry_law_across_dimensions():
    """Cross-dimension converters are symmetric too."""
    with models.using(models.RELATIVISTIC):
        a = si.KILOGRAM * 0.45359237
        b = si.ELECTRON_VOLT
        assert a.get_converter_to(b).inverse() == b.get_converter_to(a)
        assert b.get_converter_to_any(a).inverse() == a.get_converter_to_any(b)


def test_angles():
    """Convert angles through pi converters."""
    converter = si.DEGREE_ANGLE.get_converter_to(si.RADIAN)
    assert converter.convert(180.0) == pytest.approx(math.pi)
    assert si.RADIAN.get_converter_to(si.DEGREE_ANGLE)(math.pi) == pytest.approx(180.0)
    assert si.REVOLUTION.get_converter_to(si.DEGREE_ANGLE)(1.0) == pytest.approx(360.0)


def test_logarithmic_units():
    """Logarithmic units are non-linear."""
    converter = si.BEL.get_converter_to(units.ONE)
    assert not converter.is_linear
    assert converter.convert(2.0) == pytest.approx(100.0)
    assert si.NEPER.get_converter_to(units.ONE)(1.0) == pytest.approx(math.e)
    with pytest.raises(converters.UnsupportedOperationError):
        (si.BEL * si.METRE).converter_to_system_unit()


def test_fractional_transformed_exponent():
    """Transformed units under a root can't produce a converter."""
    with pytest.raises(converters.UnsupportedOperationError):
        prefixes.KILO(si.METRE).root(2).converter_to_system_unit()
    assert si.METRE.root(2).converter_to_system_unit() is converters.IDENTITY


def test_array_conversion():
    """Converters returned by units accept numpy arrays."""
    values = numpy.array([0.0, 100.0])
    converter = si.CELSIUS.get_converter_to(si.KELVIN)
    assert numpy.allclose(converter(values), [273.15, 373.15])


@pytest.mark.model
def test_incommensurable():
    """Units of different dimensions do not convert in the standard model."""
    with models.using(models.STANDARD):
        assert not si.KILOGRAM.is_compatible(si.JOULE)
        with pytest.raises(units.IncommensurableError) as err:
            si.KILOGRAM.get_converter_to(si.JOULE)
    assert err.value.source is si.KILOGRAM
    assert err.value.target is si.JOULE
    assert 'kg' in str(err.value)


@pytest.mark.model
def test_mass_energy():
    """Mass and energy are equivalent in the relativistic model."""
    with models.using(models.RELATIVISTIC):
        assert si.KILOGRAM.is_compatible(si.JOULE)
        converter = si.KILOGRAM.get_converter_to(si.JOULE)
        reverse = si.JOULE.get_converter_to(si.KILOGRAM)
    assert converter.is_linear
    assert converter == converters.RationalConverter(299792458**2)
    assert converter.inverse() == reverse
    assert converter.convert(1.0) == pytest.approx(8.987551787368176e16)


@pytest.mark.model
def test_same_dimension_different_system_units():
    """Alternate units convert to their dimensional equivalents."""
    converter = si.JOULE.get_converter_to(si.NEWTON * si.METRE)
    assert converter.convert(3.0) == 3.0
    electron_volt = si.ELECTRON_VOLT.get_converter_to(
        si.KILOGRAM * si.METRE ** 2 / si.SECOND ** 2
    )
    assert electron_volt.convert(1.0) == pytest.approx(1.602176634e-19)


@pytest.mark.model
def test_length_time():
    """Length converts to time when the speed of light is 1."""
    with models.using('relativistic'):
        converter = si.METRE.get_converter_to(si.SECOND)
    assert converter == converters.RationalConverter(1, 299792458)
    with pytest.raises(units.IncommensurableError):
        si.METRE.get_converter_to(si.SECOND)
