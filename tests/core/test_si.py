import logging
import math

import pytest

from physunits.core import constants
from physunits.core import converters
from physunits.core import dimensions
from physunits.core import si
from physunits.core import units


def test_system_mapping():
    """The SI maps quantity names to system units."""
    assert si.SI['length'] is si.METRE
    assert si.SI['energy'] is si.JOULE
    assert si.SI['velocity'] == si.METRE / si.SECOND
    assert 'mass' in si.SI
    assert len(si.SI) == len(list(si.SI))
    for unit in si.SI.values():
        assert unit.is_system_unit
    with pytest.raises(KeyError):
        si.SI['happiness']


def test_members():
    """A system keeps every unit added to it, in order."""
    members = si.SI.members
    assert isinstance(members, tuple)
    assert members[0] is units.ONE
    assert si.METRE in members
    assert si.HECTARE in members
    assert len(members) == len(set(members))
    system = si.System('toy')
    furlong = system.add(si.METRE * 201.168)
    assert system.add(si.SECOND, 'time') is si.SECOND
    assert system.members == (furlong, si.SECOND)
    assert list(system) == ['time']
    assert str(system) == 'toy'


def test_units_of():
    """Find all units with a given dimension."""
    lengths = si.SI.units_of(dimensions.LENGTH)
    assert si.METRE in lengths
    assert si.ASTRONOMICAL_UNIT in lengths
    assert si.SECOND not in lengths
    frequencies = si.SI.units_of(dimensions.TIME ** -1)
    assert si.HERTZ in frequencies
    assert si.BECQUEREL in frequencies


def test_dimension_of(caplog: pytest.LogCaptureFixture):
    """Get the dimension of a named quantity."""
    assert si.SI.dimension_of('force') == (
        dimensions.MASS * dimensions.LENGTH / dimensions.TIME ** 2
    )
    with caplog.at_level(logging.WARNING, logger='physunits.core.si'):
        assert si.SI.dimension_of('happiness') is None
    assert 'happiness' in caplog.text


def test_base_units():
    """The seven base units have the seven fundamental dimensions."""
    base = [
        si.AMPERE, si.CANDELA, si.KELVIN, si.KILOGRAM,
        si.METRE, si.MOLE, si.SECOND,
    ]
    assert {unit.dimension for unit in base} == set(dimensions.FUNDAMENTAL)
    assert all(isinstance(unit, units.BaseUnit) for unit in base)


def test_derived_dimensions():
    """Derived units have the expected dimensions."""
    L = dimensions.LENGTH
    M = dimensions.MASS
    T = dimensions.TIME
    I = dimensions.ELECTRIC_CURRENT
    assert si.NEWTON.dimension == M * L / T ** 2
    assert si.PASCAL.dimension == M / (L * T ** 2)
    assert si.WATT.dimension == M * L ** 2 / T ** 3
    assert si.VOLT.dimension == M * L ** 2 / (T ** 3 * I)
    assert si.OHM.dimension == si.VOLT.dimension / I
    assert si.TESLA.dimension == M / (T ** 2 * I)
    assert si.RADIAN.dimension == dimensions.NONE
    assert si.LITRE.dimension == L ** 3


def test_accepted_units():
    """Convert units accepted for use with the SI."""
    assert si.DAY.get_converter_to(si.SECOND)(1.0) == 86400.0
    assert si.TONNE.get_converter_to(si.GRAM) == converters.RationalConverter(
        1000000
    )
    assert si.PERCENT.get_converter_to(units.ONE)(50.0) == 0.5
    assert si.HECTARE.get_converter_to(si.SQUARE_METRE)(1.0) == 10000.0
    au = si.ASTRONOMICAL_UNIT.get_converter_to(si.METRE)
    assert au(1.0) == constants.CODATA['au'].value
    amu = si.UNIFIED_ATOMIC_MASS.get_converter_to(si.KILOGRAM)
    assert amu(1.0) == pytest.approx(1.66053906660e-27)
    arc = si.SECOND_ANGLE.get_converter_to(si.MINUTE_ANGLE)
    assert arc(60.0) == pytest.approx(1.0)


def test_symbols():
    """Catalog units print their symbols."""
    assert str(si.CELSIUS) == '℃'
    assert str(si.OHM) == 'Ω'
    assert str(si.ELECTRON_VOLT) == 'eV'
    assert str(si.METRES_PER_SECOND) == 'm s^-1'


def test_constants():
    """Physical constants are read-only named values."""
    c = constants.CODATA['c']
    assert c.value == 299792458
    assert c.unit == 'm / s'
    assert 'light' in c.info
    assert constants.hbar == pytest.approx(constants.h / (2 * math.pi))
    assert set(constants.CODATA) >= {'c', 'h', 'hbar', 'k', 'G', 'eV'}
    with pytest.raises(KeyError):
        constants.CODATA['not a constant']
    planck = constants.PLANCK_LENGTH / constants.PLANCK_TIME
    assert planck == pytest.approx(constants.c)
