# -*- coding: utf-8 -*-
r"""Unit terms and unit resolution based on the SBML unit specifications.

The :mod:`~.units` module contains the :class:`Unit` class, which describes a
single base-unit term of an SBML unit definition, and the
:func:`unit_scale_factor` function, which folds a list of such terms into one
numeric conversion factor relative to SI base units.

A :class:`~.Model` stores every unit definition as that resolved factor. The
writer additionally accepts a list of :class:`Unit`\ s for a unit definition,
which is written term by term.

To view valid unit kinds and prefixes, use the
:func:`print_defined_unit_values` function.
"""
from functools import reduce
from operator import mul

import libsbml
from tabulate import tabulate


SBML_BASE_UNIT_KINDS_DICT = {
    "ampere": libsbml.UNIT_KIND_AMPERE,
    "avogadro": libsbml.UNIT_KIND_AVOGADRO,
    "becquerel": libsbml.UNIT_KIND_BECQUEREL,
    "candela": libsbml.UNIT_KIND_CANDELA,
    "celsius": libsbml.UNIT_KIND_CELSIUS,
    "coulomb": libsbml.UNIT_KIND_COULOMB,
    "dimensionless": libsbml.UNIT_KIND_DIMENSIONLESS,
    "farad": libsbml.UNIT_KIND_FARAD,
    "gram": libsbml.UNIT_KIND_GRAM,
    "gray": libsbml.UNIT_KIND_GRAY,
    "henry": libsbml.UNIT_KIND_HENRY,
    "hertz": libsbml.UNIT_KIND_HERTZ,
    "item": libsbml.UNIT_KIND_ITEM,
    "joule": libsbml.UNIT_KIND_JOULE,
    "katal": libsbml.UNIT_KIND_KATAL,
    "kelvin": libsbml.UNIT_KIND_KELVIN,
    "kilogram": libsbml.UNIT_KIND_KILOGRAM,
    "liter": libsbml.UNIT_KIND_LITER,
    "litre": libsbml.UNIT_KIND_LITRE,
    "lumen": libsbml.UNIT_KIND_LUMEN,
    "lux": libsbml.UNIT_KIND_LUX,
    "meter": libsbml.UNIT_KIND_METER,
    "metre": libsbml.UNIT_KIND_METRE,
    "mole": libsbml.UNIT_KIND_MOLE,
    "newton": libsbml.UNIT_KIND_NEWTON,
    "ohm": libsbml.UNIT_KIND_OHM,
    "pascal": libsbml.UNIT_KIND_PASCAL,
    "radian": libsbml.UNIT_KIND_RADIAN,
    "second": libsbml.UNIT_KIND_SECOND,
    "siemens": libsbml.UNIT_KIND_SIEMENS,
    "sievert": libsbml.UNIT_KIND_SIEVERT,
    "steradian": libsbml.UNIT_KIND_STERADIAN,
    "tesla": libsbml.UNIT_KIND_TESLA,
    "volt": libsbml.UNIT_KIND_VOLT,
    "watt": libsbml.UNIT_KIND_WATT,
    "weber": libsbml.UNIT_KIND_WEBER,
}
"""dict: Contains SBML base unit kinds and their ``int`` values."""

SI_PREFIXES_DICT = {
    "atto": -18,
    "femto": -15,
    "pico": -12,
    "nano": -9,
    "micro": -6,
    "milli": -3,
    "centi": -2,
    "deci": -1,
    "deca": 1,
    "hecto": 2,
    "kilo": 3,
    "mega": 6,
    "giga": 9,
    "tera": 12,
    "peta": 15,
    "exa": 18,
}
"""dict: Contains SI unit prefixes and scale values."""

SI_CONVERSION_FACTORS_DICT = {
    "gram": 1e-3,
    "liter": 1e-3,
    "litre": 1e-3,
    "avogadro": 6.02214076e23,
}
"""dict: Factors converting base unit kinds to SI base units, default ``1``."""


class Unit:
    """A single base-unit term of an SBML unit definition.

    Parameters
    ----------
    kind : str or int
        A string representing the SBML Level 3 recognized base unit or its
        corresponding SBML integer value as defined in
        :const:`SBML_BASE_UNIT_KINDS_DICT`.
    exponent : float
        The unit exponent.
    scale : int or str
        An integer representing the scale of the unit, or a string for one of
        the pre-defined SI scales in :const:`SI_PREFIXES_DICT`.
    multiplier : float
        A number used to multiply the unit by a real-numbered factor, enabling
        units that are not necessarily a power-of-ten multiple.

    """

    def __init__(self, kind, exponent=1, scale=0, multiplier=1):
        """Initialize the Unit."""
        self._kind = None
        self._exponent = None
        self._scale = None
        self._multiplier = None

        for name, value in zip(
            ["kind", "exponent", "scale", "multiplier"],
            [kind, exponent, scale, multiplier],
        ):
            setattr(self, name, value)

    @property
    def kind(self):
        """Get or set the unit kind of the :class:`Unit` as a string."""
        return getattr(self, "_kind")

    @kind.setter
    def kind(self, kind):
        """Set the unit kind of the :class:`Unit`."""
        if isinstance(kind, int) and not isinstance(kind, bool):
            kinds = [k for k, v in SBML_BASE_UNIT_KINDS_DICT.items() if v == kind]
            kind = kinds[0] if kinds else kind
        if kind not in SBML_BASE_UNIT_KINDS_DICT:
            raise ValueError(
                "Invalid SBML Base Unit Kind '{0}'. Allowable values can be "
                "viewed by passing the string 'BaseUnitKinds' to the function "
                "'print_defined_unit_values' from the fluxsbml.core.units "
                "submodule.".format(kind)
            )
        setattr(self, "_kind", kind)

    @property
    def exponent(self):
        """Get or set the exponent of the :class:`Unit`."""
        return getattr(self, "_exponent")

    @exponent.setter
    def exponent(self, exponent):
        """Set the exponent of the :class:`Unit`."""
        if isinstance(exponent, bool) or not isinstance(exponent, (int, float)):
            raise TypeError("exponent must be a number")
        setattr(self, "_exponent", exponent)

    @property
    def scale(self):
        """Get or set the scale of the :class:`Unit`.

        Parameters
        ----------
        scale : int or str
            An integer representing the scale of the unit, or a
            string from the pre-defined SI prefixes. Not case sensitive.

        """
        return getattr(self, "_scale")

    @scale.setter
    def scale(self, scale):
        """Set the scale of the :class:`Unit`."""
        if isinstance(scale, str):
            if scale.lower() not in SI_PREFIXES_DICT:
                raise ValueError(
                    "Invalid SI Scale Prefix '{0}'. Allowable values can be "
                    "viewed by passing the string 'Scales' to the function "
                    "'print_defined_unit_values' from the fluxsbml.core.units "
                    "submodule.".format(scale)
                )
            scale = SI_PREFIXES_DICT[scale.lower()]

        if isinstance(scale, (int, float)) and float(scale).is_integer():
            setattr(self, "_scale", int(scale))
        else:
            raise TypeError("scale must be an integer")

    @property
    def multiplier(self):
        """Get or set the multiplier of the :class:`Unit`."""
        return getattr(self, "_multiplier")

    @multiplier.setter
    def multiplier(self, multiplier):
        """Set the multiplier of the :class:`Unit`."""
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)):
            raise TypeError("multiplier must be a number")
        self._multiplier = multiplier

    @property
    def factor(self):
        """Return the factor of this term relative to SI base units."""
        base = (
            self.multiplier
            * 10.0 ** self.scale
            * SI_CONVERSION_FACTORS_DICT.get(self.kind, 1.0)
        )
        return base ** self.exponent

    def __eq__(self, other):
        """Compare units term by term."""
        if not isinstance(other, Unit):
            return NotImplemented
        return (self.kind, self.exponent, self.scale, self.multiplier) == (
            other.kind,
            other.exponent,
            other.scale,
            other.multiplier,
        )

    def __hash__(self):
        return hash((self.kind, self.exponent, self.scale, self.multiplier))

    def __str__(self):
        """Override of default :class:`str` implementation.

        Warnings
        --------
        This method is intended for internal use only.

        """
        return "kind: %s; exponent: %s; scale: %s; multiplier: %s" % (
            self.kind,
            self.exponent,
            self.scale,
            self.multiplier,
        )

    def __repr__(self):
        """Override of default :func:`repr` implementation.

        Warnings
        --------
        This method is intended for internal use only.

        """
        return "<%s at 0x%x %s>" % (self.__class__.__name__, id(self), str(self))


PREDEFINED_UNITS_DICT = {
    "mole": Unit(kind="mole", exponent=1, scale=0, multiplier=1),
    "millimole": Unit(kind="mole", exponent=1, scale=-3, multiplier=1),
    "litre": Unit(kind="litre", exponent=1, scale=0, multiplier=1),
    "per_litre": Unit(kind="litre", exponent=-1, scale=0, multiplier=1),
    "second": Unit(kind="second", exponent=1, scale=0, multiplier=1),
    "per_second": Unit(kind="second", exponent=-1, scale=0, multiplier=1),
    "hour": Unit(kind="second", exponent=1, scale=0, multiplier=3600),
    "per_hour": Unit(kind="second", exponent=-1, scale=0, multiplier=3600),
    "per_gDW": Unit(kind="gram", exponent=-1, scale=0, multiplier=1),
}
r"""dict: Contains pre-built :class:`Unit`\ s."""


def unit_scale_factor(units):
    r"""Fold :class:`Unit` terms into one conversion factor to SI base units.

    Each term contributes ``(multiplier * 10**scale * SI(kind)) ** exponent``
    and the contributions are multiplied together. The contributions are
    sorted before the product is taken, so the result does not depend on the
    order of ``units``.

    Parameters
    ----------
    units : iterable
        The :class:`Unit`\ s, or names of pre-defined units from
        :const:`PREDEFINED_UNITS_DICT`.

    Returns
    -------
    float
        The combined factor. An empty definition resolves to ``1.0``.

    """
    factors = []
    for unit in units:
        if isinstance(unit, str):
            unit = PREDEFINED_UNITS_DICT[unit]
        factors.append(unit.factor)

    return reduce(mul, sorted(factors), 1.0)


def print_defined_unit_values(value="Units"):
    r"""Print the pre-defined unit quantities in the :mod:`.units` submodule.

    Parameters
    ----------
    value: str
        A string representing which pre-defined values to display.
        Must be one of the following:

            * ``"Scales"``
            * ``"BaseUnitKinds"``
            * ``"Units"``
            * ``"all"``

        Default is ``"Units"`` to display all pre-defined :class:`Unit`\ s.

    """
    predefined_items = ["Units", "Scales", "BaseUnitKinds", "all"]
    if value not in predefined_items:
        raise ValueError(
            "'{0}' not recognized, must be one of the following '{1}'.".format(
                str(value), str(predefined_items)
            )
        )

    if value == "all":
        predefined_items.remove(value)
    else:
        predefined_items = [value]

    for item in predefined_items:
        value_dict, headers, title = {
            "Units": (PREDEFINED_UNITS_DICT, ["Unit", "Definition"], "Pre-defined Units"),
            "Scales": (SI_PREFIXES_DICT, ["Prefix", "Scale Value"], "SI Unit Scale Prefixes"),
            "BaseUnitKinds": (
                SBML_BASE_UNIT_KINDS_DICT,
                ["Base Unit", "SBML Value"],
                "SBML Base Unit Kinds",
            ),
        }.get(item)
        content = [[k, str(v)] for k, v in value_dict.items()]
        table = [tabulate(content, headers=headers, tablefmt="simple")]
        print(tabulate([table], headers=[title], tablefmt="fancy_grid"))


__all__ = (
    "SBML_BASE_UNIT_KINDS_DICT",
    "SI_PREFIXES_DICT",
    "SI_CONVERSION_FACTORS_DICT",
    "Unit",
    "PREDEFINED_UNITS_DICT",
    "unit_scale_factor",
    "print_defined_unit_values",
)
