# -*- coding: utf-8 -*-
r"""
In-memory representation of an SBML model.

The :class:`Model` is the root aggregate. It owns its compartments, species,
reactions, parameters, and the remaining SBML components through plain
``dict`` attributes keyed by identifier, and ordered ``list`` attributes for
rules and constraints. The stored objects do not carry their own identifier
and hold no reference back to the model.

Cross-references (for example a :attr:`Species.compartment` or a species id
in :attr:`Reaction.stoichiometry`) are plain identifier strings. They are
not checked on construction; the reader and writer assume they resolve.

Mathematical expressions are stored in whatever representation the math
codec in use produces, an L3 formula string by default (see
:mod:`fluxsbml.io.math`).
"""
from fluxsbml.core.association import GeneProductAssociation
from fluxsbml.util.util import ensure_non_negative_value


FBC_BOUND_UNIT = "[fbc]"
"""str: Unit of a flux bound that was read from an FBC flux-bound parameter."""


class SBase:
    """Attributes shared by the SBML components of a :class:`Model`.

    Parameters
    ----------
    name : str, optional
        A human readable name.
    metaid : str, optional
        The SBML meta identifier.
    notes : str, optional
        Serialized SBML notes markup, passed through verbatim.
    annotation : str, optional
        Serialized SBML annotation markup, passed through verbatim.

    """

    def __init__(self, name=None, metaid=None, notes=None, annotation=None):
        """Initialize the SBase."""
        self.name = name
        self.metaid = metaid
        self.notes = notes
        self.annotation = annotation

    def __repr__(self):
        """Override of default :func:`repr` implementation.

        Warnings
        --------
        This method is intended for internal use only.

        """
        if self.name:
            return "<%s %s at 0x%x>" % (self.__class__.__name__, self.name, id(self))
        return "<%s at 0x%x>" % (self.__class__.__name__, id(self))


class Parameter(SBase):
    """A global model parameter or a kinetic law local parameter.

    Parameters
    ----------
    value : float, optional
        The parameter value.
    units : str, optional
        Identifier of the unit definition of the value.
    constant : bool, optional
        Whether the value is constant. Ignored for local parameters.

    """

    def __init__(self, value=None, units=None, constant=None, **kwargs):
        """Initialize the Parameter."""
        super(Parameter, self).__init__(**kwargs)
        self.value = value
        self.units = units
        self.constant = constant


class Compartment(SBase):
    """A bounded container for species.

    Parameters
    ----------
    constant : bool, optional
        Whether the compartment size is constant.
    spatial_dimensions : int, optional
        The number of spatial dimensions, a non-negative integer.
    size : float, optional
        The size of the compartment.
    units : str, optional
        Identifier of the unit definition of the size.

    """

    def __init__(
        self, constant=None, spatial_dimensions=None, size=None, units=None, **kwargs
    ):
        """Initialize the Compartment."""
        super(Compartment, self).__init__(**kwargs)
        self.constant = constant
        self.spatial_dimensions = spatial_dimensions
        self.size = size
        self.units = units

    @property
    def spatial_dimensions(self):
        """Get or set the number of spatial dimensions.

        Raises
        ------
        ValueError
            Occurs when trying to set a negative value.

        """
        return getattr(self, "_spatial_dimensions")

    @spatial_dimensions.setter
    def spatial_dimensions(self, value):
        """Set the number of spatial dimensions."""
        if value is not None and not float(value).is_integer():
            raise TypeError("spatial_dimensions must be an integer")
        value = ensure_non_negative_value(value)
        setattr(self, "_spatial_dimensions", None if value is None else int(value))


class Species(SBase):
    """A pool of entities located in a compartment.

    Parameters
    ----------
    compartment : str, optional
        Identifier of the containing compartment.
    boundary_condition : bool, optional
        Whether the species is a boundary condition.
    formula : str, optional
        The chemical formula, from the 'fbc' package extension.
    charge : int, optional
        The charge, from the 'fbc' package extension.
    initial_amount : tuple, optional
        A ``(value, units)`` pair. ``units`` may be ``None``.
    initial_concentration : tuple, optional
        A ``(value, units)`` pair. ``units`` may be ``None``.
    only_substance_units : bool, optional
        Whether the species is always treated as an amount.
    constant : bool, optional
        Whether the species value is constant.

    Notes
    -----
    Both initial values are kept independently, even though a consistent
    SBML species sets at most one of them.

    """

    def __init__(
        self,
        compartment=None,
        boundary_condition=None,
        formula=None,
        charge=None,
        initial_amount=None,
        initial_concentration=None,
        only_substance_units=None,
        constant=None,
        **kwargs
    ):
        """Initialize the Species."""
        super(Species, self).__init__(**kwargs)
        self.compartment = compartment
        self.boundary_condition = boundary_condition
        self.formula = formula
        self.charge = charge
        self.initial_amount = _validate_initial_value(initial_amount)
        self.initial_concentration = _validate_initial_value(initial_concentration)
        self.only_substance_units = only_substance_units
        self.constant = constant


class Reaction(SBase):
    """A transformation of species, with flux bounds and kinetic information.

    Parameters
    ----------
    stoichiometry : dict, optional
        Species identifiers mapped to signed coefficients. Negative values
        are net reactants, positive values are net products.
    lower_bound : tuple, optional
        A ``(value, unit)`` pair. The unit is ``""`` when unknown and
        :const:`FBC_BOUND_UNIT` when the bound comes from the 'fbc' package.
    upper_bound : tuple, optional
        A ``(value, unit)`` pair, as for ``lower_bound``.
    objective_coefficient : float
        The objective coefficient. Default is ``0.0``.
    gene_product_association : GeneProductAssociation, optional
        The gene product association tree.
    kinetic_math : object, optional
        The kinetic law math expression.
    kinetic_parameters : dict, optional
        Local kinetic law parameter identifiers mapped to :class:`Parameter`.
    reversible : bool
        Whether the reaction is reversible. Default is ``True``.

    """

    def __init__(
        self,
        stoichiometry=None,
        lower_bound=None,
        upper_bound=None,
        objective_coefficient=0.0,
        gene_product_association=None,
        kinetic_math=None,
        kinetic_parameters=None,
        reversible=True,
        **kwargs
    ):
        """Initialize the Reaction."""
        super(Reaction, self).__init__(**kwargs)
        self.stoichiometry = dict(stoichiometry or {})
        self.lower_bound = _validate_bound(lower_bound)
        self.upper_bound = _validate_bound(upper_bound)
        self.objective_coefficient = objective_coefficient
        self.gene_product_association = gene_product_association
        self.kinetic_math = kinetic_math
        self.kinetic_parameters = dict(kinetic_parameters or {})
        self.reversible = reversible

    @property
    def gene_product_association(self):
        """Get or set the :class:`~.GeneProductAssociation` tree, or ``None``."""
        return getattr(self, "_gene_product_association")

    @gene_product_association.setter
    def gene_product_association(self, association):
        """Set the gene product association tree."""
        if association is not None and not isinstance(
            association, GeneProductAssociation
        ):
            raise TypeError("Must be a GeneProductAssociation or None")
        setattr(self, "_gene_product_association", association)

    @property
    def reactants(self):
        """Return a ``dict`` of net reactants and their positive coefficients.

        Notes
        -----
        Read-only.

        """
        return {s: -c for s, c in self.stoichiometry.items() if c < 0}

    @property
    def products(self):
        """Return a ``dict`` of net products and their coefficients.

        Notes
        -----
        Read-only.

        """
        return {s: c for s, c in self.stoichiometry.items() if c > 0}

    @property
    def bounds(self):
        """Return the ``(lower_bound, upper_bound)`` pairs as a tuple."""
        return (self.lower_bound, self.upper_bound)


class GeneProduct(SBase):
    """A gene product from the 'fbc' package extension.

    Parameters
    ----------
    label : str, optional
        The gene product label.

    """

    def __init__(self, label=None, **kwargs):
        """Initialize the GeneProduct."""
        super(GeneProduct, self).__init__(**kwargs)
        self.label = label


class FunctionDefinition(SBase):
    """A named mathematical function.

    Parameters
    ----------
    body : object, optional
        The math expression of the function, a lambda.

    """

    def __init__(self, body=None, **kwargs):
        """Initialize the FunctionDefinition."""
        super(FunctionDefinition, self).__init__(**kwargs)
        self.body = body


class Objective:
    """An objective from the 'fbc' package extension.

    Parameters
    ----------
    type : str
        The objective type, ``"maximize"`` or ``"minimize"``.
    flux_objectives : dict, optional
        Reaction identifiers mapped to coefficients.

    """

    def __init__(self, type="maximize", flux_objectives=None):
        """Initialize the Objective."""
        self.type = type
        self.flux_objectives = dict(flux_objectives or {})

    def __repr__(self):
        return "<%s %s at 0x%x>" % (self.__class__.__name__, self.type, id(self))


class AlgebraicRule:
    """A rule stating that ``math`` equals zero."""

    def __init__(self, math):
        self.math = math

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self.math)


class _VariableRule:
    """Shared behavior of rules acting on a single variable."""

    def __init__(self, variable, math):
        self.variable = variable
        self.math = math

    def __repr__(self):
        return "{0}({1!r}, {2!r})".format(
            self.__class__.__name__, self.variable, self.math
        )


class AssignmentRule(_VariableRule):
    """A rule assigning ``math`` to ``variable`` at all times."""


class RateRule(_VariableRule):
    """A rule setting the rate of change of ``variable`` to ``math``."""


class Trigger:
    """The condition that fires an :class:`Event`.

    Parameters
    ----------
    persistent : bool, optional
        Whether the trigger persists once fired.
    initial_value : bool, optional
        The trigger value at the start of simulation.
    math : object, optional
        The boolean trigger expression.

    """

    def __init__(self, persistent=None, initial_value=None, math=None):
        """Initialize the Trigger."""
        self.persistent = persistent
        self.initial_value = initial_value
        self.math = math


class EventAssignment:
    """Assignment of ``math`` to ``variable`` when an :class:`Event` fires."""

    def __init__(self, variable, math=None):
        self.variable = variable
        self.math = math


class Event(SBase):
    r"""A discontinuous change of the model state.

    Parameters
    ----------
    use_values_from_trigger_time : bool, optional
        Whether assignments use the values at trigger time.
    trigger : Trigger, optional
        The trigger of the event.
    event_assignments : list, optional
        The ordered :class:`EventAssignment`\ s.

    """

    def __init__(
        self,
        use_values_from_trigger_time=None,
        trigger=None,
        event_assignments=None,
        **kwargs
    ):
        """Initialize the Event."""
        super(Event, self).__init__(**kwargs)
        self.use_values_from_trigger_time = use_values_from_trigger_time
        self.trigger = trigger
        self.event_assignments = list(event_assignments or [])


class Constraint:
    """A condition the model should satisfy.

    Parameters
    ----------
    math : object
        The boolean constraint expression.
    message : str, optional
        A plain text message shown when the constraint is violated.

    """

    def __init__(self, math, message=None):
        """Initialize the Constraint."""
        self.math = math
        self.message = message


class Model(SBase):
    r"""Root aggregate of an SBML model.

    Parameters
    ----------
    id : str, optional
        The model identifier.
    **kwargs
        Any attribute listed below, passed by name.

    Attributes
    ----------
    parameters : dict
        Identifiers mapped to :class:`Parameter`\ s.
    units : dict
        Unit definition identifiers mapped to their resolved scale factor.
        The writer also accepts a list of :class:`~.Unit`\ s as a value.
    compartments : dict
        Identifiers mapped to :class:`Compartment`\ s.
    species : dict
        Identifiers mapped to :class:`Species`.
    reactions : dict
        Identifiers mapped to :class:`Reaction`\ s.
    objectives : dict
        Identifiers mapped to :class:`Objective`\ s.
    active_objective : str or None
        Identifier of the active objective.
    gene_products : dict
        Identifiers mapped to :class:`GeneProduct`\ s.
    function_definitions : dict
        Identifiers mapped to :class:`FunctionDefinition`\ s.
    events : dict
        Identifiers mapped to :class:`Event`\ s.
    initial_assignments : dict
        Symbol identifiers mapped to math expressions.
    rules : list
        :class:`AlgebraicRule`, :class:`AssignmentRule`, and
        :class:`RateRule` objects in document order.
    constraints : list
        :class:`Constraint`\ s in document order.
    conversion_factor : str or None
        Identifier of the model conversion factor parameter.
    area_units, extent_units, length_units, substance_units, time_units,\
    volume_units : str or None
        The unit categories of the model.

    """

    _MAPPINGS = (
        "parameters",
        "units",
        "compartments",
        "species",
        "reactions",
        "objectives",
        "gene_products",
        "function_definitions",
        "events",
        "initial_assignments",
    )
    _SEQUENCES = ("rules", "constraints")
    _SCALARS = (
        "active_objective",
        "conversion_factor",
        "area_units",
        "extent_units",
        "length_units",
        "substance_units",
        "time_units",
        "volume_units",
    )

    def __init__(self, id=None, **kwargs):
        """Initialize the Model."""
        super(Model, self).__init__(
            **{k: kwargs.pop(k, None) for k in ("name", "metaid", "notes", "annotation")}
        )
        self.id = id
        for attr in self._MAPPINGS:
            setattr(self, attr, dict(kwargs.pop(attr, None) or {}))
        for attr in self._SEQUENCES:
            setattr(self, attr, list(kwargs.pop(attr, None) or []))
        for attr in self._SCALARS:
            setattr(self, attr, kwargs.pop(attr, None))
        if kwargs:
            raise TypeError(
                "Unexpected Model attributes: {0}".format(str(sorted(kwargs)))
            )

    @property
    def uses_fbc(self):
        """Return whether the model carries 'fbc' package extension data.

        Gene products, objectives, or species require the extension.

        """
        return bool(self.gene_products or self.objectives or self.species)

    def __repr__(self):
        """Override of default :func:`repr` implementation.

        Warnings
        --------
        This method is intended for internal use only.

        """
        return "<%s %s at 0x%x>" % (self.__class__.__name__, self.id, id(self))


def _validate_bound(bound):
    """Return a flux bound as a ``(float, str)`` tuple, or ``None``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if bound is None:
        return None
    value, unit = bound
    return (float(value), unit if unit is not None else "")


def _validate_initial_value(initial_value):
    """Return an initial value as a ``(float, units)`` tuple, or ``None``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if initial_value is None:
        return None
    value, units = initial_value
    return (float(value), units)


__all__ = (
    "FBC_BOUND_UNIT",
    "SBase",
    "Parameter",
    "Compartment",
    "Species",
    "Reaction",
    "GeneProduct",
    "FunctionDefinition",
    "Objective",
    "AlgebraicRule",
    "AssignmentRule",
    "RateRule",
    "Trigger",
    "EventAssignment",
    "Event",
    "Constraint",
    "Model",
)
