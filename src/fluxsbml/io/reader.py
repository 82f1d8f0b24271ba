# -*- coding: utf-8 -*-
r"""
Read SBML documents into :class:`~.Model` objects.

* Any SBML level and version :mod:`libsbml` can open is read.
* The 'fbc' package extension (version 2) is read for chemical formulas and
  charges, flux bounds, objectives, gene products, and gene product
  associations.
* Notes and annotations are read as serialized markup and are never parsed.
* Math is handed to a math codec (see :mod:`fluxsbml.io.math`).

Flux bounds of a reaction are resolved in two steps. The legacy kinetic law
parameters ``LOWER_BOUND``, ``UPPER_BOUND``, and ``OBJECTIVE_COEFFICIENT``
are read first. An 'fbc' flux bound that refers to a global parameter with a
value then replaces the legacy bound, and its unit is set to
:const:`~.FBC_BOUND_UNIT` since 'fbc' bounds carry no unit of their own.
An 'fbc' flux bound that refers to an unknown parameter or to a parameter
without a value is logged as a warning and the legacy (or default) bound is
kept, so the bound is never ``nan``. An 'fbc' flux objective for the
reaction likewise replaces the legacy objective coefficient.

The :class:`~.Model` is only created once every component was read, so a
failing read never returns a partial model. The document is freed on every
exit path.
"""
from collections import defaultdict

import libsbml

from fluxsbml.core.configuration import SBMLConfiguration
from fluxsbml.core.model import (
    FBC_BOUND_UNIT,
    AlgebraicRule,
    AssignmentRule,
    Compartment,
    Constraint,
    Event,
    EventAssignment,
    FunctionDefinition,
    GeneProduct,
    Model,
    Objective,
    Parameter,
    RateRule,
    Reaction,
    Species,
    Trigger,
)
from fluxsbml.core.units import SBML_BASE_UNIT_KINDS_DICT, Unit, unit_scale_factor
from fluxsbml.exceptions import ParseError, UnsupportedConstruct
from fluxsbml.io.accessors import (
    _for_id,
    get_annotation,
    get_notes,
    get_optional_bool,
    get_optional_double,
    get_optional_int,
    get_optional_string,
    get_string,
)
from fluxsbml.io.association import decode_association
from fluxsbml.io.document import open_document
from fluxsbml.io.math import FormulaMath
from fluxsbml.util.util import _check_kwargs, _make_logger


LOGGER = _make_logger(__name__)
"""logging.Logger: Logger for the :mod:`~fluxsbml.io.reader` submodule."""

SBMLCONFIGURATION = SBMLConfiguration()

LOWER_BOUND_PARAMETER = "LOWER_BOUND"
"""str: Kinetic law parameter holding a legacy lower flux bound."""

UPPER_BOUND_PARAMETER = "UPPER_BOUND"
"""str: Kinetic law parameter holding a legacy upper flux bound."""

OBJECTIVE_COEFFICIENT_PARAMETER = "OBJECTIVE_COEFFICIENT"
"""str: Kinetic law parameter holding a legacy objective coefficient."""

UNIT_CATEGORIES = ("Area", "Extent", "Length", "Substance", "Time", "Volume")
"""tuple: SBML model unit categories, as used in :mod:`libsbml` accessors."""

_DEFAULT_KWARGS = {"set_missing_bounds": True, "number": float}


def read_sbml_model(
    filename, conversion=None, report_severities=None, math=None, **kwargs
):
    """Read an SBML model from the given filename into a :class:`~.Model`.

    Parameters
    ----------
    filename : path to SBML file, SBML string, or SBML file handle
        SBML which is read into a :class:`~.Model`.
    conversion : callable, optional
        Called once with the opened :class:`libsbml.SBMLDocument` after the
        diagnostics were checked and before the model is read, to transform
        the document in place. See :func:`~.set_level_and_version`,
        :func:`~.libsbml_convert`, and :data:`~.convert_simplify_math`.
        Errors raised by the callable propagate.
    report_severities : iterable of str, optional
        Diagnostic severities that make reading fail. Default is
        :attr:`.SBMLConfiguration.report_severities`.
    math : object, optional
        The math codec. Default is a :class:`~.FormulaMath`.
    **kwargs
        set_missing_bounds :
            ``bool`` indicating whether to give reactions without any bound
            information the default bounds from the
            :class:`~.SBMLConfiguration`. If ``False``, such bounds are
            ``None``.

            Default is ``True``.
        number :
            In which data type should the stoichiometry be parsed. Can be
            ``float`` or ``int``.

            Default is ``float``.

    Returns
    -------
    Model
        The model read from the document.

    Raises
    ------
    ParseError
        If the document cannot be opened, reports a diagnostic of a watched
        severity, or contains no model.
    MissingRequiredField
        If a required identifier or attribute is absent.
    UnsupportedConstruct
        If the document contains something that cannot be represented.

    """
    kwargs = _check_kwargs(_DEFAULT_KWARGS, kwargs)
    with open_document(filename, report_severities=report_severities) as handle:
        document = handle.document
        if conversion is not None:
            conversion(document)
        if not document.isSetModel():
            raise ParseError("SBML document contains no model")

        return extract_model(document.getModel(), math=math, **kwargs)


def extract_model(model, math=None, **kwargs):
    """Extract a :class:`~.Model` from a :class:`libsbml.Model`.

    Parameters
    ----------
    model : libsbml.Model
        The SBML model to read.
    math : object, optional
        The math codec. Default is a :class:`~.FormulaMath`.
    **kwargs
        Passed on as in :func:`read_sbml_model`.

    Returns
    -------
    Model

    """
    kwargs = _check_kwargs(_DEFAULT_KWARGS, kwargs)
    if math is None:
        math = FormulaMath()
    model_fbc = model.getPlugin("fbc")

    attributes = {
        "name": get_optional_string(model, "Name"),
        "metaid": get_optional_string(model, "MetaId"),
    }
    attributes["parameters"] = _read_model_parameters_from_sbml(model)
    attributes["units"] = _read_model_units_from_sbml(model)
    attributes["compartments"] = _read_model_compartments_from_sbml(model)
    attributes["species"] = _read_model_species_from_sbml(model)

    objectives, active_objective = _read_model_objectives_from_sbml(model_fbc)
    attributes["objectives"] = objectives
    attributes["active_objective"] = active_objective
    attributes["reactions"] = _read_model_reactions_from_sbml(
        model, attributes["parameters"], objectives, math, **kwargs
    )
    attributes["gene_products"] = _read_model_genes_from_sbml(model_fbc)
    attributes["function_definitions"] = _read_function_definitions_from_sbml(
        model, math
    )
    attributes["initial_assignments"] = {
        get_string(assignment, "Symbol"): _parse_math(assignment, math)
        for assignment in model.getListOfInitialAssignments()
    }
    attributes["rules"] = _read_model_rules_from_sbml(model, math)
    attributes["constraints"] = [
        Constraint(
            math=_parse_math(constraint, math),
            message=_read_message_text(constraint),
        )
        for constraint in model.getListOfConstraints()
    ]
    attributes["events"] = _read_model_events_from_sbml(model, math)

    attributes["conversion_factor"] = get_optional_string(model, "ConversionFactor")
    for category in UNIT_CATEGORIES:
        attributes[category.lower() + "_units"] = get_optional_string(
            model, category + "Units"
        )
    attributes["notes"] = get_notes(model)
    attributes["annotation"] = get_annotation(model)

    return Model(id=get_optional_string(model, "Id"), **attributes)


def resolve_unit_definition(unit_definition):
    """Resolve a :class:`libsbml.UnitDefinition` into one scale factor.

    Parameters
    ----------
    unit_definition : libsbml.UnitDefinition
        The unit definition to resolve.

    Returns
    -------
    float
        The factor of the unit definition relative to SI base units, see
        :func:`~.unit_scale_factor`.

    Raises
    ------
    UnsupportedConstruct
        If a unit has a kind that is not an SBML base unit kind.

    """
    return unit_scale_factor(read_units(unit_definition))


def read_units(unit_definition):
    r"""Return the :class:`~.Unit`\ s of a :class:`libsbml.UnitDefinition`.

    Raises
    ------
    UnsupportedConstruct
        If a unit has a kind that is not an SBML base unit kind.

    """
    units = []
    for unit in unit_definition.getListOfUnits():
        kind = libsbml.UnitKind_toString(unit.getKind()).lower()
        if kind not in SBML_BASE_UNIT_KINDS_DICT:
            raise UnsupportedConstruct(
                "Cannot read Unit kind '{0}'{1}".format(
                    kind, _for_id(unit_definition.getId())
                )
            )
        units.append(
            Unit(
                kind=kind,
                exponent=unit.getExponentAsDouble(),
                scale=unit.getScale(),
                multiplier=unit.getMultiplier(),
            )
        )

    return units


def _parse_math(sbase, math):
    """Parse the math of an SBML object with the codec, or return ``None``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if not sbase.isSetMath():
        return None
    return math.parse(sbase.getMath())


def _read_sbase_attributes(sbase):
    """Return the name, metaid, notes, and annotation of an SBML object.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return {
        "name": get_optional_string(sbase, "Name"),
        "metaid": get_optional_string(sbase, "MetaId"),
        "notes": get_notes(sbase),
        "annotation": get_annotation(sbase),
    }


def _read_parameter(parameter, constant=True):
    """Read a global or local SBML parameter into a :class:`~.Parameter`.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return Parameter(
        value=get_optional_double(parameter, "Value"),
        units=get_optional_string(parameter, "Units"),
        constant=get_optional_bool(parameter, "Constant") if constant else None,
        **_read_sbase_attributes(parameter)
    )


def _read_model_parameters_from_sbml(model):
    """Read the SBML global parameters and return them in a dict.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return {
        get_string(parameter, "Id"): _read_parameter(parameter)
        for parameter in model.getListOfParameters()
    }


def _read_model_units_from_sbml(model):
    """Read the SBML unit definitions and return their factors in a dict.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return {
        get_string(unit_definition, "Id"): resolve_unit_definition(unit_definition)
        for unit_definition in model.getListOfUnitDefinitions()
    }


def _read_model_compartments_from_sbml(model):
    """Read the SBML compartments and return them in a dict.

    Warnings
    --------
    This method is intended for internal use only.

    """
    compartments = {}
    for compartment in model.getListOfCompartments():
        cid = get_string(compartment, "Id")
        compartments[cid] = Compartment(
            constant=get_optional_bool(compartment, "Constant"),
            spatial_dimensions=get_optional_int(compartment, "SpatialDimensions"),
            size=get_optional_double(compartment, "Size"),
            units=get_optional_string(compartment, "Units"),
            **_read_sbase_attributes(compartment)
        )

    return compartments


def _read_model_species_from_sbml(model):
    """Read the SBML species and return them in a dict.

    Both initial values use the substance units of the species.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if model.getNumSpecies() == 0:
        LOGGER.info("No species in model.")

    species = {}
    for specie in model.getListOfSpecies():
        sid = get_string(specie, "Id")
        substance_units = get_optional_string(specie, "SubstanceUnits")

        initial_amount = get_optional_double(specie, "InitialAmount")
        if initial_amount is not None:
            initial_amount = (initial_amount, substance_units)
        initial_concentration = get_optional_double(specie, "InitialConcentration")
        if initial_concentration is not None:
            initial_concentration = (initial_concentration, substance_units)

        formula, charge = _read_specie_formula_charge_from_sbml(specie)
        species[sid] = Species(
            compartment=get_string(specie, "Compartment"),
            boundary_condition=get_optional_bool(specie, "BoundaryCondition"),
            formula=formula,
            charge=charge,
            initial_amount=initial_amount,
            initial_concentration=initial_concentration,
            only_substance_units=get_optional_bool(specie, "HasOnlySubstanceUnits"),
            constant=get_optional_bool(specie, "Constant"),
            **_read_sbase_attributes(specie)
        )

    return species


def _read_specie_formula_charge_from_sbml(specie):
    """Read the specie formula and charge from the 'fbc' plugin.

    Warnings
    --------
    This method is intended for internal use only.

    """
    specie_fbc = specie.getPlugin("fbc")
    if specie_fbc is None:
        return None, None

    formula = get_optional_string(specie_fbc, "ChemicalFormula")
    charge = get_optional_int(specie_fbc, "Charge")
    return formula, charge


def _read_model_objectives_from_sbml(model_fbc):
    """Read the 'fbc' objectives and the active objective id.

    Warnings
    --------
    This method is intended for internal use only.

    """
    objectives = {}
    if model_fbc is None:
        return objectives, None

    for objective in model_fbc.getListOfObjectives():
        oid = get_string(objective, "Id")
        flux_objectives = {}
        for flux_objective in objective.getListOfFluxObjectives():
            rid = get_string(flux_objective, "Reaction")
            flux_objectives[rid] = flux_objective.getCoefficient()
        objectives[oid] = Objective(
            type=get_optional_string(objective, "Type") or "maximize",
            flux_objectives=flux_objectives,
        )

    active_objective = model_fbc.getActiveObjectiveId() or None
    return objectives, active_objective


def _read_model_reactions_from_sbml(model, parameters, objectives, math, **kwargs):
    """Read the SBML reactions and return them in a dict.

    Warnings
    --------
    This method is intended for internal use only.

    """
    # Objective coefficients from every objective, later objectives win.
    fbc_coefficients = {}
    for objective in objectives.values():
        fbc_coefficients.update(objective.flux_objectives)

    if kwargs.get("set_missing_bounds"):
        default_bounds = (
            (SBMLCONFIGURATION.lower_bound, ""),
            (SBMLCONFIGURATION.upper_bound, ""),
        )
    else:
        default_bounds = (None, None)

    reactions = {}
    for reaction in model.getListOfReactions():
        rid = get_string(reaction, "Id")
        lower_bound, upper_bound = default_bounds
        objective_coefficient = 0.0
        kinetic_math = None
        kinetic_parameters = {}

        # Kinetic laws can hold a legacy encoding of bounds and objectives
        if reaction.isSetKineticLaw():
            kinetic_law = reaction.getKineticLaw()
            for i in range(kinetic_law.getNumParameters()):
                parameter = kinetic_law.getParameter(i)
                pid = get_string(parameter, "Id")
                kinetic_parameters[pid] = _read_parameter(parameter, constant=False)
                value = parameter.getValue()
                if pid == LOWER_BOUND_PARAMETER:
                    lower_bound = (value, get_optional_string(parameter, "Units"))
                elif pid == UPPER_BOUND_PARAMETER:
                    upper_bound = (value, get_optional_string(parameter, "Units"))
                elif pid == OBJECTIVE_COEFFICIENT_PARAMETER:
                    objective_coefficient = value
            kinetic_math = _parse_math(kinetic_law, math)

        reaction_fbc = reaction.getPlugin("fbc")
        association = None
        if reaction_fbc is not None:
            lower_bound = _read_fbc_flux_bound(
                reaction_fbc, "LowerFluxBound", parameters, lower_bound, rid
            )
            upper_bound = _read_fbc_flux_bound(
                reaction_fbc, "UpperFluxBound", parameters, upper_bound, rid
            )
            association = _read_reaction_gpr_from_sbml(reaction_fbc)

        reversible = get_optional_bool(reaction, "Reversible")
        reactions[rid] = Reaction(
            stoichiometry=_read_reaction_species_from_sbml(reaction, **kwargs),
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            objective_coefficient=fbc_coefficients.get(rid, objective_coefficient),
            gene_product_association=association,
            kinetic_math=kinetic_math,
            kinetic_parameters=kinetic_parameters,
            reversible=True if reversible is None else reversible,
            **_read_sbase_attributes(reaction)
        )

    return reactions


def _read_fbc_flux_bound(reaction_fbc, attribute, parameters, bound, rid):
    """Return the 'fbc' flux bound if its parameter resolves, else ``bound``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    pid = get_optional_string(reaction_fbc, attribute)
    if pid is None:
        return bound
    parameter = parameters.get(pid)
    if parameter is None or parameter.value is None:
        LOGGER.warning(
            "Flux bound parameter '%s' cannot be resolved%s",
            pid,
            _for_id(rid),
        )
        return bound

    return (parameter.value, FBC_BOUND_UNIT)


def _read_reaction_species_from_sbml(reaction, **kwargs):
    """Read the reactants and products into one signed stoichiometry dict.

    A species that is both a reactant and a product gets the sum of its
    signed coefficients.

    Warnings
    --------
    This method is intended for internal use only.

    """
    number = kwargs.get("number", float)
    stoichiometry = defaultdict(number)
    for sign, species_references in (
        (-1, reaction.getListOfReactants()),
        (1, reaction.getListOfProducts()),
    ):
        for species_reference in species_references:
            sid = get_string(species_reference, "Species")
            stoichiometry[sid] += sign * number(species_reference.getStoichiometry())

    return dict(stoichiometry)


def _read_reaction_gpr_from_sbml(reaction_fbc):
    """Read the gene product association of an 'fbc' reaction plugin.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if not reaction_fbc.isSetGeneProductAssociation():
        return None
    gpa = reaction_fbc.getGeneProductAssociation()
    association = gpa.getAssociation()
    if association is None:
        return None
    return decode_association(association)


def _read_model_genes_from_sbml(model_fbc):
    """Read the 'fbc' gene products and return them in a dict.

    Gene products without an identifier are skipped.

    Warnings
    --------
    This method is intended for internal use only.

    """
    gene_products = {}
    if model_fbc is None:
        return gene_products

    for gene_product in model_fbc.getListOfGeneProducts():
        gid = get_optional_string(gene_product, "Id")
        if gid is None:
            LOGGER.warning(
                "Skipping gene product without id, label '%s'.",
                gene_product.getLabel(),
            )
            continue
        gene_products[gid] = GeneProduct(
            label=get_optional_string(gene_product, "Label"),
            **_read_sbase_attributes(gene_product)
        )

    return gene_products


def _read_function_definitions_from_sbml(model, math):
    """Read the SBML function definitions and return them in a dict.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return {
        get_string(function_definition, "Id"): FunctionDefinition(
            body=_parse_math(function_definition, math),
            **_read_sbase_attributes(function_definition)
        )
        for function_definition in model.getListOfFunctionDefinitions()
    }


def _read_model_rules_from_sbml(model, math):
    """Read the SBML rules and return them in document order.

    Warnings
    --------
    This method is intended for internal use only.

    """
    rules = []
    for rule in model.getListOfRules():
        if rule.isAlgebraic():
            rules.append(AlgebraicRule(_parse_math(rule, math)))
        elif rule.isAssignment():
            rules.append(
                AssignmentRule(get_string(rule, "Variable"), _parse_math(rule, math))
            )
        elif rule.isRate():
            rules.append(RateRule(get_string(rule, "Variable"), _parse_math(rule, math)))
        else:
            raise UnsupportedConstruct(
                "Unsupported rule of type '{0}'.".format(rule.getElementName())
            )

    return rules


def _read_message_text(constraint):
    """Return the plain text of a constraint message, or ``None``.

    Markup and namespaces are dropped and whitespace is collapsed.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if not constraint.isSetMessage():
        return None

    def _collect_text(node):
        if node.isText():
            yield node.getCharacters()
        for i in range(node.getNumChildren()):
            for text in _collect_text(node.getChild(i)):
                yield text

    text = " ".join("".join(_collect_text(constraint.getMessage())).split())
    return text or None


def _read_model_events_from_sbml(model, math):
    """Read the SBML events and return them in a dict.

    Events without an identifier are skipped.

    Warnings
    --------
    This method is intended for internal use only.

    """
    events = {}
    for event in model.getListOfEvents():
        eid = get_optional_string(event, "Id")
        if eid is None:
            LOGGER.warning("Skipping event without id.")
            continue

        trigger = None
        if event.isSetTrigger():
            sbml_trigger = event.getTrigger()
            trigger = Trigger(
                persistent=get_optional_bool(sbml_trigger, "Persistent"),
                initial_value=get_optional_bool(sbml_trigger, "InitialValue"),
                math=_parse_math(sbml_trigger, math),
            )

        events[eid] = Event(
            use_values_from_trigger_time=get_optional_bool(
                event, "UseValuesFromTriggerTime"
            ),
            trigger=trigger,
            event_assignments=[
                EventAssignment(
                    get_string(assignment, "Variable"), _parse_math(assignment, math)
                )
                for assignment in event.getListOfEventAssignments()
            ],
            **_read_sbase_attributes(event)
        )

    return events


__all__ = (
    "read_sbml_model",
    "extract_model",
    "resolve_unit_definition",
    "read_units",
)
