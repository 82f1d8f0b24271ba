# -*- coding: utf-8 -*-
r"""
Write :class:`~.Model` objects as SBML documents.

* Models without 'fbc' data are written as SBML Level 3 Version 2 core.
* Models with gene products, objectives, or species are written as SBML
  Level 3 Version 1 with the 'fbc' package extension (version 2), which is
  declared not required and strict. The level and version of both kinds of
  documents are set through the :class:`~.SBMLConfiguration`.
* Flux bounds are written as global parameters named
  ``<reaction id>_lower_bound`` and ``<reaction id>_upper_bound`` that the
  'fbc' reaction plugin refers to. Bounds with the unit
  :const:`~.FBC_BOUND_UNIT` or an unknown unit are written without units.
* Kinetic law parameters are written as local parameters of the kinetic law.
* Notes and annotations are written verbatim.
* Math is built by a math codec (see :mod:`fluxsbml.io.math`).

Attributes that SBML Level 3 requires but a :class:`~.Model` leaves as
``None`` are written with their conventional defaults, for example constant
parameters and compartments, and non-constant species.

A :mod:`libsbml` call that fails while building the document is logged as a
warning and the rest of the document is still written. Only a failure to
write the finished document raises a :class:`~.SerializationError`.
"""
from pathlib import Path
from xml.sax.saxutils import escape

import libsbml
from cobra.io.sbml import SBO_FLUX_BOUND, SHORT_LONG_DIRECTION

from fluxsbml.core.model import (
    FBC_BOUND_UNIT,
    AlgebraicRule,
    AssignmentRule,
    RateRule,
)
from fluxsbml.core.units import PREDEFINED_UNITS_DICT, SBML_BASE_UNIT_KINDS_DICT, Unit
from fluxsbml.exceptions import SerializationError, UnsupportedConstruct
from fluxsbml.io.accessors import _check, _for_id
from fluxsbml.io.association import encode_association
from fluxsbml.io.document import create_document
from fluxsbml.io.math import FormulaMath
from fluxsbml.io.reader import UNIT_CATEGORIES
from fluxsbml.util.util import _make_logger


LOGGER = _make_logger(__name__)
"""logging.Logger: Logger for the :mod:`~fluxsbml.io.writer` submodule."""

DEFAULT_OBJECTIVE_ID = "obj"
"""str: Identifier of the objective made from reaction objective coefficients."""


def write_sbml_model(model, filename=None, math=None):
    """Write a :class:`~.Model` in SBML format.

    Parameters
    ----------
    model : Model
        The model to write.
    filename : str, pathlib.Path, or file handle, optional
        Path or open text file handle to which the model is written. If
        ``None``, the SBML is returned as a string instead.
    math : object, optional
        The math codec. Default is a :class:`~.FormulaMath`.

    Returns
    -------
    str or None
        The SBML string if no ``filename`` was given.

    Raises
    ------
    SerializationError
        If :mod:`libsbml` fails to write the document.

    """
    with build_document(model, math=math) as handle:
        document = handle.document
        if isinstance(filename, Path):
            filename = str(filename.absolute())

        if filename is None or hasattr(filename, "write"):
            sbml_str = libsbml.writeSBMLToString(document)
            if not sbml_str:
                raise SerializationError("Writing SBML to a string failed.")
            if filename is None:
                return sbml_str
            filename.write(sbml_str)
        elif isinstance(filename, str):
            if not libsbml.writeSBMLToFile(document, filename):
                raise SerializationError(
                    "Writing SBML to '{0}' failed.".format(filename)
                )
        else:
            raise SerializationError(
                "Output type '{0}' for filename is not supported.".format(
                    type(filename)
                )
            )

    return None


def build_document(model, math=None):
    """Build a new SBML document for a :class:`~.Model`.

    Parameters
    ----------
    model : Model
        The model to write.
    math : object, optional
        The math codec. Default is a :class:`~.FormulaMath`.

    Returns
    -------
    DocumentHandle
        The handle of the built document. The caller must free it.

    """
    if math is None:
        math = FormulaMath()

    handle = create_document(fbc=model.uses_fbc)
    try:
        _model_to_sbml(handle.document, model, math)
    except Exception:
        handle.free()
        raise

    return handle


def _model_to_sbml(doc, model, math):
    """Write the model into an empty SBMLDocument.

    Warnings
    --------
    This method is intended for internal use only.

    """
    sbml_model = doc.createModel()
    _check(sbml_model, "create model")

    model_fbc = None
    if model.uses_fbc:
        model_fbc = sbml_model.getPlugin("fbc")
        _check(model_fbc, "get fbc plugin for model")
        if model_fbc is not None:
            _check(model_fbc.setStrict(True), "set fbc plugin strictness to True")

    if model.id is not None:
        _check(sbml_model.setId(model.id), "set model id")
    if model.metaid is not None:
        _check(sbml_model.setMetaId(model.metaid), "set model meta id")
    if model.name is not None:
        _check(sbml_model.setName(model.name), "set model name")

    for pid, parameter in model.parameters.items():
        _create_parameter(sbml_model, pid, parameter)
    _write_model_units_to_sbml(sbml_model, model)
    _write_model_compartments_to_sbml(sbml_model, model)
    if model_fbc is not None:
        _write_model_genes_to_sbml(model_fbc, model)

    for symbol, expression in model.initial_assignments.items():
        assignment = sbml_model.createInitialAssignment()
        if _check(assignment, "create initial assignment" + _for_id(symbol)):
            _check(
                assignment.setSymbol(symbol),
                "set initial assignment symbol" + _for_id(symbol),
            )
            _set_math(assignment, expression, math, "initial assignment" + _for_id(symbol))

    for constraint in model.constraints:
        sbml_constraint = sbml_model.createConstraint()
        if not _check(sbml_constraint, "create constraint"):
            continue
        _set_math(sbml_constraint, constraint.math, math, "constraint")
        if constraint.message:
            _check(
                sbml_constraint.setMessage(escape(constraint.message), True),
                "set constraint message",
            )

    _write_model_reactions_to_sbml(sbml_model, model, math)
    if model_fbc is not None:
        _write_model_objectives_to_sbml(model_fbc, model)
    _write_model_species_to_sbml(sbml_model, model)

    for fid, function_definition in model.function_definitions.items():
        sbml_function = sbml_model.createFunctionDefinition()
        if not _check(sbml_function, "create function definition" + _for_id(fid)):
            continue
        _check(sbml_function.setId(fid), "set function definition id" + _for_id(fid))
        _set_math(
            sbml_function,
            function_definition.body,
            math,
            "function definition" + _for_id(fid),
        )
        _write_sbase_attributes(sbml_function, function_definition, fid)

    _write_model_rules_to_sbml(sbml_model, model, math)
    _write_model_events_to_sbml(sbml_model, model, math)

    if model.conversion_factor is not None:
        _check(
            sbml_model.setConversionFactor(model.conversion_factor),
            "set model conversion factor",
        )
    for category in UNIT_CATEGORIES:
        units = getattr(model, category.lower() + "_units")
        if units is not None:
            _check(
                getattr(sbml_model, "set" + category + "Units")(units),
                "set model {0} units".format(category.lower()),
            )
    if model.notes is not None:
        _check(sbml_model.setNotes(model.notes), "set model notes")
    if model.annotation is not None:
        _check(sbml_model.setAnnotation(model.annotation), "set model annotation")


def _write_sbase_attributes(sbase, component, sid):
    """Write the name, metaid, notes, and annotation of a component.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if component.name is not None:
        _check(sbase.setName(component.name), "set name" + _for_id(sid))
    if component.metaid is not None:
        _check(sbase.setMetaId(component.metaid), "set meta id" + _for_id(sid))
    if component.notes is not None:
        _check(sbase.setNotes(component.notes), "set notes" + _for_id(sid))
    if component.annotation is not None:
        _check(sbase.setAnnotation(component.annotation), "set annotation" + _for_id(sid))


def _set_math(sbase, expression, math, description):
    """Build the math of an SBML object with the codec, unless ``None``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if expression is None:
        return
    _check(sbase.setMath(math.build(expression)), "set math of " + description)


def _default(value, default):
    """Return ``value``, or ``default`` if it is ``None``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return default if value is None else value


def _create_parameter(sbml_obj, pid, parameter, local=False):
    """Create a global parameter, or a local parameter of a kinetic law.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if local:
        sbml_parameter = sbml_obj.createLocalParameter()
        p_type = " local "
    else:
        sbml_parameter = sbml_obj.createParameter()
        p_type = " model "
    if not _check(sbml_parameter, "create" + p_type + "parameter" + _for_id(pid)):
        return

    _check(sbml_parameter.setId(pid), "set" + p_type + "parameter id" + _for_id(pid))
    if parameter.value is not None:
        _check(
            sbml_parameter.setValue(parameter.value),
            "set" + p_type + "parameter value" + _for_id(pid),
        )
    if parameter.units is not None:
        _check(
            sbml_parameter.setUnits(parameter.units),
            "set" + p_type + "parameter units" + _for_id(pid),
        )
    # Local parameters are always constant
    if not local:
        _check(
            sbml_parameter.setConstant(_default(parameter.constant, True)),
            "set" + p_type + "parameter constant" + _for_id(pid),
        )
    _write_sbase_attributes(sbml_parameter, parameter, pid)


def _write_model_units_to_sbml(sbml_model, model):
    r"""Write the model unit definitions into the SBML model.

    A factor is written as a single dimensionless unit with that multiplier,
    a list of :class:`~.Unit`\ s is written term by term.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for uid, definition in model.units.items():
        if isinstance(definition, (int, float)) and not isinstance(definition, bool):
            units = [Unit(kind="dimensionless", multiplier=float(definition))]
        else:
            units = [
                PREDEFINED_UNITS_DICT[u] if isinstance(u, str) else u
                for u in definition
            ]

        unit_definition = sbml_model.createUnitDefinition()
        if not _check(unit_definition, "create UnitDefinition" + _for_id(uid)):
            continue
        _check(unit_definition.setId(uid), "set UnitDefinition id" + _for_id(uid))
        for u in units:
            unit = unit_definition.createUnit()
            if not _check(unit, "create Unit" + _for_id(uid)):
                continue
            _check(
                unit.setKind(SBML_BASE_UNIT_KINDS_DICT[u.kind]),
                "set Unit kind '" + u.kind + "'" + _for_id(uid),
            )
            _check(unit.setExponent(u.exponent), "set Unit exponent" + _for_id(u.kind))
            _check(unit.setScale(u.scale), "set Unit scale" + _for_id(u.kind))
            _check(
                unit.setMultiplier(u.multiplier),
                "set Unit multiplier" + _for_id(u.kind),
            )


def _write_model_compartments_to_sbml(sbml_model, model):
    """Write the model compartments into the SBML model.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for cid, compartment in model.compartments.items():
        sbml_compartment = sbml_model.createCompartment()
        if not _check(sbml_compartment, "create model compartment" + _for_id(cid)):
            continue
        _check(sbml_compartment.setId(cid), "set compartment id" + _for_id(cid))
        _check(
            sbml_compartment.setConstant(_default(compartment.constant, True)),
            "set compartment constant" + _for_id(cid),
        )
        if compartment.spatial_dimensions is not None:
            _check(
                sbml_compartment.setSpatialDimensions(compartment.spatial_dimensions),
                "set compartment spatial dimensions" + _for_id(cid),
            )
        if compartment.size is not None:
            _check(
                sbml_compartment.setSize(compartment.size),
                "set compartment size" + _for_id(cid),
            )
        if compartment.units is not None:
            _check(
                sbml_compartment.setUnits(compartment.units),
                "set compartment units" + _for_id(cid),
            )
        _write_sbase_attributes(sbml_compartment, compartment, cid)


def _write_model_genes_to_sbml(model_fbc, model):
    """Write the model gene products into the 'fbc' model plugin.

    Gene products without a label are labeled with their identifier.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for gid, gene_product in model.gene_products.items():
        gp = model_fbc.createGeneProduct()
        if not _check(gp, "create model gene product" + _for_id(gid)):
            continue
        _check(gp.setId(gid), "set gene id" + _for_id(gid))
        _check(
            gp.setLabel(_default(gene_product.label, gid)),
            "set gene label" + _for_id(gid),
        )
        _write_sbase_attributes(gp, gene_product, gid)


def _write_model_reactions_to_sbml(sbml_model, model, math):
    """Write the model reactions into the SBML model.

    Warnings
    --------
    This method is intended for internal use only.

    """
    set_fast = (sbml_model.getLevel(), sbml_model.getVersion()) == (3, 1)
    for rid, reaction in model.reactions.items():
        sbml_reaction = sbml_model.createReaction()
        if not _check(sbml_reaction, "create reaction" + _for_id(rid)):
            continue
        _check(sbml_reaction.setId(rid), "set reaction id" + _for_id(rid))
        _check(
            sbml_reaction.setReversible(_default(reaction.reversible, True)),
            "set reaction reversible" + _for_id(rid),
        )
        if set_fast:
            _check(sbml_reaction.setFast(False), "set reaction fast" + _for_id(rid))

        _write_reaction_specie_ref_to_sbml(sbml_reaction, reaction, rid)

        if reaction.kinetic_parameters or reaction.kinetic_math is not None:
            kinetic_law = sbml_reaction.createKineticLaw()
            if _check(kinetic_law, "create kinetic law" + _for_id(rid)):
                for pid, parameter in reaction.kinetic_parameters.items():
                    _create_parameter(kinetic_law, pid, parameter, local=True)
                _set_math(
                    kinetic_law, reaction.kinetic_math, math, "kinetic law" + _for_id(rid)
                )

        reaction_fbc = sbml_reaction.getPlugin("fbc")
        if reaction_fbc is not None and (
            reaction.lower_bound is not None or reaction.upper_bound is not None
        ):
            for attribute, suffix, bound in (
                ("LowerFluxBound", "lower_bound", reaction.lower_bound),
                ("UpperFluxBound", "upper_bound", reaction.upper_bound),
            ):
                if bound is None:
                    continue
                pid = _create_bound(sbml_model, rid, suffix, bound)
                _check(
                    getattr(reaction_fbc, "set" + attribute)(pid),
                    "set reaction {0}{1}".format(suffix.replace("_", " "), _for_id(rid)),
                )
            if reaction.gene_product_association is not None:
                encode_association(reaction_fbc, reaction.gene_product_association)
        elif reaction.gene_product_association is not None:
            LOGGER.warning(
                "Gene product association not written for reaction without flux "
                "bounds%s",
                _for_id(rid),
            )
        if reaction_fbc is None and _has_flux_information(reaction):
            LOGGER.warning(
                "Flux bounds and objective coefficient not written for reaction "
                "in a model without 'fbc' information%s",
                _for_id(rid),
            )

        _write_sbase_attributes(sbml_reaction, reaction, rid)


def _has_flux_information(reaction):
    """Return whether the reaction has finite bounds or a non-zero objective.

    Warnings
    --------
    This method is intended for internal use only.

    """
    finite_bounds = [
        bound
        for bound in (reaction.lower_bound, reaction.upper_bound)
        if bound is not None and abs(bound[0]) != float("inf")
    ]
    return bool(finite_bounds) or bool(reaction.objective_coefficient)


def _write_reaction_specie_ref_to_sbml(sbml_reaction, reaction, rid):
    """Write the reaction stoichiometry as species references.

    Species with a zero coefficient are not written.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for sid, coefficient in reaction.stoichiometry.items():
        if coefficient < 0:
            sref = sbml_reaction.createReactant()
        elif coefficient > 0:
            sref = sbml_reaction.createProduct()
        else:
            LOGGER.info("Skipping zero stoichiometry of '%s'%s", sid, _for_id(rid))
            continue
        if not _check(sref, "create specie reference " + sid + _for_id(rid)):
            continue
        _check(sref.setSpecies(sid), "set specie reference id" + _for_id(sid))
        _check(
            sref.setStoichiometry(abs(coefficient)),
            "set specie reference stoichiometry" + _for_id(sid),
        )
        _check(sref.setConstant(True), "set specie reference constant" + _for_id(sid))


def _create_bound(sbml_model, rid, suffix, bound):
    """Create the global parameter of a flux bound and return its id.

    An existing parameter with the same identifier and value is reused,
    otherwise a numeric suffix makes the identifier unique.

    Warnings
    --------
    This method is intended for internal use only.

    """
    value, unit = bound
    pid = "{0}_{1}".format(rid, suffix)
    existing = sbml_model.getParameter(pid)
    if existing is not None and existing.getValue() == value:
        return pid

    base_pid, i = pid, 1
    while sbml_model.getParameter(pid) is not None:
        pid = "{0}_{1}".format(base_pid, i)
        i += 1

    parameter = sbml_model.createParameter()
    if not _check(parameter, "create flux bound parameter" + _for_id(pid)):
        return pid
    _check(parameter.setId(pid), "set flux bound parameter id" + _for_id(pid))
    _check(parameter.setValue(value), "set flux bound parameter value" + _for_id(pid))
    _check(parameter.setConstant(True), "set flux bound parameter constant" + _for_id(pid))
    _check(
        parameter.setSBOTerm(SBO_FLUX_BOUND),
        "set flux bound parameter sbo term" + _for_id(pid),
    )
    if unit and unit != FBC_BOUND_UNIT:
        _check(parameter.setUnits(unit), "set flux bound parameter units" + _for_id(pid))

    return pid


def _write_model_objectives_to_sbml(model_fbc, model):
    """Write the model objectives into the 'fbc' model plugin.

    A model without objectives whose reactions have objective coefficients
    gets a maximizing objective built from those coefficients. The active
    objective defaults to the first objective.

    Warnings
    --------
    This method is intended for internal use only.

    """
    objectives = [
        (oid, objective.type, objective.flux_objectives)
        for oid, objective in model.objectives.items()
    ]
    if not objectives:
        coefficients = {
            rid: reaction.objective_coefficient
            for rid, reaction in model.reactions.items()
            if reaction.objective_coefficient
        }
        if coefficients:
            objectives = [(DEFAULT_OBJECTIVE_ID, "maximize", coefficients)]

    for oid, objective_type, flux_objectives in objectives:
        objective = model_fbc.createObjective()
        if not _check(objective, "create model objective" + _for_id(oid)):
            continue
        _check(objective.setId(oid), "set objective id" + _for_id(oid))
        _check(
            objective.setType(SHORT_LONG_DIRECTION.get(objective_type, objective_type)),
            "set objective type" + _for_id(oid),
        )
        for rid, coefficient in flux_objectives.items():
            flux_objective = objective.createFluxObjective()
            if not _check(flux_objective, "create flux objective" + _for_id(rid)):
                continue
            _check(
                flux_objective.setReaction(rid),
                "set flux objective reaction id" + _for_id(rid),
            )
            _check(
                flux_objective.setCoefficient(coefficient),
                "set flux objective reaction coefficient" + _for_id(rid),
            )

    if objectives:
        active_objective = model.active_objective or objectives[0][0]
        _check(
            model_fbc.setActiveObjectiveId(active_objective),
            "set model active objective id",
        )


def _write_model_species_to_sbml(sbml_model, model):
    """Write the model species into the SBML model.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for sid, specie in model.species.items():
        sbml_specie = sbml_model.createSpecies()
        if not _check(sbml_specie, "create model specie" + _for_id(sid)):
            continue
        _check(sbml_specie.setId(sid), "set specie id" + _for_id(sid))
        if specie.compartment is not None:
            _check(
                sbml_specie.setCompartment(specie.compartment),
                "set specie compartment" + _for_id(sid),
            )
        else:
            LOGGER.warning("Specie has no compartment%s", _for_id(sid))
        _check(
            sbml_specie.setBoundaryCondition(_default(specie.boundary_condition, False)),
            "set specie boundary condition" + _for_id(sid),
        )
        _check(
            sbml_specie.setHasOnlySubstanceUnits(
                _default(specie.only_substance_units, False)
            ),
            "set specie has only substance units" + _for_id(sid),
        )
        _check(
            sbml_specie.setConstant(_default(specie.constant, False)),
            "set specie constant" + _for_id(sid),
        )

        initial_values = [("InitialAmount", specie.initial_amount)]
        if specie.initial_amount is None:
            initial_values.append(
                ("InitialConcentration", specie.initial_concentration)
            )
        elif specie.initial_concentration is not None:
            # Setting one initial value unsets the other in libsbml.
            LOGGER.warning(
                "Specie has both an initial amount and an initial concentration, "
                "only the initial amount is written%s",
                _for_id(sid),
            )
        for attribute, initial_value in initial_values:
            if initial_value is None:
                continue
            value, units = initial_value
            _check(
                getattr(sbml_specie, "set" + attribute)(value),
                "set specie {0}{1}".format(attribute, _for_id(sid)),
            )
            if units is not None:
                _check(
                    sbml_specie.setSubstanceUnits(units),
                    "set specie substance units" + _for_id(sid),
                )

        specie_fbc = sbml_specie.getPlugin("fbc")
        if specie_fbc is not None:
            if specie.formula is not None:
                _check(
                    specie_fbc.setChemicalFormula(specie.formula),
                    "set specie formula" + _for_id(sid),
                )
            if specie.charge is not None:
                _check(
                    specie_fbc.setCharge(int(specie.charge)),
                    "set specie charge" + _for_id(sid),
                )
        _write_sbase_attributes(sbml_specie, specie, sid)


def _write_model_rules_to_sbml(sbml_model, model, math):
    """Write the model rules into the SBML model in order.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for rule in model.rules:
        if isinstance(rule, AlgebraicRule):
            sbml_rule = sbml_model.createAlgebraicRule()
            description = "algebraic rule"
        elif isinstance(rule, AssignmentRule):
            sbml_rule = sbml_model.createAssignmentRule()
            description = "assignment rule" + _for_id(rule.variable)
        elif isinstance(rule, RateRule):
            sbml_rule = sbml_model.createRateRule()
            description = "rate rule" + _for_id(rule.variable)
        else:
            raise UnsupportedConstruct("Unsupported rule '{0}'.".format(repr(rule)))

        if not _check(sbml_rule, "create " + description):
            continue
        if not isinstance(rule, AlgebraicRule):
            _check(sbml_rule.setVariable(rule.variable), "set variable of " + description)
        _set_math(sbml_rule, rule.math, math, description)


def _write_model_events_to_sbml(sbml_model, model, math):
    """Write the model events into the SBML model.

    Warnings
    --------
    This method is intended for internal use only.

    """
    for eid, event in model.events.items():
        sbml_event = sbml_model.createEvent()
        if not _check(sbml_event, "create event" + _for_id(eid)):
            continue
        _check(sbml_event.setId(eid), "set event id" + _for_id(eid))
        _check(
            sbml_event.setUseValuesFromTriggerTime(
                _default(event.use_values_from_trigger_time, True)
            ),
            "set event use values from trigger time" + _for_id(eid),
        )

        if event.trigger is not None:
            trigger = sbml_event.createTrigger()
            if _check(trigger, "create event trigger" + _for_id(eid)):
                _check(
                    trigger.setPersistent(_default(event.trigger.persistent, True)),
                    "set trigger persistent" + _for_id(eid),
                )
                _check(
                    trigger.setInitialValue(_default(event.trigger.initial_value, True)),
                    "set trigger initial value" + _for_id(eid),
                )
                _set_math(trigger, event.trigger.math, math, "trigger" + _for_id(eid))

        for assignment in event.event_assignments:
            sbml_assignment = sbml_event.createEventAssignment()
            if not _check(sbml_assignment, "create event assignment" + _for_id(eid)):
                continue
            _check(
                sbml_assignment.setVariable(assignment.variable),
                "set event assignment variable" + _for_id(assignment.variable),
            )
            _set_math(
                sbml_assignment,
                assignment.math,
                math,
                "event assignment" + _for_id(assignment.variable),
            )

        _write_sbase_attributes(sbml_event, event, eid)


__all__ = (
    "write_sbml_model",
    "build_document",
)
