# -*- coding: utf-8 -*-
"""Tests for reading SBML documents into models."""
import logging
from io import StringIO
from math import inf

import pytest

from fluxsbml.core.association import GeneProductAnd, GeneProductOr, GeneProductRef
from fluxsbml.core.model import FBC_BOUND_UNIT, AssignmentRule, Model
from fluxsbml.exceptions import MissingRequiredField, ParseError
from fluxsbml.io.reader import extract_model, read_sbml_model
from tests import create_test_model, view_test_models


@pytest.fixture(scope="module")
def model(fbc_xml):
    """Return the model read from the 'fbc' test document."""
    return read_sbml_model(fbc_xml)


def test_read_returns_model(model):
    assert isinstance(model, Model)
    assert model.id == "test_model"
    assert model.name == "Test model"
    assert "small flux balance test model" in model.notes


def test_read_compartments(model):
    assert list(model.compartments) == ["c"]
    compartment = model.compartments["c"]
    assert compartment.name == "cytosol"
    assert compartment.constant is True
    assert compartment.spatial_dimensions == 3
    assert compartment.size == 1.0
    assert compartment.units is None


def test_read_species(model):
    assert list(model.species) == ["A", "B", "C"]
    specie = model.species["A"]
    assert specie.compartment == "c"
    assert specie.formula == "C6H12O6"
    assert specie.charge == -1
    assert specie.initial_concentration == (2.0, None)
    assert specie.initial_amount is None
    assert specie.boundary_condition is False
    assert "fluxsbml-test" in specie.annotation

    assert model.species["B"].initial_amount == (0.5, "mmol")
    assert model.species["B"].initial_concentration is None
    assert model.species["B"].formula is None
    assert model.species["C"].boundary_condition is True


def test_read_units(model):
    assert model.units["mmol"] == pytest.approx(1e-3)
    assert model.units["mmol_per_gDW_per_hr"] == pytest.approx(1e-3 * 1e3 / 3600)


def test_read_level_2_celsius_units():
    model = create_test_model("l2v1_celsius_model")
    assert model.id == "temperature_model"
    assert model.units["temp"] == 1.0
    assert model.units["milli_celsius"] == pytest.approx(1e-3)
    assert model.parameters["T"].value == 37.0
    assert model.parameters["T"].units == "temp"


def test_read_stoichiometry_sums_reactant_and_product_roles(model):
    assert model.reactions["R1"].stoichiometry == {"A": -1.0, "B": 2.0}
    assert model.reactions["R2"].stoichiometry == {"A": 1.0, "B": -1.0}
    assert model.reactions["R2"].products == {"A": 1.0}
    assert model.reactions["R2"].reactants == {"B": 1.0}


def test_read_stoichiometry_as_int(fbc_xml):
    model = read_sbml_model(fbc_xml, number=int)
    stoichiometry = model.reactions["R1"].stoichiometry
    assert stoichiometry == {"A": -1, "B": 2}
    assert all(isinstance(v, int) for v in stoichiometry.values())


def test_read_fbc_bound_replaces_kinetic_law_bound(model):
    reaction = model.reactions["R1"]
    assert reaction.lower_bound == (-5.0, FBC_BOUND_UNIT)
    assert reaction.upper_bound == (1000.0, FBC_BOUND_UNIT)
    assert reaction.kinetic_parameters["LOWER_BOUND"].value == -10.0
    assert reaction.kinetic_parameters["LOWER_BOUND"].units == "mmol"


def test_read_kinetic_law_bound_without_fbc_bound(model):
    reaction = model.reactions["R2"]
    assert reaction.lower_bound == (-inf, "")
    assert reaction.upper_bound == (20.0, "")
    assert reaction.kinetic_math is None


def test_read_unresolved_fbc_bound_keeps_default(model):
    reaction = model.reactions["EX_C"]
    assert reaction.lower_bound == (0.0, FBC_BOUND_UNIT)
    assert reaction.upper_bound == (inf, "")


def test_read_unresolved_fbc_bound_is_logged(fbc_xml, caplog):
    with caplog.at_level(logging.WARNING, logger="fluxsbml.io.reader"):
        read_sbml_model(fbc_xml)
    assert "unset_bound" in caplog.text
    assert "EX_C" in caplog.text


def test_read_missing_bounds_unset(fbc_xml):
    model = read_sbml_model(fbc_xml, set_missing_bounds=False)
    assert model.reactions["R2"].lower_bound is None
    assert model.reactions["R2"].upper_bound == (20.0, "")
    assert model.reactions["EX_C"].upper_bound is None


def test_read_missing_bounds_from_configuration(plain_xml, configuration):
    configuration.bounds = (-1000.0, 1000.0)
    model = read_sbml_model(plain_xml)
    assert model.reactions["R1"].bounds == ((-1000.0, ""), (1000.0, ""))


def test_read_fbc_objective_replaces_kinetic_law_objective(model):
    assert model.reactions["R1"].objective_coefficient == 0.5
    assert model.reactions["R1"].kinetic_parameters[
        "OBJECTIVE_COEFFICIENT"
    ].value == 1.0
    assert model.reactions["R2"].objective_coefficient == 0.0


def test_read_objectives(model):
    assert list(model.objectives) == ["obj"]
    assert model.objectives["obj"].type == "maximize"
    assert model.objectives["obj"].flux_objectives == {"R1": 0.5}
    assert model.active_objective == "obj"


def test_read_gene_products(model):
    assert list(model.gene_products) == ["g1", "g2", "g3"]
    assert model.gene_products["g1"].label == "gene1"
    assert model.gene_products["g1"].name == "Gene one"


def test_read_gene_product_associations(model):
    assert model.reactions["R1"].gene_product_association == GeneProductOr(
        [
            GeneProductAnd([GeneProductRef("g1"), GeneProductRef("g2")]),
            GeneProductRef("g3"),
        ]
    )
    assert model.reactions["EX_C"].gene_product_association == GeneProductRef("g3")
    assert model.reactions["R2"].gene_product_association is None


def test_read_kinetic_law(model):
    reaction = model.reactions["R1"]
    assert reaction.kinetic_math == "k1 * A"
    assert reaction.reversible is True
    assert model.reactions["R2"].reversible is False


def test_read_parameters(model):
    assert model.parameters["R1_lower_bound"].value == -5.0
    assert model.parameters["R1_lower_bound"].constant is True
    assert model.parameters["unset_bound"].value is None
    assert model.parameters["k2"].constant is False


def test_read_math_components(model):
    assert model.function_definitions["double_it"].body == "lambda(x, 2 * x)"
    assert model.initial_assignments == {"k1": "0.2"}
    assert len(model.rules) == 1
    rule = model.rules[0]
    assert isinstance(rule, AssignmentRule)
    assert rule.variable == "k2"
    assert rule.math == "2 * k1"


def test_read_constraint_message_is_plain_text(model):
    assert len(model.constraints) == 1
    assert model.constraints[0].message == "k1 must be non-negative"
    assert model.constraints[0].math == "k1 >= 0"


def test_read_events(model):
    event = model.events["e1"]
    assert event.use_values_from_trigger_time is True
    assert event.trigger.persistent is True
    assert event.trigger.initial_value is False
    assert event.trigger.math == "k1 > 10"
    assert len(event.event_assignments) == 1
    assert event.event_assignments[0].variable == "k3"
    assert event.event_assignments[0].math == "1"


def test_read_plain_document(plain_xml):
    model = read_sbml_model(plain_xml)
    assert model.id == "plain_model"
    assert model.objectives == {}
    assert model.active_objective is None
    assert model.gene_products == {}
    assert model.species["A"].formula is None
    assert model.species["A"].charge is None
    assert model.reactions["R1"].kinetic_parameters["kf"].value == 2.0


def test_read_from_path_and_handle(fbc_xml_path):
    from_path = read_sbml_model(fbc_xml_path)
    from_str_path = read_sbml_model(str(fbc_xml_path))
    with open(str(fbc_xml_path)) as handle:
        from_handle = read_sbml_model(handle)
    for model in (from_path, from_str_path, from_handle):
        assert list(model.reactions) == ["R1", "R2", "EX_C"]


def test_read_test_models():
    assert view_test_models() == [
        "fbc_model.xml",
        "l2v1_celsius_model.xml",
        "plain_model.xml",
    ]
    model = create_test_model("fbc_model", number=int)
    assert model.reactions["R2"].stoichiometry["A"] == 1
    assert create_test_model("plain_model.xml").id == "plain_model"


def test_read_from_string_io(fbc_xml):
    model = read_sbml_model(StringIO(fbc_xml))
    assert model.id == "test_model"


def test_read_missing_path():
    with pytest.raises(ParseError):
        read_sbml_model("this/path/does/not/exist.xml")


def test_read_unsupported_input_type():
    with pytest.raises(ParseError):
        read_sbml_model(42)


def test_read_no_model(no_model_xml):
    with pytest.raises(ParseError, match="contains no model"):
        read_sbml_model(no_model_xml)


def test_read_truncated_document(truncated_xml):
    with pytest.raises(ParseError):
        read_sbml_model(truncated_xml)


def test_read_missing_required_id(missing_species_id_xml):
    with pytest.raises(MissingRequiredField, match="Id"):
        read_sbml_model(missing_species_id_xml, report_severities=())


def test_read_missing_required_id_is_reported_as_error(missing_species_id_xml):
    with pytest.raises(ParseError):
        read_sbml_model(missing_species_id_xml)


def test_read_wrong_kwarg_type(fbc_xml):
    with pytest.raises(TypeError):
        read_sbml_model(fbc_xml, set_missing_bounds="yes")


def test_read_unknown_kwarg_warns(fbc_xml):
    with pytest.warns(UserWarning, match="Unrecognized kwargs"):
        read_sbml_model(fbc_xml, not_an_option=True)


def test_extract_model_from_libsbml_model(fbc_xml):
    import libsbml

    document = libsbml.readSBMLFromString(fbc_xml)
    model = extract_model(document.getModel())
    assert list(model.species) == ["A", "B", "C"]
