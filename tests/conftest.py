# -*- coding: utf-8 -*-
"""Shared fixtures for the fluxsbml tests."""
import pytest

from fluxsbml.core.configuration import SBMLConfiguration
from fluxsbml.core.association import GeneProductAnd, GeneProductOr, GeneProductRef
from fluxsbml.core.model import (
    Compartment,
    GeneProduct,
    Model,
    Parameter,
    Reaction,
    Species,
)
from tests import load_test_document


@pytest.fixture(scope="session")
def fbc_xml():
    """Return an SBML L3V1 document using the 'fbc' package as a string."""
    return load_test_document("fbc_model")


@pytest.fixture(scope="session")
def plain_xml():
    """Return an SBML L3V1 core document as a string."""
    return load_test_document("plain_model")


@pytest.fixture(scope="session")
def missing_species_id_xml():
    return load_test_document("invalid_missing_species_id")


@pytest.fixture(scope="session")
def no_model_xml():
    return load_test_document("invalid_no_model")


@pytest.fixture(scope="session")
def truncated_xml():
    return load_test_document("invalid_truncated")


@pytest.fixture
def fbc_xml_path(tmp_path, fbc_xml):
    """Write the 'fbc' test document to a temporary file and return its path."""
    path = tmp_path / "fbc_model.xml"
    path.write_text(fbc_xml)
    return path


@pytest.fixture
def configuration():
    """Return the SBMLConfiguration and restore its values afterwards."""
    config = SBMLConfiguration()
    saved = (
        config.report_severities,
        config.bounds,
        config.level_version,
        config.fbc_level_version,
    )
    yield config
    config.report_severities = saved[0]
    config.bounds = saved[1]
    config.level_version = saved[2]
    config.fbc_level_version = saved[3]


@pytest.fixture
def association():
    """Return the association tree ``(g1 and g2) or g3``."""
    return GeneProductOr(
        [
            GeneProductAnd([GeneProductRef("g1"), GeneProductRef("g2")]),
            GeneProductRef("g3"),
        ]
    )


@pytest.fixture
def textbook_model(association):
    """Return a small in-memory :class:`~.Model` for writing."""
    return Model(
        id="textbook",
        name="Textbook",
        notes=(
            '<notes>\n  <body xmlns="http://www.w3.org/1999/xhtml">\n'
            "    <p>Written by the tests.</p>\n  </body>\n</notes>"
        ),
        compartments={
            "c": Compartment(constant=True, spatial_dimensions=3, size=1.0),
            "e": Compartment(name="extracellular"),
        },
        species={
            "glc__D_e": Species(
                compartment="e",
                formula="C6H12O6",
                charge=0,
                initial_concentration=(10.0, None),
            ),
            "glc__D_c": Species(compartment="c", formula="C6H12O6", charge=0),
            "g6p_c": Species(compartment="c", formula="C6H11O9P", charge=-2),
        },
        reactions={
            "EX_glc__D_e": Reaction(
                stoichiometry={"glc__D_e": -1},
                lower_bound=(-10.0, ""),
                upper_bound=(1000.0, ""),
            ),
            "GLCt": Reaction(
                stoichiometry={"glc__D_e": -1, "glc__D_c": 1},
                lower_bound=(0.0, ""),
                upper_bound=(1000.0, ""),
                gene_product_association=GeneProductRef("b2417"),
            ),
            "HEX1": Reaction(
                stoichiometry={"glc__D_c": -1, "g6p_c": 1},
                lower_bound=(0.0, ""),
                upper_bound=(1000.0, ""),
                objective_coefficient=1.0,
                gene_product_association=association,
                reversible=False,
                name="hexokinase",
            ),
        },
        gene_products={
            "b2417": GeneProduct(label="crr"),
            "g1": GeneProduct(),
            "g2": GeneProduct(),
            "g3": GeneProduct(name="third gene"),
        },
        parameters={"k_cat": Parameter(value=2.5)},
    )
