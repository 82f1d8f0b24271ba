# -*- coding: utf-8 -*-
"""Tests for gene product association trees and their 'fbc' codec."""
import ast
from types import SimpleNamespace

import libsbml
import pytest
from cobra.core.gene import GPR

from fluxsbml.core.association import (
    GeneProductAnd,
    GeneProductAssociation,
    GeneProductOr,
    GeneProductRef,
    association_from_gpr,
    association_from_string,
)
from fluxsbml.exceptions import UnsupportedConstruct
from fluxsbml.io.association import decode_association, encode_association
from fluxsbml.io.document import create_document


class _StubNode:
    """Stand-in for an 'fbc' association node with a given type code."""

    def __init__(self, type_code, children=()):
        self.type_code = type_code
        self.children = list(children)

    def getTypeCode(self):
        return self.type_code

    def getNumAssociations(self):
        return len(self.children)

    def getAssociation(self, i):
        return self.children[i]


@pytest.fixture
def reaction_fbc():
    """Return the 'fbc' plugin of a reaction in a new document."""
    handle = create_document(fbc=True)
    reaction = handle.document.createModel().createReaction()
    reaction.setId("R1")
    yield reaction.getPlugin("fbc")
    handle.free()


def test_association_equality(association):
    same = GeneProductOr(
        [
            GeneProductAnd([GeneProductRef("g1"), GeneProductRef("g2")]),
            GeneProductRef("g3"),
        ]
    )
    assert association == same
    assert hash(association) == hash(same)
    assert GeneProductAnd([GeneProductRef("g1")]) != GeneProductOr(
        [GeneProductRef("g1")]
    )
    assert GeneProductAnd(
        [GeneProductRef("g1"), GeneProductRef("g2")]
    ) != GeneProductAnd([GeneProductRef("g2"), GeneProductRef("g1")])


def test_association_gene_products(association):
    assert association.gene_products == frozenset({"g1", "g2", "g3"})


def test_association_repr():
    assert repr(GeneProductRef("g1")) == "GeneProductRef('g1')"
    assert repr(GeneProductAnd([GeneProductRef("g1")])) == (
        "GeneProductAnd([GeneProductRef('g1')])"
    )


def test_association_rejects_non_association_terms():
    with pytest.raises(TypeError):
        GeneProductAnd(["g1"])


def test_association_to_string(association):
    assert association.to_string() == "(g1 and g2) or g3"
    assert str(GeneProductRef("g1")) == "g1"


def test_association_from_string(association):
    assert association_from_string("(g1 and g2) or g3") == association
    assert association_from_string("g1") == GeneProductRef("g1")
    assert association_from_string("") is None
    assert association_from_string("   ") is None


def test_association_gpr_conversion(association):
    gpr = association.to_gpr()
    assert isinstance(gpr, GPR)
    assert association_from_gpr(gpr) == association
    assert association_from_gpr(GPR.from_string("g1 and g2")) == GeneProductAnd(
        [GeneProductRef("g1"), GeneProductRef("g2")]
    )


def test_association_from_empty_gpr():
    assert association_from_gpr(SimpleNamespace(body=None)) is None


def test_association_from_unsupported_gpr():
    with pytest.raises(UnsupportedConstruct):
        association_from_gpr(SimpleNamespace(body=ast.Constant(value=True)))


def test_encode_decode_association(reaction_fbc, association):
    assert encode_association(reaction_fbc, association)
    gpa = reaction_fbc.getGeneProductAssociation()
    assert decode_association(gpa.getAssociation()) == association


def test_encode_single_reference(reaction_fbc):
    assert encode_association(reaction_fbc, GeneProductRef("g1"))
    node = reaction_fbc.getGeneProductAssociation().getAssociation()
    assert node.getTypeCode() == libsbml.SBML_FBC_GENEPRODUCTREF
    assert node.getGeneProduct() == "g1"


def test_encode_unsupported_association(reaction_fbc):
    with pytest.raises(UnsupportedConstruct):
        encode_association(reaction_fbc, GeneProductAssociation())


def test_decode_unsupported_node():
    with pytest.raises(UnsupportedConstruct):
        decode_association(_StubNode(-1))


def test_decode_unsupported_nested_node():
    node = _StubNode(libsbml.SBML_FBC_OR, [_StubNode(-1)])
    with pytest.raises(UnsupportedConstruct):
        decode_association(node)
