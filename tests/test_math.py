# -*- coding: utf-8 -*-
"""Tests for the math codecs."""
import libsbml
import pytest
from sympy import Symbol, symbols

from fluxsbml.core.model import AssignmentRule, Parameter
from fluxsbml.exceptions import UnsupportedConstruct
from fluxsbml.io.math import FormulaMath, SympyMath
from fluxsbml.io.reader import read_sbml_model
from fluxsbml.io.writer import write_sbml_model


def test_formula_math():
    codec = FormulaMath()
    ast = codec.build("k1 * A")
    assert isinstance(ast, libsbml.ASTNode)
    assert codec.parse(ast) == "k1 * A"
    assert codec.parse(None) is None


def test_formula_math_invalid():
    with pytest.raises(UnsupportedConstruct):
        FormulaMath().build("k1 * (")


def test_sympy_math():
    codec = SympyMath()
    kf, x = symbols("kf x")
    assert codec.parse(libsbml.parseL3Formula("kf * x^2")) == kf * x ** 2
    expression = kf * x - 3
    assert codec.parse(codec.build(expression)) == expression
    assert codec.parse(None) is None


def test_sympy_math_keeps_identifiers_as_symbols():
    codec = SympyMath()
    expression = codec.parse(libsbml.parseL3Formula("S * Q * N"))
    assert expression == Symbol("S") * Symbol("Q") * Symbol("N")


def test_sympy_math_underscored_symbols():
    codec = SympyMath()
    expression = Symbol("v_max") * Symbol("glc__D_c")
    ast = codec.build(expression)
    assert libsbml.formulaToL3String(ast) in (
        "v_max * glc__D_c",
        "glc__D_c * v_max",
    )


def test_sympy_math_build_from_string():
    ast = SympyMath().build("kf * x")
    assert ast is not None
    assert ast.getNumChildren() == 2


def test_read_and_write_with_sympy_math(textbook_model):
    codec = SympyMath()
    k_cat, glc = Symbol("k_cat"), Symbol("glc__D_c")
    textbook_model.reactions["HEX1"].kinetic_math = k_cat * glc
    textbook_model.parameters["x"] = Parameter(constant=False)
    textbook_model.rules = [AssignmentRule("x", 2 * k_cat)]

    model = read_sbml_model(write_sbml_model(textbook_model, math=codec), math=codec)
    assert model.reactions["HEX1"].kinetic_math == k_cat * glc
    assert model.rules[0].variable == "x"
    assert model.rules[0].math == 2 * k_cat
