# -*- coding: utf-8 -*-
r"""
Math codecs translating between :class:`libsbml.ASTNode` trees and Python.

A math codec is any object with two methods:

``parse(ast)``
    Return the Python representation of a :class:`libsbml.ASTNode`.
``build(expression)``
    Return a new :class:`libsbml.ASTNode` for an expression.

The reader calls :meth:`parse` wherever SBML carries math (kinetic laws,
function definitions, initial assignments, rules, constraints, event
triggers and assignments) and the writer calls :meth:`build` for the same
places. The codec is passed to :func:`~.read_sbml_model` and
:func:`~.write_sbml_model` explicitly through the ``math`` argument.

Two codecs are provided:

* :class:`FormulaMath` keeps math as SBML Level 3 infix formula strings and
  is the default.
* :class:`SympyMath` represents math as :mod:`sympy` expressions, written
  through `MathML <https://www.w3.org/Math/>`_.

"""
import re

import libsbml
from sympy import Symbol, SympifyError, mathml, sympify

from fluxsbml.exceptions import UnsupportedConstruct


class FormulaMath:
    """Math codec using SBML Level 3 formula strings such as ``"k1 * A"``."""

    def parse(self, ast):
        """Return the L3 formula string of a :class:`libsbml.ASTNode`."""
        if ast is None:
            return None
        return libsbml.formulaToL3String(ast)

    def build(self, expression):
        """Return a :class:`libsbml.ASTNode` for an L3 formula string.

        Raises
        ------
        UnsupportedConstruct
            If :mod:`libsbml` cannot parse the formula.

        """
        ast = libsbml.parseL3Formula(str(expression))
        if ast is None:
            raise UnsupportedConstruct(
                "Cannot parse formula '{0}': {1}".format(
                    expression, libsbml.getLastParseL3Error()
                )
            )
        return ast

    def __repr__(self):
        return "{0}()".format(self.__class__.__name__)


class SympyMath:
    r"""Math codec using :mod:`sympy` expressions.

    Notes
    -----
    Identifiers in parsed expressions become :class:`sympy.Symbol`\ s, even
    when they collide with names :mod:`sympy` would otherwise interpret
    (for example ``S`` or ``E``). Only expressions :mod:`sympy` can represent
    are supported; piecewise and relational SBML math is not.

    """

    def parse(self, ast):
        """Return a :mod:`sympy` expression for a :class:`libsbml.ASTNode`.

        Raises
        ------
        UnsupportedConstruct
            If :mod:`sympy` cannot interpret the formula.

        """
        if ast is None:
            return None
        formula = libsbml.formulaToL3String(ast)
        local_dict = {name: Symbol(name) for name in _iter_ast_names(ast)}
        try:
            return sympify(formula.replace("^", "**"), locals=local_dict)
        except (SympifyError, SyntaxError, TypeError) as e:
            raise UnsupportedConstruct(
                "Cannot interpret formula '{0}' with sympy: {1}".format(formula, e)
            )

    def build(self, expression):
        """Return a :class:`libsbml.ASTNode` for a :mod:`sympy` expression.

        Raises
        ------
        UnsupportedConstruct
            If :mod:`libsbml` cannot read the MathML made for the expression.

        """
        if not hasattr(expression, "atoms"):
            expression = sympify(expression)
        mathml_xml = _create_math_xml_str_from_sympy_expr(expression)
        ast = libsbml.readMathMLFromString(mathml_xml)
        if ast is None:
            raise UnsupportedConstruct(
                "Cannot write expression '{0}' as MathML.".format(str(expression))
            )
        return ast

    def __repr__(self):
        return "{0}()".format(self.__class__.__name__)


def _iter_ast_names(ast):
    """Yield the identifiers named in an AST, depth first.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if ast.isName() and ast.getName():
        yield ast.getName()
    for i in range(ast.getNumChildren()):
        for name in _iter_ast_names(ast.getChild(i)):
            yield name


def _create_math_xml_str_from_sympy_expr(sympy_equation):
    """Create a MathML string from a sympy expression to be parsed by libsbml.

    Notes
    -----
    The :mod:`sympy` MathML printer reads ``'_'`` in a symbol name as a
    subscript and ``'__'`` as a superscript, so underscores are swapped for
    ``'UNDERSCORE'`` while printing and restored afterwards. Presentation
    markup is stripped since :mod:`libsbml` only reads content MathML. The
    symbol ``t`` is written as the SBML time csymbol.

    Warnings
    --------
    This method is intended for internal use only.

    """
    underscore_replace = {
        str(arg): Symbol(str(arg).replace("_", "UNDERSCORE"))
        for arg in sympy_equation.atoms(Symbol)
    }
    sympy_equation = sympy_equation.subs(underscore_replace)
    mathml_xml = mathml(sympy_equation)
    mathml_xml = '<math xmlns="http://www.w3.org/1998/Math/MathML">{0}</math>'.format(
        mathml_xml.replace("UNDERSCORE", "_")
    )
    mathml_xml = re.sub(r"\<mml:.*?\>|\<\/mml:.*?\>", "", mathml_xml)
    if re.search(r"\>\<ci\>t\<\/ci\>\<", mathml_xml):
        time_symbol = (
            '><csymbol encoding="text" definitionURL='
            + '"http://www.sbml.org/sbml/symbols/time">'
            + "t</csymbol><"
        )
        mathml_xml = re.sub(r"\>\<ci\>t\<\/ci\>\<", time_symbol, mathml_xml)
    return mathml_xml


__all__ = (
    "FormulaMath",
    "SympyMath",
)
