# -*- coding: utf-8 -*-
r"""
Gene product association trees.

A gene product association is a boolean expression over gene products that
states which gene products a reaction requires. The tree has three node
kinds:

* :class:`GeneProductRef` refers to a single gene product by id.
* :class:`GeneProductAnd` requires all of its ordered terms.
* :class:`GeneProductOr` requires any of its ordered terms.

Trees can be converted to and from :class:`cobra.core.gene.GPR` objects and
boolean rule strings such as ``"(g1 and g2) or g3"``.
"""
from ast import And, BoolOp, Expression, Name, Or

from cobra.core.gene import GPR

from fluxsbml.exceptions import UnsupportedConstruct


class GeneProductAssociation:
    """Base class of gene product association tree nodes."""

    @property
    def gene_products(self):
        """Return a :class:`frozenset` of gene product ids in the tree."""
        return frozenset(self._iter_gene_products())

    def to_gpr(self):
        """Return the association as a :class:`cobra.core.gene.GPR`."""
        return GPR(Expression(body=self._to_ast()))

    def to_string(self):
        """Return the association as a boolean rule string."""
        return self.to_gpr().to_string()

    def _iter_gene_products(self):
        raise NotImplementedError

    def _to_ast(self):
        raise NotImplementedError

    def __str__(self):
        return self.to_string()


class GeneProductRef(GeneProductAssociation):
    """Reference to a single gene product.

    Parameters
    ----------
    gene_product : str
        Identifier of the referenced gene product.

    """

    def __init__(self, gene_product):
        """Initialize the GeneProductRef."""
        self.gene_product = gene_product

    def _iter_gene_products(self):
        yield self.gene_product

    def _to_ast(self):
        return Name(id=self.gene_product)

    def __eq__(self, other):
        if not isinstance(other, GeneProductRef):
            return NotImplemented
        return self.gene_product == other.gene_product

    def __hash__(self):
        return hash((self.__class__.__name__, self.gene_product))

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self.gene_product)


class _GeneProductOperator(GeneProductAssociation):
    """Shared behavior of the :class:`GeneProductAnd` and Or nodes."""

    _ast_operator = None

    def __init__(self, terms=None):
        """Initialize the operator node with an ordered list of terms."""
        terms = list(terms) if terms is not None else []
        for term in terms:
            if not isinstance(term, GeneProductAssociation):
                raise TypeError(
                    "'{0}' is not a gene product association.".format(repr(term))
                )
        self.terms = terms

    def _iter_gene_products(self):
        for term in self.terms:
            for gene_product in term._iter_gene_products():
                yield gene_product

    def _to_ast(self):
        return BoolOp(op=self._ast_operator(), values=[t._to_ast() for t in self.terms])

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.terms == other.terms

    def __hash__(self):
        return hash((self.__class__.__name__, tuple(self.terms)))

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self.terms)


class GeneProductAnd(_GeneProductOperator):
    """Conjunction of gene product association terms.

    Parameters
    ----------
    terms : list
        The ordered sub-trees that are all required.

    """

    _ast_operator = And


class GeneProductOr(_GeneProductOperator):
    """Disjunction of gene product association terms.

    Parameters
    ----------
    terms : list
        The ordered sub-trees of which any one is sufficient.

    """

    _ast_operator = Or


def association_from_gpr(gpr):
    """Create a gene product association tree from a :class:`GPR`.

    Parameters
    ----------
    gpr : cobra.core.gene.GPR
        The GPR to convert.

    Returns
    -------
    GeneProductAssociation or None
        ``None`` if the GPR is empty.

    Raises
    ------
    UnsupportedConstruct
        If the GPR contains anything other than names, ``and``, and ``or``.

    """
    body = getattr(gpr, "body", None)
    if body is None:
        return None

    def _from_ast(node):
        if isinstance(node, Name):
            return GeneProductRef(node.id)
        if isinstance(node, BoolOp) and isinstance(node.op, And):
            return GeneProductAnd([_from_ast(v) for v in node.values])
        if isinstance(node, BoolOp) and isinstance(node.op, Or):
            return GeneProductOr([_from_ast(v) for v in node.values])
        raise UnsupportedConstruct(
            "Unsupported node '{0}' in gene reaction rule.".format(
                node.__class__.__name__
            )
        )

    return _from_ast(body)


def association_from_string(rule):
    """Create a gene product association tree from a boolean rule string.

    Parameters
    ----------
    rule : str
        A rule such as ``"(g1 and g2) or g3"``. An empty string gives
        ``None``.

    """
    if not rule or not rule.strip():
        return None
    return association_from_gpr(GPR.from_string(rule))


__all__ = (
    "GeneProductAssociation",
    "GeneProductRef",
    "GeneProductAnd",
    "GeneProductOr",
    "association_from_gpr",
    "association_from_string",
)
