# -*- coding: utf-8 -*-
"""
Encode and decode 'fbc' gene product associations.

The 'fbc' package stores a gene product association as a tree of
:class:`libsbml.FbcAnd`, :class:`libsbml.FbcOr`, and
:class:`libsbml.GeneProductRef` nodes. Nodes are told apart by their SBML
type code, and any other node kind is rejected with an
:class:`~.UnsupportedConstruct` error rather than skipped.
"""
import libsbml

from fluxsbml.core.association import GeneProductAnd, GeneProductOr, GeneProductRef
from fluxsbml.exceptions import UnsupportedConstruct
from fluxsbml.io.accessors import _check, get_string


def decode_association(association):
    """Return the gene product association tree of an 'fbc' association node.

    Parameters
    ----------
    association : libsbml.FbcAssociation
        The root node to decode.

    Returns
    -------
    GeneProductAssociation

    Raises
    ------
    UnsupportedConstruct
        If a node in the tree is not a gene product reference, an and, or an
        or node.
    MissingRequiredField
        If a gene product reference does not name a gene product.

    """
    type_code = association.getTypeCode()
    if type_code == libsbml.SBML_FBC_GENEPRODUCTREF:
        return GeneProductRef(get_string(association, "GeneProduct"))
    if type_code == libsbml.SBML_FBC_AND:
        return GeneProductAnd(_decode_terms(association))
    if type_code == libsbml.SBML_FBC_OR:
        return GeneProductOr(_decode_terms(association))

    raise UnsupportedConstruct(
        "Unsupported gene product association node with type code '{0}'.".format(
            type_code
        )
    )


def encode_association(reaction_fbc, association):
    """Write a gene product association tree into an 'fbc' reaction plugin.

    Parameters
    ----------
    reaction_fbc : libsbml.FbcReactionPlugin
        The 'fbc' plugin of the reaction to write into.
    association : GeneProductAssociation
        The tree to write.

    Returns
    -------
    bool
        Whether the association was attached to the reaction.

    """
    root = _create_root(
        association,
        reaction_fbc.getLevel(),
        reaction_fbc.getVersion(),
        reaction_fbc.getPackageVersion(),
    )
    _encode_terms(root, association)
    gpa = reaction_fbc.createGeneProductAssociation()
    if not _check(gpa, "create gene product association"):
        return False
    return _check(gpa.setAssociation(root), "set gene product association")


def _decode_terms(association):
    """Decode the ordered children of an and or or node.

    Warnings
    --------
    This method is intended for internal use only.

    """
    return [
        decode_association(association.getAssociation(i))
        for i in range(association.getNumAssociations())
    ]


def _create_root(association, level, version, pkg_version):
    """Create a detached node matching the root of an association tree.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if isinstance(association, GeneProductRef):
        return libsbml.GeneProductRef(level, version, pkg_version)
    if isinstance(association, GeneProductAnd):
        return libsbml.FbcAnd(level, version, pkg_version)
    if isinstance(association, GeneProductOr):
        return libsbml.FbcOr(level, version, pkg_version)

    raise UnsupportedConstruct(
        "Unsupported gene product association '{0}'.".format(repr(association))
    )


def _encode_terms(node, association):
    """Fill ``node`` from ``association``, creating children in order.

    Each child node is created by the parent with the method matching the
    kind of the child term.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if isinstance(association, GeneProductRef):
        _check(
            node.setGeneProduct(association.gene_product),
            "set gene product reference '{0}'".format(association.gene_product),
        )
        return

    operator = "and" if isinstance(association, GeneProductAnd) else "or"
    for term in association.terms:
        if isinstance(term, GeneProductRef):
            child = node.createGeneProductRef()
        elif isinstance(term, GeneProductAnd):
            child = node.createAnd()
        elif isinstance(term, GeneProductOr):
            child = node.createOr()
        else:
            raise UnsupportedConstruct(
                "Unsupported term '{0}' in '{1}' association.".format(
                    repr(term), operator
                )
            )
        if _check(child, "create association term '{0}'".format(repr(term))):
            _encode_terms(child, term)


__all__ = (
    "decode_association",
    "encode_association",
)
