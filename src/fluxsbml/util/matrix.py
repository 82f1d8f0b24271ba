# -*- coding: utf-8 -*-
"""
Contains matrix views of the flux balance data of a :class:`~.Model`.

To assist with various matrix operations using different packages, the
following values can be provided to the ``array_type`` argument to set the
return type of the output. Valid matrix types include:

* ``'dense'`` for a :class:`numpy.ndarray`
* ``'dok'`` for a :class:`scipy.sparse.dok_matrix`
* ``'lil'`` for a :class:`scipy.sparse.lil_matrix`
* ``'DataFrame'`` for a :class:`pandas.DataFrame`

For all matrix types, species are the row indicies and reactions are the
column indicies, both in the insertion order of the model mappings. Species
that only appear in reaction stoichiometries are appended after the species
of the model.

"""
import numpy as np
import pandas as pd
from scipy.sparse import dok_matrix, lil_matrix


_ARRAY_TYPES = ["dense", "dok", "lil", "DataFrame"]


# Public
def stoichiometry_matrix(model, array_type="dense", dtype=None):
    """Create the stoichiometric matrix for a given model.

    The rows represent the species and the columns represent the reactions.
    ``S[i, j]`` therefore contains the quantity of species ``i`` produced
    (positive) or consumed (negative) by reaction ``j``.

    Parameters
    ----------
    model : Model
        The :class:`~.Model` to construct the matrix for.
    array_type : str
        A string identifiying the desired format for the returned matrix.
        Default is ``'dense'``. See the :mod:`~.matrix` module documentation
        for more information on the ``array_type``.
    dtype : data-type, optional
        The desired array data-type for the matrix. Default is
        :class:`numpy.float64`.

    Returns
    -------
    tuple (species_ids, reaction_ids, matrix)
    species_ids : list
        The species identifiers of the rows.
    reaction_ids : list
        The reaction identifiers of the columns.
    matrix : matrix of type ``array_type``
        The stoichiometric matrix for the model.

    """
    constructor, array_type, dtype = _get_matrix_constructor(array_type, dtype)

    reaction_ids = list(model.reactions)
    species_ids = list(model.species)
    for reaction in model.reactions.values():
        for sid in reaction.stoichiometry:
            if sid not in species_ids:
                species_ids.append(sid)

    s_ind = {sid: i for i, sid in enumerate(species_ids)}
    stoich_mat = constructor((len(species_ids), len(reaction_ids)), dtype=dtype)
    for j, reaction in enumerate(model.reactions.values()):
        for sid, coefficient in reaction.stoichiometry.items():
            stoich_mat[s_ind[sid], j] = coefficient

    if array_type == "DataFrame":
        stoich_mat = pd.DataFrame(stoich_mat, index=species_ids, columns=reaction_ids)

    return species_ids, reaction_ids, stoich_mat


def flux_bounds(model):
    """Return the flux bound values of the model reactions.

    Unset bounds are ``-inf`` for lower and ``inf`` for upper bounds. Bound
    units are ignored.

    Parameters
    ----------
    model : Model
        The :class:`~.Model` to get the bounds for.

    Returns
    -------
    tuple (lower_bounds, upper_bounds)
        Two numpy arrays in reaction order.

    """
    lower_bounds = np.array(
        [
            -np.inf if r.lower_bound is None else r.lower_bound[0]
            for r in model.reactions.values()
        ],
        dtype=np.float64,
    )
    upper_bounds = np.array(
        [
            np.inf if r.upper_bound is None else r.upper_bound[0]
            for r in model.reactions.values()
        ],
        dtype=np.float64,
    )
    return lower_bounds, upper_bounds


def flux_objective(model):
    """Return the objective coefficients of the model reactions.

    Parameters
    ----------
    model : Model
        The :class:`~.Model` to get the objective for.

    Returns
    -------
    numpy.ndarray
        The coefficients in reaction order.

    """
    return np.array(
        [r.objective_coefficient for r in model.reactions.values()], dtype=np.float64
    )


# Internal
def _get_matrix_constructor(
    array_type, dtype, array_type_default="dense", dtype_default=np.float64
):
    """Create a matrix constructor for the specified matrix type.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if array_type is None:
        array_type = array_type_default
    elif array_type not in _ARRAY_TYPES:
        raise ValueError("Unrecognized array_type.")

    if dtype is None:
        dtype = dtype_default

    matrix_constructor = dict(
        zip(_ARRAY_TYPES, [np.zeros, dok_matrix, lil_matrix, np.zeros])
    )
    constructor = matrix_constructor[array_type]
    return (constructor, array_type, dtype)


__all__ = (
    "stoichiometry_matrix",
    "flux_bounds",
    "flux_objective",
)
