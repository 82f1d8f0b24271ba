# -*- coding: utf-8 -*-
from fluxsbml.util.util import show_versions
from fluxsbml.util.matrix import flux_bounds, flux_objective, stoichiometry_matrix


__all__ = ()
