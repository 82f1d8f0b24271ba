# -*- coding: utf-8 -*-
from fluxsbml.core.association import (
    GeneProductAnd,
    GeneProductAssociation,
    GeneProductOr,
    GeneProductRef,
    association_from_gpr,
    association_from_string,
)
from fluxsbml.core.configuration import SBMLConfiguration
from fluxsbml.core.model import (
    FBC_BOUND_UNIT,
    AlgebraicRule,
    AssignmentRule,
    Compartment,
    Constraint,
    Event,
    EventAssignment,
    FunctionDefinition,
    GeneProduct,
    Model,
    Objective,
    Parameter,
    RateRule,
    Reaction,
    Species,
    Trigger,
)
from fluxsbml.core.units import Unit, print_defined_unit_values, unit_scale_factor


__all__ = ()
