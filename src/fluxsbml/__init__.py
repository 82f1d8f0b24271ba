# -*- coding: utf-8 -*-
import warnings as _warnings
from os import name as _name
from os.path import abspath as _abspath
from os.path import dirname as _dirname

from fluxsbml import io
from fluxsbml.core import (
    GeneProduct,
    GeneProductAnd,
    GeneProductOr,
    GeneProductRef,
    Model,
    Reaction,
    SBMLConfiguration,
    Species,
    Unit,
)
from fluxsbml.exceptions import (
    MissingRequiredField,
    ParseError,
    SBMLError,
    SerializationError,
    UnsupportedConstruct,
)
from fluxsbml.io import read_sbml_model, validate_sbml_model, write_sbml_model
from fluxsbml.util import show_versions, stoichiometry_matrix


__version__ = "0.1.0"

# set the warning format to be prettier and fit on one line
_FLUXSBML_PATH = _dirname(_abspath(__file__))
if _name == "posix":
    _WARNING_BASE = "%s:%s \x1b[1;31m%s\x1b[0m: %s\n"  # colors
else:
    _WARNING_BASE = "%s:%s %s: %s\n"


def _warn_format(message, category, filename, lineno, file=None, line=None):
    """Set the warning format to be prettier and fit on one line."""
    shortname = filename.replace(_FLUXSBML_PATH, "fluxsbml", 1)
    return _WARNING_BASE % (shortname, lineno, category.__name__, message)


_warnings.formatwarning = _warn_format

__all__ = ("_warn_format",)
