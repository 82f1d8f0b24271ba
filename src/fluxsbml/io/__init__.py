# -*- coding: utf-8 -*-
from fluxsbml.io.document import (
    DocumentHandle,
    convert_simplify_math,
    create_document,
    libsbml_convert,
    open_document,
    set_level_and_version,
)
from fluxsbml.io.math import FormulaMath, SympyMath
from fluxsbml.io.reader import read_sbml_model
from fluxsbml.io.validation import validate_sbml_model
from fluxsbml.io.writer import write_sbml_model


__all__ = ()
