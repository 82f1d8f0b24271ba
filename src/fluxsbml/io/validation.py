# -*- coding: utf-8 -*-
"""Validate SBML documents with :mod:`libsbml` and the :mod:`fluxsbml` reader."""
import logging
from io import StringIO

import libsbml
from cobra.io.sbml import _error_string

from fluxsbml.exceptions import SBMLError
from fluxsbml.io import reader
from fluxsbml.io.document import open_document
from fluxsbml.util.util import _make_logger


LOGGER = _make_logger(__name__)
"""logging.Logger: Logger for the :mod:`~fluxsbml.io.validation` submodule."""

ERROR_KEYS = (
    "SBML_FATAL",
    "SBML_ERROR",
    "SBML_SCHEMA_ERROR",
    "SBML_WARNING",
    "FLUXSBML_FATAL",
    "FLUXSBML_ERROR",
    "FLUXSBML_WARNING",
)
"""tuple: Keys of the error groups returned by :func:`validate_sbml_model`."""


def validate_sbml_model(
    filename,
    internal_consistency=True,
    check_units_consistency=False,
    check_modeling_practice=False,
    **kwargs
):
    """Validate the SBML model and return the model along with the errors.

    ``kwargs`` are passed to :func:`~.extract_model`.

    Parameters
    ----------
    filename : path to SBML file, SBML string, or SBML file handle
        The SBML to validate.
    internal_consistency : bool
        Check internal consistency. Default is ``True``.
    check_units_consistency : bool
        Check consistency of units. Default is ``False``.
    check_modeling_practice : bool
        Check modeling practice. Default is ``False``.
    **kwargs
        set_missing_bounds :
            ``bool`` indicating whether to set missing bounds to the
            default bounds from the :class:`~.SBMLConfiguration`.

            Default is ``True``.
        number :
            In which data type should the stoichiometry be parsed. Can be
            ``float`` or ``int``.

            Default is ``float``.

    Returns
    -------
    tuple (model, errors)
    model : :class:`~.Model` or ``None``
        The model if the document could be read, otherwise ``None``.
    errors : dict
        Warnings and errors grouped by their respective types. ``SBML_*``
        groups come from the :mod:`libsbml` validators, ``FLUXSBML_*`` groups
        from reading the model.

    """
    errors = {key: [] for key in ERROR_KEYS}
    # Open without severity filtering, severities are grouped below.
    with open_document(filename, report_severities=()) as handle:
        doc = handle.document
        doc.setConsistencyChecks(
            libsbml.LIBSBML_CAT_UNITS_CONSISTENCY, check_units_consistency
        )
        doc.setConsistencyChecks(
            libsbml.LIBSBML_CAT_MODELING_PRACTICE, check_modeling_practice
        )
        if internal_consistency:
            doc.checkInternalConsistency()
        doc.checkConsistency()

        for k in range(doc.getNumErrors()):
            e = doc.getError(k)
            msg = _error_string(e, k=k)
            sev = e.getSeverity()
            if sev == libsbml.LIBSBML_SEV_FATAL:
                errors["SBML_FATAL"].append(msg)
            elif sev == libsbml.LIBSBML_SEV_ERROR:
                errors["SBML_ERROR"].append(msg)
            elif sev == libsbml.LIBSBML_SEV_SCHEMA_ERROR:
                errors["SBML_SCHEMA_ERROR"].append(msg)
            elif sev == libsbml.LIBSBML_SEV_WARNING:
                errors["SBML_WARNING"].append(msg)

        model = _read_with_log_capture(doc, errors, **kwargs)

    for keys, kind in (
        (["SBML_FATAL", "SBML_ERROR", "SBML_SCHEMA_ERROR"], "SBML errors"),
        (["SBML_WARNING"], "SBML warnings"),
        (["FLUXSBML_FATAL", "FLUXSBML_ERROR"], "Reader errors"),
        (["FLUXSBML_WARNING"], "Reader warnings"),
    ):
        for key in keys:
            if errors[key]:
                LOGGER.error("%s in validation, check error log for details.", kind)
                break

    return model, errors


def _read_with_log_capture(doc, errors, **kwargs):
    """Read the model, collecting reader log records into ``errors``.

    Warnings
    --------
    This method is intended for internal use only.

    """
    log_stream = StringIO()
    stream_handler = logging.StreamHandler(log_stream)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))
    stream_handler.setLevel(logging.INFO)
    reader.LOGGER.addHandler(stream_handler)
    reader.LOGGER.propagate = False

    try:
        if not doc.isSetModel():
            errors["FLUXSBML_ERROR"].append("SBML document contains no model")
            return None
        model = reader.extract_model(doc.getModel(), **kwargs)
    except SBMLError as e:
        errors["FLUXSBML_ERROR"].append(str(e))
        return None
    except Exception as e:
        errors["FLUXSBML_FATAL"].append(str(e))
        return None
    finally:
        reader.LOGGER.removeHandler(stream_handler)
        reader.LOGGER.propagate = True

    for record in log_stream.getvalue().split("\n"):
        error_type, _, error_msg = record.partition(":")
        if error_type == "WARNING":
            errors["FLUXSBML_WARNING"].append(error_msg)
        elif error_type == "ERROR":
            errors["FLUXSBML_ERROR"].append(error_msg)

    return model


__all__ = ("validate_sbml_model",)
