# -*- coding: utf-8 -*-
"""
Accessors for reading attributes of :mod:`libsbml` objects.

SBML attributes are exposed by :mod:`libsbml` as a pair of methods, an
``isSet<Attribute>`` query and a ``get<Attribute>`` getter, where the getter
returns a default value when the attribute is not set. The ``get_optional_*``
functions combine both calls and return ``None`` for an unset attribute, so
a default value is never mistaken for a real one.

The :func:`get_string` function is used for required identifiers and raises
a :class:`~.MissingRequiredField` instead.

The :func:`_check` function is the write-side counterpart, turning
:mod:`libsbml` status codes into logged warnings.
"""
import libsbml

from fluxsbml.exceptions import MissingRequiredField
from fluxsbml.util.util import _make_logger


LOGGER = _make_logger(__name__)
"""logging.Logger: Logger for the :mod:`~fluxsbml.io.accessors` submodule."""


def get_string(sbase, attribute):
    """Return a required string attribute of an SBML object.

    Parameters
    ----------
    sbase : libsbml.SBase
        The SBML object.
    attribute : str
        The attribute name as used in the :mod:`libsbml` getter, e.g.
        ``"Id"`` for ``getId``.

    Returns
    -------
    str

    Raises
    ------
    MissingRequiredField
        If the attribute is unset or empty.

    """
    value = getattr(sbase, "get" + attribute)()
    if value is None or value == "":
        msg = "Required attribute '{0}' cannot be found or parsed in '{1}'".format(
            attribute, _describe(sbase)
        )
        raise MissingRequiredField(msg)

    return value


def get_optional_string(sbase, attribute):
    """Return a string attribute of an SBML object, or ``None`` if unset.

    Attributes without an ``isSet`` query are treated as unset when empty.

    """
    is_set = getattr(sbase, "isSet" + attribute, None)
    if is_set is not None and not is_set():
        return None
    value = getattr(sbase, "get" + attribute)()
    if value is None or value == "":
        return None

    return value


def get_optional_bool(sbase, attribute):
    """Return a boolean attribute of an SBML object, or ``None`` if unset."""
    return _get_optional(sbase, attribute, bool)


def get_optional_int(sbase, attribute):
    """Return an integer attribute of an SBML object, or ``None`` if unset."""
    return _get_optional(sbase, attribute, int)


def get_optional_double(sbase, attribute):
    """Return a real attribute of an SBML object, or ``None`` if unset."""
    return _get_optional(sbase, attribute, float)


def get_notes(sbase):
    """Return the serialized notes of an SBML object, or ``None``."""
    if not sbase.isSetNotes():
        return None
    return sbase.getNotesString() or None


def get_annotation(sbase):
    """Return the serialized annotation of an SBML object, or ``None``."""
    if not sbase.isSetAnnotation():
        return None
    return sbase.getAnnotationString() or None


def _get_optional(sbase, attribute, cast):
    """Return an attribute cast by ``cast`` if its ``isSet`` query is true.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if not getattr(sbase, "isSet" + attribute)():
        return None
    return cast(getattr(sbase, "get" + attribute)())


def _describe(sbase):
    """Return a description of an SBML object for messages.

    Warnings
    --------
    This method is intended for internal use only.

    """
    description = sbase.getElementName() if hasattr(sbase, "getElementName") else ""
    description = description or sbase.__class__.__name__
    for attr, label in (("Id", "id"), ("Name", "name"), ("MetaId", "metaId")):
        getter = getattr(sbase, "get" + attr, None)
        value = getter() if getter is not None else None
        if value:
            return "{0}' with {1} '{2}".format(description, label, value)

    return description


def _check(value, message):
    """Check the libsbml return value and log a warning on failure.

    If ``value`` is ``None``, the creation of an object failed. If ``value``
    is an integer, it is a :mod:`libsbml` status code and anything other than
    ``LIBSBML_OPERATION_SUCCESS`` is logged with the text :mod:`libsbml`
    gives for that code. Failures never raise, so the rest of a document can
    still be written.

    Returns
    -------
    bool
        Whether the operation succeeded.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if value is None:
        LOGGER.warning("LibSBML returned a null value trying to <%s>.", message)
        return False
    if isinstance(value, bool):
        if not value:
            LOGGER.warning("LibSBML reported failure trying to <%s>.", message)
        return value
    if isinstance(value, int) and value != libsbml.LIBSBML_OPERATION_SUCCESS:
        LOGGER.warning(
            "Error encountered trying to <%s>. LibSBML error code %s: %s",
            message,
            str(value),
            (libsbml.OperationReturnValue_toString(value) or "").strip(),
        )
        return False

    return True


def _for_id(sid):
    """Return a string specifying the object id for logger messages."""
    return " for '{0}'".format(sid)


__all__ = (
    "get_string",
    "get_optional_string",
    "get_optional_bool",
    "get_optional_int",
    "get_optional_double",
    "get_notes",
    "get_annotation",
)
