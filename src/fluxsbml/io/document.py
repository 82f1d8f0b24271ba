# -*- coding: utf-8 -*-
r"""
Lifecycle of the :mod:`libsbml` documents behind reading and writing.

A :class:`DocumentHandle` owns one :class:`libsbml.SBMLDocument` from the
moment it is opened or created until it is freed. Handles are context
managers, and every read and write in :mod:`fluxsbml` frees its handle on
every exit path, including failures during extraction or serialization.

Documents are opened with :func:`open_document`, which fails with a
:class:`~.ParseError` when :mod:`libsbml` attached diagnostics of a watched
severity while parsing. Empty documents for writing are made by
:func:`create_document`.

The conversion callbacks :func:`set_level_and_version`,
:func:`libsbml_convert`, and :data:`convert_simplify_math` can be passed to
:func:`~.read_sbml_model` to transform a document in place after it is
opened and before the model is extracted::

    model = read_sbml_model(
        "model.xml", conversion=set_level_and_version(3, 1)
    )

"""
import os
from pathlib import Path

import libsbml
from cobra.io.sbml import _error_string

from fluxsbml.core.configuration import SBMLConfiguration
from fluxsbml.exceptions import ConversionError, ParseError, SerializationError
from fluxsbml.io.accessors import _check
from fluxsbml.util.util import _make_logger


LOGGER = _make_logger(__name__)
"""logging.Logger: Logger for the :mod:`~fluxsbml.io.document` submodule."""

SBMLCONFIGURATION = SBMLConfiguration()

FBC_VERSION = 2
"""int: Version of the SBML 'fbc' package extension that is written."""


class DocumentHandle:
    """Scoped owner of a :class:`libsbml.SBMLDocument`.

    Parameters
    ----------
    document : libsbml.SBMLDocument
        The document to own.

    Notes
    -----
    Freeing drops the reference to the document, after which :mod:`libsbml`
    releases it together with every object it owns. A handle is freed at
    most once; further calls to :meth:`free` do nothing.

    """

    def __init__(self, document):
        """Initialize the DocumentHandle."""
        self._document = document

    @property
    def document(self):
        """Return the owned :class:`libsbml.SBMLDocument`.

        Raises
        ------
        ValueError
            If the handle has already been freed.

        """
        if self._document is None:
            raise ValueError("The SBML document has already been freed.")
        return self._document

    @property
    def is_freed(self):
        """Return whether the handle has been freed."""
        return self._document is None

    def error_messages(self, severities):
        """Return the diagnostic messages of the given severities.

        Parameters
        ----------
        severities : iterable of str
            Severity names such as ``"Fatal"`` and ``"Error"``.

        Returns
        -------
        list
            Formatted messages in the order :mod:`libsbml` reported them.

        """
        document = self.document
        severities = set(severities)
        messages = []
        for k in range(document.getNumErrors()):
            error = document.getError(k)
            if error.getSeverityAsString() in severities:
                messages.append(_error_string(error, k=k))

        return messages

    def free(self):
        """Release the owned document."""
        if self._document is not None:
            self._document = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.free()
        return False

    def __repr__(self):
        """Override of default :func:`repr` implementation.

        Warnings
        --------
        This method is intended for internal use only.

        """
        state = "freed" if self.is_freed else "open"
        return "<%s %s at 0x%x>" % (self.__class__.__name__, state, id(self))


def open_document(filename, report_severities=None):
    """Open an SBML document and check its diagnostics.

    Parameters
    ----------
    filename : path to SBML file, SBML string, or SBML file handle
        The SBML to read. A string containing ``"<sbml"`` is parsed as SBML
        content, any other string or :class:`pathlib.Path` as a path.
    report_severities : iterable of str, optional
        The diagnostic severities that make opening fail. Default is
        :attr:`.SBMLConfiguration.report_severities`.

    Returns
    -------
    DocumentHandle
        The handle of the opened document. The caller must free it.

    Raises
    ------
    ParseError
        If the input cannot be read, or :mod:`libsbml` reported a diagnostic
        with one of ``report_severities``. The document is freed first.

    """
    if report_severities is None:
        report_severities = SBMLCONFIGURATION.report_severities

    handle = DocumentHandle(_read_document(filename))
    try:
        messages = handle.error_messages(report_severities)
        if messages:
            raise ParseError(
                "Opening SBML document has reported errors:\n\t"
                + "\n\t".join(messages)
            )
    except Exception:
        handle.free()
        raise

    return handle


def create_document(level=None, version=None, fbc=False):
    """Create an empty SBML document for writing.

    Parameters
    ----------
    level : int, optional
        The SBML level. Default is taken from the :class:`.SBMLConfiguration`.
    version : int, optional
        The SBML version. Default is taken from the
        :class:`.SBMLConfiguration`.
    fbc : bool
        Whether to register the 'fbc' package extension namespace. The
        package is declared not required, so core SBML readers can still read
        the model. Default is ``False``.

    Returns
    -------
    DocumentHandle
        The handle of the new document. The caller must free it.

    Raises
    ------
    SerializationError
        If :mod:`libsbml` cannot create a document for the namespaces.

    """
    default_level, default_version = (
        SBMLCONFIGURATION.fbc_level_version if fbc else SBMLCONFIGURATION.level_version
    )
    level = default_level if level is None else level
    version = default_version if version is None else version

    sbml_ns = libsbml.SBMLNamespaces(level, version)
    if fbc:
        _check(
            sbml_ns.addPackageNamespace("fbc", FBC_VERSION),
            "add fbc-v{0} package namespace".format(FBC_VERSION),
        )
    try:
        document = libsbml.SBMLDocument(sbml_ns)
    except ValueError as e:
        raise SerializationError(
            "Could not create SBMLDocument due to the following:\n" + str(e)
        )

    if fbc:
        _check(
            document.setPackageRequired("fbc", False),
            "set fbc extension required to false",
        )

    return DocumentHandle(document)


def set_level_and_version(level, version):
    """Return a conversion callback changing the document level and version.

    Parameters
    ----------
    level : int
        The target SBML level.
    version : int
        The target SBML version.

    Returns
    -------
    callable
        Callback taking a :class:`libsbml.SBMLDocument`. It raises a
        :class:`~.ConversionError` if :mod:`libsbml` cannot convert.

    """

    def _set_level_and_version(document):
        if not document.setLevelAndVersion(level, version):
            raise ConversionError(
                "Conversion to SBML L{0}V{1} failed.".format(level, version)
            )

    return _set_level_and_version


def libsbml_convert(conversions):
    """Return a conversion callback running :mod:`libsbml` converters.

    Parameters
    ----------
    conversions : iterable or dict
        Names of :mod:`libsbml` converters, e.g.
        ``"expandFunctionDefinitions"``, or a ``dict`` mapping converter names
        to a ``dict`` of additional converter options. Converters run one at a
        time in the given order.

    Returns
    -------
    callable
        Callback taking a :class:`libsbml.SBMLDocument`. It raises a
        :class:`~.ConversionError` on the first converter that fails.

    """
    if isinstance(conversions, dict):
        conversions = list(conversions.items())
    else:
        conversions = [(name, {}) for name in conversions]

    def _libsbml_convert(document):
        for converter, options in conversions:
            props = libsbml.ConversionProperties()
            props.addOption(converter, True)
            for key, value in options.items():
                props.addOption(key, value)
            result = document.convert(props)
            if result != libsbml.LIBSBML_OPERATION_SUCCESS:
                raise ConversionError(
                    "Conversion '{0}' failed: {1}".format(
                        converter,
                        (libsbml.OperationReturnValue_toString(result) or "").strip(),
                    )
                )
            LOGGER.debug("Applied conversion '%s'.", converter)

    return _libsbml_convert


convert_simplify_math = libsbml_convert(
    [
        "promoteLocalParameters",
        "expandFunctionDefinitions",
        "expandInitialAssignments",
    ]
)
"""callable: Conversion callback that inlines function definitions and
initial assignments and promotes kinetic law local parameters to globals."""


def _read_document(filename):
    """Read an :class:`libsbml.SBMLDocument` from a path, string, or handle.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if isinstance(filename, Path):
        filename = str(filename.absolute())

    if isinstance(filename, str):
        if "<sbml" in filename:
            return libsbml.readSBMLFromString(filename)
        if not os.path.exists(filename):
            raise ParseError(
                "The path '{0}' does not exist, or is not an SBML string.".format(
                    filename
                )
            )
        return libsbml.readSBMLFromFile(filename)

    if hasattr(filename, "read"):
        return libsbml.readSBMLFromString(filename.read())

    raise ParseError(
        "Input type '{0}' for filename is not supported.".format(type(filename))
    )


__all__ = (
    "FBC_VERSION",
    "DocumentHandle",
    "open_document",
    "create_document",
    "set_level_and_version",
    "libsbml_convert",
    "convert_simplify_math",
)
