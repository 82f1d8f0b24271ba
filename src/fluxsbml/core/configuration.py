# -*- coding: utf-8 -*-
"""
Define the global configuration values through the :class:`SBMLConfiguration`.

Involved in reading SBML:
    * :meth:`~SBMLBaseConfiguration.report_severities`
    * :meth:`~SBMLBaseConfiguration.lower_bound`
    * :meth:`~SBMLBaseConfiguration.upper_bound`

Involved in writing SBML:
    * :meth:`~SBMLBaseConfiguration.level_version`
    * :meth:`~SBMLBaseConfiguration.fbc_level_version`

Notes
-----
The math codec used for kinetic laws, rules, and events is not part of the
configuration. It is always passed to the reader and writer functions.

"""
from cobra.core.singleton import Singleton

from fluxsbml.util.util import ensure_iterable


SEVERITIES = ("Info", "Warning", "Error", "Fatal")
"""tuple: Diagnostic severity names reported by :mod:`libsbml`."""


class SBMLBaseConfiguration:
    """Define global configuration values honored by :mod:`fluxsbml` functions.

    Notes
    -----
    The :class:`SBMLConfiguration` should always be used over the
    :class:`SBMLBaseConfiguration` in order for global configuration to work
    as intended.

    """

    def __init__(self):
        """Initialize SBMLBaseConfiguration."""
        # Reading options
        self._report_severities = ("Fatal", "Error")
        self._lower_bound = float("-inf")
        self._upper_bound = float("inf")

        # Writing options
        self._level_version = (3, 2)
        self._fbc_level_version = (3, 1)

    @property
    def report_severities(self):
        """Get or set the severities treated as fatal when opening documents.

        Parameters
        ----------
        severities : iterable of str
            Severity names from ``"Info"``, ``"Warning"``, ``"Error"``, and
            ``"Fatal"``. An empty iterable disables the check entirely.

        """
        return getattr(self, "_report_severities")

    @report_severities.setter
    def report_severities(self, severities):
        """Set the severities treated as fatal when opening documents."""
        severities = tuple(ensure_iterable(severities))
        unknown = [s for s in severities if s not in SEVERITIES]
        if unknown:
            raise ValueError(
                "Unrecognized severities {0}, must be in {1}.".format(
                    str(unknown), str(SEVERITIES)
                )
            )
        setattr(self, "_report_severities", severities)

    @property
    def lower_bound(self):
        """Get or set the lower bound for reactions without any bound info.

        Parameters
        ----------
        bound : float
            The lower flux bound value.

        """
        return getattr(self, "_lower_bound")

    @lower_bound.setter
    def lower_bound(self, bound):
        """Set the default lower bound."""
        if bound > self.upper_bound:
            raise ValueError(
                "lower_bound '{0}' cannot exceed upper_bound '{1}'.".format(
                    bound, self.upper_bound
                )
            )
        setattr(self, "_lower_bound", float(bound))

    @property
    def upper_bound(self):
        """Get or set the upper bound for reactions without any bound info.

        Parameters
        ----------
        bound : float
            The upper flux bound value.

        """
        return getattr(self, "_upper_bound")

    @upper_bound.setter
    def upper_bound(self, bound):
        """Set the default upper bound."""
        if bound < self.lower_bound:
            raise ValueError(
                "upper_bound '{0}' cannot be less than lower_bound '{1}'.".format(
                    bound, self.lower_bound
                )
            )
        setattr(self, "_upper_bound", float(bound))

    @property
    def bounds(self):
        """Get or set the default lower and upper bounds as a tuple."""
        return (self.lower_bound, self.upper_bound)

    @bounds.setter
    def bounds(self, bounds):
        """Set the default lower and upper bounds."""
        lower_bound, upper_bound = bounds
        # Widen first so the ordering checks in the setters hold.
        setattr(self, "_lower_bound", float("-inf"))
        setattr(self, "_upper_bound", float("inf"))
        self.upper_bound = upper_bound
        self.lower_bound = lower_bound

    @property
    def level_version(self):
        """Get or set the SBML level and version of plain written documents.

        Parameters
        ----------
        level_version : tuple
            A ``tuple`` of ints ``(level, version)``.

        """
        return getattr(self, "_level_version")

    @level_version.setter
    def level_version(self, level_version):
        """Set the SBML level and version of plain written documents."""
        setattr(self, "_level_version", self._validate_level_version(level_version))

    @property
    def fbc_level_version(self):
        """Get or set the SBML level and version of FBC documents.

        Parameters
        ----------
        level_version : tuple
            A ``tuple`` of ints ``(level, version)``.

        """
        return getattr(self, "_fbc_level_version")

    @fbc_level_version.setter
    def fbc_level_version(self, level_version):
        """Set the SBML level and version of FBC documents."""
        setattr(
            self, "_fbc_level_version", self._validate_level_version(level_version)
        )

    @staticmethod
    def _validate_level_version(level_version):
        """Return the level and version as a tuple of ints.

        Warnings
        --------
        This method is intended for internal use only.

        """
        level, version = level_version
        if level != 3:
            raise ValueError("Only SBML Level 3 documents are written.")
        return (int(level), int(version))

    def __repr__(self):
        """Override default :func:`repr` for the SBMLConfiguration.

        Warnings
        --------
        This method is intended for internal use only.

        """
        return """SBMLConfiguration:
        report severities: {report_severities}
        lower_bound: {lower_bound}
        upper_bound: {upper_bound}
        level and version: L{level_version[0]}V{level_version[1]}
        fbc level and version: L{fbc_level_version[0]}V{fbc_level_version[1]}""".format(
            report_severities=", ".join(self.report_severities),
            lower_bound=self.lower_bound,
            upper_bound=self.upper_bound,
            level_version=self.level_version,
            fbc_level_version=self.fbc_level_version,
        )


class SBMLConfiguration(SBMLBaseConfiguration, metaclass=Singleton):
    """Define the configuration to be :class:`.Singleton` based."""


__all__ = (
    "SEVERITIES",
    "SBMLConfiguration",
    "SBMLBaseConfiguration",
)
