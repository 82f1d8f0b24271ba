# -*- coding: utf-8 -*-
"""This module contains Exceptions specific to :mod:`fluxsbml` module."""


class SBMLError(Exception):
    """Base class for all :mod:`fluxsbml` errors."""


class ParseError(SBMLError):
    """Document could not be opened or failed severity-filtered validation."""


class ConversionError(ParseError):
    """A document conversion callback reported failure."""


class MissingRequiredField(SBMLError):
    """A required identifier or attribute is absent."""


class UnsupportedConstruct(SBMLError):
    """Structurally valid input that cannot be represented."""


class SerializationError(SBMLError):
    """Writing the document to its target failed."""


__all__ = (
    "SBMLError",
    "ParseError",
    "ConversionError",
    "MissingRequiredField",
    "UnsupportedConstruct",
    "SerializationError",
)
