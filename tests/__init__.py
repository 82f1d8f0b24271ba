# -*- coding: utf-8 -*-
"""
Module containing functions for testing various :mod:`fluxsbml` methods.

There are functions for viewing and loading the SBML documents kept in the
test data directory, either as raw XML strings or as :class:`~.Model`
objects read through the :mod:`~fluxsbml.io` submodule. Documents whose file
names contain ``"invalid"`` are broken on purpose and are not listed.
"""
from os import listdir
from os.path import abspath, dirname, join

from fluxsbml.io import read_sbml_model


FILE_EXTENSIONS = [".xml"]
"""list: list of recognized file extensions."""

DATA_DIR = join(abspath(join(dirname(abspath(__file__)), "data", "")))
"""str: The directory location of the test data files."""

MODELS_DIR = join(DATA_DIR, "models", "")
"""str: The directory location of the SBML test documents."""


def create_test_model(model_name, **kwargs):
    """Return a :class:`~.Model` for testing.

    Parameters
    ----------
    model_name: str
        The name of the test model to load. Valid model names can be printed
        and viewed using the :func:`view_test_models` function.
    **kwargs
        Passed on to :func:`~.read_sbml_model`.

    Returns
    -------
    Model
        The loaded :class:`~.Model`

    """
    return read_sbml_model(_get_filepath(model_name), **kwargs)


def load_test_document(model_name):
    """Return the XML text of a test document, including invalid ones."""
    with open(_get_filepath(model_name), "r", encoding="utf-8") as handle:
        return handle.read()


def view_test_models():
    """Return the test models that can be loaded."""
    return _get_directory_files(MODELS_DIR)


def _get_filepath(model_name):
    """Return the path to a test document.

    Warnings
    --------
    This method is intended for internal use only.

    """
    if not model_name.endswith(".xml"):
        model_name = model_name + ".xml"
    return join(MODELS_DIR, model_name)


def _get_directory_files(directory):
    """Return a list of files in a given directory."""
    all_filenames = []
    for filename in listdir(directory):
        # Do not include invalid/broken models used in testing suite.
        if "invalid" in filename:
            continue
        if any(list(map(lambda x: filename.endswith(x), FILE_EXTENSIONS))):
            all_filenames.append(filename)

    return sorted(all_filenames)


__all__ = (
    "FILE_EXTENSIONS",
    "DATA_DIR",
    "MODELS_DIR",
    "create_test_model",
    "load_test_document",
    "view_test_models",
)
