# -*- coding: utf-8 -*-
"""Contains utility functions to assist in various :mod:`fluxsbml` functions."""
import logging
import warnings
from copy import copy

from depinfo import print_dependencies


LOG_COLORS = {
    logging.CRITICAL: "\x1b[90m",
    logging.ERROR: "\x1b[91m",
    logging.WARNING: "\x1b[93m",
    logging.INFO: "\x1b[94m",
    logging.DEBUG: "\x1b[92m",
    -1: "\x1b[0m",
}
"""dict: Contains logger levels and corresponding color codes."""


# Public
def show_versions():
    """Print dependency information."""
    print_dependencies("fluxsbml")


def ensure_iterable(item):
    """Ensure the given item is returned as a list.

    Parameters
    ----------
    item : object
        The item to ensure is returned as an iterable. Strings are treated
        as a single item.

    """
    if item is None:
        item = list()
    if not hasattr(item, "__iter__") or isinstance(item, str):
        item = [item]

    return list(item)


def ensure_non_negative_value(value, exclude_zero=False):
    """Ensure provided value is a non-negative value, or ``None``.

    Parameters
    ----------
    value : float
        The value to ensure is non-negative.
    exclude_zero : bool
        Whether to also reject zero.

    Raises
    ------
    ValueError
        Occurs if the value is negative.

    """
    if value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError("Must be an int or float")
    if value < 0 or (exclude_zero and value == 0):
        raise ValueError(
            "Must be a postive number" if exclude_zero
            else "Must be a non-negative number"
        )

    return value


# Internal
def _check_kwargs(default_kwargs, kwargs):
    """Check the provided kwargs against the default values for kwargs."""
    if kwargs is None:
        return dict(default_kwargs)

    for key, value in default_kwargs.items():
        if key not in kwargs:
            kwargs[key] = value
            continue
        # Check the value type against the default.
        if value is None:
            continue
        type_ = type(value)
        if type_ == float:
            type_ = (float, int)
        if not isinstance(kwargs[key], type_):
            raise TypeError("'{0}' must be of type: {1}.".format(key, str(type_)))

    if len(kwargs) != len(default_kwargs):
        warnings.warn(
            "Unrecognized kwargs: {0}".format(
                str([key for key in kwargs if key not in default_kwargs])
            )
        )

    return kwargs


class ColorFormatter(logging.Formatter):
    """Colored Formatter for logging output.

    Based on
    http://uran198.github.io/en/python/2016/07/12/colorful-python-logging.html

    """

    def format(self, record, *args, **kwargs):
        """Set logger format."""
        new_record = copy(record)
        if new_record.levelno in LOG_COLORS:
            color, reset = LOG_COLORS[new_record.levelno], LOG_COLORS[-1]
            new_record.levelname = "{color}{level}:{reset}".format(
                color=color, level=new_record.levelname, reset=reset
            )
            new_record.msg = "{color}{msg}{reset}".format(
                color=color, msg=new_record.msg, reset=reset
            )

        return super(ColorFormatter, self).format(new_record, *args, **kwargs)


def _make_logger(name):
    """Make the logger instance and set the default format."""
    formatter = ColorFormatter("%(levelname)s %(message)s")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.addHandler(handler)
    return logger


__all__ = (
    "show_versions",
    "ensure_iterable",
    "ensure_non_negative_value",
    "LOG_COLORS",
    "ColorFormatter",
)
