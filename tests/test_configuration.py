# -*- coding: utf-8 -*-
"""Tests for the global SBMLConfiguration."""
import pytest

from fluxsbml.core.configuration import SBMLBaseConfiguration, SBMLConfiguration


def test_configuration_is_singleton():
    assert SBMLConfiguration() is SBMLConfiguration()


def test_configuration_defaults():
    config = SBMLBaseConfiguration()
    assert config.report_severities == ("Fatal", "Error")
    assert config.bounds == (float("-inf"), float("inf"))
    assert config.level_version == (3, 2)
    assert config.fbc_level_version == (3, 1)


def test_report_severities(configuration):
    configuration.report_severities = "Warning"
    assert configuration.report_severities == ("Warning",)
    configuration.report_severities = []
    assert configuration.report_severities == ()
    with pytest.raises(ValueError):
        configuration.report_severities = ["Severe"]


def test_bounds(configuration):
    configuration.bounds = (-1000, 1000)
    assert configuration.bounds == (-1000.0, 1000.0)
    configuration.lower_bound = -10
    assert configuration.lower_bound == -10.0
    with pytest.raises(ValueError):
        configuration.lower_bound = 2000
    with pytest.raises(ValueError):
        configuration.upper_bound = -2000


def test_level_version(configuration):
    configuration.level_version = (3, 1)
    assert configuration.level_version == (3, 1)
    with pytest.raises(ValueError):
        configuration.level_version = (2, 4)
    with pytest.raises(ValueError):
        configuration.fbc_level_version = (1, 2)


def test_configuration_repr(configuration):
    text = repr(configuration)
    assert "report severities: Fatal, Error" in text
    assert "L3V2" in text
    assert "L3V1" in text
