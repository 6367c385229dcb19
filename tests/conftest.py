# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures for test suite.

This module provides:
- Transformer specs shared across geometry, writer and CLI tests
- Deterministic uuid factories
- Deterministic test environment setup
"""
from __future__ import annotations

import os

import pytest

from coilgen.kicad import UuidFactory, deterministic_uuid_factory
from coilgen.spec import TransformerSpec, get_preset


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest environment for determinism."""
    deterministic_env = {
        "LC_ALL": "C",
        "LANG": "C",
        "TZ": "UTC",
        "PYTHONHASHSEED": "0",
    }
    for key, value in deterministic_env.items():
        os.environ.setdefault(key, value)


# ---------------------------------------------------------------------------
# Fixtures: Specs
# ---------------------------------------------------------------------------


@pytest.fixture
def default_spec() -> TransformerSpec:
    """The default CurrSensTrans1 preset."""
    return get_preset()


@pytest.fixture
def t1_spec() -> TransformerSpec:
    """Reference transformer: 3 mm inner radius, 0.4 mm step, 9 half-turns."""
    return TransformerSpec(
        footprint_name="T1",
        inner_radius_nm=3_000_000,
        step_nm=400_000,
        half_turns_count=9,
        trace_width1_nm=160_000,
        trace_width2_nm=80_000,
        end_radius_nm=800_000,
        pad_size_nm=1_000_000,
        pad_drill_nm=600_000,
    )


@pytest.fixture
def no_cutout_spec(t1_spec: TransformerSpec) -> TransformerSpec:
    """T1 with both the central hole and the corner reliefs disabled."""
    return t1_spec.model_copy(update={"internal_cut_hole_radius_nm": 0, "corner_cut_hole_size_nm": 0})


# ---------------------------------------------------------------------------
# Fixtures: Unique ids
# ---------------------------------------------------------------------------


@pytest.fixture
def uuid_factory() -> UuidFactory:
    """Reproducible uuid source."""
    return deterministic_uuid_factory("tests")
