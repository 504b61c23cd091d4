"""
Test configuration and fixtures for phrp_utils tests.
"""

import pytest

from phrp_utils.modifications import ModificationRegistry, ModificationType
from phrp_utils.peptide import PeptideMassCalculator

MOD_DEFINITIONS = "\n".join(
    [
        "*\t79.9663\tSTY\tD\tPhosph",
        "#\t15.9949\tM\tD\tPlus1Oxy",
        "C\t57.0215\tC\tS\tIodoAcet",
        "-\t42.0106\t<\tT\tAcetyl",
        "X\tabc\tK\tD",
        "ab\t1.0\tK\tD",
        "@\t0.9840\tNQ\tZ",
    ]
)


@pytest.fixture
def registry():
    """An empty registry with the default mass correction tags."""
    return ModificationRegistry()


@pytest.fixture
def phospho_registry():
    """A registry holding a single dynamic phosphorylation on S, T and Y."""
    registry = ModificationRegistry()
    registry.add_modification("*", 79.9663, "STY", ModificationType.DYNAMIC)
    return registry


@pytest.fixture
def calculator():
    return PeptideMassCalculator()


@pytest.fixture
def mod_definitions_file(tmp_path):
    path = tmp_path / "mod_defs.txt"
    path.write_text(MOD_DEFINITIONS + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def loaded_registry(mod_definitions_file):
    """A registry loaded from the modification definitions file above."""
    registry = ModificationRegistry()
    registry.read_modification_definitions_file(mod_definitions_file)
    return registry
