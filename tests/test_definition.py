"""
Test modification definitions and their enums.
"""

import pytest

from phrp_utils.exceptions import ModificationTypeNotSupported
from phrp_utils.modifications import ModificationDefinition, ModificationType, masses_match


def test_select_modification_type():
    assert ModificationType.select("s") is ModificationType.STATIC
    assert ModificationType.select("I") is ModificationType.ISOTOPIC
    assert ModificationType.select("Q") is ModificationType.UNKNOWN


def test_select_modification_type_strict():
    with pytest.raises(ModificationTypeNotSupported):
        ModificationType.select("Q", strict=True)


def test_static_kinds():
    assert ModificationType.TERMINAL_PEPTIDE_STATIC.is_static
    assert ModificationType.PROTEIN_TERMINUS_STATIC.is_static
    assert not ModificationType.DYNAMIC.is_static


def test_masses_match():
    assert masses_match(15.9949, 15.99491)
    assert not masses_match(1.0, 1.002, 3)
    assert masses_match(1.0, 1.002, 2)


def test_equivalence_ignores_symbol_and_residues():
    first = ModificationDefinition("*", 79.9663, "S", ModificationType.DYNAMIC, "Phosph")
    second = ModificationDefinition("#", 79.9663, "T", ModificationType.DYNAMIC, "Phosph")

    assert first.is_equivalent(second)
    assert not first.is_equivalent(second, consider_symbol=True)


def test_equivalence_requires_same_kind():
    dynamic = ModificationDefinition("*", 79.9663, "S", ModificationType.DYNAMIC, "Phosph")
    static = ModificationDefinition("-", 79.9663, "S", ModificationType.STATIC, "Phosph")
    assert not dynamic.is_equivalent(static)


def test_add_target_residues_preserves_order():
    definition = ModificationDefinition(target_residues="M")
    definition.add_target_residues("MCM")
    assert definition.target_residues == "MC"


def test_terminus_only_definitions():
    n_terminal = ModificationDefinition("#", 42.0106, "<", ModificationType.DYNAMIC)
    mixed = ModificationDefinition("#", 42.0106, "<K", ModificationType.DYNAMIC)
    terminal_static = ModificationDefinition("-", 42.0106, "<", ModificationType.TERMINAL_PEPTIDE_STATIC)

    assert not n_terminal.can_affect_peptide_residues()
    assert n_terminal.can_affect_peptide_or_protein_terminus()
    assert mixed.can_affect_peptide_residues()
    assert not terminal_static.can_affect_peptide_residues()


def test_copy_resets_occurrence_count():
    definition = ModificationDefinition("*", 79.9663, "STY", ModificationType.DYNAMIC, "Phosph")
    definition.occurrence_count = 4
    duplicate = definition.copy()

    assert duplicate is not definition
    assert duplicate.occurrence_count == 0
    assert duplicate.is_equivalent(definition, consider_symbol=True)


def test_repr():
    definition = ModificationDefinition("*", 79.9663, "STY", ModificationType.DYNAMIC, "Phosph")
    assert repr(definition) == "DYNAMIC Phosph, 79.9663; STY"
