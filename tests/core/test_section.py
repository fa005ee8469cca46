# tests/core/test_section.py
"""
Testes da árvore de configuração (ConfigurationSection).

Os testes asseguram que:
- filhos seguem a ordem natural (numéricos primeiro, numericamente)
- chaves são comparadas sem distinção de caixa
- seções ausentes são vazias, nunca None
- `from_mapping` e `from_flat` produzem a mesma árvore
"""

import pytest

from callbind import ConfigurationSection


def test_numeric_children_are_ordered_numerically():
    root = ConfigurationSection.from_flat(
        {
            "WriteTo:10:Name": "c",
            "WriteTo:2:Name": "b",
            "WriteTo:1:Name": "a",
        }
    )
    keys = [c.key for c in root.get_section("WriteTo").get_children()]
    assert keys == ["1", "2", "10"]


def test_numeric_keys_precede_named_keys():
    root = ConfigurationSection.from_flat({"s:beta": "x", "s:0": "y", "s:Alpha": "z"})
    assert [c.key for c in root.get_section("s")] == ["0", "Alpha", "beta"]


def test_paths_and_values():
    root = ConfigurationSection.from_flat({"Serilog:WriteTo:1:Args:pathFormat": "C:\\logs"})
    arg = root.get_section("Serilog:WriteTo:1:Args:pathFormat")

    assert arg.key == "pathFormat"
    assert arg.path == "Serilog:WriteTo:1:Args:pathFormat"
    assert arg.value == "C:\\logs"
    assert arg.is_leaf
    assert root["Serilog:WriteTo:1:Args:pathFormat"] == "C:\\logs"


def test_lookup_is_case_insensitive_and_preserves_spelling():
    root = ConfigurationSection.from_flat({"Serilog:WriteTo:0:Name": "LiterateConsole"})
    entry = root.get_section("serilog:writeto:0")

    assert entry.path == "Serilog:WriteTo:0"
    assert entry["NAME"] == "LiterateConsole"


def test_missing_section_is_empty():
    root = ConfigurationSection.from_flat({"Serilog:MinimumLevel": "Debug"})
    missing = root.get_section("Serilog:WriteTo")

    assert missing is not None
    assert not missing.exists()
    assert missing.path == "Serilog:WriteTo"
    assert missing.get_children() == []
    assert root["Serilog:WriteTo:0:Name"] is None


def test_from_mapping_matches_from_flat():
    nested = ConfigurationSection.from_mapping(
        {
            "Serilog": {
                "WriteTo": [
                    {"Name": "Batched", "Args": {"eagerlyEmitFirstEvent": False, "batchSizeLimit": 50}},
                ]
            }
        }
    )
    flat = ConfigurationSection.from_flat(
        {
            "Serilog:WriteTo:0:Name": "Batched",
            "Serilog:WriteTo:0:Args:eagerlyEmitFirstEvent": "false",
            "Serilog:WriteTo:0:Args:batchSizeLimit": "50",
        }
    )
    assert nested == flat


def test_null_value_creates_key_without_value():
    root = ConfigurationSection.from_flat({"WriteTo:0:Name": None, "WriteTo:0:Args:x": "1"})
    entry = root.get_section("WriteTo:0")
    assert entry.get_child("Name") is not None
    assert entry["Name"] is None


@pytest.mark.parametrize("path", ["", "a::b", ":a", "a:"])
def test_invalid_flat_paths_raise(path):
    with pytest.raises(ValueError):
        ConfigurationSection.from_flat({path: "x"})
