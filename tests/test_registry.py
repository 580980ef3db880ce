import pytest

from voxelworld.registry import Registry, RegistryError


def test_ids_follow_registration_order():
    registry = Registry()
    names = ["air", "stone", "grass"]
    ids = [registry.register(name, name.upper()) for name in names]
    assert ids == list(range(len(names)))
    assert len(registry) == len(names)


def test_lookup_round_trip():
    registry = Registry()
    registry.register("dirt", {"hard": False})
    registry.register("stone", {"hard": True})
    assert registry.value_of(registry.id_of("stone")) == {"hard": True}
    assert registry.value_of(registry.id_of("dirt")) == {"hard": False}


def test_duplicate_name_is_rejected_and_registry_unchanged():
    registry = Registry()
    registry.register("sand", 1)
    with pytest.raises(RegistryError) as excinfo:
        registry.register("sand", 2)
    assert excinfo.value.key == "sand"
    assert "key already exists in the Registry: sand" in str(excinfo.value)
    assert len(registry) == 1
    assert registry.value_of(registry.id_of("sand")) == 1


def test_missing_entries_give_none():
    registry = Registry()
    registry.register("water", "w")
    assert registry.id_of("lava") is None
    assert registry.value_of(len(registry)) is None
    assert registry.value_of(-1) is None