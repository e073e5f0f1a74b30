import pytest

from modal_edit.keymaps import (
    Action,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
)
from modal_edit.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> Action:
    return Action(id=action_id, handler=lambda *args: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    keys: str = "g g",
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
    )


def make_registry() -> KeymapRegistry:
    registry = KeymapRegistry()
    registry.add_action(make_action())
    return registry


def test_bind_indexes_binding() -> None:
    registry = make_registry()
    binding = make_binding(binding_id="normal.gg")

    registry.bind(binding)

    assert registry.stats().bindings == 1
    assert list(registry.bindings("normal")) == [binding]
    assert registry.binding("normal.gg") is binding
    assert registry.bound_to("normal", "g g") is binding
    assert registry.bound_to("insert", "g g") is None


def test_second_binding_for_same_keys_conflicts() -> None:
    registry = make_registry()
    registry.bind(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.bind(make_binding(binding_id="normal.gg.again"))

    assert excinfo.value.existing.id == "normal.gg"
    assert excinfo.value.binding.id == "normal.gg.again"


def test_prefix_of_existing_sequence_conflicts() -> None:
    registry = make_registry()
    registry.bind(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.bind(make_binding(binding_id="normal.g", keys="g"))
    assert excinfo.value.existing.id == "normal.gg"

    with pytest.raises(KeymapConflictError):
        registry.bind(make_binding(binding_id="normal.ggg", keys="g g g"))

    registry.bind(make_binding(binding_id="normal.gd", keys="g d"))
    registry.bind(make_binding(binding_id="insert.g", mode="insert", keys="g"))
    assert registry.stats().bindings == 3


def test_replace_evicts_every_shadowed_binding() -> None:
    registry = make_registry()
    registry.bind(make_binding(binding_id="normal.gg"))
    registry.bind(make_binding(binding_id="normal.gd", keys="g d"))
    before = registry.revision

    registry.bind(make_binding(binding_id="normal.g", keys="g"), replace=True)

    assert [b.id for b in registry.bindings("normal")] == ["normal.g"]
    assert registry.revision == before + 1


def test_replace_evicts_binding_on_same_keys() -> None:
    registry = make_registry()
    registry.bind(make_binding(binding_id="normal.gg"))
    newer = make_binding(binding_id="normal.top")

    registry.bind(newer, replace=True)

    assert list(registry.bindings()) == [newer]
    with pytest.raises(KeyError):
        registry.binding("normal.gg")


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = make_registry()

    registry.bind(make_binding(binding_id="normal.gg"))
    registry.bind(make_binding(binding_id="insert.gg", mode="insert"))

    assert registry.stats().modes == ("insert", "normal")


def test_rebinding_id_to_new_keys() -> None:
    registry = make_registry()
    registry.bind(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.bind(make_binding(binding_id="binding", keys="d d"))

    moved = registry.bind(make_binding(binding_id="binding", keys="d d"), replace=True)
    assert registry.bound_to("normal", "g g") is None
    assert registry.bound_to("normal", "d d") is moved


def test_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.bind(make_binding(binding_id="orphan"))
    assert registry.stats().bindings == 0


def test_duplicate_action_rejected() -> None:
    registry = make_registry()

    with pytest.raises(ValueError):
        registry.add_action(make_action())
    registry.add_action(make_action(), replace=True)


def test_unbind_bumps_revision() -> None:
    registry = make_registry()
    binding = registry.bind(make_binding(binding_id="binding"))
    before = registry.revision

    removed = registry.unbind("binding")

    assert removed == binding
    assert registry.stats().bindings == 0
    assert registry.revision == before + 1
    assert registry.unbind("binding") is None
    assert registry.revision == before + 1


def test_unknown_lookups_raise_key_error() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.binding("nope")
    with pytest.raises(KeyError):
        registry.action("nope")


def test_load_default_keymaps_covers_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.bindings == len(DEFAULT_BINDINGS)
    assert stats.modes == ("command", "insert", "normal")
    assert registry.binding("normal.i").action_id == "core.enter_insert"
    assert registry.binding("normal.:").action_id == "core.enter_command"
    assert registry.binding("insert.ESC").action_id == "core.exit_to_normal"
    assert registry.binding("command.ENTER").action_id == "command.submit_line"
    assert registry.binding("normal.g_g").sequence.tokens == ("g", "g")


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    custom = make_binding(
        binding_id="normal.a", keys="a", action_id="core.enter_insert"
    )

    load_default_keymaps(
        registry, exclude_bindings=("normal.x",), extra_bindings=(custom,)
    )

    assert registry.binding("normal.a") is custom
    assert registry.bound_to("normal", "x") is None


def test_load_default_keymaps_twice_needs_replace() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    with pytest.raises(ValueError):
        load_default_keymaps(registry)

    load_default_keymaps(registry, replace=True)
    assert registry.stats().bindings == len(DEFAULT_BINDINGS)
