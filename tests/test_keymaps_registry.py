import pytest

from moded.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
)
from moded.keymaps.defaults import DEFAULT_BINDINGS, load_default_keymaps


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="normal.gg")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))

    assert excinfo.value.existing == binding


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.gg"))
    registry.register_binding(make_binding(binding_id="search.gg", mode="search"))

    assert registry.stats().modes == ("normal", "search")


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg"))


def test_register_action_rejects_duplicates() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_load_default_keymaps_covers_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)
    assert registry.stats().modes == ("command", "insert", "normal", "search")
    signatures = {b.key_signature for b in registry.iter_bindings(mode="normal")}
    assert {"i", ":", "UP", "DOWN", "LEFT", "RIGHT", "h", "j", "k", "l"} <= signatures


def test_load_default_keymaps_exclude_and_extra_bindings() -> None:
    registry = KeymapRegistry()
    excluded = next(b.id for b in DEFAULT_BINDINGS if b.key_signature == "i")
    custom = make_binding(
        binding_id="normal.custom_insert",
        sequence=make_sequence("a"),
        action_id="core.enter_insert",
    )

    load_default_keymaps(
        registry, exclude_bindings=(excluded,), extra_bindings=(custom,)
    )

    signatures = {b.key_signature for b in registry.iter_bindings(mode="normal")}
    assert "i" not in signatures
    assert registry.get_binding("normal.custom_insert").action_id == "core.enter_insert"
