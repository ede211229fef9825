import pytest

from hookchain.config import CallbackSpec, HooksConfig
from hookchain.facade import Hooks
from hookchain.table import HookTable


def test_filters_and_actions_through_facade() -> None:
    hooks = Hooks()
    log: list[str] = []

    hooks.add_filter("title", lambda text: text.strip())
    hooks.add_filter("title", lambda text: text.title(), priority=20)
    hooks.add_action("saved", lambda post_id, title: log.append(f"{post_id}:{title}"), accepted_args=2)

    title = hooks.apply_filters("title", "  hello world ")
    hooks.do_action("saved", 7, title)

    assert title == "Hello World"
    assert log == ["7:Hello World"]
    assert hooks.did_action("saved") == 1
    assert hooks.did_action("title") == 0


def test_facade_uses_injected_backend() -> None:
    table = HookTable()
    hooks = Hooks(backend=table)

    def noop(value):
        return value

    hooks.add_filter("x", noop, priority=3)

    assert hooks.backend is table
    assert table.has("x", noop) == 3
    assert hooks.has_hook("x", noop) == 3
    assert hooks.remove_hook("x", noop, 3) is True
    assert hooks.has_hook("x") is False


def test_separate_instances_do_not_share_state() -> None:
    first = Hooks()
    second = Hooks()

    first.add_action("boot", lambda: None, accepted_args=0)
    first.do_action("boot")

    assert first.did_action("boot") == 1
    assert second.did_action("boot") == 0
    assert second.has_hook("boot") is False


def test_doing_hook_and_current_hook() -> None:
    hooks = Hooks()
    observed: list[tuple] = []

    hooks.add_action(
        "render",
        lambda: observed.append((hooks.current_hook(), hooks.doing_hook(), hooks.doing_hook("render"))),
        accepted_args=0,
    )
    hooks.do_action("render")

    assert observed == [("render", True, True)]
    assert hooks.current_hook() is None
    assert hooks.doing_hook() is False


def test_remove_all_hooks() -> None:
    hooks = Hooks()
    hooks.add_filter("x", lambda value: value + 1, priority=1)
    hooks.add_filter("x", lambda value: value * 10, priority=2)

    hooks.remove_all_hooks("x", 2)
    assert hooks.apply_filters("x", 1) == 2

    hooks.remove_all_hooks("x")
    assert hooks.apply_filters("x", 1) == 1


def test_from_config_and_argument_guard() -> None:
    config = HooksConfig(hooks={"title": [CallbackSpec(callback="string:capwords")]})

    hooks = Hooks.from_config(config)
    assert hooks.apply_filters("title", "a b") == "A B"

    with pytest.raises(ValueError):
        Hooks(backend=HookTable(), config=config)
