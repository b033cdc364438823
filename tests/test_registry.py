from __future__ import annotations

import pytest

from rote.errors import DuplicateTask, NoDefaultTask, UnknownTask
from rote.model import CustomAction
from rote.registry import Registry


def test_register_and_get_keeps_fields():
    reg = Registry()
    action = CustomAction(lambda: None)
    reg.register("install", "Install it", ["release"], action)

    t = reg.get("install")
    assert t.name == "install"
    assert t.description == "Install it"
    assert t.prerequisites == ("release",)
    assert t.action is action


def test_get_unknown_task_lists_known_names():
    reg = Registry()
    reg.register("debug")
    with pytest.raises(UnknownTask) as exc:
        reg.get("nope")
    assert exc.value.name == "nope"
    assert "debug" in str(exc.value)


def test_duplicate_registration_is_rejected():
    reg = Registry()
    reg.register("clean")
    with pytest.raises(DuplicateTask):
        reg.register("clean", "again")
    assert len(reg) == 1


def test_listing_order_is_registration_order_and_sorted_view():
    reg = Registry()
    for name in ["release", "clean", "debug"]:
        reg.register(name)
    assert reg.names() == ["release", "clean", "debug"]
    assert [t.name for t in reg.sorted_tasks()] == ["clean", "debug", "release"]


def test_default_task():
    reg = Registry()
    with pytest.raises(NoDefaultTask):
        reg.default_task()

    # default may be set before the task exists
    reg.set_default("debug")
    with pytest.raises(UnknownTask):
        reg.default_task()

    reg.register("debug")
    assert reg.default_task().name == "debug"


def test_single_string_prerequisite_is_one_name():
    reg = Registry()
    t = reg.register("install", prerequisites="release")
    assert t.prerequisites == ("release",)
