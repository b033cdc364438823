from __future__ import annotations

import pytest

from rote.errors import CommandFailed, CyclicDependency, NoDefaultTask, UnknownTask
from rote.model import CustomAction
from rote.registry import Registry
from rote.scheduler import Scheduler


def make_registry(graph: dict[str, list[str]], calls: list[str], fail: set[str] = frozenset()):
    reg = Registry()

    def action_for(name):
        def _run():
            calls.append(name)
            if name in fail:
                raise CommandFailed(command=name, exit_code=1)
        return _run

    for name, deps in graph.items():
        reg.register(name, prerequisites=deps, action=CustomAction(action_for(name)))
    return reg


def test_install_runs_release_first_and_nothing_else():
    calls: list[str] = []
    reg = make_registry(
        {"debug": [], "release": [], "install": ["release"], "clean": []},
        calls,
    )
    Scheduler(reg).run("install")
    assert calls == ["release", "install"]


def test_diamond_runs_shared_prerequisite_once():
    calls: list[str] = []
    reg = make_registry(
        {
            "setup": [],
            "lint": ["setup"],
            "unit": ["setup"],
            "package": ["lint", "unit"],
        },
        calls,
    )
    Scheduler(reg).run("package")
    assert calls == ["setup", "lint", "unit", "package"]


def test_every_edge_is_respected():
    calls: list[str] = []
    graph = {
        "a": ["b", "c"],
        "b": ["d"],
        "c": ["d", "e"],
        "d": [],
        "e": ["d"],
    }
    reg = make_registry(graph, calls)
    Scheduler(reg).run("a")

    assert sorted(calls) == sorted(graph)
    assert len(calls) == len(set(calls))
    for task, deps in graph.items():
        for dep in deps:
            assert calls.index(dep) < calls.index(task)


def test_deep_chain_runs_without_recursion_limit():
    calls: list[str] = []
    depth = 3000
    graph = {f"t{i}": ([f"t{i + 1}"] if i + 1 < depth else []) for i in range(depth)}
    reg = make_registry(graph, calls)

    Scheduler(reg).run("t0")
    assert calls == [f"t{i}" for i in reversed(range(depth))]


def test_deep_cycle_reports_full_path():
    depth = 2000
    graph = {f"t{i}": [f"t{(i + 1) % depth}"] for i in range(depth)}
    reg = make_registry(graph, [])

    with pytest.raises(CyclicDependency) as exc:
        Scheduler(reg).plan(["t0"])
    assert exc.value.cycle == [f"t{i}" for i in range(depth)] + ["t0"]


def test_siblings_run_in_declared_order():
    calls: list[str] = []
    reg = make_registry({"z": [], "a": [], "m": [], "all": ["z", "a", "m"]}, calls)
    Scheduler(reg).run("all")
    assert calls == ["z", "a", "m", "all"]


def test_cycle_fails_before_any_action():
    calls: list[str] = []
    reg = make_registry({"a": ["b"], "b": ["a"]}, calls)
    with pytest.raises(CyclicDependency) as exc:
        Scheduler(reg).run("a")
    assert calls == []
    assert exc.value.cycle == ["a", "b", "a"]


def test_cycle_behind_a_runnable_sibling_still_runs_nothing():
    calls: list[str] = []
    reg = make_registry({"root": ["ok", "x"], "ok": [], "x": ["y"], "y": ["x"]}, calls)
    with pytest.raises(CyclicDependency) as exc:
        Scheduler(reg).run("root")
    assert calls == []
    assert exc.value.cycle == ["x", "y", "x"]


def test_self_dependency_is_a_cycle():
    calls: list[str] = []
    reg = make_registry({"loop": ["loop"]}, calls)
    with pytest.raises(CyclicDependency):
        Scheduler(reg).run("loop")


def test_unknown_task_runs_nothing():
    calls: list[str] = []
    reg = make_registry({"debug": []}, calls)
    with pytest.raises(UnknownTask):
        Scheduler(reg).run("nope")
    assert calls == []


def test_unknown_prerequisite_runs_nothing():
    calls: list[str] = []
    reg = make_registry({"ok": [], "install": ["ok", "missing"]}, calls)
    with pytest.raises(UnknownTask) as exc:
        Scheduler(reg).run("install")
    assert exc.value.name == "missing"
    assert calls == []


def test_first_failure_stops_the_run():
    calls: list[str] = []
    reg = make_registry(
        {"a": [], "b": [], "c": [], "all": ["a", "b", "c"]},
        calls,
        fail={"b"},
    )
    with pytest.raises(CommandFailed):
        Scheduler(reg).run("all")
    assert calls == ["a", "b"]


def test_default_task_is_used_when_no_name_given():
    calls: list[str] = []
    reg = make_registry({"debug": [], "release": []}, calls)
    reg.set_default("release")
    assert Scheduler(reg).run() == ["release"]
    assert calls == ["release"]


def test_no_default_task():
    reg = make_registry({"debug": []}, [])
    with pytest.raises(NoDefaultTask):
        Scheduler(reg).run_default()


def test_several_roots_share_state():
    calls: list[str] = []
    reg = make_registry({"base": [], "x": ["base"], "y": ["base"]}, calls)
    Scheduler(reg).run("x", "y")
    assert calls == ["base", "x", "y"]


def test_aggregate_task_without_action():
    calls: list[str] = []
    reg = make_registry({"a": [], "b": []}, calls)
    reg.register("all", prerequisites=["a", "b"])
    assert Scheduler(reg).run("all") == ["a", "b", "all"]
    assert calls == ["a", "b"]


def test_dry_run_skips_actions_but_reports_plan(capsys):
    calls: list[str] = []
    reg = make_registry({"release": [], "install": ["release"]}, calls)
    done = Scheduler(reg, dry_run=True).run("install")
    assert done == ["release", "install"]
    assert calls == []
    out = capsys.readouterr().out
    assert "[1/2] release" in out
    assert "[2/2] install" in out


def test_progress_lines(capsys):
    reg = make_registry({"release": [], "install": ["release"]}, [])
    Scheduler(reg).run("install")
    out = capsys.readouterr().out.splitlines()
    assert out == ["[1/2] release", "[2/2] install"]
