# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""Tests for extension hooks."""

from chromata.hooks import Hooks


class TestHooks:

    def test_run_in_order(self):
        hooks = Hooks()
        calls = []
        hooks.add("h", lambda env: calls.append("a"))
        hooks.add("h", lambda env: calls.append("b"))
        hooks.run("h", {})
        assert calls == ["a", "b"]

    def test_first(self):
        hooks = Hooks()
        calls = []
        hooks.add("h", lambda env: calls.append("a"))
        hooks.add("h", lambda env: calls.append("b"), first=True)
        hooks.run("h", {})
        assert calls == ["b", "a"]

    def test_several_names(self):
        hooks = Hooks()
        seen = []
        hooks.add(["one", "two"], lambda env: seen.append(env["name"]))
        hooks.run("one", {"name": "one"})
        hooks.run("two", {"name": "two"})
        assert seen == ["one", "two"]

    def test_env_is_mutable(self):
        hooks = Hooks()

        def set_color(env):
            env["color"] = "resolved"

        hooks.add("parse-start", set_color)
        env = {"str": "x"}
        hooks.run("parse-start", env)
        assert env["color"] == "resolved"

    def test_unknown_hook_is_noop(self):
        Hooks().run("nothing", {})

    def test_remove_and_contains(self):
        hooks = Hooks()

        def callback(env):
            pass

        hooks.add("h", callback)
        assert "h" in hooks
        hooks.remove("h", callback)
        assert "h" not in hooks
