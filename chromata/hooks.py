# Copyright (c) 2026 Chromata
# SPDX-License-Identifier: MIT

"""
Extension hooks.

A hook is a named list of callbacks that receive a mutable ``env`` dict.
Callbacks communicate by writing into ``env``; hooks return nothing.

Hooks run by chromata:
    parse-start: env = {"str": text, "parsed": ParsedFunction | None}.
        Setting env["color"] makes the parser return that value unchanged.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Union


Callback = Callable[[dict], Any]


class Hooks:
    """Named callback lists."""

    def __init__(self) -> None:
        self._callbacks: dict[str, list[Callback]] = {}

    def add(self, name: Union[str, Iterable[str]], callback: Callback, first: bool = False) -> None:
        """
        Register a callback for one hook name or several.

        Args:
            name: Hook name, or an iterable of names
            callback: Called with the env dict when the hook runs
            first: Run before the callbacks already registered
        """
        names = [name] if isinstance(name, str) else list(name)

        for n in names:
            callbacks = self._callbacks.setdefault(n, [])
            if first:
                callbacks.insert(0, callback)
            else:
                callbacks.append(callback)

    def remove(self, name: str, callback: Callback) -> None:
        callbacks = self._callbacks.get(name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def run(self, name: str, env: dict) -> None:
        for callback in list(self._callbacks.get(name, ())):
            callback(env)

    def __contains__(self, name: str) -> bool:
        return bool(self._callbacks.get(name))
