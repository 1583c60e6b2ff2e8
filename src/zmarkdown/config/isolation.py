#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/zmarkdown/config/isolation.py
"""Per-invocation configuration isolation.

Every render works on its own deep copy of the configuration bundle so a
stage that mutates its configuration slice cannot leak state into another
render, whether the two run one after the other or concurrently.

Unlike :func:`copy.deepcopy`, plain Python functions are not shared with the
original: they are re-created around deep copies of their closure cells and
defaults. The copy stays callable and behaves the same, but any mutable data
it captured belongs to the copy alone. Containers other than the builtin
ones (``OrderedDict``, ``defaultdict``, namedtuples, dataclass instances, ...)
are rebuilt from their pickle reduction with every part isolated, so this
holds for functions nested anywhere in the configuration.

Examples
--------
    >>> seen = []
    >>> config = {"ping": {"on_ping": lambda name: seen.append(name)}, "seen": seen}
    >>> copy_ = isolate(config)
    >>> copy_["ping"]["on_ping"]("alice")
    >>> seen, copy_["seen"]
    ([], ['alice'])

"""

from __future__ import annotations

import copy
import logging
import re
import types
from typing import Any

from zmarkdown.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_ATOMIC_TYPES: tuple[type, ...] = (
    type(None),
    type(Ellipsis),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    range,
    type,
    types.BuiltinFunctionType,
    types.ModuleType,
    types.CodeType,
    re.Pattern,
)


def isolate(value: Any) -> Any:
    """Return a structurally equal, referentially independent copy of ``value``.

    Parameters
    ----------
    value : Any
        Configuration value; typically a nested mapping

    Returns
    -------
    Any
        The isolated copy. Shared references inside ``value`` stay shared inside
        the copy, and cyclic structures are reproduced without recursion issues.

    Raises
    ------
    ConfigurationError
        If some embedded value cannot be copied (e.g. an open resource handle)

    """
    try:
        return _isolate(value, {})
    except ConfigurationError:
        raise
    except (TypeError, copy.Error, AttributeError, ValueError) as exc:
        raise ConfigurationError(
            f"Configuration contains a value that cannot be isolated per render: {exc}",
            original_error=exc,
        ) from exc


def _isolate(value: Any, memo: dict[int, Any]) -> Any:
    if isinstance(value, _ATOMIC_TYPES):
        return value

    key = id(value)
    if key in memo:
        return memo[key]

    value_type = type(value)

    if value_type is dict:
        copied_dict: dict[Any, Any] = {}
        memo[key] = copied_dict
        for item_key, item_value in value.items():
            copied_dict[_isolate(item_key, memo)] = _isolate(item_value, memo)
        return copied_dict

    if value_type is list:
        copied_list: list[Any] = []
        memo[key] = copied_list
        copied_list.extend(_isolate(item, memo) for item in value)
        return copied_list

    if value_type is set:
        copied_set: set[Any] = set()
        memo[key] = copied_set
        copied_set.update(_isolate(item, memo) for item in value)
        return copied_set

    if value_type is tuple:
        copied_tuple = tuple(_isolate(item, memo) for item in value)
        # A cycle through this tuple may already have produced its copy
        if key in memo:
            return memo[key]
        memo[key] = copied_tuple
        return copied_tuple

    if value_type is types.FunctionType:
        return _isolate_function(value, memo)

    copier = getattr(value, "__deepcopy__", None)
    if copier is not None:
        return copier(memo)

    return _isolate_object(value, memo)


def _isolate_object(value: Any, memo: dict[int, Any]) -> Any:
    """Rebuild ``value`` from its pickle reduction, isolating every part.

    Mapping and set subclasses, namedtuples, dataclasses and other instances
    all go through here, so functions they hold are re-created like the ones
    found in plain containers.
    """
    reduction = value.__reduce_ex__(4)
    if isinstance(reduction, str):
        # Module-level singleton
        return value
    # The memo is keyed by id(); temporaries of the reduction must outlive it
    memo.setdefault(id(memo), []).append(reduction)

    constructor, args, *rest = reduction
    state, list_items, dict_items = (list(rest) + [None, None, None])[:3]

    copied = constructor(*_isolate(args, memo))
    memo[id(value)] = copied

    if state is not None:
        state = _isolate(state, memo)
        if hasattr(copied, "__setstate__"):
            copied.__setstate__(state)
        else:
            slot_state = None
            if isinstance(state, tuple) and len(state) == 2:
                state, slot_state = state
            if state:
                copied.__dict__.update(state)
            if slot_state:
                for name, slot_value in slot_state.items():
                    setattr(copied, name, slot_value)

    if list_items is not None:
        for item in list_items:
            copied.append(_isolate(item, memo))

    if dict_items is not None:
        for item_key, item_value in dict_items:
            copied[_isolate(item_key, memo)] = _isolate(item_value, memo)

    return copied


def _isolate_function(function: types.FunctionType, memo: dict[int, Any]) -> types.FunctionType:
    """Re-create ``function`` around isolated closure cells and defaults."""
    cells: tuple[types.CellType, ...] | None = None
    if function.__closure__:
        cells = tuple(types.CellType() for _ in function.__closure__)

    clone = types.FunctionType(function.__code__, function.__globals__, function.__name__, None, cells)
    memo[id(function)] = clone

    if function.__closure__ and cells is not None:
        for original_cell, new_cell in zip(function.__closure__, cells):
            try:
                contents = original_cell.cell_contents
            except ValueError:
                # Free variable not bound yet
                continue
            new_cell.cell_contents = _isolate(contents, memo)

    clone.__defaults__ = _isolate(function.__defaults__, memo)
    clone.__kwdefaults__ = _isolate(function.__kwdefaults__, memo)
    clone.__dict__.update(_isolate(function.__dict__, memo))
    clone.__qualname__ = function.__qualname__
    clone.__module__ = function.__module__
    clone.__doc__ = function.__doc__
    clone.__annotations__ = dict(function.__annotations__)
    return clone
