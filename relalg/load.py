from __future__ import annotations

import dataclasses
import json
import logging
import re
from pathlib import Path
from typing import Any

from relalg.examples import example_by_name
from relalg.relation import PredicateRelation, Relation
from relalg.result import Err, Ok, Result
from relalg.serialization import relation_from_json

logger = logging.getLogger(__name__)


def load_relation_from_file(path: str) -> Result[Relation[Any, Any], str]:
    """Load a relation from a ``.py`` or ``.json`` file.

    For ``.py`` files the executed module's namespace is searched for:

    1. Any callable whose name ends in ``_rel``.
    2. Falls back to any callable that, when called with no arguments, returns
       a :class:`~relalg.relation.Relation` instance.

    ``.json`` files must hold a serialized finite relation.
    """
    try:
        source = Path(path).read_text()
    except OSError as e:
        return Err(f"Could not read file: {e}")

    if path.endswith(".json"):
        try:
            return Ok(relation_from_json(json.loads(source)))
        except (ValueError, KeyError, TypeError) as e:
            return Err(f"Invalid relation JSON: {e}")

    namespace: dict[str, Any] = {}
    try:
        exec("from relalg import *", namespace)
        exec("from relalg.helpers import *", namespace)
        exec("from relalg.carriers import *", namespace)
    except Exception as e:
        return Err(f"Failed to import relalg builtins: {e}")
    builtins = set(namespace)

    try:
        exec(compile(source, path, "exec"), namespace)
    except Exception as e:
        return Err(f"Code execution failed: {e}")

    # 1. Prefer functions whose name ends in _rel.
    candidates = [
        (name, obj)
        for name, obj in namespace.items()
        if callable(obj)
        and re.search(r"_rel$", name)
        and not name.startswith("_")
        and name not in builtins
    ]

    # 2. If nothing matches the naming convention, try the callables the file defined.
    if not candidates:
        candidates = [
            (name, obj)
            for name, obj in namespace.items()
            if callable(obj)
            and not name.startswith("_")
            and name not in builtins
            and not isinstance(obj, type)
        ]

    if not candidates:
        return Err("No callable relation-factory function found in file")

    last_err = ""
    for name, fn in candidates:
        try:
            result = fn()
        except Exception as e:
            last_err = f"'{name}()' raised: {e}"
            logger.debug("candidate %s failed: %s", name, e)
            continue
        match result:
            case Relation():
                return Ok(result)
            case _:
                last_err = f"'{name}()' returned {type(result).__name__}, expected Relation"

    return Err(last_err or "No suitable relation-factory function found")


def resolve_relation(target: str, *, memoize: bool = False) -> Result[Relation[Any, Any], str]:
    """Resolve a CLI argument: an example name, or a path to a relation file."""
    if not Path(target).exists():
        found = example_by_name(target)
        if found is None:
            return Err(f"No such file or example: {target}")
        loaded: Result[Relation[Any, Any], str] = Ok(found)
    else:
        loaded = load_relation_from_file(target)

    match loaded:
        case Ok(PredicateRelation() as r) if memoize and not r.memoize:
            return Ok(dataclasses.replace(r, memoize=True))
        case _:
            return loaded
