"""Helpers for looking through type annotations."""

import types
from collections.abc import Sequence
from typing import Annotated, Any, Union, get_args, get_origin

_CONTAINERS = (list, tuple, set, frozenset, Sequence)


def unwrap_annotation(annotation: Any, containers: bool = True) -> Any:
    """Return the element type behind Optional, list and Annotated wrappers.

    ``list[Account] | None`` -> ``Account``; unions of more than one
    non-None member are returned unchanged. With ``containers=False`` only
    Optional and Annotated are looked through.
    """
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
        elif origin is Union or origin is types.UnionType:
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) != 1:
                return annotation
            annotation = members[0]
        elif containers and origin in _CONTAINERS and get_args(annotation):
            annotation = get_args(annotation)[0]
        else:
            return annotation
