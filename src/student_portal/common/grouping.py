from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar

P = TypeVar("P")
C = TypeVar("C")

Row = Dict[str, Any]


def group_nested(
    rows: Iterable[Row],
    *,
    key: Callable[[Row], Hashable],
    make_parent: Callable[[Row], P],
    make_child: Callable[[Row], C],
    has_child: Optional[Callable[[Row], bool]] = None,
) -> List[Tuple[P, List[C]]]:
    """Fold flat joined rows into ``(parent, children)`` pairs.

    Parents keep the order in which their key was first seen. The parent object
    is built from that first row; later rows with the same key only contribute
    children. Rows for which ``has_child`` is false (e.g. the all-NULL side of a
    LEFT JOIN) add no child, so a parent without children gets an empty list.
    """

    groups: Dict[Hashable, Tuple[P, List[C]]] = {}
    for row in rows:
        k = key(row)
        if k not in groups:
            groups[k] = (make_parent(row), [])
        if has_child is None or has_child(row):
            groups[k][1].append(make_child(row))
    return list(groups.values())
