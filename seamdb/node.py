"""Identity and statistics of nodes in a cluster."""

from __future__ import annotations

import uuid


class NodeId(str):
    """Textual identifier of a cluster node."""

    __slots__ = ()

    @classmethod
    def new_random(cls) -> "NodeId":
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return str.__str__(self)

    def __repr__(self) -> str:
        return f"NodeId({str.__str__(self)!r})"


class NodeStatistics:
    """Number of live nodes in a cluster, or the registry being offline."""

    __slots__ = ("_node_number", "_offline")

    def __init__(self, node_number: int = 0, *, offline: bool = False) -> None:
        self._node_number = node_number
        self._offline = offline

    @classmethod
    def new_offline(cls) -> "NodeStatistics":
        return cls(0, offline=True)

    def node_number(self) -> int:
        return self._node_number

    def offline(self) -> bool:
        return self._offline

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NodeStatistics):
            return (self._node_number, self._offline) == (other._node_number, other._offline)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._node_number, self._offline))

    def __repr__(self) -> str:
        return f"NodeStatistics(node_number={self._node_number}, offline={self._offline})"