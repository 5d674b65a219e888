from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Node:
    """Generic syntax tree node: a name, an optional text value and child nodes."""
    name: str
    value: str = ""
    children: Tuple['Node', ...] = ()

    def child(self, name: str) -> 'Node':
        """First child called `name`."""
        for node in self.children:
            if node.name == name:
                return node
        raise KeyError(name)

    def __str__(self) -> str:
        return "\n".join(self._lines(0))

    def _lines(self, depth: int):
        line = "  " * depth + self.name
        if self.value:
            line += f": {self.value}"
        yield line
        for node in self.children:
            yield from node._lines(depth + 1)


def ast_node(name: str, value: str = "", children: Iterable[Node] = ()) -> Node:
    return Node(name, value, tuple(children))
