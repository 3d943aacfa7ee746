from typing import TYPE_CHECKING

import networkx as nx
from networkx import generate_network_text

from .config import Config
from .walk import Walk, required_names

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Hashable, Mapping, Sequence
    from typing import Any

    from networkx import DiGraph

    from .step import Step

    StepName = Hashable


class Topology:
    def __init__(self, *, digraph: "DiGraph", order: list["StepName"]) -> None:
        self.digraph = digraph
        self.order = order

    def dependents(self, name: "StepName") -> set["StepName"]:
        """Every step that transitively depends on `name`."""
        return nx.descendants(self.digraph, name)

    def __str__(self) -> str:
        return "\n".join(generate_network_text(self.digraph, vertical_chains=True))


def topology(
    graph: "Mapping[StepName, Any]",
    required: "Sequence[StepName] | None" = None,
    *,
    config: Config | None = None,
) -> Topology:
    """
    The part of a steps graph that resolving `required` would run, without running
    it. Edges point from a dependency to its dependent and `order` lists every step
    after all of its dependencies. Raises the same structural errors as resolving
    the graph would.
    """
    if config is None:
        config = Config()

    digraph = nx.DiGraph()

    def _link(name: "StepName", step: "Step", _: list["StepName"]) -> "StepName":
        digraph.add_node(name)
        for dependency in step.dependencies:
            digraph.add_edge(dependency, name)

        return name

    walk = Walk(graph, _link)
    walk.resolve(
        required_names(
            graph, required, warn_duplicates=config.warn_duplicate_required
        )
    )
    return Topology(digraph=digraph, order=walk.order)
