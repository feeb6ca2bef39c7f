#!/usr/bin/env python3
"""
Distance Oracle
Static city adjacency table answering pairwise distance queries
"""

import logging
from typing import Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np

from .common import INFINITE_DISTANCE

logger = logging.getLogger(__name__)

# Undirected edges of the default city graph: (city_a, city_b, length)
DEFAULT_EDGES: List[Tuple[str, str, float]] = [
    ("F", "N", 30), ("F", "C", 20), ("F", "L", 10), ("F", "G", 55),
    ("N", "C", 47), ("N", "K", 60),
    ("C", "K", 70), ("C", "E", 10), ("C", "H", 30), ("C", "L", 10),
    ("K", "E", 10), ("K", "G", 90), ("K", "H", 73),
    ("E", "H", 60), ("E", "G", 40), ("E", "L", 5),
    ("H", "G", 80), ("H", "L", 40),
]


class DistanceOracle:
    """Symmetric distance table keyed by city id

    Pairs without an edge resolve to ``infinity``. The table is built once;
    a different graph means a new oracle.
    """

    def __init__(self, edges: Optional[Iterable[Tuple[str, str, float]]] = None,
                 infinity: float = INFINITE_DISTANCE):
        """Build the distance table

        Args:
            edges: Iterable of (city_a_id, city_b_id, length); defaults to DEFAULT_EDGES
            infinity: Sentinel returned for unconnected pairs
        """
        self.infinity = float(infinity)
        self.graph = nx.Graph()

        for city_a, city_b, length in (DEFAULT_EDGES if edges is None else edges):
            if length < 0:
                raise ValueError(f"Negative edge length {length} between {city_a} and {city_b}")
            if city_a == city_b:
                raise ValueError(f"Self-loop on city {city_a} is not allowed")
            self.graph.add_edge(city_a, city_b, length=float(length))

        self._node_index = {node: i for i, node in enumerate(self.graph.nodes)}
        self.matrix = nx.to_numpy_array(
            self.graph, nodelist=list(self.graph.nodes), weight='length',
            nonedge=self.infinity
        )
        np.fill_diagonal(self.matrix, 0.0)

        logger.debug(f"Distance table built: {self.graph.number_of_nodes()} cities, "
                     f"{self.graph.number_of_edges()} edges")

    @property
    def city_ids(self) -> List[str]:
        """Ids of every city appearing in the table"""
        return list(self._node_index)

    def has_city(self, city_id: str) -> bool:
        return city_id in self._node_index

    def distance(self, city_a, city_b) -> float:
        """Distance between two cities

        Raises:
            ValueError: If either city is None
        """
        if city_a is None or city_b is None:
            raise ValueError(f"Cities cannot be None. city_a={city_a}, city_b={city_b}")

        i = self._node_index.get(city_a.id)
        j = self._node_index.get(city_b.id)
        if i is None or j is None:
            return self.infinity

        return float(self.matrix[i, j])

    def has_direct_connection(self, city_a, city_b) -> bool:
        return self.distance(city_a, city_b) < self.infinity

    def theoretical_minimum(self, city_count: Optional[int] = None) -> float:
        """Lower bound on any closed tour: the sum of the cheapest edges

        A tour over ``city_count`` cities uses exactly that many distinct
        edges, so no tour can be shorter than the cheapest ones combined.
        """
        count = city_count if city_count is not None else self.graph.number_of_nodes()
        lengths = sorted(length for _, _, length in self.graph.edges(data='length'))
        if count > len(lengths):
            return self.infinity
        return float(sum(lengths[:count]))

    def __repr__(self) -> str:
        return (f"DistanceOracle(cities={self.graph.number_of_nodes()}, "
                f"edges={self.graph.number_of_edges()})")
