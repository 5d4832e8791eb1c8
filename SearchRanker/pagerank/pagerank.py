"""
PageRank computation over a corpus link graph.

Ranks are computed by power iteration with damping. A document without
outbound links spreads its damped mass uniformly over the whole corpus, which
keeps the ranks a probability distribution.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from ..errors import EmptyCorpusError, UnknownDocumentError
from ..preprocessing.document import Document
from .link_graph import LinkGraph, LinkGraphBuilder

logger = logging.getLogger(__name__)


def _require_number(name, value, types):
    """Raise ValueError unless `value` is one of `types` (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, types):
        raise ValueError(f"{name} must be a number, got {type(value).__name__} {value!r}")


class PageRankEngine:
    """Computes and serves the PageRank of every document in a link graph."""

    def __init__(self, graph: LinkGraph, decay: float = 0.85, epsilon: float = 0.0001,
                 max_iterations: int = 200):
        """
        Compute ranks for the given graph.

        The graph is only read during construction and is not kept.

        Args:
            graph: Mapping from document id to its outbound neighbours
            decay: Damping factor, the probability of following a link
            epsilon: Iteration stops once no rank moves by this much or more
            max_iterations: Upper bound on the number of iterations; the last
                ranks are returned if it is reached without convergence

        Raises:
            EmptyCorpusError: If the graph has no documents
            ValueError: If a parameter is out of range
        """
        if not graph:
            raise EmptyCorpusError("PageRankEngine")
        _require_number("decay", decay, (int, float))
        _require_number("epsilon", epsilon, (int, float))
        _require_number("max_iterations", max_iterations, (int,))
        if not 0.0 <= decay <= 1.0:
            raise ValueError(f"decay must be in [0, 1], got {decay}")
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        if max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")

        self.decay = decay
        self.epsilon = epsilon
        self.max_iterations = max_iterations
        self.iterations = 0
        self.converged = False

        self._ranks = self._compute_ranks(graph)

        if self.converged:
            logger.info("PageRank converged after %d iterations over %d documents",
                        self.iterations, len(self._ranks))
        else:
            logger.warning("PageRank did not converge within %d iterations, using last ranks",
                           self.max_iterations)

    @classmethod
    def from_documents(cls, documents: Iterable[Document], decay: float = 0.85,
                       epsilon: float = 0.0001, max_iterations: int = 200) -> "PageRankEngine":
        """Build the link graph for `documents` and rank it."""
        graph = LinkGraphBuilder().build(documents)
        return cls(graph, decay=decay, epsilon=epsilon, max_iterations=max_iterations)

    def _compute_ranks(self, graph: LinkGraph) -> Dict[str, float]:
        """
        Run power iteration until convergence or the iteration limit.

        Args:
            graph: Mapping from document id to its outbound neighbours

        Returns:
            Dictionary mapping document ids to their rank
        """
        n = len(graph)
        teleport = (1.0 - self.decay) / n
        dangling = [doc_id for doc_id, neighbours in graph.items() if not neighbours]

        ranks = {doc_id: 1.0 / n for doc_id in graph}

        for iteration in range(1, self.max_iterations + 1):
            # Mass of dangling documents goes to every document, itself included
            dangling_share = self.decay * sum(ranks[doc_id] for doc_id in dangling) / n

            # Fresh accumulator each round, ranks of the previous round stay read-only
            new_ranks = dict.fromkeys(graph, dangling_share + teleport)
            for doc_id, neighbours in graph.items():
                if not neighbours:
                    continue
                share = self.decay * ranks[doc_id] / len(neighbours)
                for neighbour in neighbours:
                    new_ranks[neighbour] += share

            self.iterations = iteration
            if all(abs(ranks[doc_id] - new_ranks[doc_id]) < self.epsilon for doc_id in graph):
                self.converged = True
                return new_ranks

            ranks = new_ranks

        return ranks

    @property
    def ranks(self) -> Mapping[str, float]:
        """Read-only view of all ranks."""
        return MappingProxyType(self._ranks)

    def score(self, doc_id: str) -> float:
        """
        Return the PageRank of a document.

        Args:
            doc_id: Identifier of a document from the ranked graph

        Returns:
            The document's rank

        Raises:
            UnknownDocumentError: If the document was not in the graph
        """
        try:
            return self._ranks[doc_id]
        except KeyError:
            raise UnknownDocumentError(doc_id) from None
