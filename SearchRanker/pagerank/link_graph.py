import logging
from typing import Dict, Iterable, Set

from ..preprocessing.document import Document

logger = logging.getLogger(__name__)

# document id -> ids of the corpus documents it links to
LinkGraph = Dict[str, Set[str]]


class LinkGraphBuilder:
    """Builds a self-contained directed link graph from a document set."""

    def build(self, documents: Iterable[Document]) -> LinkGraph:
        """
        Convert documents into an adjacency-set graph.

        Links pointing outside the corpus and self-links are dropped, so every
        edge stays inside the graph. Documents without remaining links still
        get an (empty) entry.

        Args:
            documents: Documents to build the graph from

        Returns:
            Dictionary mapping each document id to its outbound neighbours
        """
        documents = list(documents)
        known_ids = {document.uri for document in documents}

        graph: LinkGraph = {}
        dropped = 0
        for document in documents:
            neighbours = {
                link for link in document.links
                if link in known_ids and link != document.uri
            }
            dropped += sum(1 for link in document.links if link not in neighbours)
            graph[document.uri] = neighbours

        logger.debug(
            "Built link graph with %d nodes and %d edges (%d links dropped)",
            len(graph), sum(len(n) for n in graph.values()), dropped
        )
        return graph
