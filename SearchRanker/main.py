import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from SearchRanker.config import load_config
from SearchRanker.errors import EmptyCorpusError
from SearchRanker.pagerank.pagerank import PageRankEngine
from SearchRanker.preprocessing.document import Document, load_documents
from SearchRanker.tfidf_search.tfidf_search import RelevanceEngine

logger = logging.getLogger(__name__)

SORT_KEYS = ("relevance", "pagerank")


@dataclass(frozen=True)
class SearchResult:
    """A document together with both of its ranking signals."""

    document: Document
    relevance: float
    pagerank: float


class SearchRanker:
    """
    Unified interface for the SearchRanker engines.
    Owns a corpus and the PageRank and TF-IDF engines built from it.
    """
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config if config is not None else load_config()
        self.documents: Dict[str, Document] = {}
        self.pagerank_engine: Optional[PageRankEngine] = None
        self.tfidf_engine: Optional[RelevanceEngine] = None

    @property
    def documents_loaded(self) -> bool:
        return bool(self.documents)

    def set_documents(self, documents: Iterable[Document]) -> None:
        """
        Replace the corpus. Engines built from a previous corpus are dropped.

        Args:
            documents: Documents of the new corpus
        """
        self.documents = {document.uri: document for document in documents}
        self.pagerank_engine = None
        self.tfidf_engine = None

    def load_documents(self, documents_path: str) -> List[Document]:
        """
        Load documents from a JSON file and make them the corpus.

        Args:
            documents_path: Path to the JSON file with documents

        Returns:
            The loaded documents
        """
        documents = load_documents(documents_path)
        self.set_documents(documents)
        return documents

    def init_pagerank_engine(self, **overrides) -> PageRankEngine:
        """
        Build the PageRank engine for the loaded corpus.

        Args:
            overrides: decay, epsilon or max_iterations values replacing the
                configured ones

        Returns:
            The initialized engine
        """
        if not self.documents_loaded:
            raise EmptyCorpusError("PageRankEngine")

        params = dict(self.config.get("pagerank", {}))
        params.update({key: value for key, value in overrides.items() if value is not None})

        logger.info("Computing PageRank (decay=%s, epsilon=%s, max_iterations=%s)",
                    params.get("decay"), params.get("epsilon"), params.get("max_iterations"))
        self.pagerank_engine = PageRankEngine.from_documents(
            self.documents.values(),
            decay=params.get("decay", 0.85),
            epsilon=params.get("epsilon", 0.0001),
            max_iterations=params.get("max_iterations", 200)
        )
        return self.pagerank_engine

    def init_tfidf_engine(self) -> RelevanceEngine:
        """Build the TF-IDF engine for the loaded corpus."""
        if not self.documents_loaded:
            raise EmptyCorpusError("RelevanceEngine")

        logger.info("Initializing TF-IDF relevance engine...")
        self.tfidf_engine = RelevanceEngine(self.documents.values())
        return self.tfidf_engine

    def search(self, query: Sequence[str], top_k: Optional[int] = None,
               sort_by: Optional[str] = None) -> List[SearchResult]:
        """
        Score the corpus against a query.

        Both signals are reported per document; they are never combined.
        When sorting by relevance, documents with zero relevance are left out.

        Args:
            query: Query tokens
            top_k: Maximum number of results to return
            sort_by: "relevance" or "pagerank"

        Returns:
            List of SearchResult objects, best first
        """
        search_config = self.config.get("search", {})
        top_k = search_config.get("top_k", 5) if top_k is None else top_k
        sort_by = sort_by or search_config.get("sort_by", "relevance")
        if sort_by not in SORT_KEYS:
            raise ValueError(f"sort_by must be one of {SORT_KEYS}, got {sort_by!r}")
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 0:
            raise ValueError(f"top_k must be a non-negative integer, got {top_k!r}")

        if self.pagerank_engine is None:
            self.init_pagerank_engine()
        if self.tfidf_engine is None:
            self.init_tfidf_engine()

        logger.debug("Query terms known to the corpus: %s",
                     sorted(self.tfidf_engine.query_vector(query)))
        relevance_scores = dict(self.tfidf_engine.rank(query))

        results = []
        for doc_id, document in self.documents.items():
            relevance = relevance_scores[doc_id]
            if sort_by == "relevance" and relevance == 0.0:
                continue
            results.append(SearchResult(
                document=document,
                relevance=relevance,
                pagerank=self.pagerank_engine.score(doc_id)
            ))

        results.sort(key=lambda result: (-getattr(result, sort_by), result.document.uri))
        return results[:top_k]
