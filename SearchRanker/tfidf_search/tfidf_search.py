"""
TF-IDF relevance scoring of documents against queries.
Documents are ranked by the cosine similarity of their TF-IDF vectors.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..errors import EmptyCorpusError, UnknownDocumentError
from ..preprocessing.document import Document
from .term_statistics import compute_cosine_similarity, compute_idf, compute_tf, vector_norm

logger = logging.getLogger(__name__)


class RelevanceEngine:
    """TF-IDF relevance engine over a fixed corpus."""

    def __init__(self, documents: Iterable[Document]):
        """
        Precompute IDF scores, document vectors and their norms.

        Args:
            documents: Documents of the corpus

        Raises:
            EmptyCorpusError: If no documents are given
        """
        documents = list(documents)
        if not documents:
            raise EmptyCorpusError("RelevanceEngine")

        self._idf_scores = compute_idf(documents)
        self._doc_vectors: Dict[str, Dict[str, float]] = {}
        self._doc_norms: Dict[str, float] = {}

        for document in documents:
            vector = self._weigh(compute_tf(document.words))
            self._doc_vectors[document.uri] = vector
            self._doc_norms[document.uri] = vector_norm(vector)

        logger.info("Computed TF-IDF vectors for %d documents over %d terms",
                    len(self._doc_vectors), len(self._idf_scores))

    def _weigh(self, tf_scores: Mapping[str, float]) -> Dict[str, float]:
        """Multiply TF scores by IDF, dropping terms unknown to the corpus."""
        return {
            word: tf_score * self._idf_scores[word]
            for word, tf_score in tf_scores.items()
            if word in self._idf_scores
        }

    @property
    def idf_scores(self) -> Mapping[str, float]:
        """Read-only view of the corpus IDF table."""
        return MappingProxyType(self._idf_scores)

    @property
    def document_vectors(self) -> Mapping[str, Mapping[str, float]]:
        """Read-only view of every document's TF-IDF vector."""
        return MappingProxyType(
            {doc_id: MappingProxyType(vector) for doc_id, vector in self._doc_vectors.items()}
        )

    def document_norm(self, doc_id: str) -> float:
        """Return the cached Euclidean norm of a document's vector."""
        try:
            return self._doc_norms[doc_id]
        except KeyError:
            raise UnknownDocumentError(doc_id) from None

    def query_vector(self, query: Sequence[str]) -> Dict[str, float]:
        """
        Build the TF-IDF vector of a query.

        Args:
            query: Query tokens

        Returns:
            Dictionary mapping known query terms to their TF-IDF weight
        """
        return self._weigh(compute_tf(query))

    def _similarity(self, query_vector: Mapping[str, float], query_norm: float,
                    doc_id: str) -> float:
        try:
            doc_vector = self._doc_vectors[doc_id]
        except KeyError:
            raise UnknownDocumentError(doc_id) from None

        similarity = compute_cosine_similarity(
            doc_vector, query_vector, self._doc_norms[doc_id], query_norm
        )
        # Rounding can push a perfect match just above 1
        return min(similarity, 1.0)

    def relevance(self, query: Sequence[str], doc_id: str) -> float:
        """
        Cosine similarity between a query and a document.

        Args:
            query: Query tokens
            doc_id: Identifier of a document from the corpus

        Returns:
            Similarity in [0, 1]; 0.0 if the query or the document has no
            corpus terms

        Raises:
            UnknownDocumentError: If the document was not in the corpus
        """
        query_vector = self.query_vector(query)
        return self._similarity(query_vector, vector_norm(query_vector), doc_id)

    def rank(self, query: Sequence[str], top_k: Optional[int] = None) -> List[Tuple[str, float]]:
        """
        Rank every document of the corpus against a query.

        Args:
            query: Query tokens
            top_k: Number of top results to return, all when omitted

        Returns:
            List of (document_id, similarity_score) tuples, best first
        """
        query_vector = self.query_vector(query)
        query_norm = vector_norm(query_vector)

        similarities = [
            (doc_id, self._similarity(query_vector, query_norm, doc_id))
            for doc_id in self._doc_vectors
        ]

        # Sort by similarity score (descending), then id for stable output
        similarities.sort(key=lambda x: (-x[1], x[0]))

        if top_k is None:
            return similarities
        return similarities[:top_k]
