"""
Corpus-wide term statistics for TF-IDF weighting.
"""
import math
from collections import Counter
from typing import Dict, Iterable, Mapping, Optional, Sequence

from ..preprocessing.document import Document


def compute_idf(documents: Iterable[Document]) -> Dict[str, float]:
    """
    Compute the inverse document frequency of every term in the corpus.
    IDF(t) = ln(N / DF(t))

    A term that occurs in every document gets an IDF of 0.

    Args:
        documents: Documents of the corpus

    Returns:
        Dictionary mapping terms to their IDF score
    """
    document_frequency = Counter()
    document_count = 0
    for document in documents:
        document_count += 1
        # Repeated words count once per document
        document_frequency.update(set(document.words))

    return {
        term: math.log(document_count / frequency)
        for term, frequency in document_frequency.items()
    }


def compute_tf(words: Sequence[str]) -> Dict[str, float]:
    """
    Compute term frequency (TF) for each distinct word.
    TF(t) = count(t) / len(words)

    Args:
        words: Token sequence of a document or a query

    Returns:
        Dictionary mapping words to their TF scores
    """
    if not words:
        return {}
    length = len(words)
    return {word: count / length for word, count in Counter(words).items()}


def vector_norm(vector: Mapping[str, float]) -> float:
    """Euclidean norm of a sparse vector."""
    return math.sqrt(sum(score ** 2 for score in vector.values()))


def compute_cosine_similarity(vec1: Mapping[str, float], vec2: Mapping[str, float],
                              norm1: Optional[float] = None,
                              norm2: Optional[float] = None) -> float:
    """
    Compute cosine similarity between two sparse vectors.

    Args:
        vec1: First vector as a dictionary {word: tf_idf_score}
        vec2: Second vector as a dictionary {word: tf_idf_score}
        norm1: Precomputed norm of vec1, computed when omitted
        norm2: Precomputed norm of vec2, computed when omitted

    Returns:
        Cosine similarity score, 0.0 if either vector has zero norm
    """
    if norm1 is None:
        norm1 = vector_norm(vec1)
    if norm2 is None:
        norm2 = vector_norm(vec2)

    # Avoid division by zero
    if norm1 == 0 or norm2 == 0:
        return 0.0

    # Iterate the smaller vector, absent terms contribute nothing
    if len(vec1) > len(vec2):
        vec1, vec2 = vec2, vec1
    dot_product = sum(score * vec2[word] for word, score in vec1.items() if word in vec2)

    return dot_product / (norm1 * norm2)
