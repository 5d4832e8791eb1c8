import math

import pytest

from SearchRanker.errors import EmptyCorpusError, UnknownDocumentError
from SearchRanker.preprocessing.document import Document
from SearchRanker.tfidf_search.term_statistics import (
    compute_cosine_similarity,
    compute_idf,
    compute_tf,
    vector_norm,
)
from SearchRanker.tfidf_search.tfidf_search import RelevanceEngine


@pytest.fixture()
def pets():
    return [
        Document(uri="d1", words=["cat", "dog"]),
        Document(uri="d2", words=["cat", "fish"]),
        Document(uri="d3", words=["bird", "bird", "parrot"]),
    ]


def test_idf_of_term_in_every_document_is_zero():
    documents = [
        Document(uri="a", words=["the", "x"]),
        Document(uri="b", words=["the", "the"]),
        Document(uri="c", words=["y", "the"]),
    ]

    idf = compute_idf(documents)

    assert idf["the"] == 0.0
    assert idf["x"] == math.log(3)
    assert idf["y"] == math.log(3)


def test_idf_counts_each_document_once(pets):
    idf = compute_idf(pets)

    assert idf["bird"] == pytest.approx(math.log(3))
    assert idf["cat"] == pytest.approx(math.log(3 / 2))
    assert set(idf) == {"cat", "dog", "fish", "bird", "parrot"}


def test_tf_normalizes_by_sequence_length():
    tf = compute_tf(["a", "b", "a", "c"])

    assert tf == {"a": 0.5, "b": 0.25, "c": 0.25}


def test_tf_of_empty_sequence_is_empty():
    assert compute_tf([]) == {}


def test_cosine_similarity_handles_zero_vectors():
    assert compute_cosine_similarity({}, {"a": 1.0}) == 0.0
    assert compute_cosine_similarity({"a": 0.0}, {"a": 1.0}) == 0.0


def test_cosine_similarity_of_orthogonal_vectors():
    assert compute_cosine_similarity({"a": 1.0}, {"b": 2.0}) == 0.0


def test_cosine_similarity_uses_given_norms():
    vec1 = {"a": 3.0, "b": 4.0}
    vec2 = {"a": 1.0}

    assert vector_norm(vec1) == 5.0
    assert compute_cosine_similarity(vec1, vec2) == pytest.approx(0.6)
    assert compute_cosine_similarity(vec1, vec2, norm1=5.0, norm2=1.0) == pytest.approx(0.6)


def test_document_vectors_hold_only_document_terms(pets):
    engine = RelevanceEngine(pets)

    vectors = engine.document_vectors
    assert set(vectors) == {"d1", "d2", "d3"}
    assert set(vectors["d3"]) == {"bird", "parrot"}
    assert vectors["d3"]["bird"] == pytest.approx(2 / 3 * math.log(3))
    assert engine.document_norm("d1") == pytest.approx(vector_norm(vectors["d1"]))


def test_relevance_matches_hand_computed_cosine(pets):
    engine = RelevanceEngine(pets)

    expected = math.log(3) / math.sqrt(math.log(1.5) ** 2 + math.log(3) ** 2)
    assert engine.relevance(["dog"], "d1") == pytest.approx(expected)
    assert engine.relevance(["dog"], "d2") == 0.0


def test_query_equal_to_unique_document_is_maximal(pets):
    engine = RelevanceEngine(pets)

    assert engine.relevance(["bird", "bird", "parrot"], "d3") == pytest.approx(1.0)
    assert engine.relevance(["bird", "bird", "parrot"], "d3") <= 1.0


def test_unknown_query_terms_score_zero(pets):
    engine = RelevanceEngine(pets)

    for doc in pets:
        assert engine.relevance(["zebra", "unicorn"], doc.uri) == 0.0


def test_unknown_terms_are_dropped_from_query(pets):
    engine = RelevanceEngine(pets)

    assert engine.query_vector(["dog", "zebra"]) == {"dog": pytest.approx(0.5 * math.log(3))}


def test_empty_query_scores_zero(pets):
    engine = RelevanceEngine(pets)

    assert engine.relevance([], "d1") == 0.0


def test_document_of_common_terms_scores_zero():
    documents = [
        Document(uri="a", words=["common"]),
        Document(uri="b", words=["common", "rare"]),
    ]
    engine = RelevanceEngine(documents)

    assert engine.document_norm("a") == 0.0
    assert engine.relevance(["common", "rare"], "a") == 0.0
    assert engine.relevance(["common", "rare"], "b") > 0.0


def test_document_without_words_scores_zero():
    engine = RelevanceEngine([Document(uri="empty"), Document(uri="full", words=["x"])])

    assert engine.relevance(["x"], "empty") == 0.0


def test_relevance_is_repeatable(pets):
    engine = RelevanceEngine(pets)

    first = engine.relevance(["cat", "fish"], "d2")
    assert engine.relevance(["cat", "fish"], "d2") == first


def test_rank_orders_by_similarity(pets):
    engine = RelevanceEngine(pets)

    ranked = engine.rank(["cat", "dog"])

    assert [doc_id for doc_id, _ in ranked] == ["d1", "d2", "d3"]
    assert ranked[0][1] > ranked[1][1] > ranked[2][1] == 0.0
    assert engine.rank(["cat", "dog"], top_k=1) == ranked[:1]


def test_tables_are_read_only(pets):
    engine = RelevanceEngine(pets)

    with pytest.raises(TypeError):
        engine.idf_scores["cat"] = 10.0
    with pytest.raises(TypeError):
        engine.document_vectors["d1"]["cat"] = 10.0


def test_unknown_document_raises(pets):
    engine = RelevanceEngine(pets)

    with pytest.raises(UnknownDocumentError):
        engine.relevance(["cat"], "d9")
    with pytest.raises(UnknownDocumentError):
        engine.document_norm("d9")


def test_empty_corpus_is_rejected():
    with pytest.raises(EmptyCorpusError):
        RelevanceEngine([])
