import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """
    A crawled document as seen by the ranking engines.

    The crawler owns tokenization: `words` arrive already split, and repeated
    words are kept because they count towards term frequency.
    """

    uri: str
    links: Tuple[str, ...] = field(default_factory=tuple)
    words: Tuple[str, ...] = field(default_factory=tuple)
    title: str = ""

    def __post_init__(self):
        # Accept any iterable but store tuples so the record stays hashable
        object.__setattr__(self, "links", tuple(self.links))
        object.__setattr__(self, "words", tuple(self.words))


def _extract_words(record: Dict[str, Any]) -> List[str]:
    """
    Extract the token sequence from a raw record.

    Args:
        record: Raw document dictionary

    Returns:
        List of word tokens
    """
    words = record.get("words")
    if words is not None:
        if isinstance(words, str) or not isinstance(words, list):
            raise ValueError(f"'words' must be a list of tokens, got {type(words).__name__}")
        return [str(word) for word in words]

    # Plain text is split on whitespace only
    text = record.get("text")
    if text is None:
        return []
    if not isinstance(text, str):
        raise ValueError(f"'text' must be a string, got {type(text).__name__}")
    return text.split()


def document_from_record(record: Dict[str, Any], fallback_id: str = None) -> Document:
    """
    Build a Document from a raw JSON record.

    Args:
        record: Dictionary with `uri` (or `id`), `links`, `words` or `text`
            and an optional `title`
        fallback_id: Identifier to use when the record carries none (dict
            keyed corpora)

    Returns:
        Document object

    Raises:
        ValueError: If the record has no identifier or malformed fields
    """
    if not isinstance(record, dict):
        raise ValueError(f"Document record must be an object, got {type(record).__name__}")

    # An explicit null uri falls back to id, then to the corpus key
    candidates = (record.get("uri"), record.get("id"), fallback_id)
    uri = next((value for value in candidates if value is not None and value != ""), None)
    if uri is None:
        raise ValueError(f"Document record has no 'uri' or 'id': {record!r}")

    links = record.get("links") or []
    if not isinstance(links, list):
        raise ValueError(f"'links' of document {uri!r} must be a list")

    title = record.get("title") or ""
    if not isinstance(title, str):
        raise ValueError(f"'title' of document {uri!r} must be a string")

    return Document(
        uri=str(uri),
        links=tuple(str(link) for link in links),
        words=tuple(_extract_words(record)),
        title=title
    )


def documents_from_records(records: Any) -> List[Document]:
    """
    Convert a list of records, or a dict keyed by document id, into Documents.

    Duplicate identifiers keep the last record seen.

    Args:
        records: Parsed JSON corpus

    Returns:
        List of unique Document objects in input order
    """
    if isinstance(records, dict):
        items: Iterable[Tuple[Any, Any]] = records.items()
    elif isinstance(records, list):
        items = ((None, record) for record in records)
    else:
        raise ValueError(f"Corpus must be a JSON list or object, got {type(records).__name__}")

    documents: Dict[str, Document] = {}
    for key, record in items:
        document = document_from_record(record, fallback_id=key)
        if document.uri in documents:
            logger.warning("Duplicate document id %r, keeping the last record", document.uri)
        documents[document.uri] = document

    return list(documents.values())


def load_documents(path: str) -> List[Document]:
    """
    Load a crawled corpus from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        List of Document objects
    """
    logger.info("Loading documents from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)

    documents = documents_from_records(records)
    logger.info("Loaded %d documents", len(documents))
    return documents
