"""
Exceptions raised by the SearchRanker ranking engines.
"""


class SearchRankerError(Exception):
    """Base exception for all SearchRanker errors."""


class EmptyCorpusError(SearchRankerError, ValueError):
    """Raised when an engine is built from a corpus with no documents."""

    def __init__(self, component: str):
        """
        Initialize the error.

        Args:
            component: Name of the component that refused the empty corpus
        """
        self.component = component
        super().__init__(f"{component} cannot be built from an empty corpus")


class UnknownDocumentError(SearchRankerError, KeyError):
    """Raised when a score is requested for a document outside the corpus."""

    def __init__(self, doc_id: str):
        self.doc_id = doc_id
        super().__init__(doc_id)

    def __str__(self):
        return f"Document not found in corpus: {self.doc_id!r}"
