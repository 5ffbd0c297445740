"""Extraction strategy contract."""

from typing import Protocol, TypeVar

from bs4 import BeautifulSoup

T_co = TypeVar("T_co", covariant=True)

# Parsed, fully rendered page markup handed to extraction strategies.
Document = BeautifulSoup


class ExtractionStrategy(Protocol[T_co]):
    """Pure function turning a rendered document into a typed result."""

    def __call__(self, document: Document) -> T_co:
        """
        Extract a result from a rendered document.

        Args:
            document: Parsed markup of the rendered page

        Returns:
            The typed result. Missing optional fields are represented as
            None or empty values inside it.

        Raises:
            ExtractionFailure: If a structurally required element is missing
        """
        ...


def parse_document(markup: str) -> Document:
    """Parse serialized markup into a Document."""
    return BeautifulSoup(markup, "html.parser")
