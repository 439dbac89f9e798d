"""Document store for the API description served at /__api.

Keeps the raw YAML bytes exactly as supplied, so they can be returned verbatim
when no rewrite is needed, and decodes a brand new mapping from those bytes
whenever a request needs a rewritten copy.
"""
# Type hints
from typing import Any, Dict, Union

# Third-party imports
import yaml

# Content type used for every /__api response
YAML_CONTENT_TYPE = "application/yaml"


class InvalidDocumentError(ValueError):
    """Raised when the description bytes cannot be decoded into a mapping."""


def _decode(raw: bytes) -> Dict[Any, Any]:
    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise InvalidDocumentError(f"API description is not valid YAML: {e}") from e
    if not isinstance(document, dict):
        raise InvalidDocumentError(
            f"API description must be a mapping at the top level, got {type(document).__name__}"
        )
    return document


class DocumentStore:
    """
    Immutable holder of a YAML API description.

    Text input is encoded as UTF-8 before it is stored. The document is parsed
    once at construction purely to fail fast on bad input;
    every caller of fresh_parse() gets its own independently decoded mapping, so
    a rewrite applied for one request can never leak into another.

    Raises:
        InvalidDocumentError: if the bytes are not YAML or not a top-level mapping.
    """

    def __init__(self, raw: Union[bytes, str]):
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        _decode(raw)
        self._raw = bytes(raw)

    @classmethod
    def from_file(cls, path: str) -> "DocumentStore":
        """Load a store from a YAML file on disk. OSError propagates to the caller."""
        with open(path, "rb") as f:
            return cls(f.read())

    def raw_bytes(self) -> bytes:
        """Return the original document bytes, untouched."""
        return self._raw

    def fresh_parse(self) -> Dict[Any, Any]:
        """Decode a new mutable mapping from the raw bytes."""
        return _decode(self._raw)

    @staticmethod
    def serialize(document: Dict[Any, Any]) -> bytes:
        """
        Encode a mapping back to YAML.

        Args:
            document: mapping previously returned by fresh_parse(), possibly mutated.

        Returns:
            UTF-8 encoded YAML, keeping the mapping's key order and nesting.
        """
        text = yaml.safe_dump(
            document,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
        return text.encode("utf-8")
