"""
Matcher outcomes and parser-model sentinels.

A matcher returns one MatcherResult per model per document. The
selection engine wraps its decision in a DispatchResult so callers can
tell "no layout matched" apart from "something broke".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from models.model_descriptor import ModelDescriptor


class DocumentFormat(str, Enum):
    """Input format, decided by filename extension."""
    SPREADSHEET = "spreadsheet"
    CSV = "csv"
    PDF = "pdf"
    UNKNOWN = "unknown"


class MatcherResult(str, Enum):
    """Outcome of a single model's matches() predicate."""
    CORRECT = "CORRECT"
    WRONG_HEADER = "WRONG_HEADER"
    WRONG_ESTABLISHMENT_NUMBER = "WRONG_ESTABLISHMENT_NUMBER"
    EMPTY_FILE = "EMPTY_FILE"
    GENERIC_ERROR = "GENERIC_ERROR"
    WRONG_EXTENSION = "WRONG_EXTENSION"


class ParserModel:
    """Sentinel parser-model ids used when no catalog model applies."""
    NOMATCH = "NOMATCH"
    NOREMOS = "NOREMOS"
    NOREMOSCSV = "NOREMOSCSV"
    NOREMOSPDF = "NOREMOSPDF"
    UNRECOGNISED = "UNRECOGNISED"

    NO_REMOS_MODELS = frozenset({NOREMOS, NOREMOSCSV, NOREMOSPDF})


class DispatchKind(str, Enum):
    """Tag of the selection engine's result."""
    MATCHED = "MATCHED"
    NO_REMOS = "NO_REMOS"
    NO_MATCH = "NO_MATCH"
    UNRECOGNISED = "UNRECOGNISED"
    FAULT = "FAULT"


@dataclass(frozen=True)
class DispatchResult:
    """Which model (or sentinel) a document was dispatched to."""
    kind: DispatchKind
    parser_model: str
    document_format: DocumentFormat
    descriptor: Optional["ModelDescriptor"] = None
    error: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.kind == DispatchKind.MATCHED
