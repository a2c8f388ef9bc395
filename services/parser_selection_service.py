"""
Matcher selection.

Picks the single model that parses a document, or a typed sentinel:

    NO_REMOS     no establishment number anywhere (NOREMOS / NOREMOSCSV / NOREMOSPDF)
    NO_MATCH     establishment number present but no model accepted the layout
    UNRECOGNISED unknown file extension
    FAULT        selection itself broke

Models are tried in the catalog's explicit priority order, skipping
deprecated ones; the first CORRECT wins. Overlapping layouts are not
detected here; matching_models() lists every acceptor for diagnostics.
"""

from typing import Any, Optional

import structlog

from models.matcher import (
    DispatchKind,
    DispatchResult,
    DocumentFormat,
    MatcherResult,
    ParserModel,
)
from models.model_descriptor import ModelDescriptor
from services import header_matcher, matchers, model_catalog
from utils import file_extension, regex_utils

logger = structlog.get_logger(__name__)

_NO_REMOS_MODELS = {
    DocumentFormat.SPREADSHEET: ParserModel.NOREMOS,
    DocumentFormat.CSV: ParserModel.NOREMOSCSV,
    DocumentFormat.PDF: ParserModel.NOREMOSPDF,
}


class ParserSelectionService:
    """
    Dispatches sanitised documents to catalog models.

    The catalog is injectable so tests can exercise ordering with their
    own descriptors.
    """

    def __init__(self, catalog: Optional[dict] = None):
        self.logger = logger.bind(service="parser_selection")
        self._catalog = catalog

    def candidates(self, document_format: DocumentFormat) -> tuple:
        """Non-deprecated models for a format, in priority order."""
        if self._catalog is not None:
            models = self._catalog.get(document_format, ())
        else:
            models = model_catalog.models_for(document_format)
        return tuple(model for model in models if not model.deprecated)

    def _contains_remos(self, document_format: DocumentFormat, document: Any) -> bool:
        if document_format == DocumentFormat.PDF:
            return regex_utils.contains_remos(document.text_rows())
        return any(
            regex_utils.contains_remos(rows)
            for _, rows in header_matcher.iter_sheets(document)
        )

    def _is_empty(self, document_format: DocumentFormat, document: Any) -> bool:
        if document is None:
            return True
        if document_format == DocumentFormat.PDF:
            return document.is_empty
        return header_matcher.is_empty(document)

    async def select(self, document: Any, filename: Optional[str]) -> DispatchResult:
        """
        Choose the model for a sanitised document.

        Args:
            document: Sanitised table/workbook, or sanitised PdfDocument
            filename: Original filename; only its extension is consulted

        Returns:
            DispatchResult; never raises
        """
        document_format = file_extension.classify(filename)
        if document_format == DocumentFormat.UNKNOWN:
            self.logger.info("unrecognised_extension", filename=filename)
            return DispatchResult(
                kind=DispatchKind.UNRECOGNISED,
                parser_model=ParserModel.UNRECOGNISED,
                document_format=document_format,
            )

        try:
            if self._is_empty(document_format, document):
                self.logger.info("empty_document", filename=filename)
                return self._no_match(document_format)

            if not self._contains_remos(document_format, document):
                self.logger.info("no_establishment_number", filename=filename)
                return DispatchResult(
                    kind=DispatchKind.NO_REMOS,
                    parser_model=_NO_REMOS_MODELS[document_format],
                    document_format=document_format,
                )

            for descriptor in self.candidates(document_format):
                result = await matchers.matches(descriptor, document, filename)
                if result == MatcherResult.CORRECT:
                    return DispatchResult(
                        kind=DispatchKind.MATCHED,
                        parser_model=descriptor.model_id,
                        document_format=document_format,
                        descriptor=descriptor,
                    )
        except Exception as e:
            self.logger.error(
                "parser_selection_failed",
                filename=filename,
                error=str(e),
                error_type=type(e).__name__
            )
            return DispatchResult(
                kind=DispatchKind.FAULT,
                parser_model=ParserModel.NOMATCH,
                document_format=document_format,
                error=str(e),
            )

        self.logger.info("no_model_matched", filename=filename, format=document_format.value)
        return self._no_match(document_format)

    async def matching_models(self, document: Any, filename: Optional[str]) -> list[ModelDescriptor]:
        """Every non-deprecated model accepting the document, in priority order."""
        document_format = file_extension.classify(filename)
        found = []
        for descriptor in self.candidates(document_format):
            if await matchers.matches(descriptor, document, filename) == MatcherResult.CORRECT:
                found.append(descriptor)
        if len(found) > 1:
            self.logger.warning(
                "ambiguous_packing_list",
                filename=filename,
                models=[descriptor.model_id for descriptor in found]
            )
        return found

    @staticmethod
    def _no_match(document_format: DocumentFormat) -> DispatchResult:
        return DispatchResult(
            kind=DispatchKind.NO_MATCH,
            parser_model=ParserModel.NOMATCH,
            document_format=document_format,
        )


# Singleton instance
_selection_service: Optional[ParserSelectionService] = None


def get_parser_selection_service() -> ParserSelectionService:
    """Get or create ParserSelectionService instance."""
    global _selection_service
    if _selection_service is None:
        _selection_service = ParserSelectionService()
    return _selection_service
