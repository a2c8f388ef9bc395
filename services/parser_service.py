"""
Packing list parser service.

End-to-end pipeline for one document:

    classify -> sanitise (tables) / extract + sanitise (PDF)
             -> select model -> map items -> remove empty items
             -> validate -> null bad numbers -> envelope

parse() never raises. Anything unexpected becomes a FAULT outcome
carrying an empty NOMATCH envelope, so callers can alert on faults
separately from ordinary no-match results.
"""

from typing import Any, Awaitable, Callable, Optional

import structlog

from models.matcher import DispatchKind, DispatchResult, DocumentFormat, ParserModel
from models.packing_list import BusinessChecks, ParsedPackingList, ParseOutcome
from parsers import pdf_rows
from parsers.pdf_extractor import PdfDocument, extract_fragments_async
from parsers.sanitizer import sanitise
from services import model_parsers, parser_combine
from services.packing_list_validator import PackingListValidator
from services.parser_selection_service import ParserSelectionService, get_parser_selection_service
from services.validator_utilities import remove_bad_data, remove_empty_items
from utils import file_extension

logger = structlog.get_logger(__name__)

PdfExtractor = Callable[[bytes], Awaitable[PdfDocument]]


class PackingListParserService:
    """
    Parses packing lists from any supported format.

    Collaborators are injectable; defaults are the shared selection
    service, a validator over the loaded reference data, and pdfplumber
    extraction in a worker thread.
    """

    def __init__(
        self,
        selection_service: Optional[ParserSelectionService] = None,
        validator: Optional[PackingListValidator] = None,
        pdf_extractor: Optional[PdfExtractor] = None,
    ):
        self.logger = logger.bind(service="packing_list_parser")
        self.selection = selection_service or get_parser_selection_service()
        self.validator = validator or PackingListValidator()
        self._extract_pdf = pdf_extractor or extract_fragments_async

    async def prepare(self, document: Any, filename: Optional[str]) -> Any:
        """
        Bring a raw document into the shape the matchers read.

        PDF bytes are extracted to fragments first; an already extracted
        PdfDocument is accepted as is. Tables are sanitised.
        """
        document_format = file_extension.classify(filename)
        if document_format == DocumentFormat.PDF:
            if isinstance(document, (bytes, bytearray)):
                document = await self._extract_pdf(bytes(document))
            return pdf_rows.sanitise_document(document)
        if document_format in (DocumentFormat.SPREADSHEET, DocumentFormat.CSV):
            return sanitise(document)
        return document

    async def parse(
        self,
        document: Any,
        filename: Optional[str],
        dispatch_location: Any = None,
    ) -> ParseOutcome:
        """
        Parse and validate one packing list.

        Args:
            document: PDF bytes / PdfDocument, CSV rows, or sheet name -> rows
            filename: Original filename (decides the format)
            dispatch_location: Opaque tag echoed into the envelope

        Returns:
            ParseOutcome with the envelope; never raises
        """
        self.logger.info("parsing_packing_list", filename=filename)

        try:
            prepared = await self.prepare(document, filename)
            dispatch = await self.selection.select(prepared, filename)
            if dispatch.kind == DispatchKind.FAULT:
                return self._fault(dispatch.error, filename, dispatch_location)

            if dispatch.matched:
                packing_list = model_parsers.parse(prepared, dispatch.descriptor)
            else:
                packing_list = parser_combine.empty(self._sentinel(dispatch))

            outcome = ParseOutcome(
                status=dispatch.kind,
                packing_list=self._finalise(packing_list, dispatch_location),
            )
        except Exception as e:
            return self._fault(str(e), filename, dispatch_location, error_type=type(e).__name__)

        self.logger.info(
            "packing_list_parsed",
            filename=filename,
            status=outcome.status.value,
            model=outcome.packing_list.parser_model,
            items=len(outcome.packing_list.items),
            valid=outcome.packing_list.business_checks.all_required_fields_present,
        )
        return outcome

    @staticmethod
    def _sentinel(dispatch: DispatchResult) -> str:
        if dispatch.kind == DispatchKind.NO_REMOS:
            return dispatch.parser_model
        return ParserModel.NOMATCH

    def _finalise(self, packing_list: ParsedPackingList, dispatch_location: Any) -> ParsedPackingList:
        packing_list.items = remove_empty_items(packing_list.items)
        result = self.validator.validate(packing_list)
        packing_list.business_checks = BusinessChecks(
            all_required_fields_present=result.all_required_fields_present,
            failure_reasons=result.failure_reasons,
        )
        packing_list.items = remove_bad_data(packing_list.items)
        packing_list.dispatch_location_number = dispatch_location
        return packing_list

    def _fault(
        self,
        error: Optional[str],
        filename: Optional[str],
        dispatch_location: Any,
        error_type: Optional[str] = None,
    ) -> ParseOutcome:
        self.logger.error(
            "packing_list_parse_failed",
            filename=filename,
            error=error,
            error_type=error_type
        )
        return ParseOutcome(
            status=DispatchKind.FAULT,
            packing_list=parser_combine.empty(ParserModel.NOMATCH, dispatch_location),
            error=error,
        )


# Singleton instance
_parser_service: Optional[PackingListParserService] = None


def get_packing_list_parser_service() -> PackingListParserService:
    """Get or create PackingListParserService instance."""
    global _parser_service
    if _parser_service is None:
        _parser_service = PackingListParserService()
    return _parser_service
