"""Domain models for the inspection workbook importer."""

from .config_models import ApiConfig, FieldCandidates, ImportConfig, ItemTypeRule
from .error_record import ErrorRecord
from .inspection_record import FAIL_RESULT, PASS_RESULT, UNKNOWN, InspectionRecord
from .processing_result import ImportResult, SheetStat
from .row_data import RowData

__all__ = [
    # Configuration models
    "ApiConfig",
    "FieldCandidates",
    "ImportConfig",
    "ItemTypeRule",
    # Records
    "ErrorRecord",
    "InspectionRecord",
    "FAIL_RESULT",
    "PASS_RESULT",
    "UNKNOWN",
    # Processing models
    "ImportResult",
    "RowData",
    "SheetStat",
]
