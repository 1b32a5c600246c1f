"""Ingestion and aggregation pipeline for uploaded sales exports."""

from .columns import ColumnMapping, resolve_columns
from .data_loader import detect_format, load_raw_table
from .errors import (
    DecodeError,
    EmptyOrInsufficientData,
    MissingRequiredColumn,
    NoValidRecords,
    SalesDataError,
    UnsupportedFormat,
)
from .insights import Insights, generate_insights
from .normalizer import SalesRecord, normalize_records
from .pipeline import AnalysisResult, UploadSlot, process_upload, run_pipeline
from .summary import generate_summary

__all__ = [
    "ColumnMapping",
    "resolve_columns",
    "detect_format",
    "load_raw_table",
    "DecodeError",
    "EmptyOrInsufficientData",
    "MissingRequiredColumn",
    "NoValidRecords",
    "SalesDataError",
    "UnsupportedFormat",
    "Insights",
    "generate_insights",
    "SalesRecord",
    "normalize_records",
    "AnalysisResult",
    "UploadSlot",
    "process_upload",
    "run_pipeline",
    "generate_summary",
]
