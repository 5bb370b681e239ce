"""Infrastructure layer package."""

from .json_repository import JsonRecordStore
from .report_exporter import record_set_frame, save_month_html, save_record_set_excel, save_record_set_json

__all__ = [
    "JsonRecordStore",
    "record_set_frame",
    "save_month_html",
    "save_record_set_excel",
    "save_record_set_json",
]
