"""
Export functionality for Vaccine Helper.
"""

from .json_export import (
    export_profile_json,
    export_schedule_json,
    export_schedule_summary,
    import_profile_json,
)
from .markdown import export_schedule_markdown

__all__ = [
    "export_profile_json",
    "export_schedule_json",
    "export_schedule_summary",
    "import_profile_json",
    "export_schedule_markdown",
]
