"""
app/decoders package marker.
"""

from app.decoders.spreadsheet_decoder import FileFormat, SpreadsheetDecoder, detect_format

__all__ = [
    "FileFormat",
    "SpreadsheetDecoder",
    "detect_format",
]
