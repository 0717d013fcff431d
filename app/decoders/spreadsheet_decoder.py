"""
app/decoders/spreadsheet_decoder.py

Turns uploaded CSV or workbook bytes into header-keyed raw rows.

Delimited text is read as UTF-8 only. Files saved in a legacy encoding
either fail to decode or arrive with mangled non-ASCII text; no encoding
detection is attempted. Workbooks are read from their first sheet only.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from openpyxl import load_workbook

from app.domain.import_errors import EmptyFileError, MissingColumnError, UnreadableFileError
from app.domain.scheme_import import REQUIRED_COLUMNS, RawRow

logger = logging.getLogger(__name__)

DELIMITED_TEXT_EXTENSIONS = (".csv", ".txt")


class FileFormat:
    DELIMITED_TEXT = "delimited_text"
    SPREADSHEET = "spreadsheet"


def detect_format(filename: str | None) -> str:
    """
    Infer the file format from its extension.

    Anything that is not delimited text is handed to the workbook reader,
    which rejects bytes it cannot open.
    """

    name = (filename or "").strip().lower()
    if name.endswith(DELIMITED_TEXT_EXTENSIONS):
        return FileFormat.DELIMITED_TEXT
    return FileFormat.SPREADSHEET


class SpreadsheetDecoder:
    """
    Decodes one uploaded file and checks its header before returning rows.
    """

    def __init__(self, required_columns: Sequence[str] = REQUIRED_COLUMNS) -> None:
        self._required_columns = tuple(required_columns)

    def decode(self, *, content: bytes, filename: str | None) -> list[RawRow]:
        """
        Return every non-blank data row, or raise a batch-level error.

        Raises:
            EmptyFileError: no header row, or no data rows below it.
            MissingColumnError: a required column is absent from the header.
            UnreadableFileError: the bytes are not UTF-8 text or a workbook.
        """

        file_format = detect_format(filename)
        if file_format == FileFormat.DELIMITED_TEXT:
            table = self._read_delimited_text(content)
        else:
            table = self._read_workbook(content)

        if not table:
            raise EmptyFileError("File is empty")

        headers = [self._header_name(cell) for cell in table[0]]
        self._check_required_columns(headers)

        rows = list(self._build_rows(headers, table[1:]))
        if not rows:
            raise EmptyFileError("File is empty")

        logger.info(
            "Decoded import file filename=%r format=%s rows=%d",
            filename,
            file_format,
            len(rows),
        )
        return rows

    def _read_delimited_text(self, content: bytes) -> list[list[Any]]:
        try:
            text = content.decode("utf-8-sig")
            return [row for row in csv.reader(io.StringIO(text, newline=""))]
        except UnicodeDecodeError as exc:
            raise UnreadableFileError("File must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise UnreadableFileError(f"Invalid CSV format: {exc}") from exc

    def _read_workbook(self, content: bytes) -> list[list[Any]]:
        # read_only sheets parse lazily, so corrupt sheet XML surfaces while iterating.
        workbook = None
        try:
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
            if not workbook.worksheets:
                return []
            sheet = workbook.worksheets[0]
            return [list(row) for row in sheet.iter_rows(values_only=True)]
        except Exception as exc:  # noqa: BLE001
            logger.warning("Workbook could not be read: %s: %s", exc.__class__.__name__, exc)
            raise UnreadableFileError("File could not be read as a spreadsheet.") from exc
        finally:
            if workbook is not None:
                workbook.close()

    def _check_required_columns(self, headers: Iterable[str | None]) -> None:
        present = {header for header in headers if header}
        for column in self._required_columns:
            if column not in present:
                raise MissingColumnError(column)

    def _build_rows(
        self,
        headers: Sequence[str | None],
        data_rows: Sequence[Sequence[Any]],
    ) -> Iterator[RawRow]:
        for row_index, cells in enumerate(data_rows, start=1):
            if self._is_blank_row(cells):
                continue

            values: dict[str, Any] = {}
            for position, header in enumerate(headers):
                if not header:
                    continue
                values[header] = cells[position] if position < len(cells) else None
            yield RawRow(row_index=row_index, values=values)

    @staticmethod
    def _header_name(cell: Any) -> str | None:
        if cell is None:
            return None
        name = str(cell).strip()
        return name or None

    @staticmethod
    def _is_blank_row(cells: Sequence[Any]) -> bool:
        return all(cell is None or str(cell).strip() == "" for cell in cells)
