"""Spreadsheet-backed attendance log.

One sheet, six fixed columns, one row appended per accepted submission.
Date and time are written as separate text cells so readers never have to
re-parse a combined timestamp.
"""
from __future__ import annotations

import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from ..attendance.model import AttendanceRecord, ReportRow
from ..core.constants import SHEET_HEADERS, SHEET_NAME
from ..core.enums import TableState
from ..core.exceptions import TabularStoreReadFailure, TabularStoreWriteFailure

logger = logging.getLogger(__name__)

_LOAD_ERRORS = (InvalidFileException, BadZipFile, ParseError, KeyError, ValueError, OSError)
_WRITE_ERRORS = _LOAD_ERRORS + (IllegalCharacterError, TypeError)
_READ_ERRORS = _LOAD_ERRORS + (TypeError, IndexError)


class ExcelAttendanceStore:
    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _open(self, *, read_only: bool = False) -> tuple[TableState, Optional[Workbook]]:
        """Load the workbook and classify it without using errors as the happy path."""
        if not self._path.exists():
            return TableState.MISSING, None

        try:
            workbook = load_workbook(self._path, read_only=read_only)
        except _LOAD_ERRORS as exc:
            logger.warning("Cannot parse %s: %s", self._path, exc)
            return TableState.MALFORMED, None

        if SHEET_NAME not in workbook.sheetnames:
            return TableState.MISSING, workbook

        sheet = workbook[SHEET_NAME]
        header = next(sheet.iter_rows(min_row=1, max_row=1, values_only=True), None)
        if header is None or tuple(header[: len(SHEET_HEADERS)]) != SHEET_HEADERS:
            return TableState.MALFORMED, workbook
        return TableState.VALID, workbook

    def inspect(self) -> TableState:
        state, workbook = self._open(read_only=True)
        if workbook is not None:
            workbook.close()
        return state

    def append(self, record: AttendanceRecord) -> None:
        row = ReportRow.from_record(record)
        with self._write_lock:
            state, workbook = self._open()
            if state == TableState.MALFORMED:
                raise TabularStoreWriteFailure(f"{self._path} is not a valid attendance workbook")

            try:
                if workbook is None:
                    logger.info("Creating new %s", self._path)
                    workbook = Workbook()
                    sheet = workbook.active
                    sheet.title = SHEET_NAME
                    self._write_header(sheet)
                elif state == TableState.MISSING:
                    logger.info("Adding %r sheet to %s", SHEET_NAME, self._path)
                    sheet = workbook.create_sheet(SHEET_NAME)
                    self._write_header(sheet)
                else:
                    sheet = workbook[SHEET_NAME]

                sheet.append(list(row.as_cells()))
                self._save(workbook)
            except _WRITE_ERRORS as exc:
                raise TabularStoreWriteFailure(f"Could not write {self._path}: {exc}") from exc

        logger.debug("Row appended: %s", row)

    def read_all(self) -> list[ReportRow]:
        state, workbook = self._open(read_only=True)
        if state != TableState.VALID:
            if workbook is not None:
                workbook.close()
            raise TabularStoreReadFailure(f"{self._path} is {state.value}")

        rows: list[ReportRow] = []
        try:
            for values in workbook[SHEET_NAME].iter_rows(min_row=2, values_only=True):
                cells = [_cell_text(v) for v in values[: len(SHEET_HEADERS)]]
                cells += [""] * (len(SHEET_HEADERS) - len(cells))
                identity, name, date_str, time_str, address, status = cells
                if not identity and not name:
                    continue
                rows.append(ReportRow(identity, name, date_str, time_str, address, status))
        except _READ_ERRORS as exc:
            raise TabularStoreReadFailure(f"Could not read {self._path}: {exc}") from exc
        finally:
            workbook.close()
        return rows

    @staticmethod
    def _write_header(sheet) -> None:
        sheet.append(list(SHEET_HEADERS))
        for cell in sheet[1]:
            cell.font = Font(bold=True)

    def _save(self, workbook: Workbook) -> None:
        # Write next to the target and swap in, so readers never see a half-written file.
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=".xlsx", dir=self._path.parent)
        os.close(fd)
        try:
            workbook.save(tmp_name)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def _cell_text(value) -> str:
    return "" if value is None else str(value)
