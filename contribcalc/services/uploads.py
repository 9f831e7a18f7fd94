"""Parse uploaded city and salary tables and store them for a company.

Workbooks (``.xlsx``) are read with openpyxl, first sheet, header on row 1.
``.csv`` files are read with the standard ``csv`` module.
"""
from __future__ import annotations

import csv
import io
from decimal import Decimal, InvalidOperation
from pathlib import PurePath
from typing import Any, Iterable, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.orm import Session

from contribcalc.calculations import parse_yearmonth
from contribcalc.core.errors import UploadFormatError
from contribcalc.core.log import get_logger, timeit
from contribcalc.models import Salary
from contribcalc.repositories import CityRepository, SalaryRepository
from contribcalc.schemas import UploadSummary

LOGGER = get_logger(__name__)

CITY_COLUMNS: tuple[str, ...] = ("city_name", "year", "rate", "base_min", "base_max")
SALARY_COLUMNS: tuple[str, ...] = ("id", "employee_id", "employee_name", "month", "salary_amount")

Row = dict[str, Any]
# Source line number (header is line 1) paired with the row values.
NumberedRow = tuple[int, Row]


def _normalize_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _rows_from_workbook(content: bytes) -> list[NumberedRow]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as exc:
        raise UploadFormatError("Could not read the workbook, check the file format") from exc

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        keys = [str(cell).strip() if cell is not None else "" for cell in header]
        parsed: list[NumberedRow] = []
        for line, values in enumerate(rows, start=2):
            cells = [_normalize_cell(value) for value in values]
            if not any(cell != "" for cell in cells):
                continue
            parsed.append((line, {key: cell for key, cell in zip(keys, cells) if key}))
        return parsed
    finally:
        workbook.close()


def _rows_from_csv(content: bytes) -> list[NumberedRow]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UploadFormatError("CSV files must be UTF-8 encoded") from exc
    reader = csv.DictReader(io.StringIO(text))
    parsed: list[NumberedRow] = []
    for record in reader:
        row = {
            (key or "").strip(): _normalize_cell(value)
            for key, value in record.items()
            if key
        }
        if any(value != "" for value in row.values()):
            parsed.append((reader.line_num, row))
    return parsed


def read_table(filename: str, content: bytes) -> list[NumberedRow]:
    """Return ``(line, row)`` for each non-blank data row of an ``.xlsx`` or ``.csv`` file."""

    suffix = PurePath(filename or "").suffix.lower()
    if suffix == ".csv":
        return _rows_from_csv(content)
    if suffix in {".xlsx", ".xlsm"}:
        return _rows_from_workbook(content)
    raise UploadFormatError(
        f"Unsupported file type {suffix or '(none)'}; upload an .xlsx or .csv file",
        filename=filename,
    )


def require_columns(rows: Sequence[NumberedRow], required: Iterable[str]) -> None:
    """Raise :class:`UploadFormatError` unless the first row has every column."""

    if not rows:
        raise UploadFormatError("The uploaded file contains no data rows")
    missing = [column for column in required if column not in rows[0][1]]
    if missing:
        raise UploadFormatError(
            f"Missing required columns: {', '.join(missing)}",
            missing=missing,
        )


def _decimal(row: Row, column: str, line: int) -> Decimal:
    try:
        value = Decimal(str(row[column]))
    except (InvalidOperation, KeyError) as exc:
        raise UploadFormatError(
            f"Row {line}: {column} must be a number", row=line, column=column
        ) from exc
    if not value.is_finite():
        raise UploadFormatError(f"Row {line}: {column} must be a number", row=line, column=column)
    return value


def _integer(row: Row, column: str, line: int) -> int:
    value = row.get(column)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise UploadFormatError(
            f"Row {line}: {column} must be an integer", row=line, column=column
        ) from exc


def _text(row: Row, column: str, line: int) -> str:
    value = str(row.get(column, "")).strip()
    if not value:
        raise UploadFormatError(f"Row {line}: {column} is required", row=line, column=column)
    return value


def _name(row: Row, line: int) -> str:
    # Kept verbatim: results group employees by this exact string.
    value = str(row.get("employee_name", ""))
    if not value.strip():
        raise UploadFormatError(f"Row {line}: employee_name is required", row=line)
    return value


class UploadService:
    """Store parsed city and salary rows for one company."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._cities = CityRepository(session)
        self._salaries = SalaryRepository(session)

    def upload_cities(self, company_id: str, filename: str, content: bytes) -> UploadSummary:
        rows = read_table(filename, content)
        require_columns(rows, CITY_COLUMNS)

        with timeit("City upload", logger=LOGGER, unit="rows", total=len(rows)):
            try:
                for line, row in rows:
                    rate = _decimal(row, "rate", line)
                    base_min = _decimal(row, "base_min", line)
                    base_max = _decimal(row, "base_max", line)
                    if not Decimal(0) < rate <= Decimal(1):
                        raise UploadFormatError(
                            f"Row {line}: rate must be a fraction in (0, 1]", row=line
                        )
                    if base_min < 0 or base_min > base_max:
                        raise UploadFormatError(
                            f"Row {line}: base_min must be between 0 and base_max", row=line
                        )
                    self._cities.upsert(
                        company_id,
                        city_name=_text(row, "city_name", line),
                        year=_integer(row, "year", line),
                        rate=rate,
                        base_min=base_min,
                        base_max=base_max,
                    )
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise

        LOGGER.info("Stored %d city policies for %s", len(rows), company_id)
        return UploadSummary(
            type="cities",
            count=len(rows),
            message=f"Uploaded {len(rows)} city rows",
        )

    def upload_salaries(self, company_id: str, filename: str, content: bytes) -> UploadSummary:
        rows = read_table(filename, content)
        require_columns(rows, SALARY_COLUMNS)

        with timeit("Salary upload", logger=LOGGER, unit="rows", total=len(rows)):
            by_id: dict[int, Salary] = {}
            for line, row in rows:
                salary = self._salary_from_row(company_id, row, line)
                by_id[salary.id] = salary
            try:
                count = self._salaries.replace(company_id, list(by_id.values()))
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise

        if count != len(rows):
            LOGGER.warning("Salary upload repeated %d row ids", len(rows) - count)
        LOGGER.info("Stored %d salary rows for %s", count, company_id)
        return UploadSummary(
            type="salaries",
            count=count,
            message=f"Uploaded {count} salary rows",
        )

    @staticmethod
    def _salary_from_row(company_id: str, row: Row, line: int) -> Salary:
        try:
            yearmonth = parse_yearmonth(row.get("month", ""))
        except ValueError as exc:
            raise UploadFormatError(
                f"Row {line}: month must look like 202401 or 2024-01", row=line
            ) from exc
        if not 1 <= yearmonth % 100 <= 12:
            raise UploadFormatError(f"Row {line}: month {yearmonth} is not a calendar month", row=line)

        amount = _decimal(row, "salary_amount", line)
        if amount < 0:
            raise UploadFormatError(f"Row {line}: salary_amount cannot be negative", row=line)

        return Salary(
            company_id=company_id,
            id=_integer(row, "id", line),
            employee_id=_text(row, "employee_id", line),
            employee_name=_name(row, line),
            yearmonth=yearmonth,
            salary_amount=amount,
        )
