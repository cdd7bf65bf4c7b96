"""
Workbook tables - row-oriented access to the first sheet of an .xlsx file.

Reads and writes are whole-file operations. A write rewrites the entire
first sheet into a temporary file and atomically replaces the workbook,
but concurrent writers are not serialized: two overlapping
read-modify-write cycles can still lose one update.
"""

import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

import openpyxl


def cell_text(value: Any) -> str:
    """Render a cell value the way it reads in the sheet (101.0 -> "101")."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


@dataclass
class TableTransaction:
    """Rows loaded for one read-modify-write cycle."""
    rows: list[dict[str, Any]]
    dirty: bool = field(default=False)

    def mark_dirty(self) -> None:
        self.dirty = True


class WorkbookTable:
    """
    A spreadsheet treated as a list of header->value rows.

    Example:
        table = WorkbookTable("library/assignment.xlsx")
        with table.transaction() as txn:
            for row in txn.rows:
                row["submitted"] = "true"
            txn.mark_dirty()
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_rows(self) -> list[dict[str, Any]]:
        """
        Read every non-empty row of the first sheet.

        The first row is the header; columns with an empty header are skipped.
        """
        workbook = openpyxl.load_workbook(self.path, read_only=True, data_only=True)
        try:
            sheet = workbook.worksheets[0]
            rows = sheet.iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                return []

            columns = [
                (index, str(name)) for index, name in enumerate(header)
                if name is not None and str(name).strip()
            ]
            records = []
            for values in rows:
                if all(value is None for value in values):
                    continue
                records.append({
                    name: values[index] if index < len(values) else None
                    for index, name in columns
                })
            return records
        finally:
            workbook.close()

    def write_rows(self, rows: list[dict[str, Any]]) -> None:
        """
        Replace the first sheet's contents with rows.

        The header is the ordered union of all row keys. Other sheets in
        the workbook are preserved.
        """
        header: list[str] = []
        for row in rows:
            for key in row:
                if key not in header:
                    header.append(key)

        if self.exists():
            workbook = openpyxl.load_workbook(self.path)
            old_sheet = workbook.worksheets[0]
            title = old_sheet.title
            workbook.remove(old_sheet)
            sheet = workbook.create_sheet(title, 0)
            workbook.active = 0
        else:
            workbook = openpyxl.Workbook()
            sheet = workbook.active

        sheet.append(header)
        for row in rows:
            sheet.append([row.get(name) for name in header])

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.stem}-", suffix=".xlsx"
        )
        os.close(fd)
        try:
            workbook.save(tmp_name)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        finally:
            workbook.close()

    @contextmanager
    def transaction(self) -> Iterator[TableTransaction]:
        """
        Load rows, let the caller mutate them, then persist if marked dirty.

        Nothing is written when the block raises or never calls mark_dirty().
        """
        txn = TableTransaction(rows=self.read_rows())
        yield txn
        if txn.dirty:
            self.write_rows(txn.rows)
