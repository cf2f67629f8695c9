from __future__ import annotations
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List, Union
import pandas as pd

TEXT_SUFFIXES = {".csv", ".tsv", ".txt"}


@dataclass
class Table:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def detect_delimiter(text: str) -> str:
    first_line = text.split("\n", 1)[0]
    return "\t" if "\t" in first_line else ","


def table_from_frame(df: pd.DataFrame) -> Table:
    """Turn a frame into trimmed string rows, dropping rows whose cells are all empty."""
    headers = [str(c).strip() for c in df.columns]
    df = df.copy()
    df.columns = headers
    df = df.fillna("").astype(str)
    for col in headers:
        df[col] = df[col].str.strip()

    rows: List[Dict[str, str]] = []
    for rec in df.to_dict(orient="records"):
        if any(v != "" for v in rec.values()):
            rows.append(rec)

    return Table(headers=headers, rows=rows)


def parse_delimited_text(text: str) -> Table:
    """
    Parse pasted spreadsheet/CSV text. Tab-separated when the first line
    holds a tab (spreadsheet paste), comma-separated otherwise.
    """
    if not text or not text.strip():
        return Table()

    body = text.strip()
    sep = detect_delimiter(text)

    width = len(pd.read_csv(StringIO(body), sep=sep, nrows=0, dtype=str, skipinitialspace=True).columns)
    df = pd.read_csv(
        StringIO(body),
        sep=sep,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        index_col=False,
        skipinitialspace=True,
        on_bad_lines=lambda bad: bad[:width],
    )
    return table_from_frame(df)


def read_table(source: Union[str, Path, Any], *, sheet: Union[int, str] = 0) -> Table:
    if isinstance(source, (str, Path)) and Path(source).suffix.lower() in TEXT_SUFFIXES:
        return parse_delimited_text(Path(source).read_text(encoding="utf-8-sig"))

    df = pd.read_excel(source, sheet_name=sheet, dtype=str, keep_default_na=False)
    return table_from_frame(df)
