"""
Unit tests for tabular import.
"""

from io import BytesIO

import pandas as pd
import pytest

from curlmapper.core.io import Table, detect_delimiter, parse_delimited_text, read_table


# ===================
# PASTED TEXT
# ===================

class TestParseDelimitedText:

    def test_comma_separated(self):
        table = parse_delimited_text("Name,Qty\nA1,2\nB2,3\n")
        assert table.headers == ["Name", "Qty"]
        assert table.rows == [{"Name": "A1", "Qty": "2"}, {"Name": "B2", "Qty": "3"}]

    def test_tab_separated_paste(self):
        table = parse_delimited_text("Name\tRoute\nA1\t(HAN*SGN), (HAN*AAA)\n")
        assert table.rows == [{"Name": "A1", "Route": "(HAN*SGN), (HAN*AAA)"}]

    def test_quotes_and_whitespace(self):
        table = parse_delimited_text('"Name", "Note"\n"Acme, Inc", hi \n')
        assert table.headers == ["Name", "Note"]
        assert table.rows == [{"Name": "Acme, Inc", "Note": "hi"}]

    def test_ghost_rows_dropped(self):
        table = parse_delimited_text("A,B\n1,2\n,\n\n3,4\n,,")
        assert table.rows == [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]

    def test_short_rows_padded(self):
        table = parse_delimited_text("A,B,C\n1,2,3\n4\n")
        assert table.rows[1] == {"A": "4", "B": "", "C": ""}

    def test_values_stay_text(self):
        table = parse_delimited_text("Id,Flag\n007,NA\n")
        assert table.rows == [{"Id": "007", "Flag": "NA"}]

    def test_blank_input(self):
        assert parse_delimited_text("   \n ") == Table()
        assert len(parse_delimited_text("")) == 0

    def test_header_only(self):
        table = parse_delimited_text("A,B")
        assert table.headers == ["A", "B"]
        assert table.rows == []

    def test_detect_delimiter(self):
        assert detect_delimiter("a\tb\nc,d") == "\t"
        assert detect_delimiter("a,b\nc\td") == ","


# ===================
# FILES
# ===================

class TestReadTable:

    def test_csv_file(self, tmp_path):
        path = tmp_path / "rows.csv"
        path.write_text("\ufeffSKU,Qty\nA1,2\n", encoding="utf-8")
        table = read_table(path)
        assert table.rows == [{"SKU": "A1", "Qty": "2"}]

    def test_spreadsheet(self):
        pytest.importorskip("openpyxl")
        buf = BytesIO()
        pd.DataFrame({"SKU": ["A1", "B2"], "Qty": [2, 3]}).to_excel(buf, index=False, engine="openpyxl")
        buf.seek(0)

        table = read_table(buf)
        assert table.headers == ["SKU", "Qty"]
        assert table.rows == [{"SKU": "A1", "Qty": "2"}, {"SKU": "B2", "Qty": "3"}]
