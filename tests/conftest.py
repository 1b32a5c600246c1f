import io

import pandas as pd
import pytest


@pytest.fixture
def excel_bytes():
    """Return a builder writing sheets (name -> row lists) into an .xlsx payload."""

    def build(sheets):
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False, header=False)
        return buffer.getvalue()

    return build
