import io

import pandas as pd


def xlsx_bytes(rows):
    buf = io.BytesIO()
    pd.DataFrame(rows).to_excel(buf, header=False, index=False, engine="openpyxl")
    return buf.getvalue()


def csv_bytes(text):
    return text.encode("utf-8")
