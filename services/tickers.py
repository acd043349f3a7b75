from __future__ import annotations
import os
import pandas as pd
from typing import List

TICKERS_CSV = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data", "tickers.csv"))
SYMBOL_COLUMNS = ("symbol", "ticker", "Ticker", "SYMBOL")


def load_tickers(csv_path: str | None = None) -> List[str]:
    """Symbols offered in the client's dropdown, in file order."""
    path = os.path.abspath(csv_path or TICKERS_CSV)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Ticker list missing: {path}")

    frame = pd.read_csv(path, dtype=str)
    column = next((c for c in SYMBOL_COLUMNS if c in frame.columns), None)
    if column is None:
        raise ValueError(f"{path} has no symbol column (looked for {', '.join(SYMBOL_COLUMNS)})")

    symbols = frame[column].dropna().str.strip().str.upper()
    # blank cells survive dropna as empty strings
    symbols = symbols[symbols != ""]
    return symbols.drop_duplicates().tolist()
