"""
Tabular views of a built converter for inspection and CLI output.
"""
from typing import Iterable, List, Optional, Tuple
import pandas as pd
from fx_paths.graph.base import PathConverter
from fx_paths.market.currency_index import CurrencyIndex


def conversion_matrix(
    converter: PathConverter,
    index: CurrencyIndex,
    codes: Optional[List[str]] = None,
    amount: float = 1.0
) -> pd.DataFrame:
    """
    Square DataFrame: cell [row, col] = convert(amount, row, col).

    Unreachable pairs show 0.0, the diagonal shows amount.
    """
    codes = codes if codes is not None else index.codes
    ids = [index.id_of(code) for code in codes]
    return pd.DataFrame(
        [[converter.convert(amount, src, dst) for dst in ids] for src in ids],
        index=pd.Index(codes, name="from"),
        columns=pd.Index(codes, name="to")
    )


def path_table(
    converter: PathConverter,
    index: CurrencyIndex,
    pairs: Iterable[Tuple[str, str]]
) -> pd.DataFrame:
    """
    One row per (from, to) pair with columns:
      - hops: int, -1 when unreachable
      - route: str, e.g. "EUR → USD → JPY" ("" when unreachable)
      - rate: float, live composite rate (0.0 when unreachable/unavailable)
    """
    rows = []
    for from_code, to_code in pairs:
        src, dst = index.id_of(from_code), index.id_of(to_code)
        nodes = converter.path(src, dst)
        rows.append({
            "from": from_code,
            "to": to_code,
            "hops": len(nodes) - 1 if nodes else -1,
            "route": " → ".join(index.code_of(node) for node in nodes),
            "rate": converter.convert(1.0, src, dst)
        })
    return pd.DataFrame(rows, columns=["from", "to", "hops", "route", "rate"])
