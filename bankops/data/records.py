"""
Raw record types consumed by the metrics engine, and helpers that normalise
record collections into DataFrames with every field defaulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

LOAN_STAGES: Tuple[str, ...] = (
    "new_lead",
    "contacted",
    "doc_collection",
    "credit_scoring",
    "approval",
    "disbursement",
    "active",
    "rejected",
)

CUSTOMER_COLUMNS = ["id", "balance", "segment", "product_count"]
CAMPAIGN_COLUMNS = ["id", "title", "status", "reach", "conversion"]
APPLICATION_COLUMNS = ["id", "stage", "amount"]


@dataclass(frozen=True)
class CustomerRecord:
    id: str
    balance: float = 0.0
    segment: Optional[str] = None
    products: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CampaignRecord:
    id: str
    title: str = ""
    status: str = "Draft"
    reach: int = 0
    conversion: float = 0.0


@dataclass(frozen=True)
class LoanApplicationRecord:
    id: str
    stage: str = "new_lead"
    amount: float = 0.0


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        value = record.get(name, default)
    else:
        value = getattr(record, name, default)
    return default if value is None else value


def _to_numeric(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce").fillna(0.0).astype("float64")


def _clean_label(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _label_column(series: pd.Series) -> pd.Series:
    # Object dtype with None for absent labels, whatever string dtype pandas infers
    return pd.Series(
        [value if pd.notna(value) else None for value in series],
        index=series.index,
        dtype=object,
    )


def _product_count(value: Any) -> int:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return 0
    return len(list(value))


def _present(records: Optional[Iterable[Any]]) -> List[Any]:
    if records is None:
        return []
    return [r for r in records if r is not None]


def customers_frame(records: Optional[Iterable[Any]]) -> pd.DataFrame:
    rows = [
        {
            "id": _clean_label(_field(r, "id")),
            "balance": _field(r, "balance", 0.0),
            "segment": _clean_label(_field(r, "segment")),
            "product_count": _product_count(_field(r, "products", ())),
        }
        for r in _present(records)
    ]
    df = pd.DataFrame(rows, columns=CUSTOMER_COLUMNS)
    df["balance"] = _to_numeric(df["balance"])
    df["product_count"] = df["product_count"].astype("int64")
    for column in ("id", "segment"):
        df[column] = _label_column(df[column])
    return df


def campaigns_frame(records: Optional[Iterable[Any]]) -> pd.DataFrame:
    rows = [
        {
            "id": _clean_label(_field(r, "id")),
            "title": _clean_label(_field(r, "title")),
            "status": _clean_label(_field(r, "status")),
            "reach": _field(r, "reach", 0),
            "conversion": _field(r, "conversion", 0.0),
        }
        for r in _present(records)
    ]
    df = pd.DataFrame(rows, columns=CAMPAIGN_COLUMNS)
    df["reach"] = _to_numeric(df["reach"])
    df["conversion"] = _to_numeric(df["conversion"])
    for column in ("id", "title", "status"):
        df[column] = _label_column(df[column])
    return df


def applications_frame(records: Optional[Iterable[Any]]) -> pd.DataFrame:
    rows = [
        {
            "id": _clean_label(_field(r, "id")),
            "stage": (_clean_label(_field(r, "stage")) or "").lower(),
            "amount": _field(r, "amount", 0.0),
        }
        for r in _present(records)
    ]
    df = pd.DataFrame(rows, columns=APPLICATION_COLUMNS)
    df["amount"] = _to_numeric(df["amount"])
    df["id"] = _label_column(df["id"])
    df["stage"] = df["stage"].astype(object)
    return df
