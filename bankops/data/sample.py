"""
Seeded synthetic records for the dashboard and local validation runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from bankops.data.records import (
    LOAN_STAGES,
    CampaignRecord,
    CustomerRecord,
    LoanApplicationRecord,
)

SEGMENTS = [
    "Champions",
    "Loyal Customers",
    "Potential Loyalists",
    "New Customers",
    "Need Attention",
    "At Risk",
    "Hibernating",
]
SEGMENT_WEIGHTS = [0.12, 0.18, 0.16, 0.12, 0.14, 0.13, 0.15]
PRODUCTS = ["Tabungan", "Deposito", "KPR", "KUR", "Kartu Kredit", "Kredit Mikro"]
CAMPAIGN_STATUSES = ["Active", "Draft", "Completed"]
STAGE_WEIGHTS = [0.15, 0.12, 0.12, 0.1, 0.1, 0.13, 0.2, 0.08]


@dataclass(frozen=True)
class SampleDataset:
    customers: List[CustomerRecord]
    campaigns: List[CampaignRecord]
    applications: List[LoanApplicationRecord]


def generate_sample(
    n_customers: int = 250,
    n_campaigns: int = 8,
    n_applications: int = 120,
    seed: int = 42,
) -> SampleDataset:
    rng = np.random.default_rng(seed)

    segments = rng.choice(SEGMENTS, n_customers, p=SEGMENT_WEIGHTS)
    # Log-normal balances, roughly Rp 5M - Rp 2B
    balances = rng.lognormal(mean=18.0, sigma=1.1, size=n_customers).clip(5_000_000, 2_000_000_000)
    product_counts = rng.integers(low=0, high=4, size=n_customers)
    customers = [
        CustomerRecord(
            id=f"CUST-{idx + 1:05d}",
            balance=float(round(balances[idx], -3)),
            segment=str(segments[idx]),
            products=tuple(
                str(p) for p in rng.choice(PRODUCTS, int(product_counts[idx]), replace=False)
            ),
        )
        for idx in range(n_customers)
    ]

    statuses = rng.choice(CAMPAIGN_STATUSES, n_campaigns, p=[0.5, 0.2, 0.3])
    campaigns = [
        CampaignRecord(
            id=f"CMP-{idx + 1:03d}",
            title=f"Campaign {idx + 1}",
            status=str(statuses[idx]),
            reach=int(rng.integers(500, 20_000)),
            conversion=float(round(rng.uniform(1.0, 15.0), 1)),
        )
        for idx in range(n_campaigns)
    ]

    stages = rng.choice(LOAN_STAGES, n_applications, p=STAGE_WEIGHTS)
    amounts = rng.normal(250_000_000, 120_000_000, n_applications).clip(10_000_000, None)
    applications = [
        LoanApplicationRecord(
            id=f"APP-{idx + 1:04d}",
            stage=str(stages[idx]),
            amount=float(round(amounts[idx], -5)),
        )
        for idx in range(n_applications)
    ]

    return SampleDataset(customers=customers, campaigns=campaigns, applications=applications)
