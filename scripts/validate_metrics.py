"""Quick validation script for the executive metrics engine.

Run with `python scripts/validate_metrics.py` to ensure the seeded sample
data produces a complete, bounded metrics payload.
"""

from __future__ import annotations

from datetime import datetime, timezone

from bankops.data.sample import generate_sample
from bankops.metrics.engine import compute_metrics


def main() -> None:
    sample = generate_sample(seed=7)
    as_of = datetime(2026, 1, 15, tzinfo=timezone.utc)
    metrics = compute_metrics(sample.customers, sample.campaigns, sample.applications, as_of=as_of)
    payload = metrics.to_dict()

    required_keys = [
        "total_revenue",
        "health_scores",
        "critical_alerts",
        "aum_trend",
        "revenue_trend",
        "rfm_distribution",
        "forecast_revenue",
    ]
    missing = [key for key in required_keys if key not in payload]
    if missing:
        raise SystemExit(f"Missing required keys: {missing}")

    for name, score in payload["health_scores"].items():
        assert 0 <= score <= 100, f"Health score {name} out of range: {score}"
    assert len(payload["revenue_trend"]) == 12, "Revenue trend should cover 12 months"
    assert payload["revenue_trend"][-1]["period"] == "2026-01", "Trend should end at the as-of month"

    print(
        "Metrics validation passed. Customers:",
        payload["total_customers"],
        "Alerts:",
        [alert["type"] for alert in payload["critical_alerts"]],
    )


if __name__ == "__main__":
    main()
