from bankops.metrics.models import AlertMetric, MetricKind
from bankops.ui.components.formatting import (
    format_alert_metric,
    format_currency,
    format_percent,
    format_signed_percent,
)


def test_currency_is_abbreviated():
    assert format_currency(1_500_000_000) == "Rp 1.5B"
    assert format_currency(320_000_000) == "Rp 320.0M"
    assert format_currency(950.0, decimals=0) == "Rp 950"
    assert format_currency(None) == "–"
    assert format_currency("n/a") == "–"


def test_percent_helpers():
    assert format_percent(68.04) == "68.0%"
    assert format_signed_percent(-2.5) == "-2.5%"
    assert format_signed_percent(3.0) == "+3.0%"


def test_alert_metric_formatting_by_kind():
    assert format_alert_metric(AlertMetric("At-Risk Customers", 12, MetricKind.COUNT)) == "12"
    assert format_alert_metric(AlertMetric("Gap", 2_460_000_000, MetricKind.CURRENCY)) == "Rp 2.5B"
    assert format_alert_metric(AlertMetric("Achievement", 2.0, MetricKind.PERCENT)) == "2.0%"
