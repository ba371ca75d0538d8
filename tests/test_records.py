from bankops.data.records import (
    CustomerRecord,
    LoanApplicationRecord,
    applications_frame,
    campaigns_frame,
    customers_frame,
)


def test_empty_frames_keep_columns():
    assert list(customers_frame(None).columns) == ["id", "balance", "segment", "product_count"]
    assert customers_frame([]).empty
    assert list(campaigns_frame([]).columns) == ["id", "title", "status", "reach", "conversion"]
    assert list(applications_frame(None).columns) == ["id", "stage", "amount"]


def test_customers_from_dataclasses_and_mappings():
    df = customers_frame(
        [
            CustomerRecord(id="a", balance=10.0, segment="Champions", products=("KPR", "KUR")),
            {"id": "b", "balance": "20", "segment": None, "products": ["Tabungan"]},
        ]
    )
    assert df["balance"].tolist() == [10.0, 20.0]
    assert df["product_count"].tolist() == [2, 1]
    assert df["segment"].tolist() == ["Champions", None]


def test_applications_stage_is_normalised():
    df = applications_frame(
        [
            LoanApplicationRecord(id="a", stage=" Active ", amount=5.0),
            {"id": "b", "amount": float("nan")},
        ]
    )
    assert df["stage"].tolist() == ["active", ""]
    assert df["amount"].tolist() == [5.0, 0.0]


def test_absent_labels_are_none_with_object_dtype():
    customers = customers_frame([{"id": "a", "segment": "  "}, {"id": "b"}])
    assert customers["segment"].dtype == object
    assert customers["segment"].tolist() == [None, None]

    campaigns = campaigns_frame([{"id": "x", "title": None, "status": " Active "}, {"id": "y"}])
    assert campaigns["title"].tolist() == [None, None]
    assert campaigns["status"].tolist() == ["Active", None]
    assert campaigns["id"].tolist() == ["x", "y"]
