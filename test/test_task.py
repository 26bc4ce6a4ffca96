import numpy as np
import pandas as pd
import pytest

from evalHarness.core import ColumnType, SchemaError, Task, TaskType


def test_create_infers_types(regression_task):
    assert regression_task.target == "price"
    assert regression_task.task_type == TaskType.REGRESSION
    assert regression_task.n_rows == 150
    assert len(regression_task.feature_names) == 15
    assert regression_task.column_names[-1] == "price"

    types = regression_task.feature_types
    assert types["area"] == ColumnType.NUMERIC
    assert types["neighborhood"] == ColumnType.CATEGORICAL
    assert types["condition"] == ColumnType.ORDINAL
    assert "price" not in types


def test_classification_task_type(classification_task):
    assert classification_task.task_type == TaskType.CLASSIFICATION
    assert set(classification_task.target_values()) == {"yes", "no"}


def test_create_copies_input(housing_frame):
    task = Task.create(housing_frame, "price")
    housing_frame.loc[0, "area"] = -1.0
    assert task.features(rows=[0])["area"].iloc[0] != -1.0


def test_create_with_type_override(housing_frame):
    task = Task.create(housing_frame, "price", {"rooms": "categorical"})
    assert task.feature_types["rooms"] == ColumnType.CATEGORICAL


def test_create_rejects_missing_target(housing_frame):
    with pytest.raises(SchemaError):
        Task.create(housing_frame, "no_such_column")


def test_create_rejects_empty_data():
    with pytest.raises(SchemaError):
        Task.create(pd.DataFrame({"x": [], "y": []}), "y")


def test_create_rejects_target_only():
    with pytest.raises(SchemaError):
        Task.create(pd.DataFrame({"y": [1.0, 2.0]}), "y")


def test_create_rejects_missing_target_values():
    with pytest.raises(SchemaError):
        Task.create(pd.DataFrame({"x": [1, 2, 3], "y": [1.0, np.nan, 3.0]}), "y")


def test_create_rejects_unknown_column_type(housing_frame):
    with pytest.raises(SchemaError):
        Task.create(housing_frame, "price", {"rooms": "interval"})


def test_create_rejects_numeric_override_on_text(housing_frame):
    with pytest.raises(SchemaError):
        Task.create(housing_frame, "price", {"expensive": "numeric"})


def test_select_reads_back_requested_order(regression_task):
    before = regression_task.data
    selected = regression_task.select(["rooms", "area"])

    assert selected.feature_names == ["rooms", "area"]
    assert selected.column_names == ["rooms", "area", "price"]
    pd.testing.assert_frame_equal(regression_task.data, before)
    assert len(regression_task.feature_names) == 15


def test_select_errors(regression_task):
    with pytest.raises(SchemaError):
        regression_task.select([])
    with pytest.raises(SchemaError):
        regression_task.select(["area", "unknown"])
    with pytest.raises(SchemaError):
        regression_task.select(["price"])
    with pytest.raises(SchemaError):
        regression_task.select(["area", "area"])


def test_drop_features(regression_task):
    dropped = regression_task.drop_features(["noise_1", "noise_2"])
    assert "noise_1" not in dropped.feature_names
    assert len(dropped.feature_names) == 13
    with pytest.raises(SchemaError):
        regression_task.drop_features(["missing"])


def test_clone_is_isolated(regression_task):
    before = regression_task.data
    clone = regression_task.clone()
    clone.append_column("double_area", clone.features()["area"] * 2)
    clone_selected = clone.select(["area"])

    pd.testing.assert_frame_equal(regression_task.data, before)
    assert "double_area" not in regression_task.column_names
    assert clone_selected.feature_names == ["area"]


def test_data_accessor_returns_copy(regression_task):
    frame = regression_task.data
    frame.loc[0, "area"] = -999.0
    assert regression_task.data.loc[0, "area"] != -999.0


def test_filter_renumbers_rows(regression_task):
    subset = regression_task.filter([10, 3, 7])
    assert subset.n_rows == 3
    assert list(subset.data.index) == [0, 1, 2]
    assert subset.target_values()[0] == regression_task.target_values([10])[0]


def test_filter_errors(regression_task):
    with pytest.raises(SchemaError):
        regression_task.filter([0, 150])
    with pytest.raises(SchemaError):
        regression_task.filter([-1])
    with pytest.raises(SchemaError):
        regression_task.filter([])
    with pytest.raises(SchemaError):
        regression_task.filter([0.5])


def test_append_column_keeps_target_last(regression_task):
    values = np.arange(regression_task.n_rows)
    task = regression_task.append_column("row_number", values)

    assert task.column_names[-1] == "price"
    assert task.feature_names[-1] == "row_number"
    assert task.feature_types["row_number"] == ColumnType.NUMERIC
    assert "row_number" not in regression_task.column_names


def test_append_column_errors(regression_task):
    with pytest.raises(SchemaError):
        regression_task.append_column("area", np.zeros(150))
    with pytest.raises(SchemaError):
        regression_task.append_column("short", np.zeros(10))


def test_append_column_categorical(regression_task):
    labels = np.where(regression_task.features()["area"] > 100, "large", "small")
    task = regression_task.append_column("size", labels)
    assert task.feature_types["size"] == ColumnType.CATEGORICAL


def test_append_group_aggregate(regression_task):
    task = regression_task.append_group_aggregate("area_median", by="neighborhood", of="area")
    frame = task.data
    expected = frame.groupby("neighborhood", observed=True)["area"].median()

    for _, row in frame.head(20).iterrows():
        assert row["area_median"] == pytest.approx(expected[row["neighborhood"]])
    assert task.feature_types["area_median"] == ColumnType.NUMERIC


def test_append_group_aggregate_errors(regression_task):
    with pytest.raises(SchemaError):
        regression_task.append_group_aggregate("x", by="missing", of="area")
    with pytest.raises(SchemaError):
        regression_task.append_group_aggregate("x", by="neighborhood", of="area", agg="mode")
    with pytest.raises(SchemaError):
        regression_task.append_group_aggregate("x", by="rooms", of="neighborhood")


def test_append_lookup(regression_task):
    tax = {"north": 0.03, "south": 0.01, "east": 0.02, "west": 0.02}
    task = regression_task.append_lookup("tax_rate", "neighborhood", tax)
    frame = task.data
    assert (frame["tax_rate"] == frame["neighborhood"].astype(str).map(tax)).all()


def test_append_lookup_duplicate_keys(regression_task):
    table = pd.DataFrame({
        "neighborhood": ["north", "north", "south", "east", "west"],
        "zone": [1, 9, 2, 3, 4],
    })
    first = regression_task.append_lookup("zone", "neighborhood", table).data
    last = regression_task.append_lookup("zone", "neighborhood", table, keep="last").data

    north = first["neighborhood"] == "north"
    assert (first.loc[north, "zone"] == 1).all()
    assert (last.loc[north, "zone"] == 9).all()


def test_append_lookup_missing_keys(regression_task):
    partial = {"north": 1, "south": 2}
    with pytest.raises(SchemaError):
        regression_task.append_lookup("zone", "neighborhood", partial)

    task = regression_task.append_lookup("zone", "neighborhood", partial, default=0)
    frame = task.data
    assert (frame.loc[frame["neighborhood"] == "east", "zone"] == 0).all()
