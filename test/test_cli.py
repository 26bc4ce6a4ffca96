import json

import pytest
import yaml

from evalHarness.cli.argument_parser import comma_separated_items, key_value_pairs, parse_arguments
from evalHarness.main import main


def test_key_value_pairs():
    assert key_value_pairs("max_depth=3,criterion=gini,bootstrap=false,alpha=0.5") == {
        "max_depth": 3, "criterion": "gini", "bootstrap": False, "alpha": 0.5,
    }
    assert comma_separated_items("knn, svm,,lasso") == ["knn", "svm", "lasso"]


def test_parse_evaluate():
    args = parse_arguments(["evaluate", "--data_file", "x.csv", "--target", "price",
                            "--learners", "knn,featureless", "--folds", "3"])
    assert args.command == "evaluate"
    assert args.learners == ["knn", "featureless"]
    assert args.folds == 3
    assert args.learner is None


def test_evaluate_command(housing_csv, tmp_path, capsys):
    out = tmp_path / "results"
    main(["evaluate", "--data_file", str(housing_csv), "--target", "price",
          "--column_types", "expensive=categorical", "--learners", "decision_tree,featureless",
          "--folds", "3", "--output", str(out)])

    printed = capsys.readouterr().out
    assert "RMSE of decision_tree:" in printed
    assert "RMSE of featureless:" in printed

    saved = json.loads((out / "results.json").read_text())
    assert saved["metric"] == "rmse"
    assert len(saved["scores"]) == 6


def test_tune_command_with_config(housing_csv, tmp_path, capsys):
    config_path = tmp_path / "tune.yaml"
    config_path.write_text(yaml.safe_dump({
        "data_file": str(housing_csv),
        "target": "expensive",
        "learner": "decision_tree",
        "resampling": "stratified_cv",
        "folds": 3,
        "search_space": {"max_depth": {"type": "int", "low": 1, "high": 5}},
        "max_evaluations": 4,
        "output_dir": str(tmp_path / "tuned"),
    }))
    main(["tune", "--config", str(config_path), "--search_method", "random"])

    saved = json.loads((tmp_path / "tuned" / "results.json").read_text())
    assert saved["metric"] == "ce"
    assert saved["n_evaluations"] == 4
    assert 1 <= saved["best_params"]["max_depth"] <= 5
    assert "Best configuration:" in capsys.readouterr().out


@pytest.mark.parametrize("extra_args, expected", [
    ([], 3),
    (["--grid_resolution", "2"], 2),
])
def test_tune_grid_resolution(housing_csv, tmp_path, extra_args, expected):
    config_path = tmp_path / "grid.yaml"
    config_path.write_text(yaml.safe_dump({
        "data_file": str(housing_csv),
        "target": "price",
        "learner": "decision_tree",
        "folds": 3,
        "search_space": {"max_depth": {"type": "int", "low": 1, "high": 5}},
        "max_evaluations": 10,
        "grid_resolution": 3,
        "output_dir": str(tmp_path / "grid"),
    }))
    main(["tune", "--config", str(config_path), "--search_method", "grid"] + extra_args)

    saved = json.loads((tmp_path / "grid" / "results.json").read_text())
    assert saved["n_evaluations"] == expected
    assert saved["search_method"] == "grid"


def test_select_command(housing_csv, tmp_path, capsys):
    main(["select", "--data_file", str(housing_csv), "--target", "price",
          "--column_types", "expensive=categorical", "--top_n", "4", "--compare", "true",
          "--save_results", "false", "--output", str(tmp_path / "sel")])
    printed = capsys.readouterr().out
    assert "Selected features (4):" in printed
    assert "on all features" in printed
    assert not (tmp_path / "sel").exists()


def test_missing_data_file_exits_2(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--data_file", str(tmp_path / "missing.csv"), "--target", "price"])
    assert excinfo.value.code == 2


def test_harness_error_exits_3(housing_csv):
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--data_file", str(housing_csv), "--target", "price",
              "--learner", "decision_tree", "--params", "depth=3", "--save_results", "false"])
    assert excinfo.value.code == 3


def test_missing_target_exits_3(housing_csv):
    with pytest.raises(SystemExit) as excinfo:
        main(["select", "--data_file", str(housing_csv)])
    assert excinfo.value.code == 3
