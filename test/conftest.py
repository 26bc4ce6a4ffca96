import logging

import pytest

from evalHarness.core import Evaluator, Task
from generate_test_data import make_housing_frame


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("evalHarness")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def housing_frame():
    return make_housing_frame()


@pytest.fixture
def regression_task(housing_frame):
    return Task.create(housing_frame.drop(columns=["expensive"]), "price")


@pytest.fixture
def classification_task(housing_frame):
    return Task.create(housing_frame.drop(columns=["price"]), "expensive")


@pytest.fixture
def evaluator():
    return Evaluator()


@pytest.fixture
def housing_csv(tmp_path, housing_frame):
    path = tmp_path / "housing.csv"
    housing_frame.to_csv(path, index=False)
    return path
