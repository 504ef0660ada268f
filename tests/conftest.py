import logging
import random

import matplotlib
matplotlib.use("Agg")

import pytest

from perceptron import Config, NeuralNetwork


@pytest.fixture(autouse=True)
def setup_logging():
    """Keep package logging quiet during tests."""
    logging.getLogger("perceptron").setLevel(logging.CRITICAL)
    yield
    logging.getLogger("perceptron").setLevel(logging.NOTSET)


@pytest.fixture
def network():
    """A seeded [2, 3, 1] sigmoid network."""
    return NeuralNetwork([2, 3, 1], "sigmoid", "sigmoid", "l2", rng=random.Random(7))


@pytest.fixture
def config(tmp_path):
    class TestConfig(Config):
        log_path = str(tmp_path / "walkthrough.log")
        stats_path = str(tmp_path / "passes.csv")
        figure_path = str(tmp_path / "network.png")

    return TestConfig
