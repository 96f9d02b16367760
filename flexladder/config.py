"""Defaults for the advertising train/test ladder."""

FEATURES = ("TV", "Radio", "Newspaper")
TARGET = "Sales"

SEED = 1
TRAIN_FRACTION = 0.5

# tolerance for the train-RMSE sanity check
MONOTONE_EPS = 1e-8
