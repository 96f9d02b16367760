"""flexladder: train/test evaluation of nested linear models."""
