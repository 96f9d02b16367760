from setuptools import setup, find_packages

setup(
    name="flexladder",
    version="1.0",
    description="FlexLadder: train/test RMSE of nested linear models",
    author="marcu",
    packages=find_packages(exclude=["tests", "scripts"]),
    python_requires=">=3.10",
    install_requires=["numpy", "polars", "tqdm", "plotly"],
)
