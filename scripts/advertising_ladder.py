import sys

import flexladder.plotting as fplt
from flexladder.data import load_advertising, synthetic_advertising
from flexladder.ladder import FlexibilityLadder


def main(path=None):
    fplt.set_plotly_template()

    if path is None:
        print("No data file given, using synthetic advertising data")
        samples = synthetic_advertising(200, seed=0)
    else:
        samples = load_advertising(path)

    ladder = FlexibilityLadder(samples, seed=1)
    print(ladder)

    results = ladder.evaluate()
    print(ladder)

    fig = fplt.rmse_complexity_plot(results)
    fig.show()


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
