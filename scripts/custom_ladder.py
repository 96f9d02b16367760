from flexladder.data import synthetic_advertising
from flexladder.ladder import FlexibilityLadder
from flexladder.terms import full_interaction, main_effects, power

samples = synthetic_advertising(60, seed=3)

tv_radio = full_interaction(["TV", "Radio"])
ladder = [
    main_effects(["TV"]),
    main_effects(["TV", "Radio"]),
    tv_radio,
    tv_radio + power("TV", 2) + power("Radio", 2),
    tv_radio + full_interaction([power("TV", 2), power("Radio", 2)]),
]

lad = FlexibilityLadder(samples, term_sets=ladder, seed=7, verbose=2)

print(lad.evaluate())
print(lad.models[3].coefficients)
