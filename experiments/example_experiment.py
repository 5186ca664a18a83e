# experiments/example_experiment.py
"""
An example of how to declare and use an experiment.

Declare the variants once, then expose one predicate per branch the code
needs to check.
"""

from experiments.app_config import AppConfig
from experiments.experiment_config import ExperimentConfig
from experiments.variant import Variant

REMOTE_FIELD = "testing_experiment"
VARIANT_A = "variant_A"
VARIANT_B = "variant_B"
CONTROL_GROUP = "control_group"


class ExampleExperimentConfig:
    def __init__(self, app_config: AppConfig):
        self.variant_a = Variant(VARIANT_A)
        self.variant_b = Variant(VARIANT_B)
        self.control_group = Variant(CONTROL_GROUP)
        self.experiment = ExperimentConfig(
            app_config,
            REMOTE_FIELD,
            [self.variant_a, self.variant_b, self.control_group],
        )

    @property
    def variants(self):
        return self.experiment.variants

    def is_variant_a(self) -> bool:
        return self.experiment.is_in_variant(self.variant_a)

    def is_variant_b(self) -> bool:
        return self.experiment.is_in_variant(self.variant_b)
