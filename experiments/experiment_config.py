# experiments/experiment_config.py
from __future__ import annotations

from typing import Iterable, List

from experiments.app_config import AppConfig
from experiments.variant import Variant


class ExperimentConfig:
    """
    A fixed, ordered set of variants bound to one remote-config field.

    Assignment is owned by AppConfig; this only answers "is the current
    assignment this variant".

    Usage:
        experiment = ExperimentConfig(app_config, "my_field", [Variant("a"), Variant("control")])
        if experiment.is_in_variant(Variant("a")):
            ...
    """

    def __init__(self, app_config: AppConfig, remote_field: str, variants: Iterable[Variant]):
        self.app_config = app_config
        self.remote_field = remote_field
        self.variants: List[Variant] = list(variants)

    def is_in_variant(self, variant: Variant) -> bool:
        return self.app_config.get_current_variant(self) == variant

    def current_variant(self) -> Variant:
        return self.app_config.get_current_variant(self)
