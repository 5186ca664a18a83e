# experiments/app_config.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import requests

from experiments.variant import Variant
from utils.retry import retry

if TYPE_CHECKING:
    from experiments.experiment_config import ExperimentConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class AppConfig:
    """
    Source of remote config values and experiment assignments.

    Values come from the `remote_config` mapping of the YAML config and can be
    refreshed from `remote_config_url` (a JSON object of field -> value).
    A variant is resolved once per remote field and then kept for the rest of
    the session so the UI doesn't flip between branches.
    """

    def __init__(self, config: Optional[dict] = None, session: Optional[requests.Session] = None):
        cfg = dict(config or {})
        self.remote_config_url: Optional[str] = cfg.get("remote_config_url") or None
        self.timeout = float(cfg.get("remote_config_timeout") or DEFAULT_TIMEOUT)
        self.session = session or requests.Session()

        self._values: Dict[str, str] = {str(k): str(v) for k, v in (cfg.get("remote_config") or {}).items()}
        self._experiment_values: Dict[str, Variant] = {}

    # ---------- values ----------
    def get_string(self, remote_field: str) -> str:
        return self._values.get(remote_field, "")

    def set_value(self, remote_field: str, value: Any) -> None:
        self._values[remote_field] = str(value)

    @retry(max_attempts=3, delay=1.0, exceptions=(requests.RequestException,))
    def _fetch_remote_values(self) -> Dict[str, Any]:
        r = self.session.get(self.remote_config_url, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def refresh(self) -> bool:
        """
        Pull the latest values from `remote_config_url`.

        Returns True when new values were applied. Failures are logged and the
        previously known values stay in place.
        """
        if not self.remote_config_url:
            logger.debug("No remote_config_url configured; using static remote config values.")
            return False

        try:
            data = self._fetch_remote_values()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Remote config refresh from %s failed: %s", self.remote_config_url, e)
            return False

        if not isinstance(data, dict):
            logger.warning("Remote config at %s is not a JSON object; ignoring it.", self.remote_config_url)
            return False

        self._values.update({str(k): str(v) for k, v in data.items() if v is not None})
        logger.info("Remote config refreshed (%d values).", len(data))
        return True

    # ---------- experiments ----------
    def get_current_variant(self, experiment: ExperimentConfig) -> Variant:
        cached = self._experiment_values.get(experiment.remote_field)
        if cached is not None:
            return cached

        value = self.get_string(experiment.remote_field)
        variant = next((v for v in experiment.variants if v.value == value), None)
        if variant is None:
            logger.error(
                "Remote variant does not match any local value for %s: %r",
                experiment.remote_field,
                value,
            )
            variant = Variant(value)

        self._experiment_values[experiment.remote_field] = variant
        return variant

    def current_assignments(self) -> Dict[str, str]:
        return {field: variant.value for field, variant in self._experiment_values.items()}
