from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Any, Dict

# Package directory (holds the bundled config.yaml)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_ENV_VAR = "LIABILITY_PAYOFF_CONFIG"


def _config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return BASE_DIR / "config.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml(_config_path())

# Display
CURRENCY_SYMBOL: str = str(CFG.get("currency_symbol", "£"))

# Payments
DEFAULT_PAYMENT_FREQUENCY: str = str(CFG.get("default_payment_frequency", "monthly"))
FREQUENCY_MULTIPLIERS: Dict[str, float] = {
    str(k): float(v)
    for k, v in (CFG.get("frequency_multipliers") or {"monthly": 1.0, "biweekly": 2.17, "weekly": 4.33}).items()
}
