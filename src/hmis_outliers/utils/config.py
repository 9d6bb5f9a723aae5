import os
import yaml
from pathlib import Path

def load_config(p: str):
    with open(p, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}

CONFIG_DIR = Path(os.getenv('HMIS_OUTLIERS_CONFIG_DIR', Path(__file__).resolve().parents[1] / 'configs'))
OUTLIER_CFG = load_config(str(CONFIG_DIR / 'outliers.yaml'))
INDICATOR_CFG = load_config(str(CONFIG_DIR / 'indicators.yaml'))
