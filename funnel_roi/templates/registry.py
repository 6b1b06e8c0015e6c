import yaml
from functools import lru_cache
from pathlib import Path
from typing import List

from funnel_roi.config import TEMPLATE_DIR
from funnel_roi.models.io import FunnelTemplate

def available_templates(root: Path = TEMPLATE_DIR) -> List[str]:
    return sorted(p.stem for p in root.glob("*.yaml"))

@lru_cache(maxsize=None)
def load_template(name: str, root: Path = TEMPLATE_DIR) -> FunnelTemplate:
    """
    name example: "full"
    """
    path = root / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Funnel template not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Funnel template {path} is not a mapping")
    return FunnelTemplate(**data)
