"""Settings read from ``[tool.encleaner]`` in a TOML file (pyproject.toml etc.).

Example::

    [tool.encleaner]
    dict = ["docs/words.txt"]
    minSeverity = "WARN"
    categories = ["spelling", "repeated_word"]
    diffWindow = 4
    historySize = 100
    suggestionLimit = 3

Unknown keys are ignored. Command-line flags take precedence over the file.
"""
from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .differ import DEFAULT_WINDOW
from .history import DEFAULT_MAX_SIZE
from .spellcheck import DEFAULT_SUGGESTION_LIMIT
from .suggestions import CATEGORIES

SEVERITIES = ("INFO", "WARN", "ERROR")


@dataclass
class EngineConfig:
    dict_files: List[str] = field(default_factory=list)
    min_severity: str = "INFO"
    categories: Optional[List[str]] = None
    diff_window: int = DEFAULT_WINDOW
    history_size: int = DEFAULT_MAX_SIZE
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT


def _section(data: Dict[str, Any]) -> Dict[str, Any]:
    tool = data.get("tool", {}) if isinstance(data, dict) else {}
    section = tool.get("encleaner", {}) if isinstance(tool, dict) else {}
    return section if isinstance(section, dict) else {}


def from_mapping(tjc: Dict[str, Any], base: Path | None = None) -> EngineConfig:
    cfg = EngineConfig()
    if "dict" in tjc:
        val = tjc["dict"]
        if not isinstance(val, list):
            raise ValueError("'dict' must be an array of paths")
        for x in val:
            p = Path(str(x))
            # relative to the config file, not the working directory
            if base is not None and not p.is_absolute():
                p = base / p
            cfg.dict_files.append(str(p))
    if "minSeverity" in tjc:
        sev = str(tjc["minSeverity"]).upper()
        if sev not in SEVERITIES:
            raise ValueError(f"minSeverity must be one of {', '.join(SEVERITIES)}")
        cfg.min_severity = sev
    if "categories" in tjc:
        cats = tjc["categories"]
        if not isinstance(cats, list) or not all(isinstance(c, str) for c in cats):
            raise ValueError("'categories' must be an array of strings")
        unknown = [c for c in cats if c not in CATEGORIES]
        if unknown:
            raise ValueError(f"unknown categories {unknown}; expected {', '.join(CATEGORIES)}")
        cfg.categories = list(cats)
    for key, attr in [
        ("diffWindow", "diff_window"),
        ("historySize", "history_size"),
        ("suggestionLimit", "suggestion_limit"),
    ]:
        if key in tjc:
            value = tjc[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{key} must be an integer >= 1")
            setattr(cfg, attr, value)
    return cfg


def load_config(path: str | Path | None) -> EngineConfig:
    if path is None:
        return EngineConfig()
    cfg_path = Path(path)
    if not cfg_path.is_file():
        return EngineConfig()
    try:
        with cfg_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"invalid TOML in {cfg_path}: {e}") from e
    return from_mapping(_section(data), base=cfg_path.parent)


__all__ = ["EngineConfig", "load_config", "from_mapping", "SEVERITIES"]
