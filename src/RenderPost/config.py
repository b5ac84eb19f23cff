from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_POST_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{title}}</title>
</head>
<body>
{{content}}
</body>
</html>
"""

DEFAULT_MATH_TEMPLATE = r"""\documentclass[12pt]{article}
\usepackage{amsmath}
\usepackage{amssymb}
\pagestyle{empty}
\begin{document}
{{content}}
\end{document}
"""

_KNOWN_KEYS = {"images_dir", "post_template", "math_template", "latex_command", "dvisvgm_command", "timeout"}


@dataclass
class CompilerConfig:
    images_dir: Path = field(default_factory=lambda: Path("images"))
    post_template: str = DEFAULT_POST_TEMPLATE
    math_template: str = DEFAULT_MATH_TEMPLATE
    latex_command: str = "latex"
    dvisvgm_command: str = "dvisvgm"
    timeout: float = 30.0


def load_config(path: str | Path | None = None) -> CompilerConfig:
    """Load a YAML config file; ``None`` gives the built-in defaults.

    Template entries are file paths; relative paths resolve against the
    directory holding the config file.
    """
    if path is None:
        return CompilerConfig()
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping.")
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    base = path.parent
    config = CompilerConfig()
    images_dir = _resolve(base, data.get("images_dir"))
    if images_dir is not None:
        config.images_dir = images_dir
    post_template = _resolve(base, data.get("post_template"))
    if post_template is not None:
        config.post_template = post_template.read_text(encoding="utf-8")
    math_template = _resolve(base, data.get("math_template"))
    if math_template is not None:
        config.math_template = math_template.read_text(encoding="utf-8")
    if data.get("latex_command"):
        config.latex_command = str(data["latex_command"])
    if data.get("dvisvgm_command"):
        config.dvisvgm_command = str(data["dvisvgm_command"])
    if "timeout" in data:
        config.timeout = _parse_timeout(data["timeout"])
    return config


def _resolve(base: Path, value: Any) -> Optional[Path]:
    if not value:
        return None
    candidate = Path(str(value)).expanduser()
    if candidate.is_absolute():
        return candidate
    return base / candidate


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"timeout must be a number, got {value!r}") from exc
    if timeout <= 0:
        raise ValueError("timeout must be positive.")
    return timeout
