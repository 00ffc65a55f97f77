from __future__ import annotations
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
import yaml

CONFIG_ENV_VAR = "VCALNODE_CONFIG"
LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass
class CodecConfig:
    line_ending: str = "\n"
    fold_width: int = 0         # 0 disables folding; RFC 5545 suggests 75
    strict_blocks: bool = False


def _line_ending(value: Any) -> str:
    text = str(value)
    return LINE_ENDINGS.get(text.lower(), text)


def load_config(path: Optional[str] = None) -> CodecConfig:
    if path is None:
        env_file = find_dotenv(usecwd=True)
        if env_file:
            load_dotenv(env_file)
        path = os.environ.get(CONFIG_ENV_VAR, "")
    if not path:
        return CodecConfig()

    p = Path(path)
    if not p.exists():
        return CodecConfig()
    data: Dict[str, Any] = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return CodecConfig(
        line_ending=_line_ending(data.get("line_ending", "lf")),
        fold_width=int(data.get("fold_width", 0)),
        strict_blocks=bool(data.get("strict_blocks", False)),
    )
