"""Placeholder substitution for script text."""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from ..config import TextConfig
from ..models.script import Port, ScriptData, Site
from ..models.state import StateView, StatusKey

PLACEHOLDER_RE = re.compile(r"\$(site|ports|days|hp|money|honor)\b")


class TextTemplater:
    """文本模板 - 替换 $site、$ports、$days、$hp、$money、$honor"""

    def __init__(self, script: ScriptData, read_state: Callable[[], StateView], text_config: TextConfig):
        self._script = script
        self._read_state = read_state
        self._config = text_config

    def port_label(self, port: Port) -> str:
        """通路的显示名称，未命名时显示为“去往”+目的地名字"""
        if port.name:
            return port.name
        target = self._script.find_site(port.target) if port.target else None
        return self._config.go_to_prefix + (target.name if target else port.target or "")

    def port_labels(self, site: Site) -> List[str]:
        return [self.port_label(port) for port in site.ports]

    def fill_text(self, raw: str) -> str:
        """
        对原始字符串中的占位符进行替换

        Tokens are matched as whole words in a single pass, so ``$sites`` or a
        lone ``$`` stay verbatim and substituted values are never re-scanned.
        """
        if "$" not in raw:
            return raw

        state = self._read_state()
        site = self._script.find_site(state.site)
        values: Dict[str, Callable[[], str]] = {
            "site": lambda: site.name if site else state.site,
            "ports": lambda: self._config.ports_delimiter.join(self.port_labels(site)) if site else "",
            "days": lambda: str(state.days),
        }
        for key in StatusKey.order():
            values[key.value] = lambda key=key: str(state[key])

        return PLACEHOLDER_RE.sub(lambda match: values[match.group(1)](), raw)
