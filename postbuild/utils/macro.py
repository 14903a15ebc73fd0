"""变量宏替换

支持 $VAR 与 ${VAR} 两种写法，未定义的变量保持原样。
花括号形式允许变量名中带点号（如 ${build.tag}）。
"""

from __future__ import annotations

from collections.abc import Mapping
from string import Template


class MacroTemplate(Template):
    idpattern = r"[A-Za-z0-9_]+"
    braceidpattern = r"[A-Za-z0-9_.]+"


def replace_macro(text: str, variables: Mapping[str, str]) -> str:
    """用 variables 展开 text 中的宏"""
    if not text or "$" not in text:
        return text
    return MacroTemplate(text).safe_substitute(variables)
