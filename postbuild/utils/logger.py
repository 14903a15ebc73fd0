"""postbuild 日志配置

- setup_logging: 配置根日志器，支持普通文本和结构化 JSON 两种输出格式
- BuildLog: 构建日志输出口，显式沿编排调用链传递，而不是作为全局状态持有
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

BUILD_LOG_NAME = "postbuild.build"
LOG_PREFIX = "[PostBuildScript] - "


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于 CI 流水线消费

    输出格式:
        {
            "timestamp": "2024-01-01T12:00:00+00:00",
            "level": "INFO",
            "logger": "postbuild.build",
            "message": "log message",
            "module": "filename",
            "function": "func_name",
            "line": 42,
            "exception": "traceback..." (仅在有异常时)
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            # 使用 record.created，记录事件发生时间而非格式化时间
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        json_output: 为 True 时使用 JSON 格式（适用于 CI），否则使用人类可读格式

    说明:
        - 输出到 stderr
        - 自动清理已有 handlers，避免重复输出
    """
    root = logging.getLogger()

    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        fmt = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
        handler.setFormatter(logging.Formatter(fmt))

    root.addHandler(handler)


class BuildLog:
    """构建日志输出口

    info / error 为插件自身消息（带统一前缀），
    write 为被执行脚本的原样输出。
    """

    def __init__(self, sink: logging.Logger | None = None) -> None:
        self.sink = sink or logging.getLogger(BUILD_LOG_NAME)

    def info(self, message: str) -> None:
        self.sink.info("%s%s", LOG_PREFIX, message)

    def error(self, message: str) -> None:
        self.sink.error("%s%s", LOG_PREFIX, message)

    def write(self, line: str) -> None:
        self.sink.info("%s", line)
