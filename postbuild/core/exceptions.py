"""统一异常体系

所有业务异常继承 PostBuildError。
执行失败（脚本返回非零、构建步骤返回 False）不是异常，按返回值传递；
只有基础设施故障（宏替换、进程启动、脚本缺失）才以 PostBuildScriptError 抛出。
"""

from __future__ import annotations


class PostBuildError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(PostBuildError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(PostBuildError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class PostBuildScriptError(PostBuildError):
    """基础设施故障 — 中止整个构建后流程

    包装底层异常（环境变量读取失败、进程启动 I/O 错误、中断），
    原始异常保存在 __cause__ 中。
    """

    code = "POST_BUILD_SCRIPT_ERROR"

    @classmethod
    def wrap(cls, exc: BaseException, message: str = "") -> PostBuildScriptError:
        """包装底层异常，消息默认取原异常文本"""
        err = cls(f"{message}: {exc}" if message else str(exc))
        err.__cause__ = exc
        return err
