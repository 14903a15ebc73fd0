"""构建后动作服务

- processor.py: 三阶段编排与过滤
- command_executor.py / interpreter.py: 通用脚本执行
- script_engine.py: Python 脚本求值
- build_steps.py: 构建步骤实现与工厂
- publisher.py: 宿主适配入口
"""

from postbuild.services.processor import Processor
from postbuild.services.publisher import PostBuildScript

__all__ = ["Processor", "PostBuildScript"]
