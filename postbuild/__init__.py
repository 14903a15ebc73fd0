"""postbuild - 构建后动作执行器"""

__version__ = "0.1.0"
