# fluid_agent/tools/fluid/fluid_errors.py
"""
Fluid 工具异常类型

只描述输入校验失败；RPC 与合约 revert 错误直接向上抛出，不做分类。
"""


class FluidToolError(Exception):
    """Fluid 工具基础异常"""


class UnsupportedChainError(FluidToolError, ValueError):
    """不支持的链"""


class InvalidAddressError(FluidToolError, ValueError):
    """无效的地址"""


class InvalidAmountError(FluidToolError, ValueError):
    """无效的数值参数"""


class AbiError(FluidToolError, KeyError):
    """ABI 中找不到函数或参数不匹配"""

    def __str__(self):
        # KeyError 默认会给消息加引号
        return str(self.args[0]) if self.args else ""
