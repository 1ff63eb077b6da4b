# fluid_agent/tools/__init__.py
"""
区块链工具集合
"""

from fluid_agent.tools.fluid import fluid_tools

# 汇总所有工具
tools = [
    *fluid_tools,
]

__all__ = ['tools']
