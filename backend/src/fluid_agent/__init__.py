# fluid_agent/__init__.py
"""
Fluid 协议 agent 工具包
"""
