# fluid_agent/tools/fluid/fluid_tool_base.py
"""
Fluid 工具公共部分

- 公共输入参数（chain / rpc_url）
- 把返回 dict 的处理函数包装成 LangChain StructuredTool
"""

import json
import logging
from functools import wraps
from typing import Any, Callable, Dict, List, Optional, Type

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_config import CONTRACTS, SUPPORTED_CHAINS

logger = logging.getLogger(__name__)

# ===== 公共输入参数 =====

class ChainInput(BaseModel):
    chain: str = Field(
        description=f"区块链网络。支持: {', '.join(SUPPORTED_CHAINS)}"
    )
    rpc_url: Optional[str] = Field(
        default=None,
        description="自定义 RPC 地址（可选，默认使用该链的公共 RPC）",
    )

# ===== 合约获取 =====

def get_resolver(chain: str, rpc_url: Optional[str], contract_key: str, abi: List[Dict[str, Any]]):
    """获取 resolver 合约对象"""
    w3 = fluid_client.get_web3(chain, rpc_url)
    return fluid_client.get_contract(CONTRACTS[contract_key], abi, w3)

def get_contract_at(chain: str, rpc_url: Optional[str], address: str, abi: List[Dict[str, Any]]):
    """获取任意地址的合约对象（fToken、vault、DEX pool、ERC20）"""
    w3 = fluid_client.get_web3(chain, rpc_url)
    return fluid_client.get_contract(address, abi, w3)

# ===== 工具包装 =====

def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)

def create_fluid_tool(
    func: Callable[..., Dict[str, Any]],
    name: str,
    description: str,
    args_schema: Type[BaseModel],
    label: str,
) -> StructuredTool:
    """
    创建 LangChain 工具

    处理函数返回 dict，成功时序列化成 JSON 文本；
    任何异常（包括参数校验失败）都记录日志并返回 "<label>失败: <错误信息>"
    """

    def failure(e: Exception) -> str:
        logger.error(f"{label}失败: {str(e)}")
        return f"{label}失败: {str(e)}"

    @wraps(func)
    def run(**kwargs) -> str:
        try:
            return to_json(func(**kwargs))
        except Exception as e:
            return failure(e)

    return StructuredTool.from_function(
        func=run,
        name=name,
        description=description,
        args_schema=args_schema,
        handle_validation_error=failure,
    )

# ===== 未签名交易 =====

def unsigned_tx(
    chain: str,
    action: str,
    to: str,
    data: str,
    value: Any = "0",
    description: str = "",
    note: Optional[str] = None,
    **fields: Any,
) -> Dict[str, Any]:
    """
    未签名交易的统一输出格式

    由外部钱包签名并广播，这里不做签名
    """
    tx = {
        "chain": chain,
        "action": action,
        "to": to,
        "data": data,
        "value": str(value),
        **fields,
        "description": description,
    }
    if note:
        tx["note"] = note
    return tx
