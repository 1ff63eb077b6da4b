# fluid_agent/tools/fluid/liquidity_tools.py
"""
Fluid 流动性层只读工具

- 上架代币列表
- 代币利率与汇率
- 用户供应/借贷数据
- 协议收入
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import LIQUIDITY_RESOLVER_ABI
from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import normalize_address
from fluid_agent.tools.fluid.fluid_formatting import format_rate_to_apy, serialize_big_ints
from fluid_agent.tools.fluid.fluid_tool_base import ChainInput, create_fluid_tool, get_resolver

logger = logging.getLogger(__name__)

# ===== 输入参数 =====

class TokenInput(ChainInput):
    token_address: str = Field(description="代币地址（例如 USDC、WETH 的合约地址）")

class UserTokenInput(ChainInput):
    user_address: str = Field(description="用户钱包地址")
    token_address: str = Field(description="代币地址")

def _resolver(chain: str, rpc_url: Optional[str]):
    return get_resolver(chain, rpc_url, "liquidity_resolver", LIQUIDITY_RESOLVER_ABI)

# ===== 工具实现 =====

def get_listed_tokens(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """流动性层上架的全部代币"""
    resolver = _resolver(chain, rpc_url)
    tokens = fluid_client.read(resolver, LIQUIDITY_RESOLVER_ABI, "listedTokens")
    return {
        "chain": chain,
        "totalTokens": len(tokens),
        "tokens": tokens,
    }

def get_token_rates(chain: str, token_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """
    单个代币的利率、汇率、总供应和总借贷

    返回 resolver 的全部 14 个字段，另加 supplyAPY / borrowAPY
    """
    resolver = _resolver(chain, rpc_url)
    data = fluid_client.read(
        resolver, LIQUIDITY_RESOLVER_ABI, "getOverallTokenData", normalize_address(token_address)
    )
    return {
        "chain": chain,
        "token": token_address,
        "data": {
            **serialize_big_ints(data),
            "supplyAPY": format_rate_to_apy(data["supplyRate"]),
            "borrowAPY": format_rate_to_apy(data["borrowRate"]),
        },
    }

def get_all_tokens_data(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    tokens_data = fluid_client.read(resolver, LIQUIDITY_RESOLVER_ABI, "getAllOverallTokensData")

    formatted = []
    for item in tokens_data:
        data = item["data"]
        formatted.append({
            **serialize_big_ints({
                "token": item["token"],
                "supplyRate": data["supplyRate"],
                "borrowRate": data["borrowRate"],
                "totalSupply": data["totalSupply"],
                "totalBorrow": data["totalBorrow"],
                "revenue": data["revenue"],
                "supplyExchangePrice": data["supplyExchangePrice"],
                "borrowExchangePrice": data["borrowExchangePrice"],
            }),
            "supplyAPY": format_rate_to_apy(data["supplyRate"]),
            "borrowAPY": format_rate_to_apy(data["borrowRate"]),
        })

    return {
        "chain": chain,
        "totalTokens": len(formatted),
        "tokens": formatted,
    }

def get_user_supply(
    chain: str, user_address: str, token_address: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    data = fluid_client.read(
        resolver, LIQUIDITY_RESOLVER_ABI, "getUserSupplyData",
        normalize_address(user_address), normalize_address(token_address),
    )
    return {
        "chain": chain,
        "user": user_address,
        "token": token_address,
        "supplyData": serialize_big_ints(data),
    }

def get_user_borrow(
    chain: str, user_address: str, token_address: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    data = fluid_client.read(
        resolver, LIQUIDITY_RESOLVER_ABI, "getUserBorrowData",
        normalize_address(user_address), normalize_address(token_address),
    )
    return {
        "chain": chain,
        "user": user_address,
        "token": token_address,
        "borrowData": serialize_big_ints(data),
    }

def get_revenue(chain: str, token_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    revenue = fluid_client.read(
        resolver, LIQUIDITY_RESOLVER_ABI, "getRevenue", normalize_address(token_address)
    )
    return {
        "chain": chain,
        "token": token_address,
        "revenue": str(revenue),
    }

# ===== 创建工具对象 =====

listed_tokens_tool = create_fluid_tool(
    func=get_listed_tokens,
    name="fluid_get_listed_tokens",
    description="查询 Fluid 流动性层在指定链上上架的全部代币地址，这些代币可以被供应或借出。",
    args_schema=ChainInput,
    label="查询流动性层代币列表",
)

token_rates_tool = create_fluid_tool(
    func=get_token_rates,
    name="fluid_get_token_rates",
    description="查询某个代币在 Fluid 流动性层的供应/借贷利率、汇率、总供应量和总借贷量。",
    args_schema=TokenInput,
    label="查询代币利率",
)

all_tokens_data_tool = create_fluid_tool(
    func=get_all_tokens_data,
    name="fluid_get_all_tokens_data",
    description="一次查询 Fluid 流动性层全部代币的利率、供应、借贷和收入，适合做协议总览。",
    args_schema=ChainInput,
    label="查询全部代币数据",
)

user_supply_tool = create_fluid_tool(
    func=get_user_supply,
    name="fluid_get_user_supply",
    description="查询用户在 Fluid 流动性层某个代币的供应数据：供应量、提取限额和权限。",
    args_schema=UserTokenInput,
    label="查询用户供应数据",
)

user_borrow_tool = create_fluid_tool(
    func=get_user_borrow,
    name="fluid_get_user_borrow",
    description="查询用户在 Fluid 流动性层某个代币的借贷数据：借款量、借款限额和权限。",
    args_schema=UserTokenInput,
    label="查询用户借贷数据",
)

revenue_tool = create_fluid_tool(
    func=get_revenue,
    name="fluid_get_revenue",
    description="查询 Fluid 流动性层某个代币累计的协议收入。",
    args_schema=TokenInput,
    label="查询协议收入",
)

liquidity_tools = [
    listed_tokens_tool,
    token_rates_tool,
    all_tokens_data_tool,
    user_supply_tool,
    user_borrow_tool,
    revenue_tool,
]

__all__ = [
    'liquidity_tools',
    'listed_tokens_tool',
    'token_rates_tool',
    'all_tokens_data_tool',
    'user_supply_tool',
    'user_borrow_tool',
    'revenue_tool',
]
