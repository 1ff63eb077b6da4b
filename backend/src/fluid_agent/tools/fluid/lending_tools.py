# fluid_agent/tools/fluid/lending_tools.py
"""
Fluid fToken 借贷只读工具

fToken 是 ERC4626 代币，代表用户在借贷池中的份额。
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import LENDING_RESOLVER_ABI
from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import normalize_address
from fluid_agent.tools.fluid.fluid_formatting import (
    format_rate_to_apy, parse_amount_list, serialize_big_ints
)
from fluid_agent.tools.fluid.fluid_tool_base import ChainInput, create_fluid_tool, get_resolver

logger = logging.getLogger(__name__)

# ===== 输入参数 =====

class FTokenInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")

class FTokenUserInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")
    user_address: str = Field(description="用户钱包地址")

class UserInput(ChainInput):
    user_address: str = Field(description="用户钱包地址")

class PreviewInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")
    assets: Optional[str] = Field(default=None, description="逗号分隔的资产数量（最小单位），可选")
    shares: Optional[str] = Field(default=None, description="逗号分隔的份额数量（最小单位），可选")

def _resolver(chain: str, rpc_url: Optional[str]):
    return get_resolver(chain, rpc_url, "lending_resolver", LENDING_RESOLVER_ABI)

def _format_ftoken(data: Dict[str, Any]) -> Dict[str, Any]:
    """fToken 结构体 -> 输出格式，decimals 保持数字"""
    details = serialize_big_ints(data)
    details["decimals"] = int(data["decimals"])
    details["supplyAPY"] = format_rate_to_apy(data["supplyRate"])
    details["rewardsAPY"] = format_rate_to_apy(data["rewardsRate"])
    return details

# ===== 工具实现 =====

def get_all_ftokens(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    ftokens = fluid_client.read(resolver, LENDING_RESOLVER_ABI, "getAllFTokens")
    return {
        "chain": chain,
        "totalFTokens": len(ftokens),
        "fTokens": ftokens,
    }

def get_ftoken_details(chain: str, ftoken_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """名称、符号、底层资产、利率、总资产和总份额，以及流动性层供应数据"""
    resolver = _resolver(chain, rpc_url)
    details = fluid_client.read(
        resolver, LENDING_RESOLVER_ABI, "getFTokenDetails", normalize_address(ftoken_address)
    )
    return {
        "chain": chain,
        "fToken": ftoken_address,
        "details": _format_ftoken(details),
    }

def get_all_ftokens_details(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """getFTokensEntireData 返回数组，每个 fToken 一项"""
    resolver = _resolver(chain, rpc_url)
    all_details = fluid_client.read(resolver, LENDING_RESOLVER_ABI, "getFTokensEntireData")
    formatted = [_format_ftoken(details) for details in all_details]
    return {
        "chain": chain,
        "totalFTokens": len(formatted),
        "fTokens": formatted,
    }

def get_user_lending_position(
    chain: str, ftoken_address: str, user_address: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    position = fluid_client.read(
        resolver, LENDING_RESOLVER_ABI, "getUserPosition",
        normalize_address(ftoken_address), normalize_address(user_address),
    )
    return {
        "chain": chain,
        "fToken": ftoken_address,
        "user": user_address,
        "position": serialize_big_ints(position),
    }

def get_user_all_positions(chain: str, user_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    positions = fluid_client.read(
        resolver, LENDING_RESOLVER_ABI, "getUserPositions", normalize_address(user_address)
    )
    formatted = [serialize_big_ints(p) for p in positions]
    return {
        "chain": chain,
        "user": user_address,
        "totalPositions": len(formatted),
        "positions": formatted,
    }

def get_previews(
    chain: str,
    ftoken_address: str,
    assets: Optional[str] = None,
    shares: Optional[str] = None,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """deposit/mint/withdraw/redeem 的换算预览"""
    asset_amounts = parse_amount_list(assets, field="assets")
    share_amounts = parse_amount_list(shares, field="shares")

    resolver = _resolver(chain, rpc_url)
    previews = fluid_client.read(
        resolver, LENDING_RESOLVER_ABI, "getPreviews",
        normalize_address(ftoken_address), asset_amounts, share_amounts,
    )
    return {
        "chain": chain,
        "fToken": ftoken_address,
        "previews": [serialize_big_ints(p) for p in previews],
    }

# ===== 创建工具对象 =====

all_ftokens_tool = create_fluid_tool(
    func=get_all_ftokens,
    name="fluid_get_all_ftokens",
    description="列出指定链上全部 fToken（Fluid 借贷代币）地址。fToken 遵循 ERC4626，代表用户在借贷池中的份额。",
    args_schema=ChainInput,
    label="查询 fToken 列表",
)

ftoken_details_tool = create_fluid_tool(
    func=get_ftoken_details,
    name="fluid_get_ftoken_details",
    description="查询某个 fToken 的详细信息：名称、符号、底层资产、供应利率、奖励利率、总资产和总份额。",
    args_schema=FTokenInput,
    label="查询 fToken 详情",
)

all_ftokens_details_tool = create_fluid_tool(
    func=get_all_ftokens_details,
    name="fluid_get_all_ftokens_details",
    description="一次查询链上全部 fToken 的名称、利率、TVL 和底层资产，适合做借贷总览。",
    args_schema=ChainInput,
    label="查询全部 fToken 详情",
)

user_lending_position_tool = create_fluid_tool(
    func=get_user_lending_position,
    name="fluid_get_user_lending_position",
    description="查询用户在某个 fToken 借贷池的仓位：fToken 份额、对应底层资产、钱包余额和授权额度。",
    args_schema=FTokenUserInput,
    label="查询借贷仓位",
)

user_all_positions_tool = create_fluid_tool(
    func=get_user_all_positions,
    name="fluid_get_user_all_positions",
    description="查询用户在链上全部 fToken 的借贷仓位，包含 fToken 信息和用户仓位数据。",
    args_schema=UserInput,
    label="查询全部借贷仓位",
)

previews_tool = create_fluid_tool(
    func=get_previews,
    name="fluid_get_previews",
    description="预览 fToken 的 deposit/mint/withdraw/redeem 换算结果，交易前用于估算。数量用最小单位，逗号分隔。",
    args_schema=PreviewInput,
    label="查询换算预览",
)

lending_tools = [
    all_ftokens_tool,
    ftoken_details_tool,
    all_ftokens_details_tool,
    user_lending_position_tool,
    user_all_positions_tool,
    previews_tool,
]

__all__ = [
    'lending_tools',
    'all_ftokens_tool',
    'ftoken_details_tool',
    'all_ftokens_details_tool',
    'user_lending_position_tool',
    'user_all_positions_tool',
    'previews_tool',
]
