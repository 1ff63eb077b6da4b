# fluid_agent/tools/fluid/dex_tools.py
"""
Fluid DEX 只读工具

- DEX pool 列表与储备
- 调整后储备（1e12 精度）
- 兑换估算（swapIn / swapOut），估算由合约计算
"""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import DEX_RESERVES_RESOLVER_ABI, DEX_RESOLVER_ABI
from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import normalize_address
from fluid_agent.tools.fluid.fluid_formatting import parse_raw_amount, serialize_big_ints
from fluid_agent.tools.fluid.fluid_tool_base import ChainInput, create_fluid_tool, get_resolver

logger = logging.getLogger(__name__)

# ===== 输入参数 =====

class PoolInput(ChainInput):
    pool_address: str = Field(description="DEX pool 合约地址")

class SwapInEstimateInput(PoolInput):
    swap_0_to_1: bool = Field(description="方向：true = token0→token1，false = token1→token0")
    amount_in: str = Field(description="输入数量（最小单位 / wei）")

class SwapOutEstimateInput(PoolInput):
    swap_0_to_1: bool = Field(description="方向：true = token0→token1，false = token1→token0")
    amount_out: str = Field(description="期望输出数量（最小单位 / wei）")

# ===== 辅助函数 =====

def _dex_resolver(chain: str, rpc_url: Optional[str]):
    return get_resolver(chain, rpc_url, "dex_resolver", DEX_RESOLVER_ABI)

def _reserves_resolver(chain: str, rpc_url: Optional[str]):
    return get_resolver(chain, rpc_url, "dex_reserves_resolver", DEX_RESERVES_RESOLVER_ABI)

def swap_direction(swap_0_to_1: bool) -> str:
    return "token0 → token1" if swap_0_to_1 else "token1 → token0"

def estimate_swap(
    chain: str,
    rpc_url: Optional[str],
    pool_address: str,
    swap_0_to_1: bool,
    amount: int,
    exact_input: bool = True,
) -> Tuple[int, Dict[str, Any]]:
    """
    先读取调整后储备，再让 reserves resolver 估算

    exact_input 时返回预计输出，否则返回预计需要的输入；同时返回储备数据
    """
    pool = normalize_address(pool_address)
    resolver = _reserves_resolver(chain, rpc_url)
    reserves = fluid_client.read(resolver, DEX_RESERVES_RESOLVER_ABI, "getPoolReservesAdjusted", pool)

    fn_name = "estimateSwapIn" if exact_input else "estimateSwapOut"
    estimate = fluid_client.read(
        resolver, DEX_RESERVES_RESOLVER_ABI, fn_name,
        pool,
        swap_0_to_1,
        amount,
        reserves["colReserves0Adjusted"],
        reserves["colReserves1Adjusted"],
        reserves["debtReserves0Adjusted"],
        reserves["debtReserves1Adjusted"],
    )
    logger.debug(f"{fn_name} {pool} {swap_direction(swap_0_to_1)}: {amount} -> {estimate}")
    return int(estimate), reserves

# ===== 工具实现 =====

def get_dex_pools(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _dex_resolver(chain, rpc_url)
    pools = fluid_client.read(resolver, DEX_RESOLVER_ABI, "getAllPoolAddresses")
    total = fluid_client.read(resolver, DEX_RESOLVER_ABI, "getTotalPools")
    return {
        "chain": chain,
        "totalPools": int(total),
        "pools": pools,
    }

def get_pool_reserves(chain: str, pool_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _dex_resolver(chain, rpc_url)
    reserves = fluid_client.read(
        resolver, DEX_RESOLVER_ABI, "getPoolReserves", normalize_address(pool_address)
    )
    reserves = dict(reserves)
    reserves.pop("pool", None)
    return {
        "chain": chain,
        "pool": pool_address,
        "reserves": serialize_big_ints(reserves),
    }

def get_all_pools_reserves(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _dex_resolver(chain, rpc_url)
    all_reserves = fluid_client.read(resolver, DEX_RESOLVER_ABI, "getAllPoolsReserves")
    formatted = [serialize_big_ints(r) for r in all_reserves]
    return {
        "chain": chain,
        "totalPools": len(formatted),
        "pools": formatted,
    }

def get_pool_adjusted_reserves(chain: str, pool_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """调整后储备（1e12 精度），用于兑换估算"""
    resolver = _reserves_resolver(chain, rpc_url)
    reserves = fluid_client.read(
        resolver, DEX_RESERVES_RESOLVER_ABI, "getPoolReservesAdjusted", normalize_address(pool_address)
    )
    return {
        "chain": chain,
        "pool": pool_address,
        "adjustedReserves": serialize_big_ints(reserves),
    }

def estimate_swap_in(
    chain: str, pool_address: str, swap_0_to_1: bool, amount_in: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    amount = parse_raw_amount(amount_in, field="amount_in")
    amount_out, reserves = estimate_swap(chain, rpc_url, pool_address, swap_0_to_1, amount, exact_input=True)
    return {
        "chain": chain,
        "pool": pool_address,
        "direction": swap_direction(swap_0_to_1),
        "amountIn": str(amount),
        "estimatedAmountOut": str(amount_out),
        "token0": reserves["token0"],
        "token1": reserves["token1"],
    }

def estimate_swap_out(
    chain: str, pool_address: str, swap_0_to_1: bool, amount_out: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    amount = parse_raw_amount(amount_out, field="amount_out")
    amount_in, reserves = estimate_swap(chain, rpc_url, pool_address, swap_0_to_1, amount, exact_input=False)
    return {
        "chain": chain,
        "pool": pool_address,
        "direction": swap_direction(swap_0_to_1),
        "desiredAmountOut": str(amount),
        "estimatedAmountIn": str(amount_in),
        "token0": reserves["token0"],
        "token1": reserves["token1"],
    }

# ===== 创建工具对象 =====

dex_pools_tool = create_fluid_tool(
    func=get_dex_pools,
    name="fluid_get_dex_pools",
    description="列出链上全部 Fluid DEX pool 地址。每个 pool 是一个交易对，有各自的储备和手续费配置。",
    args_schema=ChainInput,
    label="查询 DEX pool 列表",
)

pool_reserves_tool = create_fluid_tool(
    func=get_pool_reserves,
    name="fluid_get_pool_reserves",
    description="查询某个 Fluid DEX pool 的储备：token0、token1、手续费、储备数量和总份额。",
    args_schema=PoolInput,
    label="查询 pool 储备",
)

all_pools_reserves_tool = create_fluid_tool(
    func=get_all_pools_reserves,
    name="fluid_get_all_pools_reserves",
    description="一次查询链上全部 Fluid DEX pool 的交易对、手续费和储备数量。",
    args_schema=ChainInput,
    label="查询全部 pool 储备",
)

pool_adjusted_reserves_tool = create_fluid_tool(
    func=get_pool_adjusted_reserves,
    name="fluid_get_pool_adjusted_reserves",
    description="查询 Fluid DEX pool 的调整后储备（1e12 精度），包含抵押/债务储备、手续费和代币地址，用于准确估算兑换。",
    args_schema=PoolInput,
    label="查询调整后储备",
)

estimate_swap_in_tool = create_fluid_tool(
    func=estimate_swap_in,
    name="fluid_estimate_swap_in",
    description="估算在 Fluid DEX pool 中输入指定数量能得到的输出数量，自动读取调整后储备。",
    args_schema=SwapInEstimateInput,
    label="估算兑换输出",
)

estimate_swap_out_tool = create_fluid_tool(
    func=estimate_swap_out,
    name="fluid_estimate_swap_out",
    description="估算在 Fluid DEX pool 中得到指定输出数量所需的输入数量，自动读取调整后储备。",
    args_schema=SwapOutEstimateInput,
    label="估算兑换输入",
)

dex_tools = [
    dex_pools_tool,
    pool_reserves_tool,
    all_pools_reserves_tool,
    pool_adjusted_reserves_tool,
    estimate_swap_in_tool,
    estimate_swap_out_tool,
]

__all__ = [
    'dex_tools',
    'dex_pools_tool',
    'pool_reserves_tool',
    'all_pools_reserves_tool',
    'pool_adjusted_reserves_tool',
    'estimate_swap_in_tool',
    'estimate_swap_out_tool',
]
