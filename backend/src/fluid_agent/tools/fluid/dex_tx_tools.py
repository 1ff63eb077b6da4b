# fluid_agent/tools/fluid/dex_tx_tools.py
"""
Fluid DEX 兑换交易构建工具

- swapIn: 精确输入，按滑点计算最小输出
- swapOut: 精确输出，按滑点计算最大输入

输入代币是原生代币占位地址时，交易 value 为需要发送的原生代币数量。
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import DEX_POOL_ABI
from fluid_agent.tools.fluid.fluid_codec import encode_function_data, normalize_address
from fluid_agent.tools.fluid.fluid_config import NATIVE_TOKEN_ADDRESS, TX_CONFIG
from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError
from fluid_agent.tools.fluid.fluid_formatting import parse_raw_amount
from fluid_agent.tools.fluid.fluid_tool_base import ChainInput, create_fluid_tool, unsigned_tx
from fluid_agent.tools.fluid.dex_tools import estimate_swap, swap_direction

logger = logging.getLogger(__name__)

BPS_DENOMINATOR = 10_000

# ===== 输入参数 =====

class SwapBaseInput(ChainInput):
    pool_address: str = Field(description="DEX pool 合约地址")
    swap_0_to_1: bool = Field(description="方向：true = token0→token1，false = token1→token0")
    slippage_bps: Optional[int] = Field(
        default=None,
        description=f"滑点容忍度，单位基点（默认 {TX_CONFIG.default_slippage_bps} = 0.5%）",
    )
    receiver: str = Field(description="接收输出代币的地址")

class SwapExactInputInput(SwapBaseInput):
    amount_in: str = Field(description="精确输入数量（最小单位 / wei）")

class SwapExactOutputInput(SwapBaseInput):
    amount_out: str = Field(description="期望输出数量（最小单位 / wei）")

# ===== 辅助函数 =====

def resolve_slippage(slippage_bps: Optional[int]) -> int:
    """未指定时使用默认滑点；0 是合法值"""
    if slippage_bps is None:
        return TX_CONFIG.default_slippage_bps
    slippage = int(slippage_bps)
    if not 0 <= slippage <= TX_CONFIG.max_slippage_bps:
        raise InvalidAmountError(
            f"slippage_bps 必须在 0 到 {TX_CONFIG.max_slippage_bps} 之间: {slippage_bps}"
        )
    return slippage

def min_amount_out(estimated_out: int, slippage_bps: int) -> int:
    return estimated_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR

def max_amount_in(estimated_in: int, slippage_bps: int) -> int:
    return estimated_in * (BPS_DENOMINATOR + slippage_bps) // BPS_DENOMINATOR

def is_native_input(reserves: Dict[str, Any], swap_0_to_1: bool) -> bool:
    input_token = reserves["token0"] if swap_0_to_1 else reserves["token1"]
    return str(input_token).lower() == NATIVE_TOKEN_ADDRESS.lower()

# ===== 工具实现 =====

def build_swap_exact_input(
    chain: str,
    pool_address: str,
    swap_0_to_1: bool,
    amount_in: str,
    receiver: str,
    slippage_bps: Optional[int] = None,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """swapIn(swap0to1, amountIn, amountOutMin, to)"""
    pool = normalize_address(pool_address)
    amount = parse_raw_amount(amount_in, field="amount_in")
    slippage = resolve_slippage(slippage_bps)

    estimated_out, reserves = estimate_swap(chain, rpc_url, pool, swap_0_to_1, amount, exact_input=True)
    amount_out_min = min_amount_out(estimated_out, slippage)

    data = encode_function_data(DEX_POOL_ABI, "swapIn", [swap_0_to_1, amount, amount_out_min, receiver])
    value = amount if is_native_input(reserves, swap_0_to_1) else 0

    return unsigned_tx(
        chain, "swapIn", pool, data,
        value=value,
        direction=swap_direction(swap_0_to_1),
        amountIn=str(amount),
        estimatedAmountOut=str(estimated_out),
        amountOutMin=str(amount_out_min),
        slippageBps=slippage,
        token0=reserves["token0"],
        token1=reserves["token1"],
        description=f"Swap {amount} (exact input) on pool {pool}. Min output: {amount_out_min}",
        note="If the input token is ERC20, approve the pool contract first using fluid_build_token_approve.",
    )

def build_swap_exact_output(
    chain: str,
    pool_address: str,
    swap_0_to_1: bool,
    amount_out: str,
    receiver: str,
    slippage_bps: Optional[int] = None,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """swapOut(swap0to1, amountOut, amountInMax, to)"""
    pool = normalize_address(pool_address)
    amount = parse_raw_amount(amount_out, field="amount_out")
    slippage = resolve_slippage(slippage_bps)

    estimated_in, reserves = estimate_swap(chain, rpc_url, pool, swap_0_to_1, amount, exact_input=False)
    amount_in_max = max_amount_in(estimated_in, slippage)

    data = encode_function_data(DEX_POOL_ABI, "swapOut", [swap_0_to_1, amount, amount_in_max, receiver])
    value = amount_in_max if is_native_input(reserves, swap_0_to_1) else 0

    return unsigned_tx(
        chain, "swapOut", pool, data,
        value=value,
        direction=swap_direction(swap_0_to_1),
        desiredAmountOut=str(amount),
        estimatedAmountIn=str(estimated_in),
        amountInMax=str(amount_in_max),
        slippageBps=slippage,
        token0=reserves["token0"],
        token1=reserves["token1"],
        description=f"Swap for exact {amount} output on pool {pool}. Max input: {amount_in_max}",
    )

# ===== 创建工具对象 =====

swap_exact_input_tool = create_fluid_tool(
    func=build_swap_exact_input,
    name="fluid_build_swap_exact_input",
    description="构建在 Fluid DEX pool 中精确输入兑换（swapIn）的未签名交易，自动估算输出并应用滑点保护。",
    args_schema=SwapExactInputInput,
    label="构建精确输入兑换交易",
)

swap_exact_output_tool = create_fluid_tool(
    func=build_swap_exact_output,
    name="fluid_build_swap_exact_output",
    description="构建在 Fluid DEX pool 中精确输出兑换（swapOut）的未签名交易，自动估算所需输入并应用滑点保护。",
    args_schema=SwapExactOutputInput,
    label="构建精确输出兑换交易",
)

dex_tx_tools = [
    swap_exact_input_tool,
    swap_exact_output_tool,
]

__all__ = [
    'dex_tx_tools',
    'swap_exact_input_tool',
    'swap_exact_output_tool',
]
