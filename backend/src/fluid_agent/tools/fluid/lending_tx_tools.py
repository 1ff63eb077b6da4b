# fluid_agent/tools/fluid/lending_tx_tools.py
"""
Fluid fToken 借贷交易构建工具

只返回未签名交易（to / data / value），签名和广播由调用方的钱包完成。
calldata 在本地编码；预览值需要读链，失败时返回 "0"。
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import ERC20_ABI, FTOKEN_ABI
from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import encode_function_data, normalize_address
from fluid_agent.tools.fluid.fluid_config import get_chain_config
from fluid_agent.tools.fluid.fluid_formatting import MAX_UINT256, parse_raw_amount
from fluid_agent.tools.fluid.fluid_tool_base import (
    ChainInput, create_fluid_tool, get_contract_at, unsigned_tx
)

logger = logging.getLogger(__name__)

APPROVE_NOTE = (
    "You must first approve the fToken contract to spend the underlying asset. "
    "Use fluid_build_token_approve if needed."
)

# ===== 输入参数 =====

class DepositInput(ChainInput):
    ftoken_address: str = Field(description="要存入的 fToken 合约地址")
    amount: str = Field(description="存入的底层资产数量（最小单位 / wei）")
    receiver: str = Field(description="接收 fToken 份额的地址")

class MintInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")
    shares: str = Field(description="要铸造的 fToken 份额（最小单位）")
    receiver: str = Field(description="接收 fToken 份额的地址")

class WithdrawInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")
    amount: str = Field(description="要取出的底层资产数量（最小单位）")
    receiver: str = Field(description="接收底层资产的地址")
    owner: str = Field(description="持有 fToken 份额的地址（通常与 receiver 相同）")

class RedeemInput(ChainInput):
    ftoken_address: str = Field(description="fToken 合约地址")
    shares: str = Field(description="要赎回的 fToken 份额（最小单位）")
    receiver: str = Field(description="接收底层资产的地址")
    owner: str = Field(description="持有 fToken 份额的地址")

class ApproveInput(ChainInput):
    token_address: str = Field(description="要授权的 ERC20 代币地址")
    spender: str = Field(description="被授权地址（fToken、vault 或 DEX pool）")
    amount: Optional[str] = Field(
        default=None, description="授权数量（最小单位），默认 uint256 最大值（无限授权）"
    )

# ===== 辅助函数 =====

def _preview(chain: str, rpc_url: Optional[str], ftoken: str, fn_name: str, value: int) -> str:
    """读取 ERC4626 预览值，读取失败不影响交易构建"""
    try:
        contract = get_contract_at(chain, rpc_url, ftoken, FTOKEN_ABI)
        return str(fluid_client.read(contract, FTOKEN_ABI, fn_name, value))
    except Exception as e:
        logger.warning(f"{fn_name} 预览失败，使用 0: {str(e)}")
        return "0"

# ===== 工具实现 =====

def build_lending_deposit(
    chain: str, ftoken_address: str, amount: str, receiver: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    """ERC4626 deposit(assets, receiver)"""
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    assets = parse_raw_amount(amount)
    data = encode_function_data(FTOKEN_ABI, "deposit", [assets, receiver])

    return unsigned_tx(
        chain, "deposit", ftoken, data,
        previewSharesReceived=_preview(chain, rpc_url, ftoken, "previewDeposit", assets),
        description=f"Deposit {amount} raw units into fToken {ftoken}. Receiver: {receiver}",
        note=APPROVE_NOTE,
    )

def build_lending_mint(
    chain: str, ftoken_address: str, shares: str, receiver: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    """ERC4626 mint(shares, receiver)"""
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    share_amount = parse_raw_amount(shares, field="shares")
    data = encode_function_data(FTOKEN_ABI, "mint", [share_amount, receiver])

    return unsigned_tx(
        chain, "mint", ftoken, data,
        previewAssetsNeeded=_preview(chain, rpc_url, ftoken, "previewMint", share_amount),
        description=f"Mint {shares} fToken shares from {ftoken}. Receiver: {receiver}",
        note="You must first approve the fToken contract to spend the underlying asset.",
    )

def build_lending_withdraw(
    chain: str,
    ftoken_address: str,
    amount: str,
    receiver: str,
    owner: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """ERC4626 withdraw(assets, receiver, owner)"""
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    assets = parse_raw_amount(amount)
    data = encode_function_data(FTOKEN_ABI, "withdraw", [assets, receiver, owner])

    return unsigned_tx(
        chain, "withdraw", ftoken, data,
        previewSharesBurned=_preview(chain, rpc_url, ftoken, "previewWithdraw", assets),
        description=f"Withdraw {amount} raw units from fToken {ftoken}. Receiver: {receiver}",
    )

def build_lending_redeem(
    chain: str,
    ftoken_address: str,
    shares: str,
    receiver: str,
    owner: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """ERC4626 redeem(shares, receiver, owner)"""
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    share_amount = parse_raw_amount(shares, field="shares")
    data = encode_function_data(FTOKEN_ABI, "redeem", [share_amount, receiver, owner])

    return unsigned_tx(
        chain, "redeem", ftoken, data,
        previewAssetsReceived=_preview(chain, rpc_url, ftoken, "previewRedeem", share_amount),
        description=f"Redeem {shares} fToken shares from {ftoken}. Receiver: {receiver}",
    )

def build_lending_deposit_native(
    chain: str, ftoken_address: str, amount: str, receiver: str, rpc_url: Optional[str] = None
) -> Dict[str, Any]:
    """depositNative(receiver)，存入数量作为交易 value 发送，不需要授权"""
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    value = parse_raw_amount(amount)
    data = encode_function_data(FTOKEN_ABI, "depositNative", [receiver])

    return unsigned_tx(
        chain, "depositNative", ftoken, data,
        value=value,
        description=f"Deposit {amount} wei of native token into fToken {ftoken}. Receiver: {receiver}",
    )

def build_lending_withdraw_native(
    chain: str,
    ftoken_address: str,
    amount: str,
    receiver: str,
    owner: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    get_chain_config(chain)
    ftoken = normalize_address(ftoken_address)
    assets = parse_raw_amount(amount)
    data = encode_function_data(FTOKEN_ABI, "withdrawNative", [assets, receiver, owner])

    return unsigned_tx(
        chain, "withdrawNative", ftoken, data,
        description=f"Withdraw {amount} wei of native token from fToken {ftoken}. Receiver: {receiver}",
    )

def build_token_approve(
    chain: str,
    token_address: str,
    spender: str,
    amount: Optional[str] = None,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """ERC20 approve(spender, amount)，未指定数量时无限授权"""
    get_chain_config(chain)
    token = normalize_address(token_address)
    approve_amount = parse_raw_amount(amount) if amount else MAX_UINT256
    data = encode_function_data(ERC20_ABI, "approve", [spender, approve_amount])

    return unsigned_tx(
        chain, "approve", token, data,
        description=f"Approve {spender} to spend {amount or 'unlimited'} of token {token}",
    )

# ===== 创建工具对象 =====

lending_deposit_tool = create_fluid_tool(
    func=build_lending_deposit,
    name="fluid_build_lending_deposit",
    description="构建向 Fluid fToken 借贷池存入资产的未签名交易（ERC4626 deposit）。返回的交易需要由钱包签名发送。",
    args_schema=DepositInput,
    label="构建存款交易",
)

lending_mint_tool = create_fluid_tool(
    func=build_lending_mint,
    name="fluid_build_lending_mint",
    description="构建铸造指定数量 fToken 份额的未签名交易（ERC4626 mint），会存入相应的底层资产。",
    args_schema=MintInput,
    label="构建铸造交易",
)

lending_withdraw_tool = create_fluid_tool(
    func=build_lending_withdraw,
    name="fluid_build_lending_withdraw",
    description="构建从 Fluid fToken 借贷池取出底层资产的未签名交易（ERC4626 withdraw），会销毁对应的 fToken 份额。",
    args_schema=WithdrawInput,
    label="构建取款交易",
)

lending_redeem_tool = create_fluid_tool(
    func=build_lending_redeem,
    name="fluid_build_lending_redeem",
    description="构建赎回 fToken 份额的未签名交易（ERC4626 redeem），指定要销毁的份额而不是要取回的资产数量。",
    args_schema=RedeemInput,
    label="构建赎回交易",
)

lending_deposit_native_tool = create_fluid_tool(
    func=build_lending_deposit_native,
    name="fluid_build_lending_deposit_native",
    description="构建向原生代币 fToken（如 ETH）存入原生代币的未签名交易，不需要授权。",
    args_schema=DepositInput,
    label="构建原生代币存款交易",
)

lending_withdraw_native_tool = create_fluid_tool(
    func=build_lending_withdraw_native,
    name="fluid_build_lending_withdraw_native",
    description="构建从原生代币 fToken 取出原生代币（如 ETH）的未签名交易。",
    args_schema=WithdrawInput,
    label="构建原生代币取款交易",
)

token_approve_tool = create_fluid_tool(
    func=build_token_approve,
    name="fluid_build_token_approve",
    description="构建 ERC20 授权的未签名交易，授权 Fluid 合约（fToken、vault、DEX pool）使用代币。存款/抵押前需要先授权。",
    args_schema=ApproveInput,
    label="构建授权交易",
)

lending_tx_tools = [
    lending_deposit_tool,
    lending_mint_tool,
    lending_withdraw_tool,
    lending_redeem_tool,
    lending_deposit_native_tool,
    lending_withdraw_native_tool,
    token_approve_tool,
]

__all__ = [
    'lending_tx_tools',
    'lending_deposit_tool',
    'lending_mint_tool',
    'lending_withdraw_tool',
    'lending_redeem_tool',
    'lending_deposit_native_tool',
    'lending_withdraw_native_tool',
    'token_approve_tool',
]
