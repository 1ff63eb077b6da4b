# fluid_agent/tools/fluid/vault_tx_tools.py
"""
Fluid Vault 交易构建工具（T1/T2/T3/T4 operate）

- T1: 单资产抵押，单资产借贷
- T2: 双资产抵押，单资产借贷
- T3: 单资产抵押，双资产借贷
- T4: 双资产抵押，双资产借贷

正数表示存入/借出，负数表示取出/偿还，INT256_MIN 表示全部取出/全部偿还。
只返回未签名交易。
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import VAULT_OPERATE_ABIS
from fluid_agent.tools.fluid.fluid_codec import encode_function_data, normalize_address
from fluid_agent.tools.fluid.fluid_config import get_chain_config
from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError
from fluid_agent.tools.fluid.fluid_formatting import parse_raw_amount
from fluid_agent.tools.fluid.fluid_tool_base import ChainInput, create_fluid_tool, unsigned_tx

logger = logging.getLogger(__name__)

# ===== 输入参数 =====

class VaultOperateBase(ChainInput):
    vault_address: str = Field(description="Vault 合约地址")
    nft_id: int = Field(ge=0, description="仓位 NFT ID（0 表示开新仓位）")
    receiver: str = Field(description="接收取出的抵押品或借出代币的地址")

class T1OperateInput(VaultOperateBase):
    new_col: str = Field(description="抵押变化量（最小单位，负数为取出，INT256_MIN 为全部取出）")
    new_debt: str = Field(description="债务变化量（最小单位，负数为偿还，INT256_MIN 为全部偿还）")

class T2OperateInput(VaultOperateBase):
    new_col_token0: str = Field(description="token0 抵押数量（最小单位）")
    new_col_token1: str = Field(description="token1 抵押数量（最小单位）")
    col_shares_min: str = Field(description="抵押份额下限（滑点保护）")
    col_shares_max: str = Field(description="抵押份额上限（滑点保护）")
    new_debt: str = Field(description="债务变化量（最小单位）")

class T3OperateInput(VaultOperateBase):
    new_col: str = Field(description="抵押变化量（最小单位）")
    new_debt_token0: str = Field(description="token0 债务变化量（最小单位）")
    new_debt_token1: str = Field(description="token1 债务变化量（最小单位）")
    debt_shares_min: str = Field(description="债务份额下限（滑点保护）")
    debt_shares_max: str = Field(description="债务份额上限（滑点保护）")

class T4OperateInput(VaultOperateBase):
    new_col_token0: str = Field(description="token0 抵押数量（最小单位）")
    new_col_token1: str = Field(description="token1 抵押数量（最小单位）")
    col_shares_min: str = Field(description="抵押份额下限（滑点保护）")
    col_shares_max: str = Field(description="抵押份额上限（滑点保护）")
    new_debt_token0: str = Field(description="token0 债务变化量（最小单位）")
    new_debt_token1: str = Field(description="token1 债务变化量（最小单位）")
    debt_shares_min: str = Field(description="债务份额下限（滑点保护）")
    debt_shares_max: str = Field(description="债务份额上限（滑点保护）")

# ===== 辅助函数 =====

def _min_max(min_text: str, max_text: str, field: str) -> Dict[str, int]:
    bounds = {
        "min": parse_raw_amount(min_text, field=f"{field}_min"),
        "max": parse_raw_amount(max_text, field=f"{field}_max"),
    }
    if bounds["min"] > bounds["max"]:
        raise InvalidAmountError(f"{field}_min 不能大于 {field}_max")
    return bounds

def _serialize_bounds(bounds: Dict[str, int]) -> Dict[str, str]:
    return {"min": str(bounds["min"]), "max": str(bounds["max"])}

# ===== 工具实现 =====

def build_vault_t1_operate(
    chain: str,
    vault_address: str,
    nft_id: int,
    new_col: str,
    new_debt: str,
    receiver: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    T1 operate(nftId, newCol, newDebt, to)

    T1 是 payable，抵押为正数时把抵押数量作为 value 发送（原生代币抵押）
    """
    get_chain_config(chain)
    vault = normalize_address(vault_address)
    col = parse_raw_amount(new_col, signed=True, field="new_col")
    debt = parse_raw_amount(new_debt, signed=True, field="new_debt")

    data = encode_function_data(VAULT_OPERATE_ABIS["T1"], "operate", [nft_id, col, debt, receiver])
    value = col if col > 0 else 0

    return unsigned_tx(
        chain, "vault_t1_operate", vault, data,
        value=value,
        nftId=nft_id,
        newCol=str(col),
        newDebt=str(debt),
        receiver=receiver,
        description=f"Vault T1 operate: nftId={nft_id}, collateral={col}, debt={debt}",
    )

def build_vault_t2_operate(
    chain: str,
    vault_address: str,
    nft_id: int,
    new_col_token0: str,
    new_col_token1: str,
    col_shares_min: str,
    col_shares_max: str,
    new_debt: str,
    receiver: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    get_chain_config(chain)
    vault = normalize_address(vault_address)
    col0 = parse_raw_amount(new_col_token0, field="new_col_token0")
    col1 = parse_raw_amount(new_col_token1, field="new_col_token1")
    col_bounds = _min_max(col_shares_min, col_shares_max, "col_shares")
    debt = parse_raw_amount(new_debt, signed=True, field="new_debt")

    data = encode_function_data(
        VAULT_OPERATE_ABIS["T2"], "operate",
        [nft_id, col0, col1, col_bounds, debt, receiver],
    )

    return unsigned_tx(
        chain, "vault_t2_operate", vault, data,
        nftId=nft_id,
        colToken0=str(col0),
        colToken1=str(col1),
        colSharesMinMax=_serialize_bounds(col_bounds),
        newDebt=str(debt),
        receiver=receiver,
        description=f"Vault T2 operate: nftId={nft_id}, col0={col0}, col1={col1}, debt={debt}",
    )

def build_vault_t3_operate(
    chain: str,
    vault_address: str,
    nft_id: int,
    new_col: str,
    new_debt_token0: str,
    new_debt_token1: str,
    debt_shares_min: str,
    debt_shares_max: str,
    receiver: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    get_chain_config(chain)
    vault = normalize_address(vault_address)
    col = parse_raw_amount(new_col, signed=True, field="new_col")
    debt0 = parse_raw_amount(new_debt_token0, signed=True, field="new_debt_token0")
    debt1 = parse_raw_amount(new_debt_token1, signed=True, field="new_debt_token1")
    debt_bounds = _min_max(debt_shares_min, debt_shares_max, "debt_shares")

    data = encode_function_data(
        VAULT_OPERATE_ABIS["T3"], "operate",
        [nft_id, col, debt0, debt1, debt_bounds, receiver],
    )

    return unsigned_tx(
        chain, "vault_t3_operate", vault, data,
        nftId=nft_id,
        newCol=str(col),
        debtToken0=str(debt0),
        debtToken1=str(debt1),
        debtSharesMinMax=_serialize_bounds(debt_bounds),
        receiver=receiver,
        description=f"Vault T3 operate: nftId={nft_id}, col={col}, debt0={debt0}, debt1={debt1}",
    )

def build_vault_t4_operate(
    chain: str,
    vault_address: str,
    nft_id: int,
    new_col_token0: str,
    new_col_token1: str,
    col_shares_min: str,
    col_shares_max: str,
    new_debt_token0: str,
    new_debt_token1: str,
    debt_shares_min: str,
    debt_shares_max: str,
    receiver: str,
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    get_chain_config(chain)
    vault = normalize_address(vault_address)
    col0 = parse_raw_amount(new_col_token0, field="new_col_token0")
    col1 = parse_raw_amount(new_col_token1, field="new_col_token1")
    col_bounds = _min_max(col_shares_min, col_shares_max, "col_shares")
    debt0 = parse_raw_amount(new_debt_token0, signed=True, field="new_debt_token0")
    debt1 = parse_raw_amount(new_debt_token1, signed=True, field="new_debt_token1")
    debt_bounds = _min_max(debt_shares_min, debt_shares_max, "debt_shares")

    data = encode_function_data(
        VAULT_OPERATE_ABIS["T4"], "operate",
        [nft_id, col0, col1, col_bounds, debt0, debt1, debt_bounds, receiver],
    )

    return unsigned_tx(
        chain, "vault_t4_operate", vault, data,
        nftId=nft_id,
        colToken0=str(col0),
        colToken1=str(col1),
        colSharesMinMax=_serialize_bounds(col_bounds),
        debtToken0=str(debt0),
        debtToken1=str(debt1),
        debtSharesMinMax=_serialize_bounds(debt_bounds),
        receiver=receiver,
        description=(
            f"Vault T4 operate: nftId={nft_id}, col0={col0}, col1={col1}, "
            f"debt0={debt0}, debt1={debt1}"
        ),
    )

# ===== 创建工具对象 =====

vault_t1_operate_tool = create_fluid_tool(
    func=build_vault_t1_operate,
    name="fluid_build_vault_t1_operate",
    description="构建 Vault T1（单资产抵押、单资产借贷）operate 的未签名交易。T1 的 operate 是 payable。",
    args_schema=T1OperateInput,
    label="构建 T1 vault 交易",
)

vault_t2_operate_tool = create_fluid_tool(
    func=build_vault_t2_operate,
    name="fluid_build_vault_t2_operate",
    description="构建 Vault T2（双资产抵押、单资产借贷）operate 的未签名交易。",
    args_schema=T2OperateInput,
    label="构建 T2 vault 交易",
)

vault_t3_operate_tool = create_fluid_tool(
    func=build_vault_t3_operate,
    name="fluid_build_vault_t3_operate",
    description="构建 Vault T3（单资产抵押、双资产借贷）operate 的未签名交易。",
    args_schema=T3OperateInput,
    label="构建 T3 vault 交易",
)

vault_t4_operate_tool = create_fluid_tool(
    func=build_vault_t4_operate,
    name="fluid_build_vault_t4_operate",
    description="构建 Vault T4（双资产抵押、双资产借贷）operate 的未签名交易。",
    args_schema=T4OperateInput,
    label="构建 T4 vault 交易",
)

vault_tx_tools = [
    vault_t1_operate_tool,
    vault_t2_operate_tool,
    vault_t3_operate_tool,
    vault_t4_operate_tool,
]

__all__ = [
    'vault_tx_tools',
    'vault_t1_operate_tool',
    'vault_t2_operate_tool',
    'vault_t3_operate_tool',
    'vault_t4_operate_tool',
]
