# fluid_agent/tools/fluid/vault_tools.py
"""
Fluid Vault 只读工具

- vault 列表和类型（T1/T2/T3/T4）
- vault 数据（抵押、债务、利率、限额）
- 按 NFT ID 或用户查询仓位
"""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import Field

from fluid_agent.tools.fluid.fluid_abis import ERC20_ABI, VAULT_RESOLVER_ABI
from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import normalize_address
from fluid_agent.tools.fluid.fluid_config import ZERO_ADDRESS
from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError
from fluid_agent.tools.fluid.fluid_formatting import (
    decode_int256, format_rate_to_apy, format_token_amount, format_vault_percent,
    parse_raw_amount, serialize_big_ints, shares_to_token_amount
)
from fluid_agent.tools.fluid.fluid_tool_base import (
    ChainInput, create_fluid_tool, get_contract_at, get_resolver
)

logger = logging.getLogger(__name__)

# vault 类型常量
VAULT_TYPES = {
    10000: "T1",
    20000: "T2",
    30000: "T3",
    40000: "T4",
}

DEFAULT_TOKEN_INFO = ("UNKNOWN", 18)

# ===== 输入参数 =====

class VaultInput(ChainInput):
    vault_address: str = Field(description="Vault 合约地址")

class NftInput(ChainInput):
    nft_id: int = Field(ge=0, description="仓位 NFT ID")

class UserInput(ChainInput):
    user_address: str = Field(description="用户钱包地址")

class ConvertSharesInput(ChainInput):
    vault_address: str = Field(description="Vault 合约地址")
    shares: str = Field(description="vault 内部份额（最小单位），可为负数")
    side: str = Field(default="supply", description="supply（抵押侧）或 borrow（债务侧）")

# ===== 辅助函数 =====

def vault_type_label(type_value: int) -> str:
    return VAULT_TYPES.get(int(type_value), f"UNKNOWN({int(type_value)})")

def _resolver(chain: str, rpc_url: Optional[str]):
    return get_resolver(chain, rpc_url, "vault_resolver", VAULT_RESOLVER_ABI)

def _is_zero(address: Optional[str]) -> bool:
    return not address or address.lower() == ZERO_ADDRESS

def _supply_token(constants: Dict[str, Any]) -> str:
    """
    主抵押代币地址

    T1/T3 的抵押是单一代币（supplyToken.token0），T2/T4 是 DEX 交易对
    """
    token0 = constants["supplyToken"]["token0"]
    if not _is_zero(token0):
        return token0
    if not _is_zero(constants["supply"]):
        return constants["supply"]
    return ZERO_ADDRESS

def _borrow_token(constants: Dict[str, Any]) -> str:
    token0 = constants["borrowToken"]["token0"]
    if not _is_zero(token0):
        return token0
    if not _is_zero(constants["borrow"]):
        return constants["borrow"]
    return ZERO_ADDRESS

def _token_info(chain: str, rpc_url: Optional[str], address: str) -> Tuple[str, int]:
    """代币符号和精度，读取失败时使用 UNKNOWN / 18"""
    if _is_zero(address):
        return DEFAULT_TOKEN_INFO

    token = get_contract_at(chain, rpc_url, address, ERC20_ABI)
    try:
        symbol = fluid_client.read(token, ERC20_ABI, "symbol")
    except Exception as e:
        logger.warning(f"读取代币符号失败 {address}: {str(e)}")
        symbol = DEFAULT_TOKEN_INFO[0]
    try:
        decimals = int(fluid_client.read(token, ERC20_ABI, "decimals"))
    except Exception as e:
        logger.warning(f"读取代币精度失败 {address}: {str(e)}")
        decimals = DEFAULT_TOKEN_INFO[1]
    return symbol, decimals

def _format_configs(configs: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "collateralFactor": format_vault_percent(configs["collateralFactor"]),
        "liquidationThreshold": format_vault_percent(configs["liquidationThreshold"]),
        "liquidationMaxLimit": format_vault_percent(configs["liquidationMaxLimit"]),
        "withdrawalGap": format_vault_percent(configs["withdrawalGap"]),
        "liquidationPenalty": format_vault_percent(configs["liquidationPenalty"]),
        "borrowFee": format_vault_percent(configs["borrowFee"]),
        "oraclePriceOperate": str(configs["oraclePriceOperate"]),
        "oraclePriceLiquidate": str(configs["oraclePriceLiquidate"]),
    }

def _format_rates(rates: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "supplyRateLiquidity": format_rate_to_apy(rates["supplyRateLiquidity"]),
        "borrowRateLiquidity": format_rate_to_apy(rates["borrowRateLiquidity"]),
        "supplyRateVault": format_rate_to_apy(rates["supplyRateVault"]),
        "borrowRateVault": format_rate_to_apy(rates["borrowRateVault"]),
    }

def _position_summary(chain: str, rpc_url: Optional[str], nft_id: int) -> Dict[str, Any]:
    """
    positionByNftId 返回 (UserPosition, VaultEntireData)

    supply/borrow 已经是代币最小单位；smart col/debt 的负数余额按补码解码
    """
    resolver = _resolver(chain, rpc_url)
    result = fluid_client.read(resolver, VAULT_RESOLVER_ABI, "positionByNftId", nft_id)
    position = result["position_"]
    vault_data = result["vaultData_"]

    constants = vault_data["constantVariables"]
    supply_addr = _supply_token(constants)
    borrow_addr = _borrow_token(constants)
    supply_symbol, supply_decimals = _token_info(chain, rpc_url, supply_addr)
    borrow_symbol, borrow_decimals = _token_info(chain, rpc_url, borrow_addr)

    raw_supply = decode_int256(position["supply"])
    raw_borrow = decode_int256(position["borrow"])

    return {
        "chain": chain,
        "nftId": nft_id,
        "vault": vault_data["vault"],
        "vaultType": vault_type_label(constants["vaultType"]),
        "owner": position["owner"],
        "isLiquidated": position["isLiquidated"],
        "isSmartCol": vault_data["isSmartCol"],
        "isSmartDebt": vault_data["isSmartDebt"],
        "supply": {
            "token": supply_addr,
            "symbol": supply_symbol,
            "amount": format_token_amount(raw_supply, supply_decimals),
            "amountRaw": str(raw_supply),
        },
        "borrow": {
            "token": borrow_addr,
            "symbol": borrow_symbol,
            "amount": format_token_amount(raw_borrow, borrow_decimals),
            "amountRaw": str(raw_borrow),
        },
        "_configs": vault_data["configs"],
        "_rates": vault_data["exchangePricesAndRates"],
    }

# ===== 工具实现 =====

def get_all_vaults(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """全部 vault 地址及类型，单个 vault 类型读取失败时标记为 UNKNOWN"""
    resolver = _resolver(chain, rpc_url)
    vaults = fluid_client.read(resolver, VAULT_RESOLVER_ABI, "getAllVaultsAddresses")
    total = fluid_client.read(resolver, VAULT_RESOLVER_ABI, "getTotalVaults")

    vaults_with_types = []
    for vault in vaults:
        try:
            type_value = int(fluid_client.read(resolver, VAULT_RESOLVER_ABI, "getVaultType", vault))
            vaults_with_types.append({
                "address": vault,
                "type": vault_type_label(type_value),
                "typeValue": type_value,
            })
        except Exception as e:
            logger.warning(f"读取 vault 类型失败 {vault}: {str(e)}")
            vaults_with_types.append({
                "address": vault,
                "type": "UNKNOWN",
                "typeValue": 0,
            })

    return {
        "chain": chain,
        "totalVaults": int(total),
        "vaults": vaults_with_types,
    }

def get_vault_type(chain: str, vault_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    type_value = int(fluid_client.read(
        resolver, VAULT_RESOLVER_ABI, "getVaultType", normalize_address(vault_address)
    ))
    return {
        "chain": chain,
        "vault": vault_address,
        "type": VAULT_TYPES.get(type_value, "UNKNOWN"),
        "typeValue": type_value,
    }

def get_vault_data(chain: str, vault_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """
    vault 完整数据

    代币带符号和精度，配置转成百分比，利率转成 APY，总量按代币精度格式化
    """
    resolver = _resolver(chain, rpc_url)
    data = fluid_client.read(
        resolver, VAULT_RESOLVER_ABI, "getVaultEntireData", normalize_address(vault_address)
    )

    constants = data["constantVariables"]
    supply_addr = _supply_token(constants)
    borrow_addr = _borrow_token(constants)
    supply_symbol, supply_decimals = _token_info(chain, rpc_url, supply_addr)
    borrow_symbol, borrow_decimals = _token_info(chain, rpc_url, borrow_addr)

    rates = data["exchangePricesAndRates"]
    totals = data["totalSupplyAndBorrow"]
    limits = data["limitsAndAvailability"]

    return {
        "chain": chain,
        "vault": data["vault"],
        "vaultType": vault_type_label(constants["vaultType"]),
        "isSmartCol": data["isSmartCol"],
        "isSmartDebt": data["isSmartDebt"],
        "tokens": {
            "supplyToken": supply_addr,
            "supplySymbol": supply_symbol,
            "supplyDecimals": supply_decimals,
            "borrowToken": borrow_addr,
            "borrowSymbol": borrow_symbol,
            "borrowDecimals": borrow_decimals,
            "vaultId": str(constants["vaultId"]),
        },
        "configs": _format_configs(data["configs"]),
        "rates": {
            **_format_rates(rates),
            "vaultSupplyExchangePrice": str(rates["vaultSupplyExchangePrice"]),
            "vaultBorrowExchangePrice": str(rates["vaultBorrowExchangePrice"]),
        },
        "totals": {
            "totalSupplyVault": format_token_amount(totals["totalSupplyVault"], supply_decimals),
            "totalBorrowVault": format_token_amount(totals["totalBorrowVault"], borrow_decimals),
            "totalSupplyLiquidityOrDex": format_token_amount(totals["totalSupplyLiquidityOrDex"], supply_decimals),
            "totalBorrowLiquidityOrDex": format_token_amount(totals["totalBorrowLiquidityOrDex"], borrow_decimals),
        },
        "limits": serialize_big_ints({
            "withdrawLimit": limits["withdrawLimit"],
            "withdrawable": limits["withdrawable"],
            "borrowLimit": limits["borrowLimit"],
            "borrowable": limits["borrowable"],
            "minimumBorrowing": limits["minimumBorrowing"],
        }),
    }

def get_vault_position(chain: str, nft_id: int, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    summary = _position_summary(chain, rpc_url, nft_id)
    configs = _format_configs(summary.pop("_configs"))
    configs.pop("withdrawalGap")
    summary["config"] = configs
    summary["rates"] = _format_rates(summary.pop("_rates"))
    return summary

def get_vault_by_nft(chain: str, nft_id: int, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """NFT 对应的 vault 地址和仓位摘要"""
    summary = _position_summary(chain, rpc_url, nft_id)
    configs = _format_configs(summary.pop("_configs"))
    summary.pop("_rates")
    summary["config"] = {
        "collateralFactor": configs["collateralFactor"],
        "liquidationThreshold": configs["liquidationThreshold"],
        "liquidationPenalty": configs["liquidationPenalty"],
    }
    return summary

def get_user_vault_nft_ids(chain: str, user_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    nft_ids = fluid_client.read(
        resolver, VAULT_RESOLVER_ABI, "positionsNftIdOfUser", normalize_address(user_address)
    )
    return {
        "chain": chain,
        "user": user_address,
        "totalNfts": len(nft_ids),
        "nftIds": [str(nft_id) for nft_id in nft_ids],
    }

def get_user_vault_positions(chain: str, user_address: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    """用户在全部 vault 的仓位（原始数值，supply/borrow 按补码解码）"""
    resolver = _resolver(chain, rpc_url)
    positions = fluid_client.read(
        resolver, VAULT_RESOLVER_ABI, "positionsByUser", normalize_address(user_address)
    )

    formatted = []
    for position in positions:
        formatted.append(serialize_big_ints({
            "nftId": position["nftId"],
            "owner": position["owner"],
            "isLiquidated": position["isLiquidated"],
            "isSupplyPosition": position["isSupplyPosition"],
            "tick": position["tick"],
            "tickId": position["tickId"],
            "supply": decode_int256(position["supply"]),
            "borrow": decode_int256(position["borrow"]),
            "dustBorrow": position["dustBorrow"],
        }))

    return {
        "chain": chain,
        "user": user_address,
        "totalPositions": len(formatted),
        "positions": formatted,
    }

def get_total_positions(chain: str, rpc_url: Optional[str] = None) -> Dict[str, Any]:
    resolver = _resolver(chain, rpc_url)
    total = fluid_client.read(resolver, VAULT_RESOLVER_ABI, "totalPositions")
    return {
        "chain": chain,
        "totalPositions": str(total),
    }

def convert_vault_shares(
    chain: str,
    vault_address: str,
    shares: str,
    side: str = "supply",
    rpc_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    vault 份额按当前汇率换算成代币数量

    tokenAmount = shares * exchangePrice / 1e12
    """
    side = (side or "supply").strip().lower()
    if side not in ("supply", "borrow"):
        raise InvalidAmountError(f"side 必须是 supply 或 borrow: {side}")
    share_amount = parse_raw_amount(shares, signed=True, field="shares")

    resolver = _resolver(chain, rpc_url)
    data = fluid_client.read(
        resolver, VAULT_RESOLVER_ABI, "getVaultEntireData", normalize_address(vault_address)
    )

    rates = data["exchangePricesAndRates"]
    constants = data["constantVariables"]
    if side == "supply":
        exchange_price = rates["vaultSupplyExchangePrice"]
        token = _supply_token(constants)
    else:
        exchange_price = rates["vaultBorrowExchangePrice"]
        token = _borrow_token(constants)

    symbol, decimals = _token_info(chain, rpc_url, token)
    amount = shares_to_token_amount(share_amount, exchange_price)

    return {
        "chain": chain,
        "vault": data["vault"],
        "side": side,
        "shares": str(share_amount),
        "exchangePrice": str(exchange_price),
        "token": token,
        "symbol": symbol,
        "amount": format_token_amount(amount, decimals),
        "amountRaw": str(amount),
    }

# ===== 创建工具对象 =====

all_vaults_tool = create_fluid_tool(
    func=get_all_vaults,
    name="fluid_get_all_vaults",
    description="列出链上全部 Fluid vault 地址及其类型（T1、T2、T3、T4）。",
    args_schema=ChainInput,
    label="查询 vault 列表",
)

vault_type_tool = create_fluid_tool(
    func=get_vault_type,
    name="fluid_get_vault_type",
    description="查询某个 vault 的类型（T1=10000, T2=20000, T3=30000, T4=40000）。",
    args_schema=VaultInput,
    label="查询 vault 类型",
)

vault_data_tool = create_fluid_tool(
    func=get_vault_data,
    name="fluid_get_vault_data",
    description=(
        "查询某个 Fluid vault 的完整数据：抵押/借贷代币及符号、APY、抵押率、清算阈值、"
        "总供应/总借贷以及可用额度。"
    ),
    args_schema=VaultInput,
    label="查询 vault 数据",
)

vault_position_tool = create_fluid_tool(
    func=get_vault_position,
    name="fluid_get_vault_position",
    description=(
        "按 NFT ID 查询 vault 仓位。每个仓位是一个 NFT，返回抵押和债务的可读数量、"
        "清算状态、vault 配置和利率。"
    ),
    args_schema=NftInput,
    label="查询 vault 仓位",
)

vault_by_nft_tool = create_fluid_tool(
    func=get_vault_by_nft,
    name="fluid_get_vault_by_nft",
    description="查询 NFT ID 对应的 vault 地址和仓位摘要。",
    args_schema=NftInput,
    label="查询 NFT 对应 vault",
)

user_vault_nft_ids_tool = create_fluid_tool(
    func=get_user_vault_nft_ids,
    name="fluid_get_user_vault_nft_ids",
    description="查询用户持有的全部 vault 仓位 NFT ID。",
    args_schema=UserInput,
    label="查询用户仓位 NFT",
)

user_vault_positions_tool = create_fluid_tool(
    func=get_user_vault_positions,
    name="fluid_get_user_vault_positions",
    description="查询用户在全部 vault 中的仓位列表（tick、抵押、债务的原始数值）。",
    args_schema=UserInput,
    label="查询用户 vault 仓位",
)

total_positions_tool = create_fluid_tool(
    func=get_total_positions,
    name="fluid_get_total_positions",
    description="查询链上全部 vault 的仓位（NFT）总数。",
    args_schema=ChainInput,
    label="查询仓位总数",
)

convert_vault_shares_tool = create_fluid_tool(
    func=convert_vault_shares,
    name="fluid_convert_vault_shares",
    description="按 vault 当前的供应/借贷汇率把内部份额换算成代币数量。",
    args_schema=ConvertSharesInput,
    label="换算 vault 份额",
)

vault_tools = [
    all_vaults_tool,
    vault_type_tool,
    vault_data_tool,
    vault_position_tool,
    vault_by_nft_tool,
    user_vault_nft_ids_tool,
    user_vault_positions_tool,
    total_positions_tool,
    convert_vault_shares_tool,
]

__all__ = [
    'vault_tools',
    'all_vaults_tool',
    'vault_type_tool',
    'vault_data_tool',
    'vault_position_tool',
    'vault_by_nft_tool',
    'user_vault_nft_ids_tool',
    'user_vault_positions_tool',
    'total_positions_tool',
    'convert_vault_shares_tool',
]
