# fluid_agent/tools/fluid/fluid_config.py
"""
Fluid 工具模块配置文件 - 外部化配置

所有 resolver 合约通过 CREATE2 部署，在每条链上地址相同。
来源: https://github.com/Instadapp/fluid-contracts-public/blob/main/deployments/deployments.md
"""

import os
import logging
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from fluid_agent.tools.fluid.fluid_errors import UnsupportedChainError

load_dotenv()

logger = logging.getLogger(__name__)

# ===== 基础配置类 =====

@dataclass
class ChainConfig:
    """链信息配置"""
    chain_id: int
    name: str
    rpc_default: str
    explorer: str
    native_token: str
    wrapped_native_token: str

@dataclass
class RequestConfig:
    """RPC 请求配置"""
    timeout: int = 15
    headers: Dict[str, str] = field(default_factory=dict)

@dataclass
class TxConfig:
    """交易构建配置"""
    default_slippage_bps: int = 50
    max_slippage_bps: int = 10_000

# ===== 合约地址 =====

# 所有链共用的合约地址（CREATE2 部署）
CONTRACTS = {
    "lending_resolver": "0x48D32f49aFeAEC7AE66ad7B9264f446fc11a1569",
    "vault_resolver": "0xA5C3E16523eeeDDcC34706b0E6bE88b4c6EA95cC",
    "lending_factory": "0x54B91A0D94cb471F37f949c60F7Fa7935b551D03",
    "vault_factory": "0x324c5Dc1fC42c7a4D43d92df1eBA58a54d13Bf2d",
    "liquidity_resolver": "0xca13A15de31235A37134B4717021C35A3CF25C60",
    "dex_resolver": "0x11D80CfF056Cef4F9E6d23da8672fE9873e5cC07",
    "dex_reserves_resolver": "0x05Bd8269A20C472b148246De20E6852091BF16Ff",
}

# 原生代币占位地址
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# ===== 网络配置 =====

CHAINS = {
    "ethereum": ChainConfig(
        chain_id=1,
        name="Ethereum Mainnet",
        rpc_default=os.getenv("FLUID_ETHEREUM_RPC_URL", "https://eth.llamarpc.com"),
        explorer="https://etherscan.io",
        native_token=NATIVE_TOKEN_ADDRESS,
        wrapped_native_token="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    ),

    "arbitrum": ChainConfig(
        chain_id=42161,
        name="Arbitrum One",
        rpc_default=os.getenv("FLUID_ARBITRUM_RPC_URL", "https://arb1.arbitrum.io/rpc"),
        explorer="https://arbiscan.io",
        native_token=NATIVE_TOKEN_ADDRESS,
        wrapped_native_token="0x82aF49447D8a07e3bd95BD0d56f35241523fBab1",
    ),

    "base": ChainConfig(
        chain_id=8453,
        name="Base",
        rpc_default=os.getenv("FLUID_BASE_RPC_URL", "https://mainnet.base.org"),
        explorer="https://basescan.org",
        native_token=NATIVE_TOKEN_ADDRESS,
        wrapped_native_token="0x4200000000000000000000000000000000000006",
    ),

    "polygon": ChainConfig(
        chain_id=137,
        name="Polygon PoS",
        rpc_default=os.getenv("FLUID_POLYGON_RPC_URL", "https://polygon-rpc.com"),
        explorer="https://polygonscan.com",
        native_token=NATIVE_TOKEN_ADDRESS,
        wrapped_native_token="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
    ),

    "plasma": ChainConfig(
        chain_id=9745,
        name="Plasma",
        rpc_default=os.getenv("FLUID_PLASMA_RPC_URL", "https://rpc.plasma.to"),
        explorer="https://plasmascan.to",
        native_token=NATIVE_TOKEN_ADDRESS,
        wrapped_native_token="0x4200000000000000000000000000000000000006",
    ),
}

SUPPORTED_CHAINS = list(CHAINS.keys())

# 各链上部署的协议模块
CHAIN_PROTOCOLS = ["liquidity", "lending", "vault", "dex"]

# ===== 请求配置 =====

REQUEST_CONFIG = RequestConfig(
    timeout=int(os.getenv("FLUID_RPC_TIMEOUT", "15")),
    headers={
        "Content-Type": "application/json",
        "User-Agent": "FluidAgentTools/1.0",
    },
)

# ===== 交易配置 =====

TX_CONFIG = TxConfig(
    default_slippage_bps=int(os.getenv("FLUID_DEFAULT_SLIPPAGE_BPS", "50")),
)

# ===== 调试配置 =====

DEBUG_CONFIG = {
    "enabled": os.getenv("FLUID_DEBUG", "false").lower() == "true",
    "log_rpc_calls": os.getenv("FLUID_LOG_RPC_CALLS", "false").lower() == "true",
}

# ===== 工具函数 =====

def get_chain_config(chain: str) -> ChainConfig:
    """获取链配置，不支持的链抛出异常"""
    config = CHAINS.get((chain or "").strip().lower())
    if not config:
        raise UnsupportedChainError(
            f"Unsupported chain: {chain}. Supported: {', '.join(SUPPORTED_CHAINS)}"
        )
    return config

def get_chain_by_chain_id(chain_id: int) -> Optional[ChainConfig]:
    """按 chainId 查找链配置"""
    for config in CHAINS.values():
        if config.chain_id == chain_id:
            return config
    return None

def get_rpc_url(chain: str, custom_rpc: Optional[str] = None) -> str:
    """获取 RPC 地址，自定义地址优先"""
    config = get_chain_config(chain)
    if custom_rpc and custom_rpc.strip():
        return custom_rpc.strip()
    return config.rpc_default

def get_explorer_url(chain: str, tx_hash: str = None, address: str = None) -> str:
    """构建区块浏览器 URL"""
    config = CHAINS.get((chain or "").lower())
    if not config:
        return ""

    if tx_hash:
        return f"{config.explorer}/tx/{tx_hash}"
    elif address:
        return f"{config.explorer}/address/{address}"
    return config.explorer

def validate_config() -> List[str]:
    """验证配置的完整性"""
    errors = []

    chain_ids = set()
    for chain, config in CHAINS.items():
        if not config.rpc_default:
            errors.append(f"链 {chain} 没有配置 RPC 端点")
        if not config.explorer:
            errors.append(f"链 {chain} 缺少 explorer")
        if config.chain_id in chain_ids:
            errors.append(f"链 {chain} 的 chainId {config.chain_id} 重复")
        chain_ids.add(config.chain_id)

    if REQUEST_CONFIG.timeout <= 0:
        errors.append("FLUID_RPC_TIMEOUT 必须大于0")

    if not 0 <= TX_CONFIG.default_slippage_bps <= TX_CONFIG.max_slippage_bps:
        errors.append("FLUID_DEFAULT_SLIPPAGE_BPS 必须在 0 到 10000 之间")

    return errors

# 配置验证（如果启用调试模式）
if DEBUG_CONFIG["enabled"]:
    for error in validate_config():
        logger.warning(f"Fluid配置警告: {error}")
