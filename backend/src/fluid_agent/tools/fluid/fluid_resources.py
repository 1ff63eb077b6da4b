# fluid_agent/tools/fluid/fluid_resources.py
"""
Fluid 协议静态信息：支持的链和协议概览
"""

from typing import Any, Dict

from pydantic import BaseModel

from fluid_agent.tools.fluid.fluid_config import (
    CHAINS, CHAIN_PROTOCOLS, CONTRACTS, SUPPORTED_CHAINS
)
from fluid_agent.tools.fluid.fluid_tool_base import create_fluid_tool

PROTOCOL_OVERVIEW = {
    "name": "Fluid Protocol",
    "developer": "Instadapp",
    "description": (
        "Fluid is a DeFi protocol that unifies lending, borrowing, and trading into a single "
        "efficient liquidity layer. It supports high LTV ratios (up to 95%), smart collateral/debt "
        "via DEX integration, and ERC4626-compliant lending tokens (fTokens)."
    ),
    "architecture": {
        "liquidityLayer": (
            "Core contract holding all funds. Only interacts with protocols built on top, "
            "not end users. Single operate() interface for all actions."
        ),
        "lendingProtocol": (
            "ERC4626-compliant fTokens for deposit-and-earn. Direct access to the Liquidity Layer."
        ),
        "vaultProtocol": (
            "Vaults with NFT-based positions (T1 to T4). High LTV, low liquidation penalties."
        ),
        "dexProtocol": (
            "Built on the Liquidity Layer with smart collateral and smart debt. "
            "Users earn LP fees on collateral and even on borrowed positions."
        ),
    },
    "links": {
        "website": "https://fluid.io",
        "docs": "https://docs.fluid.instadapp.io",
        "github": "https://github.com/Instadapp/fluid-contracts-public",
        "governance": "https://gov.fluid.io",
    },
}

class NoInput(BaseModel):
    """无参数"""

def get_supported_chains() -> Dict[str, Any]:
    return {
        "description": "Chains where Fluid protocol is deployed",
        "chains": SUPPORTED_CHAINS,
        "details": {
            key: {
                "chainId": config.chain_id,
                "name": config.name,
                "explorer": config.explorer,
                "protocols": list(CHAIN_PROTOCOLS),
            }
            for key, config in CHAINS.items()
        },
        "contracts": dict(CONTRACTS),
    }

def get_protocol_overview() -> Dict[str, Any]:
    return PROTOCOL_OVERVIEW

# ===== 创建工具对象 =====

supported_chains_tool = create_fluid_tool(
    func=get_supported_chains,
    name="fluid_get_supported_chains",
    description="列出部署了 Fluid 协议的链、chainId、可用协议模块以及 resolver 合约地址。",
    args_schema=NoInput,
    label="查询支持的链",
)

protocol_overview_tool = create_fluid_tool(
    func=get_protocol_overview,
    name="fluid_get_protocol_overview",
    description="Fluid 协议概览：流动性层、借贷、vault 和 DEX 的架构说明以及官方链接。",
    args_schema=NoInput,
    label="查询协议概览",
)

resource_tools = [
    supported_chains_tool,
    protocol_overview_tool,
]

__all__ = [
    'resource_tools',
    'supported_chains_tool',
    'protocol_overview_tool',
    'PROTOCOL_OVERVIEW',
]
