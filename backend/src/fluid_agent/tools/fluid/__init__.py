# fluid_agent/tools/fluid/__init__.py

from fluid_agent.tools.fluid.liquidity_tools import liquidity_tools
from fluid_agent.tools.fluid.lending_tools import lending_tools
from fluid_agent.tools.fluid.lending_tx_tools import lending_tx_tools
from fluid_agent.tools.fluid.vault_tools import vault_tools
from fluid_agent.tools.fluid.vault_tx_tools import vault_tx_tools
from fluid_agent.tools.fluid.dex_tools import dex_tools
from fluid_agent.tools.fluid.dex_tx_tools import dex_tx_tools
from fluid_agent.tools.fluid.fluid_resources import resource_tools
from fluid_agent.tools.fluid.fluid_prompts import (
    FLUID_PROMPTS, FLUID_PROMPT_DESCRIPTIONS, render_prompt
)

# 全部 Fluid 工具
fluid_tools = [
    *liquidity_tools,
    *lending_tools,
    *vault_tools,
    *dex_tools,
    *lending_tx_tools,
    *vault_tx_tools,
    *dex_tx_tools,
    *resource_tools,
]

# Fluid 工具分类
FLUID_TOOL_CATEGORIES = {
    "流动性层": [
        "fluid_get_listed_tokens",       # 上架代币
        "fluid_get_token_rates",         # 代币利率
        "fluid_get_all_tokens_data",     # 全部代币数据
        "fluid_get_user_supply",         # 用户供应
        "fluid_get_user_borrow",         # 用户借贷
        "fluid_get_revenue",             # 协议收入
    ],
    "借贷查询": [
        "fluid_get_all_ftokens",         # fToken 列表
        "fluid_get_ftoken_details",      # fToken 详情
        "fluid_get_all_ftokens_details", # 全部 fToken 详情
        "fluid_get_user_lending_position",
        "fluid_get_user_all_positions",
        "fluid_get_previews",            # 换算预览
    ],
    "Vault查询": [
        "fluid_get_all_vaults",
        "fluid_get_vault_type",
        "fluid_get_vault_data",
        "fluid_get_vault_position",
        "fluid_get_vault_by_nft",
        "fluid_get_user_vault_nft_ids",
        "fluid_get_user_vault_positions",
        "fluid_get_total_positions",
        "fluid_convert_vault_shares",    # 份额换算
    ],
    "DEX查询": [
        "fluid_get_dex_pools",
        "fluid_get_pool_reserves",
        "fluid_get_all_pools_reserves",
        "fluid_get_pool_adjusted_reserves",
        "fluid_estimate_swap_in",
        "fluid_estimate_swap_out",
    ],
    "交易构建": [
        "fluid_build_lending_deposit",
        "fluid_build_lending_mint",
        "fluid_build_lending_withdraw",
        "fluid_build_lending_redeem",
        "fluid_build_lending_deposit_native",
        "fluid_build_lending_withdraw_native",
        "fluid_build_token_approve",     # ERC20 授权
        "fluid_build_vault_t1_operate",
        "fluid_build_vault_t2_operate",
        "fluid_build_vault_t3_operate",
        "fluid_build_vault_t4_operate",
        "fluid_build_swap_exact_input",
        "fluid_build_swap_exact_output",
    ],
    "协议信息": [
        "fluid_get_supported_chains",
        "fluid_get_protocol_overview",
    ],
}

__all__ = [
    'fluid_tools',
    'FLUID_TOOL_CATEGORIES',
    'FLUID_PROMPTS',
    'FLUID_PROMPT_DESCRIPTIONS',
    'render_prompt',
]
