# fluid_agent/tools/fluid/fluid_prompts.py
"""
Fluid 分析任务提示词模板

每个模板描述 agent 应该按什么顺序调用哪些工具。
"""

from typing import Dict

from langchain_core.prompts import PromptTemplate

DEFAULT_CHAIN = "ethereum"

analyze_lending_rates_template = """Analyze the current lending rates on Fluid protocol on {chain}.

Steps:
1. Call fluid_get_all_ftokens_details to get all fToken data
2. Sort by supply rate (APY) from highest to lowest
3. For each fToken, note: name, underlying asset, supply rate, rewards rate, total TVL
4. Summarize the best yield opportunities
5. Note any active reward programs"""

check_vault_health_template = """Check the health of vault position #{nft_id} on {chain}.

Steps:
1. Call fluid_get_vault_position with nft_id={nft_id}
2. Note the supply (collateral) and borrow (debt) amounts
3. Check if the position is liquidated
4. Calculate the current LTV ratio
5. Compare against the vault's liquidation threshold
6. Provide a health assessment and recommendations"""

find_swap_route_template = """Find the best swap route for {amount} of {token_in} → {token_out} on {chain}.

Steps:
1. Call fluid_get_all_pools_reserves to see all available pools
2. Find pools that include both tokens (direct route) or intermediate pools (multi-hop)
3. For direct routes, call fluid_estimate_swap_in to get the output estimate
4. Compare rates across pools if multiple options exist
5. Recommend the best route with estimated output and price impact"""

FLUID_PROMPTS: Dict[str, PromptTemplate] = {
    "analyze-lending-rates": PromptTemplate.from_template(analyze_lending_rates_template),
    "check-vault-health": PromptTemplate.from_template(check_vault_health_template),
    "find-swap-route": PromptTemplate.from_template(find_swap_route_template),
}

# 提示词说明，供前端列出
FLUID_PROMPT_DESCRIPTIONS = {
    "analyze-lending-rates": "分析链上全部 fToken 的借贷利率，找出收益最高的机会",
    "check-vault-health": "按 NFT ID 检查 vault 仓位的健康状况",
    "find-swap-route": "在 Fluid DEX 中寻找最佳兑换路径并估算输出",
}

def render_prompt(name: str, **kwargs) -> str:
    """
    渲染提示词

    chain 未提供或为空时默认 ethereum，其余变量缺失时抛出 KeyError
    """
    template = FLUID_PROMPTS.get(name)
    if template is None:
        raise KeyError(f"未知的提示词: {name}. 可用: {', '.join(FLUID_PROMPTS)}")

    variables = dict(kwargs)
    variables["chain"] = variables.get("chain") or DEFAULT_CHAIN

    missing = [v for v in template.input_variables if v not in variables]
    if missing:
        raise KeyError(f"提示词 {name} 缺少参数: {', '.join(missing)}")

    return template.format(**{v: variables[v] for v in template.input_variables})
