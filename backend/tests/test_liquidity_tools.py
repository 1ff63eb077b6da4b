# backend/tests/test_liquidity_tools.py

import json

from fluid_agent.tools.fluid.fluid_abis import (
    LIQUIDITY_USER_BORROW_DATA_COMPONENTS, LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS,
    OVERALL_TOKEN_DATA_COMPONENTS,
)
from fluid_agent.tools.fluid.fluid_config import CONTRACTS
from fluid_agent.tools.fluid.liquidity_tools import (
    get_all_tokens_data, get_listed_tokens, get_revenue, get_token_rates,
    get_user_borrow, get_user_supply, listed_tokens_tool, revenue_tool,
)

from conftest import build_struct

RESOLVER = CONTRACTS["liquidity_resolver"]
USDC = "0x" + "1" * 40
WETH = "0x" + "2" * 40
USER = "0x" + "3" * 40


def test_get_listed_tokens(fake_chain):
    fake_chain.on(RESOLVER, listedTokens=[USDC, WETH])

    result = get_listed_tokens("ethereum")
    assert result == {"chain": "ethereum", "totalTokens": 2, "tokens": [USDC, WETH]}


def test_get_token_rates(fake_chain):
    fake_chain.on(RESOLVER, getOverallTokenData=build_struct(
        OVERALL_TOKEN_DATA_COMPONENTS,
        supplyRate=407,
        borrowRate=512,
        totalSupply=10 ** 24,
        maxUtilization=10000,
    ))

    result = get_token_rates("base", USDC)
    data = result["data"]
    assert result["token"] == USDC
    assert data["supplyAPY"] == "4.07%"
    assert data["borrowAPY"] == "5.12%"
    assert data["totalSupply"] == str(10 ** 24)
    assert data["maxUtilization"] == "10000"
    # 14 个结构体字段加两个 APY
    assert len(data) == 16
    assert fake_chain.calls_to("getOverallTokenData") == [(USDC,)]


def test_get_all_tokens_data(fake_chain):
    fake_chain.on(RESOLVER, getAllOverallTokensData=[
        (USDC, build_struct(OVERALL_TOKEN_DATA_COMPONENTS, supplyRate=300, borrowRate=450, revenue=7)),
        (WETH, build_struct(OVERALL_TOKEN_DATA_COMPONENTS)),
    ])

    result = get_all_tokens_data("ethereum")
    assert result["totalTokens"] == 2
    first = result["tokens"][0]
    assert first["token"] == USDC
    assert first["supplyAPY"] == "3%"
    assert first["borrowAPY"] == "4.5%"
    assert first["revenue"] == "7"
    assert "fee" not in first
    assert result["tokens"][1]["supplyAPY"] == "0%"


def test_get_user_supply_and_borrow(fake_chain):
    fake_chain.on(
        RESOLVER,
        getUserSupplyData=build_struct(LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS, isAllowed=True, supply=5),
        getUserBorrowData=build_struct(LIQUIDITY_USER_BORROW_DATA_COMPONENTS, borrow=3, maxBorrowLimit=10),
    )

    supply = get_user_supply("ethereum", USER, USDC)
    assert supply["supplyData"]["isAllowed"] is True
    assert supply["supplyData"]["supply"] == "5"

    borrow = get_user_borrow("ethereum", USER, USDC)
    assert borrow["borrowData"]["isAllowed"] is False
    assert borrow["borrowData"]["maxBorrowLimit"] == "10"
    assert fake_chain.calls_to("getUserBorrowData") == [(USER, USDC)]


def test_get_revenue(fake_chain):
    fake_chain.on(RESOLVER, getRevenue=123)
    assert get_revenue("polygon", USDC) == {"chain": "polygon", "token": USDC, "revenue": "123"}


def test_tool_returns_json(fake_chain):
    fake_chain.on(RESOLVER, getRevenue=2 ** 200)

    output = revenue_tool.invoke({"chain": "ethereum", "token_address": USDC})
    assert json.loads(output)["revenue"] == str(2 ** 200)


def test_tool_reports_unsupported_chain(fake_chain):
    output = listed_tokens_tool.invoke({"chain": "solana"})
    assert output == (
        "查询流动性层代币列表失败: Unsupported chain: solana. "
        "Supported: ethereum, arbitrum, base, polygon, plasma"
    )


def test_tool_reports_revert(fake_chain):
    output = revenue_tool.invoke({"chain": "ethereum", "token_address": USDC})
    assert output == "查询协议收入失败: execution reverted: getRevenue"
