# backend/tests/test_lending_tools.py

import json

import pytest

from fluid_agent.tools.fluid.fluid_abis import FTOKEN_ABI, FTOKEN_ENTIRE_DATA_COMPONENTS
from fluid_agent.tools.fluid.fluid_codec import function_selector, get_function_abi
from fluid_agent.tools.fluid.fluid_config import CONTRACTS
from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError, UnsupportedChainError
from fluid_agent.tools.fluid.lending_tools import (
    get_all_ftokens, get_all_ftokens_details, get_ftoken_details, get_previews,
    get_user_all_positions, get_user_lending_position,
)
from fluid_agent.tools.fluid.lending_tx_tools import (
    build_lending_deposit, build_lending_deposit_native, build_lending_mint,
    build_lending_redeem, build_lending_withdraw, build_lending_withdraw_native,
    build_token_approve, lending_deposit_tool, token_approve_tool,
)

from conftest import build_struct

RESOLVER = CONTRACTS["lending_resolver"]
FTOKEN = "0x" + "4" * 40
USDC = "0x" + "1" * 40
USER = "0x" + "5" * 40
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def _ftoken(**overrides):
    return build_struct(FTOKEN_ENTIRE_DATA_COMPONENTS, **overrides)


# ===== 只读 =====

def test_get_all_ftokens(fake_chain):
    fake_chain.on(RESOLVER, getAllFTokens=[FTOKEN])
    assert get_all_ftokens("ethereum") == {"chain": "ethereum", "totalFTokens": 1, "fTokens": [FTOKEN]}


def test_get_ftoken_details(fake_chain):
    fake_chain.on(RESOLVER, getFTokenDetails=_ftoken(
        tokenAddress=FTOKEN,
        name="Fluid USD Coin",
        symbol="fUSDC",
        decimals=6,
        asset=USDC,
        totalAssets=10 ** 12,
        supplyRate=407,
        rebalanceDifference=-3,
        liquidityUserSupplyData={"isAllowed": True, "supply": 5},
    ))

    details = get_ftoken_details("ethereum", FTOKEN)["details"]
    assert details["symbol"] == "fUSDC"
    assert details["decimals"] == 6
    assert details["totalAssets"] == "1000000000000"
    assert details["rebalanceDifference"] == "-3"
    assert details["supplyAPY"] == "4.07%"
    assert details["rewardsAPY"] == "0%"
    assert details["liquidityUserSupplyData"]["isAllowed"] is True
    assert details["liquidityUserSupplyData"]["supply"] == "5"


def test_get_all_ftokens_details(fake_chain):
    fake_chain.on(RESOLVER, getFTokensEntireData=[
        _ftoken(symbol="fUSDC", decimals=6, supplyRate=400),
        _ftoken(symbol="fWETH", decimals=18, rewardsRate=125),
    ])

    result = get_all_ftokens_details("arbitrum")
    assert result["totalFTokens"] == 2
    assert [f["symbol"] for f in result["fTokens"]] == ["fUSDC", "fWETH"]
    assert result["fTokens"][0]["supplyAPY"] == "4%"
    assert result["fTokens"][1]["rewardsAPY"] == "1.25%"


def test_get_user_lending_position(fake_chain):
    fake_chain.on(RESOLVER, getUserPosition=(100, 105, 2000, 0))

    result = get_user_lending_position("ethereum", FTOKEN, USER)
    assert result["position"] == {
        "fTokenShares": "100",
        "underlyingAssets": "105",
        "underlyingBalance": "2000",
        "allowance": "0",
    }
    assert fake_chain.calls_to("getUserPosition") == [(FTOKEN, USER)]


def test_get_user_all_positions(fake_chain):
    fake_chain.on(RESOLVER, getUserPositions=[
        (FTOKEN, 100, 105, 0, 0, USDC, 10 ** 9, 10 ** 9, 407, 0),
    ])

    result = get_user_all_positions("ethereum", USER)
    assert result["totalPositions"] == 1
    assert result["positions"][0]["fToken"] == FTOKEN
    assert result["positions"][0]["supplyRate"] == "407"


def test_get_previews(fake_chain):
    fake_chain.on(RESOLVER, getPreviews=lambda ftoken, assets, shares: [(a, a * 2) for a in assets + shares])

    result = get_previews("ethereum", FTOKEN, assets="100, 200")
    assert result["previews"] == [
        {"previewAsset": "100", "previewShare": "200"},
        {"previewAsset": "200", "previewShare": "400"},
    ]
    assert fake_chain.calls_to("getPreviews") == [(FTOKEN, [100, 200], [])]


def test_get_previews_rejects_bad_amounts(fake_chain):
    with pytest.raises(InvalidAmountError):
        get_previews("ethereum", FTOKEN, shares="1,x")
    assert fake_chain.calls == []


# ===== 交易构建 =====

def _selector(name):
    return "0x" + function_selector(get_function_abi(FTOKEN_ABI, name)).hex()


def test_build_deposit(fake_chain):
    fake_chain.on(FTOKEN, previewDeposit=lambda assets: assets * 2)

    tx = build_lending_deposit("ethereum", FTOKEN, "1000000", USER)
    assert list(tx)[:5] == ["chain", "action", "to", "data", "value"]
    assert tx["action"] == "deposit"
    assert tx["to"] == FTOKEN
    assert tx["data"].startswith("0x6e553f65")
    assert tx["value"] == "0"
    assert tx["previewSharesReceived"] == "2000000"
    assert "approve" in tx["note"]


def test_build_deposit_checksums_target(fake_chain):
    tx = build_lending_deposit("ethereum", WETH.lower(), "1", USER)
    assert tx["to"] == WETH


def test_preview_failure_falls_back_to_zero(fake_chain):
    tx = build_lending_deposit("ethereum", FTOKEN, "1000000", USER)
    assert tx["previewSharesReceived"] == "0"


def test_build_mint_withdraw_redeem(fake_chain):
    fake_chain.on(
        FTOKEN,
        previewMint=lambda shares: shares + 1,
        previewWithdraw=lambda assets: assets - 1,
        previewRedeem=lambda shares: shares * 3,
    )

    mint = build_lending_mint("ethereum", FTOKEN, "10", USER)
    assert mint["data"].startswith("0x94bf804d")
    assert mint["previewAssetsNeeded"] == "11"

    withdraw = build_lending_withdraw("ethereum", FTOKEN, "10", USER, USER)
    assert withdraw["data"].startswith("0xb460af94")
    assert withdraw["previewSharesBurned"] == "9"
    assert "note" not in withdraw

    redeem = build_lending_redeem("ethereum", FTOKEN, "10", USER, USER)
    assert redeem["data"].startswith("0xba087652")
    assert redeem["previewAssetsReceived"] == "30"


def test_build_native_deposit_and_withdraw(fake_chain):
    deposit = build_lending_deposit_native("ethereum", FTOKEN, "5000", USER)
    assert deposit["action"] == "depositNative"
    assert deposit["value"] == "5000"
    assert deposit["data"] == _selector("depositNative") + "0" * 24 + "5" * 40

    withdraw = build_lending_withdraw_native("ethereum", FTOKEN, "5000", USER, USER)
    assert withdraw["value"] == "0"
    assert withdraw["data"].startswith(_selector("withdrawNative"))
    assert len(withdraw["data"]) == 2 + 8 + 64 * 3


def test_build_approve_defaults_to_unlimited():
    tx = build_token_approve("ethereum", USDC, FTOKEN)
    assert tx["to"] == USDC
    assert tx["data"].startswith("0x095ea7b3")
    assert tx["data"].endswith("f" * 64)
    assert tx["description"] == f"Approve {FTOKEN} to spend unlimited of token {USDC}"

    limited = build_token_approve("ethereum", USDC, FTOKEN, amount="256")
    assert limited["data"].endswith("0" * 61 + "100")
    assert "spend 256 of token" in limited["description"]


def test_build_rejects_bad_input():
    with pytest.raises(InvalidAmountError):
        build_lending_deposit("ethereum", FTOKEN, "-5", USER)
    with pytest.raises(UnsupportedChainError):
        build_lending_deposit("solana", FTOKEN, "5", USER)


def test_deposit_tool_error_message(fake_chain):
    output = lending_deposit_tool.invoke({
        "chain": "ethereum",
        "ftoken_address": FTOKEN,
        "amount": "-5",
        "receiver": USER,
    })
    assert output == "构建存款交易失败: amount 超出 uint256 范围: -5"


def test_approve_tool_output():
    output = json.loads(token_approve_tool.invoke({
        "chain": "base",
        "token_address": USDC,
        "spender": FTOKEN,
    }))
    assert output["chain"] == "base"
    assert output["action"] == "approve"
    assert output["value"] == "0"
