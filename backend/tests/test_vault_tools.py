# backend/tests/test_vault_tools.py

import pytest

from fluid_agent.tools.fluid.fluid_abis import (
    USER_POSITION_COMPONENTS, VAULT_ENTIRE_DATA_COMPONENTS, VAULT_OPERATE_ABIS,
)
from fluid_agent.tools.fluid.fluid_codec import function_selector, get_function_abi
from fluid_agent.tools.fluid.fluid_config import CONTRACTS, ZERO_ADDRESS
from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError
from fluid_agent.tools.fluid.fluid_formatting import MIN_INT256
from fluid_agent.tools.fluid.vault_tools import (
    convert_vault_shares, convert_vault_shares_tool, get_all_vaults, get_total_positions,
    get_user_vault_nft_ids, get_user_vault_positions, get_vault_by_nft, get_vault_data,
    get_vault_position, get_vault_type, vault_type_label,
)
from fluid_agent.tools.fluid.vault_tx_tools import (
    build_vault_t1_operate, build_vault_t2_operate, build_vault_t3_operate,
    build_vault_t4_operate, vault_t1_operate_tool, vault_t2_operate_tool,
)

from conftest import build_struct

RESOLVER = CONTRACTS["vault_resolver"]
VAULT = "0x" + "6" * 40
OTHER_VAULT = "0x" + "7" * 40
BROKEN_VAULT = "0x" + "8" * 40
WSTETH = "0x" + "2" * 40
USDC = "0x" + "3" * 40
USER = "0x" + "5" * 40


def _vault_data(**overrides):
    data = {
        "vault": VAULT,
        "constantVariables": {
            "supplyToken": {"token0": WSTETH},
            "borrowToken": {"token0": USDC},
            "vaultId": 7,
            "vaultType": 10000,
        },
    }
    data.update(overrides)
    return build_struct(VAULT_ENTIRE_DATA_COMPONENTS, **data)


@pytest.fixture
def tokens(fake_chain):
    fake_chain.on(WSTETH, symbol="wstETH", decimals=18)
    # 没有 symbol，读取失败时回退到 UNKNOWN
    fake_chain.on(USDC, decimals=6)
    return fake_chain


# ===== 只读 =====

def test_vault_type_label():
    assert vault_type_label(10000) == "T1"
    assert vault_type_label(40000) == "T4"
    assert vault_type_label(50000) == "UNKNOWN(50000)"


def test_get_all_vaults_marks_unreadable_types(fake_chain):
    types = {VAULT: 10000, OTHER_VAULT: 40000}
    fake_chain.on(
        RESOLVER,
        getAllVaultsAddresses=[VAULT, OTHER_VAULT, BROKEN_VAULT],
        getTotalVaults=3,
        getVaultType=lambda vault: types[vault],
    )

    result = get_all_vaults("ethereum")
    assert result["totalVaults"] == 3
    assert result["vaults"] == [
        {"address": VAULT, "type": "T1", "typeValue": 10000},
        {"address": OTHER_VAULT, "type": "T4", "typeValue": 40000},
        {"address": BROKEN_VAULT, "type": "UNKNOWN", "typeValue": 0},
    ]


def test_get_vault_type(fake_chain):
    fake_chain.on(RESOLVER, getVaultType=30000)
    assert get_vault_type("base", VAULT) == {
        "chain": "base", "vault": VAULT, "type": "T3", "typeValue": 30000,
    }


def test_get_vault_type_unknown(fake_chain):
    fake_chain.on(RESOLVER, getVaultType=50000)
    assert get_vault_type("base", VAULT) == {
        "chain": "base", "vault": VAULT, "type": "UNKNOWN", "typeValue": 50000,
    }


def test_get_vault_data(tokens):
    tokens.on(RESOLVER, getVaultEntireData=_vault_data(
        configs={"collateralFactor": 8800, "liquidationThreshold": 31605, "borrowFee": 0},
        exchangePricesAndRates={
            "supplyRateVault": 407,
            "borrowRateVault": -120,
            "vaultSupplyExchangePrice": 10 ** 12,
        },
        totalSupplyAndBorrow={"totalSupplyVault": 1500 * 10 ** 18, "totalBorrowVault": 2500 * 10 ** 6},
        limitsAndAvailability={"borrowable": 42},
    ))

    result = get_vault_data("ethereum", VAULT)
    assert result["vaultType"] == "T1"
    assert result["tokens"] == {
        "supplyToken": WSTETH,
        "supplySymbol": "wstETH",
        "supplyDecimals": 18,
        "borrowToken": USDC,
        "borrowSymbol": "UNKNOWN",
        "borrowDecimals": 6,
        "vaultId": "7",
    }
    assert result["configs"]["collateralFactor"] == "88%"
    assert result["configs"]["liquidationThreshold"] == "316.05%"
    assert result["configs"]["borrowFee"] == "0%"
    assert result["rates"]["supplyRateVault"] == "4.07%"
    assert result["rates"]["borrowRateVault"] == "-1.2%"
    assert result["rates"]["vaultSupplyExchangePrice"] == str(10 ** 12)
    assert result["totals"]["totalSupplyVault"] == "1,500"
    assert result["totals"]["totalBorrowVault"] == "2,500"
    assert result["limits"]["borrowable"] == "42"


def test_get_vault_data_falls_back_to_supply_and_borrow_fields(tokens):
    tokens.on(RESOLVER, getVaultEntireData=_vault_data(constantVariables={
        "supply": WSTETH,
        "borrowToken": {"token0": ZERO_ADDRESS},
        "vaultType": 20000,
    }))

    result = get_vault_data("ethereum", VAULT)
    assert result["vaultType"] == "T2"
    assert result["tokens"]["supplyToken"] == WSTETH
    assert result["tokens"]["borrowToken"] == ZERO_ADDRESS
    assert result["tokens"]["borrowSymbol"] == "UNKNOWN"
    assert result["tokens"]["borrowDecimals"] == 18


def _position_handler(nft_id):
    position = build_struct(
        USER_POSITION_COMPONENTS,
        nftId=nft_id,
        owner=USER,
        supply=2 ** 256 - 10 ** 18,
        borrow=500 * 10 ** 6,
    )
    vault_data = _vault_data(
        isSmartCol=True,
        configs={"collateralFactor": 8000, "liquidationThreshold": 8500, "withdrawalGap": 500},
        exchangePricesAndRates={"supplyRateLiquidity": 250, "borrowRateVault": 600},
    )
    return position, vault_data


def test_get_vault_position(tokens):
    tokens.on(RESOLVER, positionByNftId=_position_handler)

    result = get_vault_position("ethereum", 42)
    assert result["nftId"] == 42
    assert result["vault"] == VAULT
    assert result["owner"] == USER
    assert result["isSmartCol"] is True
    assert result["isLiquidated"] is False
    assert result["supply"] == {
        "token": WSTETH,
        "symbol": "wstETH",
        "amount": "-1",
        "amountRaw": str(-10 ** 18),
    }
    assert result["borrow"]["amount"] == "500"
    assert result["config"]["collateralFactor"] == "80%"
    assert "withdrawalGap" not in result["config"]
    assert result["rates"]["supplyRateLiquidity"] == "2.5%"
    assert result["rates"]["borrowRateVault"] == "6%"
    assert "_configs" not in result
    assert tokens.calls_to("positionByNftId") == [(42,)]


def test_get_vault_by_nft(tokens):
    tokens.on(RESOLVER, positionByNftId=_position_handler)

    result = get_vault_by_nft("ethereum", 42)
    assert result["vault"] == VAULT
    assert set(result["config"]) == {"collateralFactor", "liquidationThreshold", "liquidationPenalty"}
    assert "rates" not in result


def test_get_user_vault_nft_ids(fake_chain):
    fake_chain.on(RESOLVER, positionsNftIdOfUser=[1, 2])
    result = get_user_vault_nft_ids("ethereum", USER)
    assert result["totalNfts"] == 2
    assert result["nftIds"] == ["1", "2"]


def test_get_user_vault_positions(fake_chain):
    fake_chain.on(RESOLVER, positionsByUser=[
        build_struct(USER_POSITION_COMPONENTS, nftId=5, owner=USER, tick=-10, supply=100, borrow=2 ** 256 - 1),
    ])

    result = get_user_vault_positions("ethereum", USER)
    assert result["totalPositions"] == 1
    position = result["positions"][0]
    assert position["nftId"] == "5"
    assert position["tick"] == "-10"
    assert position["supply"] == "100"
    assert position["borrow"] == "-1"
    assert position["isLiquidated"] is False


def test_get_total_positions(fake_chain):
    fake_chain.on(RESOLVER, totalPositions=1234)
    assert get_total_positions("ethereum") == {"chain": "ethereum", "totalPositions": "1234"}


def test_convert_vault_shares(fake_chain):
    fake_chain.on(USDC, symbol="USDC", decimals=6)
    fake_chain.on(RESOLVER, getVaultEntireData=_vault_data(
        constantVariables={"supplyToken": {"token0": USDC}, "borrowToken": {"token0": USDC}},
        exchangePricesAndRates={
            "vaultSupplyExchangePrice": 1_050_000_000_000,
            "vaultBorrowExchangePrice": 2 * 10 ** 12,
        },
    ))

    supply = convert_vault_shares("ethereum", VAULT, "1000000")
    assert supply == {
        "chain": "ethereum",
        "vault": VAULT,
        "side": "supply",
        "shares": "1000000",
        "exchangePrice": "1050000000000",
        "token": USDC,
        "symbol": "USDC",
        "amount": "1.05",
        "amountRaw": "1050000",
    }

    borrow = convert_vault_shares("ethereum", VAULT, "-500000", side="Borrow")
    assert borrow["side"] == "borrow"
    assert borrow["amount"] == "-1"
    assert borrow["amountRaw"] == "-1000000"


def test_convert_vault_shares_rejects_side(fake_chain):
    output = convert_vault_shares_tool.invoke({
        "chain": "ethereum", "vault_address": VAULT, "shares": "1", "side": "sideways",
    })
    assert output == "换算 vault 份额失败: side 必须是 supply 或 borrow: sideways"
    assert fake_chain.calls == []


# ===== 交易构建 =====

def _selector(vault_type):
    return "0x" + function_selector(get_function_abi(VAULT_OPERATE_ABIS[vault_type], "operate")).hex()


def test_build_t1_operate():
    tx = build_vault_t1_operate("ethereum", VAULT, 0, "1000", "-500", USER)
    assert tx["action"] == "vault_t1_operate"
    assert tx["to"] == VAULT
    assert tx["value"] == "1000"
    assert tx["nftId"] == 0
    assert tx["newCol"] == "1000"
    assert tx["newDebt"] == "-500"
    assert tx["data"].startswith(_selector("T1"))
    assert len(tx["data"]) == 2 + 8 + 64 * 4


def test_build_t1_operate_repay_all():
    tx = build_vault_t1_operate("ethereum", VAULT, 12, "-1000", "INT256_MIN", USER)
    assert tx["value"] == "0"
    assert tx["newDebt"] == str(MIN_INT256)
    words = tx["data"][10:]
    assert words[128:192] == "8" + "0" * 63


def test_build_t2_operate():
    tx = build_vault_t2_operate("ethereum", VAULT, 3, "100", "200", "1", "2", "50", USER)
    assert tx["action"] == "vault_t2_operate"
    assert tx["value"] == "0"
    assert tx["colToken0"] == "100"
    assert tx["colToken1"] == "200"
    assert tx["colSharesMinMax"] == {"min": "1", "max": "2"}
    assert tx["data"].startswith(_selector("T2"))
    assert len(tx["data"]) == 2 + 8 + 64 * 7

    with pytest.raises(InvalidAmountError):
        build_vault_t2_operate("ethereum", VAULT, 3, "-100", "200", "1", "2", "50", USER)


def test_build_t3_operate():
    tx = build_vault_t3_operate("ethereum", VAULT, 3, "100", "-5", "INT256_MIN", "0", "10", USER)
    assert tx["debtToken0"] == "-5"
    assert tx["debtToken1"] == str(MIN_INT256)
    assert tx["debtSharesMinMax"] == {"min": "0", "max": "10"}
    assert len(tx["data"]) == 2 + 8 + 64 * 7


def test_build_t4_operate():
    tx = build_vault_t4_operate(
        "ethereum", VAULT, 3, "100", "200", "1", "2", "-5", "6", "3", "4", USER,
    )
    assert tx["action"] == "vault_t4_operate"
    assert tx["colSharesMinMax"] == {"min": "1", "max": "2"}
    assert tx["debtSharesMinMax"] == {"min": "3", "max": "4"}
    assert tx["data"].startswith(_selector("T4"))
    assert len(tx["data"]) == 2 + 8 + 64 * 10


def test_min_greater_than_max_is_rejected():
    with pytest.raises(InvalidAmountError):
        build_vault_t4_operate("ethereum", VAULT, 3, "1", "1", "1", "1", "0", "0", "9", "8", USER)

    output = vault_t2_operate_tool.invoke({
        "chain": "ethereum",
        "vault_address": VAULT,
        "nft_id": 3,
        "new_col_token0": "100",
        "new_col_token1": "200",
        "col_shares_min": "5",
        "col_shares_max": "2",
        "new_debt": "0",
        "receiver": USER,
    })
    assert output == "构建 T2 vault 交易失败: col_shares_min 不能大于 col_shares_max"


def test_negative_nft_id_returns_failure_text():
    output = vault_t1_operate_tool.invoke({
        "chain": "ethereum",
        "vault_address": VAULT,
        "nft_id": -1,
        "new_col": "1",
        "new_debt": "0",
        "receiver": USER,
    })
    assert output.startswith("构建 T1 vault 交易失败: ")
    assert "nft_id" in output
