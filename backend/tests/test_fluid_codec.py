# backend/tests/test_fluid_codec.py

import pytest

from fluid_agent.tools.fluid.fluid_abis import (
    ERC20_ABI, FTOKEN_ABI, FTOKEN_ENTIRE_DATA_COMPONENTS, LENDING_RESOLVER_ABI,
    USER_POSITION_COMPONENTS, VAULT_ENTIRE_DATA_COMPONENTS, VAULT_RESOLVER_ABI,
    VAULT_T1_ABI, VAULT_T2_ABI,
)
from fluid_agent.tools.fluid.fluid_codec import (
    canonical_type, decode_outputs, encode_function_data, function_selector,
    function_signature, get_function_abi, normalize_address,
)
from fluid_agent.tools.fluid.fluid_config import NATIVE_TOKEN_ADDRESS
from fluid_agent.tools.fluid.fluid_errors import AbiError, InvalidAddressError

from conftest import build_struct

ADDR = "0x" + "1" * 40
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


@pytest.mark.parametrize("abi, name, selector", [
    (ERC20_ABI, "approve", "095ea7b3"),
    (FTOKEN_ABI, "deposit", "6e553f65"),
    (FTOKEN_ABI, "mint", "94bf804d"),
    (FTOKEN_ABI, "withdraw", "b460af94"),
    (FTOKEN_ABI, "redeem", "ba087652"),
])
def test_function_selector(abi, name, selector):
    assert function_selector(get_function_abi(abi, name)).hex() == selector


def test_tuple_signature():
    fn_abi = get_function_abi(VAULT_T2_ABI, "operate")
    assert function_signature(fn_abi) == (
        "operate(uint256,uint256,uint256,(uint256,uint256),int256,address)"
    )
    previews = get_function_abi(LENDING_RESOLVER_ABI, "getPreviews")["outputs"][0]
    assert canonical_type(previews) == "(uint256,uint256)[]"


def test_normalize_address():
    assert normalize_address(WETH.lower()) == WETH
    assert normalize_address(f"  {WETH.upper().replace('0X', '0x')} ") == WETH
    assert normalize_address(NATIVE_TOKEN_ADDRESS.lower()) == NATIVE_TOKEN_ADDRESS


@pytest.mark.parametrize("bad", ["0x123", "not-an-address", "", "0x" + "g" * 40])
def test_normalize_address_rejects(bad):
    with pytest.raises(InvalidAddressError):
        normalize_address(bad)


def test_encode_approve():
    data = encode_function_data(ERC20_ABI, "approve", [ADDR, 1])
    assert data == "0x095ea7b3" + "0" * 24 + "1" * 40 + "0" * 63 + "1"


def test_encode_negative_int256():
    data = encode_function_data(VAULT_T1_ABI, "operate", [0, -1, 0, ADDR])
    words = data[10:]
    assert words[64:128] == "f" * 64
    assert words[128:192] == "0" * 64


def test_encode_tuple_from_dict_or_sequence():
    as_dict = encode_function_data(VAULT_T2_ABI, "operate", [1, 2, 3, {"min": 4, "max": 5}, -6, ADDR])
    as_list = encode_function_data(VAULT_T2_ABI, "operate", [1, 2, 3, [4, 5], -6, ADDR])
    assert as_dict == as_list
    assert len(as_dict) == 2 + 8 + 64 * 7


def test_encode_errors():
    with pytest.raises(AbiError) as exc:
        encode_function_data(ERC20_ABI, "transferFrom", [])
    assert str(exc.value) == "ABI 中没有函数: transferFrom"

    with pytest.raises(AbiError):
        encode_function_data(ERC20_ABI, "approve", [ADDR])

    with pytest.raises(AbiError):
        encode_function_data(VAULT_T2_ABI, "operate", [1, 2, 3, {"min": 4}, 0, ADDR])

    with pytest.raises(AbiError):
        encode_function_data(VAULT_T2_ABI, "operate", [1, 2, 3, [4], 0, ADDR])

    with pytest.raises(InvalidAddressError):
        encode_function_data(ERC20_ABI, "approve", ["0x1234", 1])


def test_decode_single_struct():
    fn_abi = get_function_abi(LENDING_RESOLVER_ABI, "getFTokenDetails")
    raw = build_struct(
        FTOKEN_ENTIRE_DATA_COMPONENTS,
        symbol="fUSDC",
        decimals=6,
        liquidityUserSupplyData={"isAllowed": True, "supply": 5},
    )
    decoded = decode_outputs(fn_abi, raw)
    assert decoded["symbol"] == "fUSDC"
    assert decoded["decimals"] == 6
    assert decoded["liquidityUserSupplyData"]["isAllowed"] is True
    assert decoded["liquidityUserSupplyData"]["supply"] == 5


def test_decode_multiple_outputs_by_name():
    fn_abi = get_function_abi(VAULT_RESOLVER_ABI, "positionByNftId")
    raw = (
        build_struct(USER_POSITION_COMPONENTS, nftId=9, owner=ADDR),
        build_struct(VAULT_ENTIRE_DATA_COMPONENTS, vault=ADDR),
    )
    decoded = decode_outputs(fn_abi, raw)
    assert set(decoded) == {"position_", "vaultData_"}
    assert decoded["position_"]["nftId"] == 9
    assert decoded["vaultData_"]["constantVariables"]["supplyToken"]["token0"] == (
        "0x0000000000000000000000000000000000000000"
    )
    assert decoded["vaultData_"]["constantVariables"]["userSupplySlot"] == "0x" + "00" * 32


def test_decode_address_array():
    fn_abi = get_function_abi(LENDING_RESOLVER_ABI, "getAllFTokens")
    assert decode_outputs(fn_abi, [ADDR, WETH]) == [ADDR, WETH]
