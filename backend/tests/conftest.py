# backend/tests/conftest.py
"""
测试公共部分：用假合约代替 RPC

FakeChain 按地址注册合约函数，函数值可以是固定返回值或可调用对象；
没有注册的函数在 call() 时抛出异常，模拟合约 revert。
"""

import pytest

from fluid_agent.tools.fluid.fluid_client import fluid_client
from fluid_agent.tools.fluid.fluid_codec import normalize_address
from fluid_agent.tools.fluid.fluid_config import ZERO_ADDRESS, get_chain_config


class ContractReverted(Exception):
    pass


def default_value(param):
    abi_type = param["type"]
    if abi_type.endswith("]"):
        return []
    if abi_type == "tuple":
        return build_struct(param["components"])
    if abi_type == "bool":
        return False
    if abi_type == "address":
        return ZERO_ADDRESS
    if abi_type == "string":
        return ""
    if abi_type.startswith("bytes"):
        return b"\x00" * 32
    return 0


def build_struct(components, **overrides):
    """按 ABI 组件顺序构造 web3 风格的 tuple，未指定的字段取默认值"""
    values = []
    for component in components:
        name = component["name"]
        if name in overrides:
            value = overrides[name]
            if component["type"] == "tuple" and isinstance(value, dict):
                value = build_struct(component["components"], **value)
            values.append(value)
        else:
            values.append(default_value(component))
    return tuple(values)


class FakeCall:
    def __init__(self, name, result):
        self.name = name
        self.result = result

    def call(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeFunctions:
    def __init__(self, address, handlers, calls):
        self._address = address
        self._handlers = handlers
        self._calls = calls

    def __getattr__(self, name):
        def function(*args):
            self._calls.append((self._address, name, args))
            if name not in self._handlers:
                return FakeCall(name, ContractReverted(f"execution reverted: {name}"))
            handler = self._handlers[name]
            result = handler(*args) if callable(handler) else handler
            return FakeCall(name, result)
        return function


class FakeContract:
    def __init__(self, address, handlers, calls):
        self.address = address
        self.functions = FakeFunctions(address, handlers, calls)


class FakeChain:
    def __init__(self):
        self.contracts = {}
        self.calls = []

    def on(self, address, **handlers):
        self.contracts.setdefault(address.lower(), {}).update(handlers)

    def get_web3(self, chain, rpc_url=None):
        get_chain_config(chain)
        return None

    def get_contract(self, address, abi, w3):
        checksummed = normalize_address(address)
        handlers = self.contracts.get(checksummed.lower(), {})
        return FakeContract(checksummed, handlers, self.calls)

    def calls_to(self, name):
        return [args for _, fn_name, args in self.calls if fn_name == name]


@pytest.fixture
def fake_chain(monkeypatch):
    chain = FakeChain()
    monkeypatch.setattr(fluid_client, "get_web3", chain.get_web3)
    monkeypatch.setattr(fluid_client, "get_contract", chain.get_contract)
    return chain
