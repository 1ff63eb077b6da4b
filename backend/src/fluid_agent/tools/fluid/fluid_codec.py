# fluid_agent/tools/fluid/fluid_codec.py
"""
ABI 编解码工具

写操作的 calldata 在本地编码，不需要连接节点。
读操作的返回值（web3 返回的嵌套 tuple）按 ABI 组件名转换成 dict。
"""

import logging
from typing import Any, Dict, List, Sequence

from eth_abi import encode
from eth_utils import keccak, to_checksum_address

from fluid_agent.tools.fluid.fluid_errors import AbiError, InvalidAddressError

logger = logging.getLogger(__name__)

# ===== 地址 =====

def normalize_address(address: str) -> str:
    """地址转成 EIP-55 校验格式，先转小写以忽略输入里错误的大小写"""
    try:
        return to_checksum_address(str(address).strip().lower())
    except ValueError:
        raise InvalidAddressError(f"无效的地址: {address}")

# ===== ABI 查找 =====

def get_function_abi(abi: List[Dict[str, Any]], name: str) -> Dict[str, Any]:
    """按函数名查找 ABI 片段"""
    for item in abi:
        if item.get("type") == "function" and item.get("name") == name:
            return item
    raise AbiError(f"ABI 中没有函数: {name}")

def canonical_type(param: Dict[str, Any]) -> str:
    """
    返回参数的规范类型字符串

    tuple 展开成组件类型，例如 tuple[] -> (uint256,uint256)[]
    """
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        suffix = abi_type[len("tuple"):]
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){suffix}"
    return abi_type

def function_signature(fn_abi: Dict[str, Any]) -> str:
    types = ",".join(canonical_type(p) for p in fn_abi.get("inputs", []))
    return f"{fn_abi['name']}({types})"

def function_selector(fn_abi: Dict[str, Any]) -> bytes:
    """函数选择器：签名 keccak 哈希的前 4 字节"""
    return keccak(text=function_signature(fn_abi))[:4]

# ===== 编码 =====

def _prepare_arg(param: Dict[str, Any], value: Any) -> Any:
    abi_type = param["type"]

    # 数组，逐个元素处理
    if abi_type.endswith("]"):
        element = dict(param, type=abi_type[:abi_type.rindex("[")])
        return [_prepare_arg(element, v) for v in value]

    if abi_type == "tuple":
        components = param.get("components", [])
        if isinstance(value, dict):
            missing = [c["name"] for c in components if c["name"] not in value]
            if missing:
                raise AbiError(f"参数 {param.get('name')} 缺少字段: {', '.join(missing)}")
            value = [value[c["name"]] for c in components]
        if len(value) != len(components):
            raise AbiError(
                f"参数 {param.get('name')} 需要 {len(components)} 个字段，实际 {len(value)} 个"
            )
        return tuple(_prepare_arg(c, v) for c, v in zip(components, value))

    if abi_type == "address":
        return normalize_address(value)

    return value

def encode_function_data(abi: List[Dict[str, Any]], name: str, args: Sequence[Any]) -> str:
    """
    编码函数调用数据

    Args:
        abi: 合约 ABI
        name: 函数名
        args: 参数列表，tuple 参数可以是序列或按组件名索引的 dict

    Returns:
        0x 开头的 calldata
    """
    fn_abi = get_function_abi(abi, name)
    inputs = fn_abi.get("inputs", [])
    if len(args) != len(inputs):
        raise AbiError(f"{name} 需要 {len(inputs)} 个参数，实际 {len(args)} 个")

    prepared = [_prepare_arg(p, v) for p, v in zip(inputs, args)]
    types = [canonical_type(p) for p in inputs]
    data = function_selector(fn_abi) + encode(types, prepared)

    logger.debug(f"编码 {function_signature(fn_abi)}: {len(data)} 字节")
    return "0x" + data.hex()

# ===== 解码 =====

def decode_value(param: Dict[str, Any], value: Any) -> Any:
    """把 web3 返回值转换成按组件名索引的结构"""
    abi_type = param["type"]

    if abi_type.endswith("]"):
        element = dict(param, type=abi_type[:abi_type.rindex("[")])
        return [decode_value(element, v) for v in value]

    if abi_type == "tuple":
        components = param.get("components", [])
        if isinstance(value, dict):
            return {c["name"]: decode_value(c, value[c["name"]]) for c in components}
        return {c["name"]: decode_value(c, v) for c, v in zip(components, value)}

    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()

    return value

def decode_outputs(fn_abi: Dict[str, Any], result: Any) -> Any:
    """
    解码函数返回值

    单个输出直接返回解码后的值；多个输出返回按输出名索引的 dict
    """
    outputs = fn_abi.get("outputs", [])
    if len(outputs) == 1:
        return decode_value(outputs[0], result)

    return {
        (output.get("name") or f"output{i}"): decode_value(output, value)
        for i, (output, value) in enumerate(zip(outputs, result))
    }
