# fluid_agent/tools/fluid/fluid_client.py
"""
Fluid RPC 客户端
按 链:RPC 地址 缓存 Web3 实例，所有实例共用一个 requests.Session
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from web3 import Web3

from fluid_agent.tools.fluid.fluid_config import (
    REQUEST_CONFIG, DEBUG_CONFIG, get_rpc_url
)
from fluid_agent.tools.fluid.fluid_codec import (
    get_function_abi, decode_outputs, normalize_address
)

logger = logging.getLogger(__name__)

class FluidRPCClient:
    """Fluid 合约读取客户端，复用 provider 连接"""

    def __init__(self):
        self.session = requests.Session()
        self.session.headers.update(REQUEST_CONFIG.headers)
        self._providers: Dict[str, Web3] = {}

    def get_web3(self, chain: str, rpc_url: Optional[str] = None) -> Web3:
        """
        获取（或创建）指定链的 Web3 实例

        Args:
            chain: 链名称
            rpc_url: 自定义 RPC 地址，为空时使用默认地址

        Returns:
            缓存的 Web3 实例
        """
        # 先解析链配置，不支持的链在任何网络请求之前失败
        url = get_rpc_url(chain, rpc_url)
        cache_key = f"{chain.strip().lower()}:{url}"

        w3 = self._providers.get(cache_key)
        if w3 is None:
            logger.debug(f"创建 provider: {cache_key}")
            # 不重试，RPC 错误直接抛给调用方
            provider = Web3.HTTPProvider(
                url,
                request_kwargs={"timeout": REQUEST_CONFIG.timeout},
                session=self.session,
                exception_retry_configuration=None,
            )
            w3 = self._providers.setdefault(cache_key, Web3(provider))
        return w3

    def get_contract(self, address: str, abi: List[Dict[str, Any]], w3: Web3):
        """创建合约对象，地址统一转成 EIP-55 校验格式"""
        return w3.eth.contract(address=normalize_address(address), abi=abi)

    def read(self, contract, abi: List[Dict[str, Any]], fn_name: str, *args) -> Any:
        """
        调用只读函数并按 ABI 解码返回值

        结构体返回值转换成按字段名索引的 dict
        """
        if DEBUG_CONFIG["log_rpc_calls"]:
            logger.debug(f"eth_call {contract.address}.{fn_name}{args}")

        result = getattr(contract.functions, fn_name)(*args).call()
        return decode_outputs(get_function_abi(abi, fn_name), result)

    def cache_size(self) -> int:
        return len(self._providers)

    def clear_cache(self):
        self._providers.clear()

# 全局客户端实例
fluid_client = FluidRPCClient()
