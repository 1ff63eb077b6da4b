# fluid_agent/tools/fluid/fluid_formatting.py
"""
Fluid 协议数据格式化工具

链上数值都是整数（uint256/int256），这里负责把它们转换成便于阅读的字符串。
"""

import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, List, Union

from fluid_agent.tools.fluid.fluid_errors import InvalidAmountError

# ===== 常量 =====

TWO_POW_256 = 2 ** 256
MAX_INT256 = 2 ** 255 - 1
MIN_INT256 = -(2 ** 255)
MAX_UINT256 = TWO_POW_256 - 1

# vault 汇率精度 1e12
EXCHANGE_PRICE_PRECISION = 10 ** 12

SECONDS_PER_YEAR = 31_536_000

RAY = 10 ** 27

# int256 最小值的占位写法，用于 "全部偿还/全部取出"
INT256_MIN_SENTINEL = "INT256_MIN"

# ===== 整数转换 =====

def decode_int256(raw: int) -> int:
    """
    把按 uint256 存储的补码值还原成 int256

    smart col / smart debt 的负数余额在链上以 uint256 存储，
    大于 2^255 - 1 的值实际是负数。
    """
    if raw > MAX_INT256:
        return raw - TWO_POW_256
    return raw

def encode_int256(value: int) -> int:
    """int256 转成 uint256 补码表示"""
    if value < 0:
        return value + TWO_POW_256
    return value

def shares_to_token_amount(shares: int, exchange_price: int) -> int:
    """
    vault shares 按汇率换算成代币数量（代币最小单位）

    tokenAmount = shares * exchangePrice / 1e12，向零截断，保留 shares 的符号
    """
    if shares == 0 or exchange_price == 0:
        return 0
    amount = abs(shares) * exchange_price // EXCHANGE_PRICE_PRECISION
    return -amount if shares < 0 else amount

# ===== 百分比 =====

def _strip_percent(value: float) -> str:
    text = f"{value:.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{text}%"

def format_rate_to_apy(rate_bps: int) -> str:
    """
    resolver 返回的利率是基点（1 = 0.01%）

    例如 supplyRate 407 => "4.07%"，400 => "4%"
    """
    return _strip_percent(int(rate_bps) / 100)

def format_ray_rate_to_apy(rate_per_second_ray: int) -> str:
    """每秒利率（1e27 精度）按年复利换算成 APY"""
    rate = int(rate_per_second_ray) / RAY
    try:
        apy = math.expm1(SECONDS_PER_YEAR * math.log1p(rate)) * 100
    except (OverflowError, ValueError):
        raise InvalidAmountError(f"利率超出范围: {rate_per_second_ray}")
    return _strip_percent(apy)

def format_percentage(value: int, scale: float = 1e4) -> str:
    return f"{int(value) / scale * 100:.2f}%"

def format_vault_percent(basis_points: int) -> str:
    """
    vault 配置值（1e4 = 100%）

    collateralFactor 8800 => "88%"，liquidationThreshold 31605 => "316.05%"
    """
    return _strip_percent(int(basis_points) / 100)

# ===== 数量 =====

def format_token_amount(amount: int, decimals: int, significant_digits: int = 6) -> str:
    """
    按精度格式化代币数量

    精度大于 30（T3/T4 vault 的 DEX LP 份额等）时直接返回原始整数字符串
    """
    amount = int(amount)
    decimals = int(decimals)
    if decimals > 30:
        return str(amount)

    is_negative = amount < 0
    with localcontext() as ctx:
        ctx.prec = 120
        value = Decimal(abs(amount)).scaleb(-decimals)
        if value == 0:
            return "0"
        if value < Decimal("0.000001"):
            return "< 0.000001"

        quantized = value.quantize(Decimal(1).scaleb(-significant_digits), rounding=ROUND_HALF_UP)
        display = f"{quantized:,f}"

    if "." in display:
        display = display.rstrip("0").rstrip(".")
    return f"-{display}" if is_negative else display

def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"

def truncate_address(address: str) -> str:
    if not address or len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"

def format_timestamp(timestamp: Union[int, float]) -> str:
    """区块时间戳转 ISO-8601 UTC 字符串"""
    dt = datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")

# ===== 序列化 =====

def serialize_big_ints(obj: Any) -> Any:
    """
    整数转成十进制字符串，避免 JSON 客户端丢失精度

    bool 保持不变
    """
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, dict):
        return {key: serialize_big_ints(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [serialize_big_ints(item) for item in obj]
    return obj

# ===== 输入解析 =====

def parse_raw_amount(text: Union[str, int], signed: bool = False, field: str = "amount") -> int:
    """
    解析最小单位的整数数量

    支持十进制和 0x 十六进制；signed 时允许负数和 INT256_MIN 占位符。
    超出 uint256 / int256 范围抛出 InvalidAmountError
    """
    if isinstance(text, bool):
        raise InvalidAmountError(f"{field} 必须是整数: {text}")

    if isinstance(text, int):
        value = text
    else:
        raw = (text or "").strip()
        if not raw:
            raise InvalidAmountError(f"{field} 不能为空")

        if signed and raw.upper() == INT256_MIN_SENTINEL:
            return MIN_INT256

        negative = raw.startswith("-")
        digits = raw[1:] if negative else raw
        try:
            if digits[:1] in ("-", "+"):
                raise ValueError(digits)
            if digits.lower().startswith("0x"):
                value = int(digits, 16)
            else:
                value = int(digits, 10)
        except ValueError:
            raise InvalidAmountError(f"{field} 不是有效的整数: {text}")
        if negative:
            value = -value

    if signed:
        if not MIN_INT256 <= value <= MAX_INT256:
            raise InvalidAmountError(f"{field} 超出 int256 范围: {text}")
    elif not 0 <= value <= MAX_UINT256:
        raise InvalidAmountError(f"{field} 超出 uint256 范围: {text}")

    return value

def parse_amount_list(text: str, field: str = "amounts") -> List[int]:
    """逗号分隔的数量列表，空字符串返回空列表"""
    if not text or not text.strip():
        return []
    return [
        parse_raw_amount(part, field=field)
        for part in text.split(",")
        if part.strip()
    ]
