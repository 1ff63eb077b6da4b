# fluid_agent/tools/fluid/fluid_abis.py
"""
Fluid 协议合约 ABI 定义

只包含工具用到的函数。resolver 合约返回复杂结构体，使用 JSON 格式。
"""

# ===== 复用的结构体片段 =====

LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS = [
    {"name": "isAllowed", "type": "bool"},
    {"name": "supply", "type": "uint256"},
    {"name": "withdrawalLimit", "type": "uint256"},
    {"name": "lastUpdateTimestamp", "type": "uint256"},
    {"name": "expandPercent", "type": "uint256"},
    {"name": "expandDuration", "type": "uint256"},
    {"name": "baseWithdrawalLimit", "type": "uint256"},
]

LIQUIDITY_USER_BORROW_DATA_COMPONENTS = [
    {"name": "isAllowed", "type": "bool"},
    {"name": "borrow", "type": "uint256"},
    {"name": "borrowLimit", "type": "uint256"},
    {"name": "lastUpdateTimestamp", "type": "uint256"},
    {"name": "expandPercent", "type": "uint256"},
    {"name": "expandDuration", "type": "uint256"},
    {"name": "baseBorrowLimit", "type": "uint256"},
    {"name": "maxBorrowLimit", "type": "uint256"},
]

FTOKEN_ENTIRE_DATA_COMPONENTS = [
    {"name": "tokenAddress", "type": "address"},
    {"name": "eip2612Deposits", "type": "bool"},
    {"name": "isNativeUnderlying", "type": "bool"},
    {"name": "name", "type": "string"},
    {"name": "symbol", "type": "string"},
    {"name": "decimals", "type": "uint256"},
    {"name": "asset", "type": "address"},
    {"name": "totalAssets", "type": "uint256"},
    {"name": "totalSupply", "type": "uint256"},
    {"name": "convertToShares", "type": "uint256"},
    {"name": "convertToAssets", "type": "uint256"},
    {"name": "rewardsRate", "type": "uint256"},
    {"name": "supplyRate", "type": "uint256"},
    {"name": "rebalanceDifference", "type": "int256"},
    {
        "name": "liquidityUserSupplyData",
        "type": "tuple",
        "components": LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS,
    },
]

OVERALL_TOKEN_DATA_COMPONENTS = [
    {"name": "supplyRate", "type": "uint256"},
    {"name": "borrowRate", "type": "uint256"},
    {"name": "fee", "type": "uint256"},
    {"name": "lastUpdateTimestamp", "type": "uint256"},
    {"name": "supplyExchangePrice", "type": "uint256"},
    {"name": "borrowExchangePrice", "type": "uint256"},
    {"name": "supplyRawInterest", "type": "uint256"},
    {"name": "supplyInterestFree", "type": "uint256"},
    {"name": "borrowRawInterest", "type": "uint256"},
    {"name": "borrowInterestFree", "type": "uint256"},
    {"name": "totalSupply", "type": "uint256"},
    {"name": "totalBorrow", "type": "uint256"},
    {"name": "revenue", "type": "uint256"},
    {"name": "maxUtilization", "type": "uint256"},
]

TOKENS_COMPONENTS = [
    {"name": "token0", "type": "address"},
    {"name": "token1", "type": "address"},
]

CONSTANT_VIEWS = {
    "name": "constantVariables",
    "type": "tuple",
    "components": [
        {"name": "liquidity", "type": "address"},
        {"name": "factory", "type": "address"},
        {"name": "operateImplementation", "type": "address"},
        {"name": "adminImplementation", "type": "address"},
        {"name": "secondaryImplementation", "type": "address"},
        {"name": "deployer", "type": "address"},
        {"name": "supply", "type": "address"},
        {"name": "borrow", "type": "address"},
        {"name": "supplyToken", "type": "tuple", "components": TOKENS_COMPONENTS},
        {"name": "borrowToken", "type": "tuple", "components": TOKENS_COMPONENTS},
        {"name": "vaultId", "type": "uint256"},
        {"name": "vaultType", "type": "uint256"},
        {"name": "supplyExchangePriceSlot", "type": "bytes32"},
        {"name": "borrowExchangePriceSlot", "type": "bytes32"},
        {"name": "userSupplySlot", "type": "bytes32"},
        {"name": "userBorrowSlot", "type": "bytes32"},
    ],
}

CONFIGS = {
    "name": "configs",
    "type": "tuple",
    "components": [
        {"name": "supplyRateMagnifier", "type": "uint16"},
        {"name": "borrowRateMagnifier", "type": "uint16"},
        {"name": "collateralFactor", "type": "uint16"},
        {"name": "liquidationThreshold", "type": "uint16"},
        {"name": "liquidationMaxLimit", "type": "uint16"},
        {"name": "withdrawalGap", "type": "uint16"},
        {"name": "liquidationPenalty", "type": "uint16"},
        {"name": "borrowFee", "type": "uint16"},
        {"name": "oracle", "type": "address"},
        {"name": "oraclePriceOperate", "type": "uint256"},
        {"name": "oraclePriceLiquidate", "type": "uint256"},
        {"name": "rebalancer", "type": "address"},
        {"name": "lastUpdateTimestamp", "type": "uint256"},
    ],
}

EXCHANGE_PRICES_AND_RATES = {
    "name": "exchangePricesAndRates",
    "type": "tuple",
    "components": [
        {"name": "lastStoredLiquiditySupplyExchangePrice", "type": "uint256"},
        {"name": "lastStoredLiquidityBorrowExchangePrice", "type": "uint256"},
        {"name": "lastStoredVaultSupplyExchangePrice", "type": "uint256"},
        {"name": "lastStoredVaultBorrowExchangePrice", "type": "uint256"},
        {"name": "liquiditySupplyExchangePrice", "type": "uint256"},
        {"name": "liquidityBorrowExchangePrice", "type": "uint256"},
        {"name": "vaultSupplyExchangePrice", "type": "uint256"},
        {"name": "vaultBorrowExchangePrice", "type": "uint256"},
        {"name": "supplyRateLiquidity", "type": "uint256"},
        {"name": "borrowRateLiquidity", "type": "uint256"},
        {"name": "supplyRateVault", "type": "int256"},
        {"name": "borrowRateVault", "type": "int256"},
        {"name": "rewardsOrFeeRateSupply", "type": "int256"},
        {"name": "rewardsOrFeeRateBorrow", "type": "int256"},
    ],
}

TOTAL_SUPPLY_AND_BORROW = {
    "name": "totalSupplyAndBorrow",
    "type": "tuple",
    "components": [
        {"name": "totalSupplyVault", "type": "uint256"},
        {"name": "totalBorrowVault", "type": "uint256"},
        {"name": "totalSupplyLiquidityOrDex", "type": "uint256"},
        {"name": "totalBorrowLiquidityOrDex", "type": "uint256"},
        {"name": "absorbedSupply", "type": "uint256"},
        {"name": "absorbedBorrow", "type": "uint256"},
    ],
}

LIMITS_AND_AVAILABILITY = {
    "name": "limitsAndAvailability",
    "type": "tuple",
    "components": [
        {"name": "withdrawLimit", "type": "uint256"},
        {"name": "withdrawableUntilLimit", "type": "uint256"},
        {"name": "withdrawable", "type": "uint256"},
        {"name": "borrowLimit", "type": "uint256"},
        {"name": "borrowableUntilLimit", "type": "uint256"},
        {"name": "borrowable", "type": "uint256"},
        {"name": "borrowLimitUtilization", "type": "uint256"},
        {"name": "minimumBorrowing", "type": "uint256"},
    ],
}

CURRENT_BRANCH_STATE = {
    "name": "currentBranchState",
    "type": "tuple",
    "components": [
        {"name": "status", "type": "uint256"},
        {"name": "minimaTick", "type": "int256"},
        {"name": "debtFactor", "type": "uint256"},
        {"name": "partials", "type": "uint256"},
        {"name": "debtLiquidity", "type": "uint256"},
        {"name": "baseBranchId", "type": "uint256"},
        {"name": "baseBranchMinima", "type": "int256"},
    ],
}

VAULT_STATE = {
    "name": "vaultState",
    "type": "tuple",
    "components": [
        {"name": "totalPositions", "type": "uint256"},
        {"name": "topTick", "type": "int256"},
        {"name": "currentBranch", "type": "uint256"},
        {"name": "totalBranch", "type": "uint256"},
        {"name": "totalBorrow", "type": "uint256"},
        {"name": "totalSupply", "type": "uint256"},
        CURRENT_BRANCH_STATE,
    ],
}

USER_POSITION_COMPONENTS = [
    {"name": "nftId", "type": "uint256"},
    {"name": "owner", "type": "address"},
    {"name": "isLiquidated", "type": "bool"},
    {"name": "isSupplyPosition", "type": "bool"},
    {"name": "tick", "type": "int256"},
    {"name": "tickId", "type": "uint256"},
    {"name": "beforeSupply", "type": "uint256"},
    {"name": "beforeBorrow", "type": "uint256"},
    {"name": "beforeDustBorrow", "type": "uint256"},
    {"name": "supply", "type": "uint256"},
    {"name": "borrow", "type": "uint256"},
    {"name": "dustBorrow", "type": "uint256"},
]

VAULT_ENTIRE_DATA_COMPONENTS = [
    {"name": "vault", "type": "address"},
    {"name": "isSmartCol", "type": "bool"},
    {"name": "isSmartDebt", "type": "bool"},
    CONSTANT_VIEWS,
    CONFIGS,
    EXCHANGE_PRICES_AND_RATES,
    TOTAL_SUPPLY_AND_BORROW,
    LIMITS_AND_AVAILABILITY,
    VAULT_STATE,
    {"name": "liquidityUserSupplyData", "type": "tuple", "components": LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS},
    {"name": "liquidityUserBorrowData", "type": "tuple", "components": LIQUIDITY_USER_BORROW_DATA_COMPONENTS},
]

MIN_MAX_COMPONENTS = [
    {"name": "min", "type": "uint256"},
    {"name": "max", "type": "uint256"},
]

DEX_POOL_RESERVES_COMPONENTS = [
    {"name": "pool", "type": "address"},
    {"name": "token0", "type": "address"},
    {"name": "token1", "type": "address"},
    {"name": "fee", "type": "uint256"},
    {"name": "reserve0", "type": "uint256"},
    {"name": "reserve1", "type": "uint256"},
    {"name": "totalSupplyShares", "type": "uint256"},
]


def _view(name, inputs, outputs):
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": inputs,
        "outputs": outputs,
    }


def _write(name, inputs, outputs, payable=False):
    return {
        "name": name,
        "type": "function",
        "stateMutability": "payable" if payable else "nonpayable",
        "inputs": inputs,
        "outputs": outputs,
    }


# ===== Lending Resolver (fTokens) =====

LENDING_RESOLVER_ABI = [
    _view("getAllFTokens", [], [{"name": "fTokens_", "type": "address[]"}]),
    _view("getFTokensEntireData", [], [
        {"name": "fTokensData_", "type": "tuple[]", "components": FTOKEN_ENTIRE_DATA_COMPONENTS},
    ]),
    _view("getFTokenDetails", [{"name": "fToken_", "type": "address"}], [
        {"name": "details_", "type": "tuple", "components": FTOKEN_ENTIRE_DATA_COMPONENTS},
    ]),
    _view("getUserPosition", [
        {"name": "fToken_", "type": "address"},
        {"name": "user_", "type": "address"},
    ], [
        {"name": "userPosition_", "type": "tuple", "components": [
            {"name": "fTokenShares", "type": "uint256"},
            {"name": "underlyingAssets", "type": "uint256"},
            {"name": "underlyingBalance", "type": "uint256"},
            {"name": "allowance", "type": "uint256"},
        ]},
    ]),
    _view("getUserPositions", [{"name": "user_", "type": "address"}], [
        {"name": "userPositions_", "type": "tuple[]", "components": [
            {"name": "fToken", "type": "address"},
            {"name": "fTokenShares", "type": "uint256"},
            {"name": "underlyingAssets", "type": "uint256"},
            {"name": "underlyingBalance", "type": "uint256"},
            {"name": "allowance", "type": "uint256"},
            {"name": "asset", "type": "address"},
            {"name": "totalAssets", "type": "uint256"},
            {"name": "totalSupply", "type": "uint256"},
            {"name": "supplyRate", "type": "uint256"},
            {"name": "rewardsRate", "type": "uint256"},
        ]},
    ]),
    _view("getPreviews", [
        {"name": "fToken_", "type": "address"},
        {"name": "assets_", "type": "uint256[]"},
        {"name": "shares_", "type": "uint256[]"},
    ], [
        {"name": "previews_", "type": "tuple[]", "components": [
            {"name": "previewAsset", "type": "uint256"},
            {"name": "previewShare", "type": "uint256"},
        ]},
    ]),
]

# ===== Vault Resolver =====

VAULT_RESOLVER_ABI = [
    _view("getAllVaultsAddresses", [], [{"name": "vaults_", "type": "address[]"}]),
    _view("getTotalVaults", [], [{"name": "totalVaults_", "type": "uint256"}]),
    _view("getVaultType", [{"name": "vault_", "type": "address"}], [
        {"name": "vaultType_", "type": "uint256"},
    ]),
    _view("getVaultEntireData", [{"name": "vault_", "type": "address"}], [
        {"name": "entireData_", "type": "tuple", "components": VAULT_ENTIRE_DATA_COMPONENTS},
    ]),
    _view("positionByNftId", [{"name": "nftId_", "type": "uint256"}], [
        {"name": "position_", "type": "tuple", "components": USER_POSITION_COMPONENTS},
        {"name": "vaultData_", "type": "tuple", "components": VAULT_ENTIRE_DATA_COMPONENTS},
    ]),
    _view("positionsByUser", [{"name": "user_", "type": "address"}], [
        {"name": "positions_", "type": "tuple[]", "components": USER_POSITION_COMPONENTS},
    ]),
    _view("positionsNftIdOfUser", [{"name": "user_", "type": "address"}], [
        {"name": "nftIds_", "type": "uint256[]"},
    ]),
    _view("vaultByNftId", [{"name": "nftId_", "type": "uint256"}], [
        {"name": "vault_", "type": "address"},
    ]),
    _view("totalPositions", [], [{"name": "totalPositions_", "type": "uint256"}]),
]

# ===== fToken (Lending) 写操作 =====

FTOKEN_ABI = [
    # ERC4626 标准
    _write("deposit", [
        {"name": "assets", "type": "uint256"},
        {"name": "receiver", "type": "address"},
    ], [{"name": "shares", "type": "uint256"}]),
    _write("mint", [
        {"name": "shares", "type": "uint256"},
        {"name": "receiver", "type": "address"},
    ], [{"name": "assets", "type": "uint256"}]),
    _write("withdraw", [
        {"name": "assets", "type": "uint256"},
        {"name": "receiver", "type": "address"},
        {"name": "owner", "type": "address"},
    ], [{"name": "shares", "type": "uint256"}]),
    _write("redeem", [
        {"name": "shares", "type": "uint256"},
        {"name": "receiver", "type": "address"},
        {"name": "owner", "type": "address"},
    ], [{"name": "assets", "type": "uint256"}]),
    _write("depositNative", [
        {"name": "receiver", "type": "address"},
    ], [{"name": "shares", "type": "uint256"}], payable=True),
    _write("withdrawNative", [
        {"name": "assets", "type": "uint256"},
        {"name": "receiver", "type": "address"},
        {"name": "owner", "type": "address"},
    ], [{"name": "shares", "type": "uint256"}]),
    # 只读
    _view("asset", [], [{"name": "", "type": "address"}]),
    _view("totalAssets", [], [{"name": "", "type": "uint256"}]),
    _view("convertToShares", [{"name": "assets", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("convertToAssets", [{"name": "shares", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("maxDeposit", [{"name": "", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("maxMint", [{"name": "", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("maxWithdraw", [{"name": "owner", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("maxRedeem", [{"name": "owner", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("previewDeposit", [{"name": "assets", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("previewMint", [{"name": "shares", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("previewWithdraw", [{"name": "assets", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("previewRedeem", [{"name": "shares", "type": "uint256"}], [{"name": "", "type": "uint256"}]),
    _view("balanceOf", [{"name": "account", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("name", [], [{"name": "", "type": "string"}]),
    _view("symbol", [], [{"name": "", "type": "string"}]),
    _view("decimals", [], [{"name": "", "type": "uint8"}]),
]

# ===== Vault T1: 单资产抵押，单资产借贷 =====

VAULT_T1_ABI = [
    _write("operate", [
        {"name": "nftId_", "type": "uint256"},
        {"name": "newCol_", "type": "int256"},
        {"name": "newDebt_", "type": "int256"},
        {"name": "to_", "type": "address"},
    ], [
        {"name": "nftId", "type": "uint256"},
        {"name": "supplyAmt", "type": "int256"},
        {"name": "borrowAmt", "type": "int256"},
    ], payable=True),
]

# ===== Vault T2: 双资产抵押，单资产借贷 =====

VAULT_T2_ABI = [
    _write("operate", [
        {"name": "nftId_", "type": "uint256"},
        {"name": "newColToken0_", "type": "uint256"},
        {"name": "newColToken1_", "type": "uint256"},
        {"name": "colSharesMinMax_", "type": "tuple", "components": MIN_MAX_COMPONENTS},
        {"name": "newDebt_", "type": "int256"},
        {"name": "to_", "type": "address"},
    ], [
        {"name": "nftId", "type": "uint256"},
        {"name": "colAmount0", "type": "uint256"},
        {"name": "colAmount1", "type": "uint256"},
        {"name": "borrowAmt", "type": "int256"},
    ]),
]

# ===== Vault T3: 单资产抵押，双资产借贷 =====

VAULT_T3_ABI = [
    _write("operate", [
        {"name": "nftId_", "type": "uint256"},
        {"name": "newCol_", "type": "int256"},
        {"name": "newDebtToken0_", "type": "int256"},
        {"name": "newDebtToken1_", "type": "int256"},
        {"name": "debtSharesMinMax_", "type": "tuple", "components": MIN_MAX_COMPONENTS},
        {"name": "to_", "type": "address"},
    ], [
        {"name": "nftId", "type": "uint256"},
        {"name": "supplyAmt", "type": "int256"},
        {"name": "borrowAmt0", "type": "int256"},
        {"name": "borrowAmt1", "type": "int256"},
    ]),
]

# ===== Vault T4: 双资产抵押，双资产借贷 =====

VAULT_T4_ABI = [
    _write("operate", [
        {"name": "nftId_", "type": "uint256"},
        {"name": "newColToken0_", "type": "uint256"},
        {"name": "newColToken1_", "type": "uint256"},
        {"name": "colSharesMinMax_", "type": "tuple", "components": MIN_MAX_COMPONENTS},
        {"name": "newDebtToken0_", "type": "int256"},
        {"name": "newDebtToken1_", "type": "int256"},
        {"name": "debtSharesMinMax_", "type": "tuple", "components": MIN_MAX_COMPONENTS},
        {"name": "to_", "type": "address"},
    ], [
        {"name": "nftId", "type": "uint256"},
        {"name": "colAmount0", "type": "uint256"},
        {"name": "colAmount1", "type": "uint256"},
        {"name": "borrowAmt0", "type": "int256"},
        {"name": "borrowAmt1", "type": "int256"},
    ]),
]

# ===== Liquidity Resolver =====

LIQUIDITY_RESOLVER_ABI = [
    _view("listedTokens", [], [{"name": "listedTokens_", "type": "address[]"}]),
    _view("getOverallTokenData", [{"name": "token_", "type": "address"}], [
        {"name": "overallTokenData_", "type": "tuple", "components": OVERALL_TOKEN_DATA_COMPONENTS},
    ]),
    _view("getAllOverallTokensData", [], [
        {"name": "tokensData_", "type": "tuple[]", "components": [
            {"name": "token", "type": "address"},
            {"name": "data", "type": "tuple", "components": OVERALL_TOKEN_DATA_COMPONENTS},
        ]},
    ]),
    _view("getUserSupplyData", [
        {"name": "user_", "type": "address"},
        {"name": "token_", "type": "address"},
    ], [
        {"name": "userSupplyData_", "type": "tuple", "components": LIQUIDITY_USER_SUPPLY_DATA_COMPONENTS},
    ]),
    _view("getUserBorrowData", [
        {"name": "user_", "type": "address"},
        {"name": "token_", "type": "address"},
    ], [
        {"name": "userBorrowData_", "type": "tuple", "components": LIQUIDITY_USER_BORROW_DATA_COMPONENTS},
    ]),
    _view("getRevenue", [{"name": "token_", "type": "address"}], [
        {"name": "revenue_", "type": "uint256"},
    ]),
]

# ===== DEX Resolver =====

DEX_RESOLVER_ABI = [
    _view("getAllPoolAddresses", [], [{"name": "pools_", "type": "address[]"}]),
    _view("getTotalPools", [], [{"name": "totalPools_", "type": "uint256"}]),
    _view("getPoolReserves", [{"name": "pool_", "type": "address"}], [
        {"name": "reserves_", "type": "tuple", "components": DEX_POOL_RESERVES_COMPONENTS},
    ]),
    _view("getAllPoolsReserves", [], [
        {"name": "allReserves_", "type": "tuple[]", "components": DEX_POOL_RESERVES_COMPONENTS},
    ]),
]

# ===== DEX Reserves Resolver =====

_SWAP_ESTIMATE_RESERVE_INPUTS = [
    {"name": "colReserves0_", "type": "uint256"},
    {"name": "colReserves1_", "type": "uint256"},
    {"name": "debtReserves0_", "type": "uint256"},
    {"name": "debtReserves1_", "type": "uint256"},
]

DEX_RESERVES_RESOLVER_ABI = [
    _view("getPoolReservesAdjusted", [{"name": "pool_", "type": "address"}], [
        {"name": "adjustedReserves_", "type": "tuple", "components": [
            {"name": "colReserves0Adjusted", "type": "uint256"},
            {"name": "colReserves1Adjusted", "type": "uint256"},
            {"name": "debtReserves0Adjusted", "type": "uint256"},
            {"name": "debtReserves1Adjusted", "type": "uint256"},
            {"name": "dexFee", "type": "uint256"},
            {"name": "token0", "type": "address"},
            {"name": "token1", "type": "address"},
        ]},
    ]),
    _view("estimateSwapIn", [
        {"name": "pool_", "type": "address"},
        {"name": "swap0to1_", "type": "bool"},
        {"name": "amountIn_", "type": "uint256"},
        *_SWAP_ESTIMATE_RESERVE_INPUTS,
    ], [{"name": "amountOut_", "type": "uint256"}]),
    _view("estimateSwapOut", [
        {"name": "pool_", "type": "address"},
        {"name": "swap0to1_", "type": "bool"},
        {"name": "amountOut_", "type": "uint256"},
        *_SWAP_ESTIMATE_RESERVE_INPUTS,
    ], [{"name": "amountIn_", "type": "uint256"}]),
]

# ===== DEX Pool 兑换 =====

DEX_POOL_ABI = [
    _write("swapIn", [
        {"name": "swap0to1_", "type": "bool"},
        {"name": "amountIn_", "type": "uint256"},
        {"name": "amountOutMin_", "type": "uint256"},
        {"name": "to_", "type": "address"},
    ], [{"name": "amountOut_", "type": "uint256"}], payable=True),
    _write("swapOut", [
        {"name": "swap0to1_", "type": "bool"},
        {"name": "amountOut_", "type": "uint256"},
        {"name": "amountInMax_", "type": "uint256"},
        {"name": "to_", "type": "address"},
    ], [{"name": "amountIn_", "type": "uint256"}], payable=True),
]

# ===== ERC20 =====

ERC20_ABI = [
    _view("name", [], [{"name": "", "type": "string"}]),
    _view("symbol", [], [{"name": "", "type": "string"}]),
    _view("decimals", [], [{"name": "", "type": "uint8"}]),
    _view("balanceOf", [{"name": "", "type": "address"}], [{"name": "", "type": "uint256"}]),
    _view("allowance", [
        {"name": "owner", "type": "address"},
        {"name": "spender", "type": "address"},
    ], [{"name": "", "type": "uint256"}]),
    _write("approve", [
        {"name": "spender", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ], [{"name": "", "type": "bool"}]),
    _view("totalSupply", [], [{"name": "", "type": "uint256"}]),
]

# 按 vault 类型选择 operate ABI
VAULT_OPERATE_ABIS = {
    "T1": VAULT_T1_ABI,
    "T2": VAULT_T2_ABI,
    "T3": VAULT_T3_ABI,
    "T4": VAULT_T4_ABI,
}
