"""
Fixed market data served in place of throttled upstream responses.

Prices are a static snapshot; they keep listings and search usable while
the upstream rate limit is in effect.
"""

FALLBACK_MARKETS: list[dict] = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
        "current_price": 43250.0,
        "market_cap": 847000000000,
        "market_cap_rank": 1,
        "total_volume": 15200000000,
        "price_change_percentage_24h": 2.15,
        "high_24h": 43800.0,
        "low_24h": 42100.0,
        "ath": 69045.0,
        "ath_change_percentage": -37.36,
        "atl": 67.81,
        "atl_change_percentage": 63680.5,
        "circulating_supply": 19580000,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
        "current_price": 2650.0,
        "market_cap": 318000000000,
        "market_cap_rank": 2,
        "total_volume": 8500000000,
        "price_change_percentage_24h": 1.85,
        "high_24h": 2690.0,
        "low_24h": 2580.0,
        "ath": 4878.26,
        "ath_change_percentage": -45.68,
        "atl": 0.432979,
        "atl_change_percentage": 611800.2,
        "circulating_supply": 120100000,
    },
    {
        "id": "tether",
        "symbol": "usdt",
        "name": "Tether",
        "image": "https://assets.coingecko.com/coins/images/325/large/Tether.png",
        "current_price": 1.0,
        "market_cap": 91800000000,
        "market_cap_rank": 3,
        "total_volume": 25000000000,
        "price_change_percentage_24h": 0.01,
        "high_24h": 1.002,
        "low_24h": 0.998,
        "ath": 1.32,
        "ath_change_percentage": -24.4,
        "atl": 0.572521,
        "atl_change_percentage": 74.6,
        "circulating_supply": 91800000000,
    },
    {
        "id": "binancecoin",
        "symbol": "bnb",
        "name": "BNB",
        "image": "https://assets.coingecko.com/coins/images/825/large/bnb-icon2_2x.png",
        "current_price": 315.5,
        "market_cap": 48500000000,
        "market_cap_rank": 4,
        "total_volume": 950000000,
        "price_change_percentage_24h": -0.75,
        "high_24h": 320.1,
        "low_24h": 311.2,
        "ath": 686.31,
        "ath_change_percentage": -54.03,
        "atl": 0.0398177,
        "atl_change_percentage": 792000.0,
        "circulating_supply": 153850000,
    },
    {
        "id": "solana",
        "symbol": "sol",
        "name": "Solana",
        "image": "https://assets.coingecko.com/coins/images/4128/large/solana.png",
        "current_price": 98.25,
        "market_cap": 42300000000,
        "market_cap_rank": 5,
        "total_volume": 2100000000,
        "price_change_percentage_24h": 3.42,
        "high_24h": 99.8,
        "low_24h": 94.1,
        "ath": 259.96,
        "ath_change_percentage": -62.2,
        "atl": 0.500801,
        "atl_change_percentage": 19520.0,
        "circulating_supply": 430500000,
    },
    {
        "id": "cardano",
        "symbol": "ada",
        "name": "Cardano",
        "image": "https://assets.coingecko.com/coins/images/975/large/cardano.png",
        "current_price": 0.52,
        "market_cap": 18300000000,
        "market_cap_rank": 6,
        "total_volume": 410000000,
        "price_change_percentage_24h": -1.2,
        "high_24h": 0.535,
        "low_24h": 0.512,
        "ath": 3.09,
        "ath_change_percentage": -83.17,
        "atl": 0.01925275,
        "atl_change_percentage": 2600.9,
        "circulating_supply": 35200000000,
    },
]

FALLBACK_SEARCH_RESULT: dict = {
    "coins": [
        {
            "id": coin["id"],
            "name": coin["name"],
            "symbol": coin["symbol"].upper(),
            "thumb": coin["image"].replace("/large/", "/thumb/"),
            "market_cap_rank": coin["market_cap_rank"],
        }
        for coin in FALLBACK_MARKETS
    ]
}
