"""Stock market data API endpoints."""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException

from app.schemas.stock import StockResponse
from app.services.market_data_service import (
    DEFAULT_INTERVAL,
    DEFAULT_PERIOD,
    MarketDataError,
    MarketDataService,
    RateLimitedError,
    StockNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_market_data_service() -> AsyncGenerator[MarketDataService, None]:
    service = MarketDataService()
    try:
        yield service
    finally:
        await service.close()


@router.get("/{symbol}", response_model=StockResponse)
async def get_stock(
    symbol: str,
    period: str = DEFAULT_PERIOD,
    interval: str = DEFAULT_INTERVAL,
    service: MarketDataService = Depends(get_market_data_service),
) -> StockResponse:
    """Quote, price history and company information for a ticker symbol."""
    if not symbol.strip():
        raise HTTPException(status_code=400, detail="Symbol is required")

    try:
        return await service.get_stock(symbol, period=period, interval=interval)
    except StockNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except RateLimitedError as e:
        raise HTTPException(status_code=429, detail=str(e)) from e
    except MarketDataError as e:
        logger.error("Error fetching stock data for %s: %s", symbol, e)
        raise HTTPException(
            status_code=500, detail="Failed to fetch stock data. Please try again."
        ) from e
