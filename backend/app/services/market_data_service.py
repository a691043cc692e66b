"""Market data service - stock quotes and price history from Yahoo Finance."""

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
from pydantic import ValidationError

from app.config import get_settings
from app.schemas.stock import ChartPoint, CompanyInfo, StockQuote, StockResponse

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = "1mo"
DEFAULT_INTERVAL = "1d"

PERIOD_DAYS = {
    "1d": 1,
    "5d": 5,
    "1mo": 30,
    "3mo": 90,
    "6mo": 180,
    "1y": 365,
    "2y": 2 * 365,
}

COMPANY_MODULES = ("summaryProfile", "financialData", "defaultKeyStatistics")


class MarketDataError(Exception):
    """The provider request failed."""


class StockNotFoundError(MarketDataError):
    def __init__(self, symbol: str):
        super().__init__(f'Stock symbol "{symbol}" not found')
        self.symbol = symbol


class RateLimitedError(MarketDataError):
    pass


def period_start(period: str, now: datetime | None = None) -> datetime:
    """Start of the look-back window; unknown periods fall back to one month."""
    now = now or datetime.now(UTC)
    days = PERIOD_DAYS.get(period, PERIOD_DAYS[DEFAULT_PERIOD])
    return now - timedelta(days=days)


def _unwrap(value: Any) -> Any:
    """Replace provider ``{"raw": ..., "fmt": ...}`` wrappers with the raw value."""
    if isinstance(value, dict):
        if "raw" in value:
            return value["raw"]
        return {key: _unwrap(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value


def _path_segment(symbol: str) -> str:
    """Percent-encode a symbol so it stays one path segment."""
    from urllib.parse import quote

    return quote(symbol, safe="")


def _round(value: Any) -> float:
    if value is None:
        return 0.0
    return round(float(value), 2)


def _series(values: list[Any] | None, index: int) -> Any:
    if not values or index >= len(values):
        return None
    return values[index]


def parse_chart(payload: dict[str, Any], symbol: str) -> tuple[StockQuote, list[ChartPoint]]:
    """Build the quote and OHLCV points from a chart response."""
    chart = payload.get("chart") or {}
    results = chart.get("result") or []
    if not results:
        raise StockNotFoundError(symbol)
    result = results[0]
    meta = result.get("meta") or {}

    price = meta.get("regularMarketPrice")
    previous_close = meta.get("chartPreviousClose") or meta.get("previousClose")
    change = change_percent = None
    if price is not None and previous_close:
        change = round(price - previous_close, 4)
        change_percent = round(change / previous_close * 100, 4)

    quote = StockQuote(
        symbol=meta.get("symbol") or symbol,
        short_name=meta.get("shortName") or meta.get("longName") or symbol,
        regular_market_price=price,
        regular_market_change=change,
        regular_market_change_percent=change_percent,
        currency=meta.get("currency") or "USD",
        market_state=meta.get("marketState"),
        regular_market_volume=meta.get("regularMarketVolume"),
        fifty_two_week_low=meta.get("fiftyTwoWeekLow"),
        fifty_two_week_high=meta.get("fiftyTwoWeekHigh"),
    )

    quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0]
    points = []
    for i, ts in enumerate(result.get("timestamp") or []):
        points.append(
            ChartPoint(
                date=datetime.fromtimestamp(ts, UTC).date().isoformat(),
                timestamp=int(ts) * 1000,
                open=_round(_series(quotes.get("open"), i)),
                high=_round(_series(quotes.get("high"), i)),
                low=_round(_series(quotes.get("low"), i)),
                close=_round(_series(quotes.get("close"), i)),
                volume=int(_series(quotes.get("volume"), i) or 0),
            )
        )
    return quote, points


def parse_company_info(payload: dict[str, Any]) -> CompanyInfo | None:
    results = (payload.get("quoteSummary") or {}).get("result") or []
    if not results:
        return None
    modules = _unwrap(results[0])
    return CompanyInfo(
        summary_profile=modules.get("summaryProfile"),
        financial_data=modules.get("financialData"),
        default_key_statistics=modules.get("defaultKeyStatistics"),
    )


def apply_key_statistics(quote: StockQuote, info: CompanyInfo | None) -> StockQuote:
    """Fill quote fields that only the quote-summary modules carry."""
    if info is None:
        return quote
    stats = info.default_key_statistics or {}
    financial = info.financial_data
    updates: dict[str, Any] = {}
    if quote.market_cap is None and stats.get("marketCap") is not None:
        updates["market_cap"] = stats["marketCap"]
    if quote.trailing_pe is None and stats.get("trailingPE") is not None:
        updates["trailing_pe"] = stats["trailingPE"]
    if quote.dividend_yield is None and stats.get("yield") is not None:
        updates["dividend_yield"] = stats["yield"]
    if quote.regular_market_price is None and financial and financial.current_price is not None:
        updates["regular_market_price"] = financial.current_price
    return quote.model_copy(update=updates) if updates else quote


class MarketDataService:
    """Client for the Yahoo Finance chart and quote-summary endpoints."""

    def __init__(self, http_client: httpx.AsyncClient | None = None):
        self.settings = get_settings()
        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.settings.market_data_base_url,
            timeout=self.settings.market_data_timeout_seconds,
            headers={"User-Agent": self.settings.market_data_user_agent},
            follow_redirects=True,
        )

    async def _get_json(self, url: str, params: dict[str, Any], symbol: str) -> dict[str, Any]:
        try:
            resp = await self.http_client.get(url, params=params)
        except httpx.HTTPError as e:
            raise MarketDataError(f"Request to market data provider failed: {e}") from e

        if resp.status_code == 404:
            raise StockNotFoundError(symbol)
        if resp.status_code == 429:
            raise RateLimitedError("Rate limit exceeded. Please try again later.")
        if resp.is_error:
            raise MarketDataError(f"Market data provider returned HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise MarketDataError("Market data provider returned invalid JSON") from e

    async def fetch_chart(
        self, symbol: str, period: str, interval: str
    ) -> tuple[StockQuote, list[ChartPoint]]:
        now = datetime.now(UTC)
        params = {
            "period1": int(period_start(period, now).timestamp()),
            "period2": int(now.timestamp()),
            "interval": interval,
        }
        path = f"/v8/finance/chart/{_path_segment(symbol)}"
        payload = await self._get_json(path, params, symbol)
        return parse_chart(payload, symbol)

    async def fetch_company_info(self, symbol: str) -> CompanyInfo | None:
        """Company profile and fundamentals; ``None`` when unavailable."""
        try:
            payload = await self._get_json(
                f"/v10/finance/quoteSummary/{_path_segment(symbol)}",
                {"modules": ",".join(COMPANY_MODULES)},
                symbol,
            )
            return parse_company_info(payload)
        except (MarketDataError, ValidationError) as e:
            logger.warning("Company info unavailable for %s: %s", symbol, e)
            return None

    async def get_stock(
        self, symbol: str, period: str = DEFAULT_PERIOD, interval: str = DEFAULT_INTERVAL
    ) -> StockResponse:
        """Quote, price history and (when available) company info for ``symbol``."""
        symbol = symbol.strip().upper()
        logger.info("Fetching market data for %s (period=%s, interval=%s)", symbol, period, interval)

        company_task = asyncio.create_task(self.fetch_company_info(symbol))
        try:
            stock, chart_data = await self.fetch_chart(symbol, period, interval)
        except BaseException:
            company_task.cancel()
            raise
        company_info = await company_task

        return StockResponse(
            stock=apply_key_statistics(stock, company_info),
            chart_data=chart_data,
            company_info=company_info,
            period=period,
            interval=interval,
        )

    async def close(self):
        await self.http_client.aclose()
