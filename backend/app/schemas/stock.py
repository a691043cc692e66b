"""Market data schemas.

Provider payloads vary per symbol, so every provider-sourced field is
optional and unknown keys are kept as-is. JSON keys are camelCase to match
the provider and the dashboard client.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class StockQuote(CamelModel):
    symbol: str
    short_name: str
    regular_market_price: float | None = None
    regular_market_change: float | None = None
    regular_market_change_percent: float | None = None
    currency: str = "USD"
    market_state: str | None = None
    regular_market_volume: int | None = None
    average_volume: int | None = None
    market_cap: float | None = None
    fifty_two_week_low: float | None = None
    fifty_two_week_high: float | None = None
    trailing_pe: float | None = Field(default=None, alias="trailingPE")
    dividend_yield: float | None = None


class ChartPoint(CamelModel):
    date: str  # YYYY-MM-DD
    timestamp: int  # epoch milliseconds
    open: float = 0
    high: float = 0
    low: float = 0
    close: float = 0
    volume: int = 0


class SummaryProfile(ProviderModel):
    sector: str | None = None
    industry: str | None = None
    website: str | None = None
    country: str | None = None
    city: str | None = None
    full_time_employees: int | None = None
    long_business_summary: str | None = None


class FinancialData(ProviderModel):
    current_price: float | None = None
    target_high_price: float | None = None
    target_low_price: float | None = None
    target_mean_price: float | None = None
    recommendation_mean: float | None = None
    recommendation_key: str | None = None
    number_of_analyst_opinions: int | None = None
    total_revenue: float | None = None
    gross_profits: float | None = None
    free_cashflow: float | None = None
    gross_margins: float | None = None
    operating_margins: float | None = None
    profit_margins: float | None = None
    return_on_equity: float | None = None
    return_on_assets: float | None = None
    current_ratio: float | None = None
    quick_ratio: float | None = None
    debt_to_equity: float | None = None
    revenue_growth: float | None = None
    earnings_growth: float | None = None
    total_cash: float | None = None
    total_debt: float | None = None


class CompanyInfo(CamelModel):
    summary_profile: SummaryProfile | None = None
    financial_data: FinancialData | None = None
    default_key_statistics: dict[str, Any] | None = None


class StockResponse(CamelModel):
    stock: StockQuote
    chart_data: list[ChartPoint]
    company_info: CompanyInfo | None = None
    period: str
    interval: str
