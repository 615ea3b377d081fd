"""Team usage and queue schemas."""

from typing import List, Optional

from .base import FirecrawlModel


class CreditUsageData(FirecrawlModel):
    remaining_credits: float
    plan_credits: float
    billing_period_start: Optional[str] = None
    billing_period_end: Optional[str] = None


class CreditUsageResponse(FirecrawlModel):
    success: bool
    data: Optional[CreditUsageData] = None


class CreditUsagePeriod(FirecrawlModel):
    start_date: str
    end_date: str
    api_key: Optional[str] = None
    """Set only when usage is broken down by API key."""

    total_credits: int


class HistoricalCreditUsageResponse(FirecrawlModel):
    success: bool
    periods: Optional[List[CreditUsagePeriod]] = None


class TokenUsageData(FirecrawlModel):
    remaining_tokens: float
    plan_tokens: float
    billing_period_start: Optional[str] = None
    billing_period_end: Optional[str] = None


class TokenUsageResponse(FirecrawlModel):
    success: bool
    data: Optional[TokenUsageData] = None


class TokenUsagePeriod(FirecrawlModel):
    start_date: str
    end_date: str
    api_key: Optional[str] = None
    total_tokens: int


class HistoricalTokenUsageResponse(FirecrawlModel):
    success: bool
    periods: Optional[List[TokenUsagePeriod]] = None


class QueueStatusResponse(FirecrawlModel):
    success: bool
    jobs_in_queue: Optional[float] = None
    active_jobs_in_queue: Optional[float] = None
    waiting_jobs_in_queue: Optional[float] = None
    max_concurrency: Optional[float] = None
    most_recent_success: Optional[str] = None
