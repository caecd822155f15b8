"""Pydantic schemas for the reports domain."""

from pydantic import BaseModel, Field

from packages.reporting import PeriodReport


class AssetOut(BaseModel):
    quantity: float
    rate: float
    current_vnd: float


class ReportOut(BaseModel):
    """Period summary; ``assets`` are valued at the current market rates."""

    period: str
    start_date: str
    total_income: float
    total_expense: float
    total_savings_vnd: float
    balance: float
    expense_by_category: dict[str, float] = Field(default_factory=dict)
    assets: dict[str, AssetOut] = Field(default_factory=dict)
    total_assets_vnd: float = 0.0

    @classmethod
    def from_report(cls, report: PeriodReport) -> "ReportOut":
        return cls(
            period=report.period,
            start_date=report.start_date.isoformat(),
            total_income=report.total_income,
            total_expense=report.total_expense,
            total_savings_vnd=report.total_savings_vnd,
            balance=report.balance,
            expense_by_category=dict(report.expense_by_category),
            assets={
                currency: AssetOut(
                    quantity=asset.quantity, rate=asset.rate, current_vnd=asset.current_vnd
                )
                for currency, asset in report.assets.items()
            },
            total_assets_vnd=report.total_assets_vnd,
        )
