"""Reporting views: dashboard, period summaries, CSV export and per-type stats."""

from __future__ import annotations

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from ...extensions import get_repositories
from ...logging_config import get_logger
from ...services.budgeting import compute_all_budget_progress
from ...services.dashboard import compute_dashboard_stats, monthly_series, recent_transactions
from ...services.export_csv import render_csv
from ...services.periods import ALL_CATEGORIES, REPORT_PERIODS, THIS_MONTH
from ...services.reports import build_report
from ...services.type_stats import compute_type_stats
from ..api import ValidationFailed, current_user_id, reference_date
from . import bp

logger = get_logger(__name__)

SERIES_LENGTHS = (6, 12)


def _report_filters() -> tuple[str, object]:
    """Read ``period`` and ``category`` query args, rejecting unknown values."""

    errors: dict[str, list[str]] = {}
    period = request.args.get("period", THIS_MONTH)
    if period not in REPORT_PERIODS:
        errors["period"] = [f"Period must be one of: {', '.join(REPORT_PERIODS)}."]

    category: object = request.args.get("category", ALL_CATEGORIES) or ALL_CATEGORIES
    if category != ALL_CATEGORIES:
        try:
            category = int(category)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            errors["category"] = ["Category must be 'all' or a category id."]

    if errors:
        raise ValidationFailed("Invalid request data", errors)
    return period, category


@bp.get("/dashboard")
@jwt_required()
def dashboard():
    """Headline stats, budget progress, recent activity and the monthly series."""

    months = request.args.get("months", 6, type=int)
    if months not in SERIES_LENGTHS:
        raise ValidationFailed("Invalid request data", {"months": ["Months must be 6 or 12."]})

    user_id = current_user_id()
    today = reference_date()
    repos = get_repositories()
    transactions = repos.transactions.list_all(user_id=user_id)
    categories = repos.categories.list_all(user_id=user_id)

    stats = compute_dashboard_stats(
        transactions,
        goals=repos.savings_goals.list_all(user_id=user_id),
        today=today,
    )
    budgets = compute_all_budget_progress(
        repos.budgets.list_all(user_id=user_id),
        categories=categories,
        transactions=transactions,
        window=current_app.config["FINTRACK_CONFIG"].BUDGET_WINDOW,
        today=today,
    )
    return jsonify(
        {
            "as_of": today.isoformat(),
            "stats": stats.to_dict(),
            "budgets": [item.to_dict() for item in budgets],
            "recent_transactions": recent_transactions(transactions, categories),
            "monthly": monthly_series(transactions, today=today, months=months).to_dict(),
        }
    )


@bp.get("/summary")
@jwt_required()
def summary():
    period, category = _report_filters()
    user_id = current_user_id()
    repos = get_repositories()
    report = build_report(
        repos.transactions.list_all(user_id=user_id),
        repos.categories.list_all(user_id=user_id),
        period=period,
        category=category,
        today=reference_date(),
    )
    return jsonify(report.to_dict())


@bp.get("/export.csv")
@jwt_required()
def export_csv():
    """Download the filtered transactions as CSV."""

    period, category = _report_filters()
    user_id = current_user_id()
    repos = get_repositories()
    categories = repos.categories.list_all(user_id=user_id)
    report = build_report(
        repos.transactions.list_all(user_id=user_id),
        categories,
        period=period,
        category=category,
        today=reference_date(),
    )
    logger.info(
        "Report exported",
        extra={"period": period, "rows": report.transaction_count},
    )
    return Response(
        render_csv(report.transactions, categories),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="fintrack-report-{period}.csv"'},
    )


def _type_stats(txn_type: str):
    user_id = current_user_id()
    repos = get_repositories()
    stats = compute_type_stats(
        repos.transactions.list_all(user_id=user_id),
        repos.categories.list_all(user_id=user_id),
        txn_type=txn_type,
        today=reference_date(),
    )
    return jsonify(stats.to_dict())


@bp.get("/expenses")
@jwt_required()
def expense_stats():
    return _type_stats("expense")


@bp.get("/income")
@jwt_required()
def income_stats():
    return _type_stats("income")
