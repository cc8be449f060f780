"""Utility functions for tally."""

from tally.utils.date_parser import parse_date, add_months, get_month_range
from tally.utils.amount_parser import parse_amount, to_money

__all__ = ["parse_date", "add_months", "get_month_range", "parse_amount", "to_money"]
