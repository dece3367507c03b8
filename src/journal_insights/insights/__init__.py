"""Behavioral insight generators.

Key components
--------------
GlobalInsightGenerator  Every qualifying signal over the full history
TodayInsightSelector    One nudge for today's weekday or active streak
MonthSummaryGenerator   One headline insight for a calendar month
PsychologyAnalyser      Readiness / mindset-tag vs outcome correlation
"""

from .base import BaseInsightGenerator, sort_by_severity
from .global_engine import GlobalInsightGenerator, generate_insights
from .month import MonthSummaryGenerator, generate_month_insight
from .psychology import PsychologyAnalyser, PsychologyReport, analyse_psychology
from .registry import create_generator, list_generators, register_generator
from .stats import avg_r, current_streak, longest_streak, win_rate
from .today import TodayInsightSelector, get_today_insight

__all__ = [
    "BaseInsightGenerator",
    "sort_by_severity",
    "GlobalInsightGenerator",
    "generate_insights",
    "TodayInsightSelector",
    "get_today_insight",
    "MonthSummaryGenerator",
    "generate_month_insight",
    "PsychologyAnalyser",
    "PsychologyReport",
    "analyse_psychology",
    "create_generator",
    "list_generators",
    "register_generator",
    "win_rate",
    "avg_r",
    "current_streak",
    "longest_streak",
]
