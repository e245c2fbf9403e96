"""Daily score and injury risk presentation."""

import math

from nutrition_dashboard.domain.reports import (
    DailyReport,
    DailyScore,
    InjuryReport,
    RecoveryDetails,
    SubScores,
)
from nutrition_dashboard.services.nutrition import round_half_up

STEP_GOAL = 10000

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
HIGH_RISK = "high_risk"
NEUTRAL = "neutral"

_RISK_COLORS = {
    "low": SUCCESS,
    "moderate": WARNING,
    "high": HIGH_RISK,
    "very_high": ERROR,
}

_RISK_ICONS = {
    "low": "checkmark-circle",
    "moderate": "alert-circle",
    "high": "warning",
    "very_high": "warning",
}

_RISK_DESCRIPTIONS = {
    "low": "All systems go! Your body is well-recovered",
    "moderate": "Light training recommended - some muscle groups need rest",
    "high": "Caution advised - high fatigue detected",
}

REST_DAY_DESCRIPTION = "Rest recommended - your muscles need recovery time"
DEFAULT_RISK_DESCRIPTION = "Keep training smart"
NO_RISK_MESSAGE = "No muscle fatigue detected. You're ready for your next workout!"


def clamp_score(value: float) -> float:
    """Clamp a sub-score into [0, 100]; non-finite values become 0."""
    if not math.isfinite(value):
        return 0.0
    return min(100.0, max(0.0, value))


def nutrition_score(adherence: float) -> float:
    return clamp_score(min(adherence, 100))


def activity_score(steps: float) -> float:
    return clamp_score(min(steps / STEP_GOAL * 100, 100))


def training_score(workouts_completed: int) -> float:
    return 100.0 if workouts_completed > 0 else 50.0


def recovery_score(overall_risk: str | None) -> float:
    if overall_risk == "low":
        return 100.0
    if overall_risk == "moderate":
        return 70.0
    return 40.0


def sub_scores(report: DailyReport, injury_risk: InjuryReport | None) -> SubScores:
    """Return the four clamped components of the daily score."""
    return SubScores(
        nutrition=nutrition_score(report.nutrition.adherence),
        activity=activity_score(report.activity.steps),
        training=training_score(report.training.workouts_completed),
        recovery=recovery_score(injury_risk.overall_risk if injury_risk else None),
    )


def daily_score(
    report: DailyReport | None, injury_risk: InjuryReport | None
) -> DailyScore:
    """Combine the sub-scores into a rounded, unweighted mean.

    The label and color use independent threshold ladders; see
    `score_label` and `score_color`.
    """
    if report is None:
        scores = SubScores(nutrition=0, activity=0, training=0, recovery=0)
        value = 0
    else:
        scores = sub_scores(report, injury_risk)
        total = scores.nutrition + scores.activity + scores.training + scores.recovery
        value = int(clamp_score(round_half_up(total / 4)))
    return DailyScore(
        value=value,
        label=score_label(value),
        color=score_color(value),
        sub_scores=scores,
    )


def score_label(score: float) -> str:
    """Return the qualitative label for a score."""
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Great"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Fair"
    return "Needs Work"


def score_color(score: float) -> str:
    """Return the color band for a score."""
    if score >= 80:
        return SUCCESS
    if score >= 60:
        return WARNING
    return ERROR


def adherence_color(adherence: float) -> str:
    """Return the nutrition progress bar color."""
    return SUCCESS if adherence >= 80 else WARNING


def risk_color(level: str | None) -> str:
    return _RISK_COLORS.get(level or "", NEUTRAL)


def risk_icon(level: str | None) -> str:
    return _RISK_ICONS.get(level or "", "help-circle")


def risk_title(level: str | None) -> str:
    """Return the headline for a risk level, e.g. "VERY HIGH RISK"."""
    return f"{(level or 'low').replace('_', ' ').upper()} RISK"


def risk_description(level: str | None, needs_rest_day: bool) -> str:
    """Return guidance for a risk level; a rest day overrides the level."""
    if needs_rest_day:
        return REST_DAY_DESCRIPTION
    return _RISK_DESCRIPTIONS.get(level or "", DEFAULT_RISK_DESCRIPTION)


def recovery_details(injury_risk: InjuryReport | None) -> RecoveryDetails:
    """Build the recovery section, treating a missing report as low risk."""
    level = injury_risk.overall_risk if injury_risk else "low"
    needs_rest = injury_risk.needs_rest_day if injury_risk else False
    recommendations = list(injury_risk.recommendations) if injury_risk else []
    muscles = [
        (
            muscle.muscle_name or "Unknown",
            muscle.risk_level.replace("_", " ").upper(),
            risk_color(muscle.risk_level),
        )
        for muscle in (injury_risk.muscles_at_risk if injury_risk else [])
    ]
    return RecoveryDetails(
        title=risk_title(level),
        description=risk_description(level, needs_rest),
        icon=risk_icon(level),
        color=risk_color(level),
        recommendations=recommendations,
        muscles=muscles,
        empty_message=None if recommendations or muscles else NO_RISK_MESSAGE,
    )


def format_weight(total: float) -> str:
    """Format lifted weight, switching to tonnes from 1000 kg."""
    if total <= 0:
        return "0"
    if total >= 1000:
        return f"{total / 1000:.1f}t"
    return str(round_half_up(total))
