"""
Advisory module for VayuWatch intelligence.

Static, per-category advice tables translated into structured payloads:
daily-life impact, safety checklists, authority (GRAP-style) actions, the
"explain this AQI" breakdown, alert reasoning, city personality labels and
the data confidence indicator. There is no computation beyond table lookup
and string formatting.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from ..aqi_category import AQICategory, CategoryLike, as_category


@dataclass(frozen=True)
class ActivityAdvice:
    status: str
    advice: str


@dataclass(frozen=True)
class DailyLifeImpact:
    """
    How the day's air quality affects common activities.

    Status values per activity:
        morning_walk: Allowed / Caution / Avoid
        outdoor_work: Safe / Risky / Unsafe
        school_activity: Allowed / Limited / Cancel
        commute: Normal / Mask Required / Not Advised
        exercise: Safe / Indoor Only / Avoid
        window_ventilation: Open / Limited / Closed
    """

    morning_walk: ActivityAdvice
    outdoor_work: ActivityAdvice
    school_activity: ActivityAdvice
    commute: ActivityAdvice
    exercise: ActivityAdvice
    window_ventilation: ActivityAdvice


def _impact(*pairs: tuple[str, str]) -> DailyLifeImpact:
    return DailyLifeImpact(*(ActivityAdvice(status, advice) for status, advice in pairs))


_DAILY_LIFE: dict[AQICategory, DailyLifeImpact] = {
    AQICategory.GOOD: _impact(
        ("Allowed", "Perfect time for outdoor exercise"),
        ("Safe", "No restrictions on outdoor activities"),
        ("Allowed", "All sports and outdoor games permitted"),
        ("Normal", "No mask needed for healthy individuals"),
        ("Safe", "Ideal conditions for running/cycling"),
        ("Open", "Fresh air circulation recommended"),
    ),
    AQICategory.SATISFACTORY: _impact(
        ("Allowed", "Safe for most people"),
        ("Safe", "Minor precautions for sensitive individuals"),
        ("Allowed", "Regular activities can continue"),
        ("Normal", "Sensitive groups may consider masks"),
        ("Safe", "Moderate intensity exercise is fine"),
        ("Open", "Natural ventilation is fine"),
    ),
    AQICategory.MODERATE: _impact(
        ("Caution", "Keep walks short, preferably early morning"),
        ("Risky", "Limit prolonged outdoor exposure"),
        ("Limited", "Reduce outdoor playtime duration"),
        ("Mask Required", "N95 mask advised during travel"),
        ("Indoor Only", "Shift workouts indoors"),
        ("Limited", "Open windows only briefly"),
    ),
    AQICategory.POOR: _impact(
        ("Avoid", "Skip outdoor walks, try indoor exercise"),
        ("Unsafe", "Essential work only with protection"),
        ("Cancel", "No outdoor activities for children"),
        ("Mask Required", "N95 mask mandatory, limit travel"),
        ("Indoor Only", "Only indoor activities with air purifier"),
        ("Closed", "Keep windows shut, use air purifier"),
    ),
    AQICategory.VERY_POOR: _impact(
        ("Avoid", "Stay indoors, health risk is high"),
        ("Unsafe", "Work from home if possible"),
        ("Cancel", "Schools should shift to online mode"),
        ("Not Advised", "Avoid travel, work from home"),
        ("Avoid", "No strenuous activity even indoors"),
        ("Closed", "Seal windows, run air purifier"),
    ),
    AQICategory.SEVERE: _impact(
        ("Avoid", "EMERGENCY: Do not go outdoors"),
        ("Unsafe", "All outdoor work banned"),
        ("Cancel", "Schools closed, online classes only"),
        ("Not Advised", "Travel only for emergencies"),
        ("Avoid", "Complete rest advised"),
        ("Closed", "Emergency: Seal all openings"),
    ),
}


def get_daily_life_impact(category: CategoryLike) -> DailyLifeImpact:
    """Returns the activity-by-activity impact for a category."""
    return _DAILY_LIFE[as_category(category)]


Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class ChecklistItem:
    label: str
    checked: bool
    priority: Priority


@dataclass(frozen=True)
class SafetyChecklist:
    items: tuple[ChecklistItem, ...]
    summary: str


_BASE_CHECK = ChecklistItem("Check AQI before outdoor activities", True, "medium")


def get_safety_checklist(category: CategoryLike) -> SafetyChecklist:
    """
    Returns the personal safety checklist for a category.

    Good and satisfactory share one list, as do very poor and severe.
    """
    category = as_category(category)

    if category in (AQICategory.GOOD, AQICategory.SATISFACTORY):
        return SafetyChecklist(
            items=(
                _BASE_CHECK,
                ChecklistItem("Enjoy outdoor activities freely", True, "low"),
            ),
            summary="Air quality is good. No special precautions needed.",
        )

    if category == AQICategory.MODERATE:
        return SafetyChecklist(
            items=(
                _BASE_CHECK,
                ChecklistItem("Sensitive individuals should limit prolonged outdoor exposure", False, "medium"),
                ChecklistItem("Keep windows partially open for ventilation", False, "low"),
            ),
            summary="Take basic precautions if you have respiratory conditions.",
        )

    if category == AQICategory.POOR:
        return SafetyChecklist(
            items=(
                ChecklistItem("Wear N95 mask when going outside", False, "high"),
                ChecklistItem("Keep windows and doors closed", False, "high"),
                ChecklistItem("Use air purifier if available", False, "medium"),
                ChecklistItem("Avoid outdoor exercise", False, "medium"),
                ChecklistItem("Stay hydrated", False, "medium"),
            ),
            summary="Protect yourself with masks and limit outdoor exposure.",
        )

    return SafetyChecklist(
        items=tuple(
            ChecklistItem(label, False, "high")
            for label in (
                "Stay indoors as much as possible",
                "Wear N95 mask if going outside is unavoidable",
                "Seal windows and doors",
                "Run air purifier on highest setting",
                "Avoid all physical exertion",
                "Keep emergency medicines ready",
                "Monitor symptoms, seek medical help if needed",
            )
        ),
        summary="Emergency precautions required. Minimize all outdoor exposure.",
    )


Urgency = Literal["immediate", "recommended", "advisory"]


@dataclass(frozen=True)
class AuthorityAction:
    category: str
    actions: tuple[str, ...]
    urgency: Urgency


def get_authority_recommendations(category: CategoryLike) -> list[AuthorityAction]:
    """
    Returns the actions recommended to civic authorities for a category.

    Poor and worse map onto Graded Response Action Plan measures.
    """
    category = as_category(category)

    if category in (AQICategory.GOOD, AQICategory.SATISFACTORY):
        return [
            AuthorityAction(
                "Routine Monitoring",
                ("Continue regular air quality monitoring", "Maintain green cover initiatives"),
                "advisory",
            ),
        ]

    if category == AQICategory.MODERATE:
        return [
            AuthorityAction(
                "Traffic Management",
                ("Increase public transport frequency", "Promote carpooling advisories"),
                "advisory",
            ),
            AuthorityAction(
                "Dust Control",
                ("Intensify road sweeping", "Water sprinkling in dusty areas"),
                "recommended",
            ),
        ]

    if category == AQICategory.POOR:
        return [
            AuthorityAction(
                "Traffic Regulation",
                (
                    "Consider odd-even restrictions",
                    "Increase parking fees in congested areas",
                    "Deploy traffic marshals",
                ),
                "recommended",
            ),
            AuthorityAction(
                "Construction Control",
                (
                    "Mandate dust barriers at all sites",
                    "Restrict construction during peak hours",
                    "Ensure material transport in covered vehicles",
                ),
                "recommended",
            ),
            AuthorityAction(
                "Industrial Compliance",
                ("Inspect industrial emission compliance", "Penalize violators"),
                "recommended",
            ),
        ]

    return [
        AuthorityAction(
            "Emergency Traffic Measures",
            (
                "Implement strict odd-even vehicle scheme",
                "Ban entry of heavy diesel vehicles",
                "Deploy additional metro/bus services",
                "Work-from-home advisory for non-essential sectors",
            ),
            "immediate",
        ),
        AuthorityAction(
            "Construction Ban",
            (
                "Halt all construction activities",
                "Stop demolition work",
                "Ban stone crushing operations",
            ),
            "immediate",
        ),
        AuthorityAction(
            "Industrial Actions",
            (
                "Shut down non-essential polluting industries",
                "Mandate emission control compliance",
                "Power plant load optimization",
            ),
            "immediate",
        ),
        AuthorityAction(
            "Public Health",
            (
                "Issue health emergency advisories",
                "Schools to shift to online mode",
                "Open medical camps in high-risk areas",
                "Distribute masks to vulnerable populations",
            ),
            "immediate",
        ),
    ]


@dataclass(frozen=True)
class AQIExplanation:
    what_it_means: str
    why_it_happened: str
    what_to_do: tuple[str, ...]
    health_effects: str
    duration: str


# {source} is filled with the dominant pollution source
_EXPLANATIONS: dict[AQICategory, AQIExplanation] = {
    AQICategory.GOOD: AQIExplanation(
        "Air quality is excellent. The air has minimal pollutants and is safe to breathe for everyone.",
        "Favorable weather conditions with good wind dispersion are keeping pollutant levels low.",
        ("Enjoy outdoor activities", "Open windows for fresh air", "Great day for exercise"),
        "No health impacts expected for the general population.",
        "Conditions may vary throughout the day.",
    ),
    AQICategory.SATISFACTORY: AQIExplanation(
        "Air quality is acceptable. Most people will not experience health effects.",
        "Moderate levels of emissions with adequate atmospheric dispersion.",
        ("Normal activities are fine", "Sensitive individuals should monitor symptoms"),
        "Very sensitive individuals might experience mild discomfort.",
        "Expected to remain stable unless weather changes.",
    ),
    AQICategory.MODERATE: AQIExplanation(
        "Air has noticeable pollutants. While not dangerous for most, it may affect sensitive groups.",
        "Elevated emissions from {source} with moderate atmospheric mixing.",
        (
            "Limit prolonged outdoor exposure",
            "Sensitive groups should reduce outdoor activity",
            "Consider wearing a mask",
        ),
        "Children, elderly, and those with respiratory issues may feel discomfort.",
        "Monitor for improvement, typically improves with better weather.",
    ),
    AQICategory.POOR: AQIExplanation(
        "Air quality is unhealthy. Most people may experience breathing discomfort on prolonged exposure.",
        "High pollution from {source} combined with poor wind conditions trapping pollutants.",
        ("Wear N95 mask outdoors", "Keep windows closed", "Use air purifiers", "Avoid outdoor exercise"),
        "May cause breathing difficulties, coughing, and eye irritation.",
        "Typically persists for 1-2 days unless weather improves.",
    ),
    AQICategory.VERY_POOR: AQIExplanation(
        "Air is very unhealthy. Health alert: serious health effects possible for everyone.",
        "Severe pollution from {source} with temperature inversion preventing pollutant dispersion.",
        ("Stay indoors", "Seal windows", "N95 mask mandatory if outside", "Avoid all outdoor activity"),
        "Respiratory illness likely on prolonged exposure. May affect even healthy individuals.",
        "May persist for several days. Follow GRAP guidelines.",
    ),
    AQICategory.SEVERE: AQIExplanation(
        "HEALTH EMERGENCY. Everyone may experience serious health effects.",
        "Emergency pollution levels from {source} with complete atmospheric stagnation.",
        ("Do not go outdoors", "Seal all openings", "Run air purifier", "Keep emergency medicines ready"),
        "Serious respiratory and cardiovascular impacts. Seek immediate medical help if symptoms occur.",
        "Emergency conditions may last multiple days. Follow government advisories.",
    ),
}


def explain_aqi(
    aqi: float,
    category: CategoryLike,
    dominant_source: Optional[str] = None,
) -> AQIExplanation:
    """
    Explains what an AQI reading means, why it happened and what to do.

    Args:
        aqi: Air Quality Index (not used by the lookup; kept for callers
             that explain a specific reading)
        category: AQI category
        dominant_source: Main pollution source, defaults to
                         "mixed pollution sources"
    """
    template = _EXPLANATIONS[as_category(category)]
    source = dominant_source or "mixed pollution sources"
    return AQIExplanation(
        what_it_means=template.what_it_means,
        why_it_happened=template.why_it_happened.format(source=source),
        what_to_do=template.what_to_do,
        health_effects=template.health_effects,
        duration=template.duration,
    )


AlertSeverity = Literal["info", "warning", "critical"]


@dataclass(frozen=True)
class AlertReason:
    title: str
    reason: str
    triggers: tuple[str, ...]
    severity: AlertSeverity


def get_alert_reason(
    aqi: float,
    category: CategoryLike,
    dominant_source: Optional[str] = None,
) -> Optional[AlertReason]:
    """
    Explains why an air quality alert was raised.

    Returns None for good and satisfactory air, where no alert is raised.
    """
    category = as_category(category)
    if category in (AQICategory.GOOD, AQICategory.SATISFACTORY):
        return None

    source = (dominant_source or "Multiple sources").lower()

    if category == AQICategory.SEVERE:
        return AlertReason(
            title="Health Emergency Alert",
            reason=(
                f"AQI has reached {aqi} (Severe) primarily due to {source}. "
                "Temperature inversion is trapping pollutants near ground level."
            ),
            triggers=("AQI > 400", "PM2.5 critically high", "Low wind dispersion"),
            severity="critical",
        )

    if category == AQICategory.VERY_POOR:
        return AlertReason(
            title="Severe Air Quality Warning",
            reason=(
                f"AQI is {aqi} (Very Poor) caused by {source} combined with "
                "unfavorable meteorological conditions."
            ),
            triggers=("AQI > 300", "High particulate matter", "Stagnant weather"),
            severity="critical",
        )

    if category == AQICategory.POOR:
        return AlertReason(
            title="Poor Air Quality Advisory",
            reason=(
                f"AQI is {aqi} (Poor) with {source} as the primary contributor. "
                "Sensitive groups should take precautions."
            ),
            triggers=("AQI > 200", "Elevated PM2.5/PM10"),
            severity="warning",
        )

    return AlertReason(
        title="Moderate Air Quality Notice",
        reason=(
            f"AQI is {aqi} (Moderate). Minor breathing discomfort possible for very "
            "sensitive individuals."
        ),
        triggers=("AQI > 100", "Moderate pollutant levels"),
        severity="info",
    )


_PERSONALITIES = {
    AQICategory.GOOD: "Excellent air quality today",
    AQICategory.SATISFACTORY: "Relatively breathable",
    AQICategory.MODERATE: "Moderate, watch for changes",
    AQICategory.POOR: "Poor conditions, caution advised",
    AQICategory.VERY_POOR: "High health risk today",
    AQICategory.SEVERE: "Emergency conditions",
}


def get_city_personality(aqi: float, category: CategoryLike) -> str:
    """Returns a one-line personality label for a city's air today."""
    return _PERSONALITIES[as_category(category)]


ConfidenceLevel = Literal["High", "Medium", "Simulated"]


@dataclass(frozen=True)
class DataConfidence:
    level: ConfidenceLevel
    label: str
    description: str


def get_confidence_level(is_live_data: bool = False) -> DataConfidence:
    """
    Describes how far the displayed data can be trusted.

    Every reading in this build comes from the variation simulator, so the
    level is always Simulated regardless of is_live_data.
    """
    return DataConfidence(
        level="Simulated",
        label="Simulated Data",
        description=(
            "Data simulated for demonstration. In production, this would reflect "
            "real CPCB readings."
        ),
    )
