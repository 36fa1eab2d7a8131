"""
Cultural Kernel — Framework Availability

Which frameworks can be used for a given set of profiles, and
up-front validation so partitioning never hits missing data mid-run.

Profiles are keyed by a caller label (country code or participant id);
the label only appears in error messages.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Tuple

from .distance import MissingFrameworkDataError
from .domain_types import CulturalProfile, Framework

# Preference order for picking a framework automatically.
PREFERRED_FRAMEWORKS: Tuple[Framework, ...] = (
    Framework.HOFSTEDE,
    Framework.LEWIS,
    Framework.HALL,
)


def has_framework_data(profile: CulturalProfile, framework: Framework | str) -> bool:
    """Combined needs any framework; individual frameworks need their own vector."""
    framework = Framework.parse(framework)
    if framework is Framework.COMBINED:
        return not profile.is_empty()
    return profile.get(framework) is not None


def validate_framework_scores(
    profile: CulturalProfile,
    framework: Framework | str,
    label: str,
) -> None:
    """Hard fail with MissingFrameworkDataError naming the label."""
    framework = Framework.parse(framework)
    if has_framework_data(profile, framework):
        return
    if framework is Framework.COMBINED:
        message = f"Participant's country ({label}) is missing all cultural framework data"
    else:
        message = f"Participant's country ({label}) is missing {framework.label} framework data"
    raise MissingFrameworkDataError(framework, label, message)


def validate_participants(
    participants: Iterable[Tuple[str, CulturalProfile]],
    framework: Framework | str,
    labels: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Validate every participant before requesting a partition.
    labels maps participant id → country code for error messages.
    """
    framework = Framework.parse(framework)
    labels = labels or {}
    for pid, profile in participants:
        validate_framework_scores(profile, framework, labels.get(pid, pid))


def available_frameworks(profiles: Mapping[str, CulturalProfile]) -> List[Framework]:
    """
    Frameworks with complete data for every profile.

    Order: hofstede, lewis, hall, then combined. Combined is available
    when at least one individual framework is complete.
    Empty input → [].
    """
    if not profiles:
        return []

    available = [
        fw for fw in PREFERRED_FRAMEWORKS
        if all(has_framework_data(p, fw) for p in profiles.values())
    ]
    if available:
        available.append(Framework.COMBINED)
    return available


def best_available_framework(profiles: Mapping[str, CulturalProfile]) -> Framework:
    """
    Preferred framework for a set of profiles.

    Individual frameworks first (hofstede > lewis > hall), then combined.
    Defaults to hofstede, the most widely published, when nothing is complete.
    """
    available = available_frameworks(profiles)
    if not available:
        return Framework.HOFSTEDE
    for fw in PREFERRED_FRAMEWORKS:
        if fw in available:
            return fw
    return Framework.COMBINED


def profiles_missing_framework(
    profiles: Mapping[str, CulturalProfile],
    framework: Framework | str,
) -> List[str]:
    """Labels lacking data for the framework, in mapping order."""
    framework = Framework.parse(framework)
    return [
        label for label, profile in profiles.items()
        if not has_framework_data(profile, framework)
    ]
