from __future__ import annotations

from koshien.contracts import RulesProfile

STANDARD_PROFILE_NAME = "koshien_standard"


def default_rules_profiles() -> dict[str, RulesProfile]:
    return {
        STANDARD_PROFILE_NAME: RulesProfile(
            name=STANDARD_PROFILE_NAME,
            regulation_innings=9,
            outs_per_half=3,
            mvp_hit_points=2,
            mvp_home_run_points=5,
            mvp_walk_points=1,
        ),
        "practice_seven": RulesProfile(
            name="practice_seven",
            regulation_innings=7,
            outs_per_half=3,
            mvp_hit_points=2,
            mvp_home_run_points=5,
            mvp_walk_points=1,
        ),
    }


def get_rules_profile(name: str = STANDARD_PROFILE_NAME) -> RulesProfile:
    profiles = default_rules_profiles()
    if name not in profiles:
        raise KeyError(f"unknown rules profile '{name}' (known: {', '.join(sorted(profiles))})")
    profile = profiles[name]
    profile.validate()
    return profile
