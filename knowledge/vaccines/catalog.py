"""
Adult vaccine regimens.

Each entry describes one vaccine product line:
- treats: conditions the vaccine protects against
- initial_schedule: the primary series
    {"type": "single"}
    {"type": "repeated", "number": N, "interval": months}
    {"type": "repeated_range", "number": N, "minimum": months, "maximum": months}
- booster_schedule: the recurring booster cadence
    {"type": "seasonal", "start_month": M, "end_month": M}
    {"type": "years", "years": N}
    {"type": "lifetime"}
- recommended: enabled by default in a new profile

Intervals are in months. Data is illustrative and is not medical advice.
"""

from __future__ import annotations

from typing import Any

# Respiratory virus boosters are timed for the start of the season.
SEASONAL_WINDOW: dict[str, int] = {"start_month": 9, "end_month": 10}

VACCINE_DEFINITIONS: tuple[dict[str, Any], ...] = (
    {
        "name": "COVID-19",
        "treats": ["COVID-19"],
        "initial_schedule": {"type": "repeated_range", "number": 2, "minimum": 1, "maximum": 2},
        "booster_schedule": {"type": "seasonal", **SEASONAL_WINDOW},
        "notes": "Get a booster in Sept/Oct to catch any new variants.",
        "recommended": True,
    },
    {
        "name": "Flu",
        "treats": ["Flu"],
        "initial_schedule": {"type": "single"},
        "booster_schedule": {"type": "seasonal", **SEASONAL_WINDOW},
        "notes": (
            "Get a booster in Sept/Oct to catch any new variants. Get a second dose "
            "in the middle of the season if you have no prior exposure."
        ),
        "recommended": True,
    },
    {
        "name": "Tdap",
        "treats": ["Tetanus", "Diphtheria", "Pertussis"],
        "initial_schedule": {"type": "repeated", "number": 3, "interval": 6},
        "booster_schedule": {"type": "years", "years": 10},
        "notes": "Tetanus protection fades; keep the 10 year booster current.",
        "recommended": True,
    },
    {
        "name": "Mpox",
        "treats": ["Monkeypox", "Smallpox"],
        "initial_schedule": {"type": "repeated_range", "number": 2, "minimum": 1, "maximum": 6},
        "booster_schedule": {"type": "years", "years": 5},
        "notes": "The 'M' is for both \"Monkey\" and \"Small\".",
        "recommended": True,
    },
    {
        "name": "Meningitis",
        "treats": ["Meningitis"],
        "initial_schedule": {"type": "repeated", "number": 2, "interval": 6},
        "booster_schedule": {"type": "years", "years": 5},
        "notes": "Only recommended for adults that are exposed regularly, but low risk to get it.",
        "recommended": True,
    },
    {
        "name": "MMR",
        "treats": ["Measles", "Mumps", "Rubella"],
        "initial_schedule": {"type": "repeated", "number": 2, "interval": 5 * 12},
        "booster_schedule": {"type": "years", "years": 5},
        "notes": (
            "Recommended for children and the immunocompromised. Measles and rubella "
            "immunity is lifelong, but mumps needs a 5 year booster."
        ),
        "recommended": True,
    },
    {
        "name": "Shinglex",
        "treats": ["Shingles"],
        "initial_schedule": {"type": "repeated_range", "number": 2, "minimum": 2, "maximum": 6},
        "booster_schedule": {"type": "years", "years": 7},
        "notes": "Recommended for 50+ and the immunocompromised, but low risk to get it sooner.",
        "recommended": True,
    },
    {
        "name": "PCV20",
        "treats": ["Pneumonia"],
        "initial_schedule": {"type": "repeated", "number": 2, "interval": 6},
        "booster_schedule": {"type": "lifetime"},
        "notes": "Recommended for at risk and 50+, but no risk to get it sooner.",
        "recommended": True,
    },
    {
        "name": "Gardacil-9",
        "treats": ["Human Papillomavirus (HPV)"],
        "initial_schedule": {"type": "repeated", "number": 3, "interval": 6},
        "booster_schedule": {"type": "lifetime"},
        "notes": "HPV causes cancer in men and women both.",
        "recommended": True,
    },
    {
        "name": "Hepatitis B",
        "treats": ["Hepatitis B"],
        "initial_schedule": {"type": "single"},
        "booster_schedule": {"type": "lifetime"},
        "notes": "Greater than 30 years proven durability.",
        "recommended": True,
    },
    {
        "name": "Hepatitis A",
        "treats": ["Hepatitis A"],
        "initial_schedule": {"type": "repeated", "number": 2, "interval": 6},
        "booster_schedule": {"type": "lifetime"},
        "notes": "Greater than 25 years proven durability.",
        "recommended": True,
    },
    {
        "name": "Hepatitis A&B",
        "treats": ["Hepatitis A", "Hepatitis B"],
        "initial_schedule": {"type": "repeated", "number": 3, "interval": 6},
        "booster_schedule": {"type": "lifetime"},
        "notes": "Not recommended for adults even though hepA and hepB are individually recommended.",
        "recommended": False,
    },
    {
        "name": "IPV",
        "treats": ["Polio"],
        "initial_schedule": {"type": "repeated", "number": 4, "interval": 4},
        "booster_schedule": {"type": "lifetime"},
        "notes": "No recommendation for adults, but get a booster if you're at risk.",
        "recommended": True,
    },
    {
        "name": "Chickenpox",
        "treats": ["Chickenpox"],
        "initial_schedule": {"type": "repeated_range", "number": 2, "minimum": 1, "maximum": 6},
        "booster_schedule": {"type": "lifetime"},
        "notes": "Recommended if at risk or you haven't had chickenpox yet.",
        "recommended": True,
    },
)
