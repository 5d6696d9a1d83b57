"""CSV export of the loaded profile set."""

import csv
import io
from collections.abc import Iterable
from datetime import date

from domain.entities.profile import UserProfile

EXPORT_COLUMNS = [
    "Name",
    "Email",
    "Mobile",
    "Branch",
    "Year",
    "Registration Number",
    "Current Game",
    "Last Active",
]


def export_filename(today: date) -> str:
    return f"beast_games_users_{today.isoformat()}.csv"


def export_profiles_csv(profiles: Iterable[UserProfile]) -> str:
    """Render profiles as CSV. Pure transformation, no store access."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for profile in profiles:
        writer.writerow(
            [
                profile.name,
                profile.gitam_email,
                profile.mobile_number,
                profile.branch,
                profile.year,
                profile.registration_number,
                profile.current_game.value if profile.current_game else "None",
                profile.last_active.isoformat() if profile.last_active else "Never",
            ]
        )
    return buffer.getvalue()
