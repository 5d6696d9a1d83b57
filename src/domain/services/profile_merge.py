"""Merge rules for profile completion.

Completion may run after an administrator (or admin auto-provisioning) has
already written a document for the user. The merge decides, field by field,
which side wins:

* Identity fields (name, institutional email, mobile number, branch, year,
  registration number) come from the submission.
* ``email`` always comes from the identity-provider session.
* Administrator-owned fields (``game_access``, ``current_game``,
  ``game_selected_at``) and ``created_at`` keep their existing values. Only
  when there is no existing document do the defaults apply: no access (full
  access for admins), no game, ``created_at = now``.
* ``role`` is admin when the email is allow-listed or the existing document
  is already admin; an admin role always carries full access.
* ``updated_at`` and ``last_active`` are set to ``now``.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from domain.entities.profile import GameAccess, UserProfile, UserRole


@dataclass
class ProfileSubmission:
    """Identity fields collected by the profile-completion form."""

    name: str
    gitam_email: str
    mobile_number: str
    branch: str
    year: str
    registration_number: str


def merge_profile_submission(
    existing: UserProfile | None,
    submission: ProfileSubmission,
    user_id: UUID,
    email: str,
    is_admin: bool,
    now: datetime,
) -> UserProfile:
    """Build the document to write for a profile-completion submission."""
    admin = is_admin or (existing is not None and existing.is_admin)

    if existing is not None:
        game_access = GameAccess(**existing.game_access.as_dict())
        current_game = existing.current_game
        game_selected_at = existing.game_selected_at
        created_at = existing.created_at
    else:
        game_access = GameAccess.uniform(admin)
        current_game = None
        game_selected_at = None
        created_at = now

    if admin:
        game_access = GameAccess.uniform(True)

    return UserProfile(
        id=user_id,
        email=email,
        name=submission.name,
        gitam_email=submission.gitam_email,
        mobile_number=submission.mobile_number,
        branch=submission.branch,
        year=submission.year,
        registration_number=submission.registration_number,
        role=UserRole.ADMIN if admin else UserRole.USER,
        game_access=game_access,
        current_game=current_game,
        game_selected_at=game_selected_at,
        last_active=now,
        created_at=created_at,
        updated_at=now,
    )
