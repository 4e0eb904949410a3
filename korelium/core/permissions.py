"""Static role -> action table for local admins."""

from __future__ import annotations

CREATE_COURSE = "create_course"
READ_COURSE = "read_course"
UPDATE_COURSE = "update_course"
DELETE_COURSE = "delete_course"
MANAGE_COMMENTS = "manage_comments"
MANAGE_ADMINS = "manage_admins"

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    "super_admin": frozenset(
        {
            CREATE_COURSE,
            READ_COURSE,
            UPDATE_COURSE,
            DELETE_COURSE,
            MANAGE_COMMENTS,
            MANAGE_ADMINS,
        }
    ),
    "course_creator": frozenset({CREATE_COURSE, READ_COURSE}),
    "course_manager": frozenset({READ_COURSE, UPDATE_COURSE, DELETE_COURSE}),
    "comment_manager": frozenset({MANAGE_COMMENTS}),
}

ROLES = tuple(ROLE_PERMISSIONS)


def has_any_permission(role: str | None, *actions: str) -> bool:
    """True when the role grants at least one of the given actions."""
    if not role:
        return False
    granted = ROLE_PERMISSIONS.get(role, frozenset())
    return any(action in granted for action in actions)
