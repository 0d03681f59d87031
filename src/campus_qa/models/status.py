"""Moderation lifecycle codes shared by questions and answers."""

# PENDING is the initial state unless auto-approve is on; the other two are terminal.
POST_STATUS_PENDING = "PENDING"
POST_STATUS_APPROVED = "APPROVED"
POST_STATUS_REJECTED = "REJECTED"

POST_STATUSES = (POST_STATUS_PENDING, POST_STATUS_APPROVED, POST_STATUS_REJECTED)

ROLE_STUDENT = "STUDENT"
ROLE_MODERATOR = "MODERATOR"

ROLES = (ROLE_STUDENT, ROLE_MODERATOR)
