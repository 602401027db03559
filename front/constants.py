"""
Front constants.
"""

STATUS_TONES = {
    "open": "tone-open",
    "new": "tone-open",
    "initialisation": "tone-open",
    "in progress": "tone-progress",
    "waiting for support": "tone-progress",
    "waiting for customer": "tone-progress",
    "resolved": "tone-done",
    "closed": "tone-done",
}

DEFAULT_TONE = "tone-muted"

LOGIN_REQUIRED_MESSAGE = "Username and password are required"
LOGIN_FAILED_MESSAGE = "Login failed"
DELETE_DONE_MESSAGE = "Participants removed from {}"


def norm_status(x) -> str:
    return str(x or "").strip().lower()


def status_tone(x) -> str:
    return STATUS_TONES.get(norm_status(x), DEFAULT_TONE)


def status_label(x) -> str:
    s = str(x or "").strip()
    return s if s else "Unknown"
