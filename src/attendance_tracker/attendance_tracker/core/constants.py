"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EMPLOYEES_KEY = "attendance-app-employees"
ATTENDANCE_KEY = "attendance-app-attendance"
ORG_SETTINGS_KEY = "attendance-app-org-settings"

DEFAULT_ORG_NAME = "My Organization"
DEFAULT_DEPARTMENTS = (
    "Engineering",
    "Human Resources",
    "Sales",
    "Marketing",
    "Finance",
    "Operations",
)
DEFAULT_POSITIONS = ("Manager", "Team Lead", "Senior", "Junior", "Intern")
DEFAULT_ACCENT_COLOR = "#8b5cf6"

DEFAULT_RECENT_LIMIT = 5
DEFAULT_TREND_DAYS = 7

# Sunday; matches date.isoweekday() % 7.
WEEK_STARTS_ON = 0

UNKNOWN_LABEL = "Unknown"
