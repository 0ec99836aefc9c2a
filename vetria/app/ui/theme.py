"""
Vetria Theme - Centralized color palette.

Dark base with a cyan accent; each collection keeps its own tile color in the
field catalog.
"""

# =============================================================================
# PRIMARY ACCENT COLORS
# =============================================================================
CYAN_PRIMARY = "#48b0f7"       # Main accent, icons, highlights
TEAL_PRIMARY = "#4ECDC4"       # Success
AMBER_PRIMARY = "#F5B041"      # Warnings, actions
RED_PRIMARY = "#FF6B6B"        # Errors, destructive actions

# =============================================================================
# TEXT COLORS (Tinted grays for hierarchy)
# =============================================================================
TEXT_BRIGHT = "#AFC5D6"
TEXT_MUTED = "#8A9BA8"
TEXT_PLACEHOLDER = TEXT_MUTED

TEXT_TITLE = "#FFFFFF"
TEXT_LABEL = TEXT_MUTED
TEXT_VALUE = TEXT_BRIGHT

# =============================================================================
# BACKGROUNDS & BORDERS
# =============================================================================
BG_PAGE = "#000000"
BG_CARD = "rgba(255, 255, 255, 0.04)"
BORDER_SUBTLE = "rgba(255, 255, 255, 0.08)"
BORDER_DIVIDER = "rgba(255, 255, 255, 0.1)"

# =============================================================================
# LOG LEVEL COLORS
# =============================================================================
LOG_INFO = CYAN_PRIMARY
LOG_SUCCESS = TEAL_PRIMARY
LOG_WARNING = AMBER_PRIMARY
LOG_ERROR = RED_PRIMARY


def get_log_color(level: str) -> str:
    """Map a log level to its display color."""
    return {
        "success": LOG_SUCCESS,
        "warning": LOG_WARNING,
        "error": LOG_ERROR,
    }.get(level, LOG_INFO)
