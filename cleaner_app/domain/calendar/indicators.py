"""Task indicator dot configuration for calendar days"""

from .schemas import DotConfig

# Colors
TASK_INDICATOR_COLOR = "#007AFF"  # single task
TODAY_HIGHLIGHT_COLOR = "#00BFA6"  # brand teal
MULTI_TASK_COLOR = "#FF6B35"  # busy days
SELECTED_COLOR = "#00BFA6"

# Sizes
SMALL_DOT = 6
LARGE_DOT = 8
TASK_COUNT_BUBBLE = 16

# Thresholds
MULTI_TASK_MIN = 2
SHOW_COUNT_MIN = 3
MAX_DISPLAY_COUNT = 9

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_NORMAL = "normal"


def classify(task_count: int, is_today: bool = False) -> DotConfig:
    """Dot size, color, count label and priority for a day with `task_count` tasks"""
    is_busy = task_count >= MULTI_TASK_MIN

    if is_today:
        dot_color = TODAY_HIGHLIGHT_COLOR
        priority = PRIORITY_HIGH
    elif is_busy:
        dot_color = MULTI_TASK_COLOR
        priority = PRIORITY_MEDIUM
    else:
        dot_color = TASK_INDICATOR_COLOR
        priority = PRIORITY_NORMAL

    return DotConfig(
        showDot=task_count > 0,
        showCount=task_count >= SHOW_COUNT_MIN,
        dotSize=LARGE_DOT if is_busy else SMALL_DOT,
        dotColor=dot_color,
        displayCount=f"{MAX_DISPLAY_COUNT}+" if task_count > MAX_DISPLAY_COUNT else str(task_count),
        priority=priority,
    )
