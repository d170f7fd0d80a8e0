START_TIME = 360  # 06:00
MINUTES_PER_DAY = 1440

# Helicopter package goes bingo fuel at 10:00
MISSION_DEADLINE = 600
DEADLINE_WARNING = 30

def format_time(minutes: int) -> str:
    """Format minutes since midnight as 'HH:MM'."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
