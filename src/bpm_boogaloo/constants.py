# Tap tempo
MIN_TAPS_FOR_CALCULATION = 4
MAX_TAPS_TO_KEEP = 12
TAP_INACTIVITY_THRESHOLD_SEC = 2.0
TAP_DETECTION_INTERVAL_SEC = 0.1

# Derived BPMs
RANGE_MULTIPLIER_LOWER = 0.94
RANGE_MULTIPLIER_UPPER = 1.06
RANGE_TIP_TITLE = "Range"
BPM_PLACEHOLDER = "- BPM"
FRACTIONAL_PRECISION_MIN = 1
FRACTIONAL_PRECISION_MAX = 2

# Pitch
PITCH_STEP = 0.1

# Countdown clock
COUNTDOWN_TICK_SEC = 1.0
COUNTDOWN_PLACEHOLDER = "HH:MM"
ORANGE_ALERT_MINUTES_DEFAULT = 10.0
RED_ALERT_MINUTES_DEFAULT = 5.0
