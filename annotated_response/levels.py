"""
levels.py
---------
Log level names for user messages (the PSR-3 / syslog vocabulary).

``AnnotatedResponse.add_user_message()`` accepts any string; these constants
give clients a stable set of values to switch on.
"""


class LogLevel:
    EMERGENCY = "emergency"
    ALERT     = "alert"
    CRITICAL  = "critical"
    ERROR     = "error"
    WARNING   = "warning"
    NOTICE    = "notice"
    INFO      = "info"
    DEBUG     = "debug"
