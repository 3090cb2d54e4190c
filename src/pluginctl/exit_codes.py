"""Exit codes for pluginctl commands.

Error categories map to sysexits values so scripts can branch on them.
"""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
USAGE = 64
IO_ERROR = 74
CONFIG = 78
