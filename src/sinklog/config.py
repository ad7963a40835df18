import os

# Directory for log files, relative to the working directory unless absolute
logs_dir = os.getenv('CONFIG_SINKLOG_DIR', '') or 'logs'

# Application name used when none (or an empty one) is given
default_app = os.getenv('CONFIG_SINKLOG_APP', '') or 'LOGS'
