#!/usr/bin/env python3

import os

# Application
# ###########

APP_VERSION  = os.getenv("CHOMSKY_VERSION", "1.0.0")

# Grammar limits
# ##############

START_SYMBOL = "S"
EPSILON      = "ъ"
MAX_RULES    = int(os.getenv("CHOMSKY_MAX_RULES", "99"))

# UI-facing behaviour
# ###################

# seconds an authoring error stays visible before it clears itself
NOTIFICATION_SECONDS = float(os.getenv("CHOMSKY_NOTIFICATION_SECONDS", "3.0"))

# Logging
# #######

LOG_FILE  = os.getenv("CHOMSKY_LOG_FILE", "chomsky.log")
LOG_LEVEL = os.getenv("CHOMSKY_LOG_LEVEL", "INFO")
