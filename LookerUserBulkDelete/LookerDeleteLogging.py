# Looker User Bulk Delete Tool - Logging
# Last Update: October 19, 2026

import logging
import os

infoLogger = logging.getLogger("mainLog")
detailedFailureLogger = logging.getLogger("dFLog")

def setupLogging(logDirectory):
    #######
    # Attach the file handlers for the main and failure detail logs
    #######

    logFormat = logging.Formatter("%(asctime)s - %(message)s")

    # Setup info logging
    if not infoLogger.handlers:
        handler = logging.FileHandler(os.path.join(logDirectory, "LookerUserDelete.log"))
        handler.setFormatter(logFormat)
        infoLogger.setLevel(logging.INFO)
        infoLogger.addHandler(handler)

    # Setup error logging
    if not detailedFailureLogger.handlers:
        handler = logging.FileHandler(os.path.join(logDirectory, "LookerUserDeleteFailuresDetail.log"))
        handler.setFormatter(logFormat)
        detailedFailureLogger.setLevel(logging.ERROR)
        detailedFailureLogger.addHandler(handler)

    return infoLogger, detailedFailureLogger
