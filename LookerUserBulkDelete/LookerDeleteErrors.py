# Looker User Bulk Delete Tool - Errors
# Last Update: October 19, 2026


class LookerDeleteError(Exception):
    pass


class ConfigurationError(LookerDeleteError):
    pass


class TransportError(LookerDeleteError):
    #######
    # Connection level failure - no HTTP response was received
    #######
    pass


class ApiError(LookerDeleteError):
    #######
    # Non-success HTTP status from a Looker API call
    #######

    def __init__(self, message, status, body):
        super().__init__(f"{message}: {status} - {body}")
        self.status = status
        self.body = body


class AuthenticationError(ApiError):

    def __init__(self, status, body):
        super().__init__("Authentication failed", status, body)
