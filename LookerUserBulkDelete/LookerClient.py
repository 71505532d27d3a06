# Looker User Bulk Delete Tool - Looker API Client
# Last Update: October 19, 2026

import time

import requests
from ratelimit import limits, sleep_and_retry

from LookerUserBulkDelete.LookerDeleteErrors import ApiError, AuthenticationError, TransportError
from LookerUserBulkDelete.LookerDeleteLogging import infoLogger

TOKEN_REFRESH_MARGIN_MS = 60 * 1000
# Clock for the per-second request ceiling
rateLimitClock = time.monotonic
USER_FIELDS = "id,display_name,email"

def retryRequest(operation, maxRetries, retryDelayMs):
    #######
    # Run one network call, retrying connection failures with exponential backoff.
    # HTTP error statuses come back as responses and are never retried here.
    #######

    retries = maxRetries
    while True:
        try:
            return operation()
        except TransportError as e:
            if retries <= 0:
                raise
            waitMs = retryDelayMs * (2 ** (maxRetries - retries))
            print(f'Connection error: {e}')
            print(f'Retrying in {waitMs}ms... ({retries} retries left)')
            infoLogger.warning(f"Connection error: {e} - retrying in {waitMs}ms ({retries} retries left)")
            time.sleep(waitMs / 1000)
            retries -= 1


class LookerClient:

    def __init__(self, config, session=None):
        self.config = config
        self.baseUrl = config.baseUrl
        self.session = session if session is not None else requests.Session()
        self.accessToken = None
        self.tokenExpiry = None
        self._limitedRequest = sleep_and_retry(limits(calls=config.callsPerSecond, period=1, clock=rateLimitClock)(self._sendRequest))

    def apiUrl(self, endpoint):
        return f"{self.baseUrl}/api/4.0/{endpoint}"

    def _sendRequest(self, method, url, **kwargs):
        try:
            return self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Error connecting to Looker: {e}") from e

    def _request(self, method, endpoint, **kwargs):
        url = self.apiUrl(endpoint)
        return retryRequest(lambda: self._limitedRequest(method, url, **kwargs),
                            self.config.maxRetries, self.config.retryDelayMs)

    def authenticate(self):
        #######
        # Exchange the client credentials for an access token
        #######

        requestHeaders = {}
        requestHeaders['Content-Type'] = 'application/x-www-form-urlencoded'
        requestBody = {}
        requestBody['client_id'] = self.config.clientId
        requestBody['client_secret'] = self.config.clientSecret

        response = self._request("POST", "login", headers=requestHeaders, data=requestBody)
        if not response.ok:
            infoLogger.error(f"Authentication failed: {response.status_code}")
            raise AuthenticationError(response.status_code, response.text)

        try:
            responseJson = response.json()
        except ValueError:
            raise AuthenticationError(response.status_code, response.text)
        if not isinstance(responseJson, dict) or \
           'access_token' not in responseJson or 'expires_in' not in responseJson:
            raise AuthenticationError(response.status_code, "Login response did not contain an access token")

        tokenTime = int(time.time() * 1000)
        self.accessToken = responseJson['access_token']
        self.tokenExpiry = tokenTime + int(responseJson['expires_in']) * 1000

        print(f'Successfully authenticated with Looker API.')
        infoLogger.info(f"Successfully authenticated with Looker API at {tokenTime}.")

    def ensureAuthenticated(self):
        # Refresh when missing or within a minute of expiring
        currentTime = int(time.time() * 1000)
        if not self.accessToken or self.tokenExpiry is None or \
           self.tokenExpiry <= currentTime + TOKEN_REFRESH_MARGIN_MS:
            self.authenticate()

    def getHeaders(self):
        self.ensureAuthenticated()

        requestHeaders = {}
        requestHeaders['Authorization'] = 'token ' + self.accessToken
        requestHeaders['Content-Type'] = 'application/json'
        return requestHeaders

    def _getPage(self, endpoint, params, pageSize, entityName):
        response = self._request("GET", endpoint, headers=self.getHeaders(), params=params)
        if not response.ok:
            infoLogger.error(f"Error getting {entityName}: {response.status_code} - {response.text}")
            raise ApiError(f"Failed to get {entityName}", response.status_code, response.text)

        try:
            entities = response.json()
        except ValueError:
            entities = None
        if not isinstance(entities, list):
            infoLogger.error(f"Error getting {entityName}: response was not a JSON list - {response.text}")
            raise ApiError(f"Unexpected response getting {entityName}", response.status_code, response.text)

        print(f'Retrieved {len(entities)} {entityName}')
        infoLogger.info(f"Retrieved {len(entities)} {entityName} (offset={params['offset']}).")

        # A short page is the last page
        return entities, len(entities) == pageSize

    def getScheduledPlans(self, pageSize=50, offset=0):
        ######
        # Get a page of scheduled plans for all users
        ######

        print(f'Fetching scheduled plans: offset={offset}, limit={pageSize}')
        params = {'all_users': 'true', 'limit': pageSize, 'offset': offset}
        return self._getPage("scheduled_plans", params, pageSize, "scheduled plans")

    def getUsers(self, pageSize=50, offset=0):
        ######
        # Get a page of users sorted by id
        ######

        print(f'Fetching users: offset={offset}, limit={pageSize}')
        params = {
            'embed_user': 'true',
            'limit': pageSize,
            'offset': offset,
            'fields': USER_FIELDS,
            'sorts': 'id',
        }
        return self._getPage("users/search", params, pageSize, "users")

    def deleteUser(self, userId):
        ######
        # Deletes a user in the Looker instance
        ######

        # Delay before the call to stay under the API rate limit
        time.sleep(self.config.apiDelayMs / 1000)

        response = self._request("DELETE", f"users/{userId}", headers=self.getHeaders())
        if not response.ok:
            raise ApiError(f"Failed to delete user {userId}", response.status_code, response.text)

        infoLogger.info(f"User {userId} deleted successfully.")
        return True
