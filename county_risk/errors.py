"""Failure kinds that end a refresh cycle.

None of these are retried. `RefreshPipeline.run_cycle` catches them, logs them
and reports them in its `CycleResult`; they never reach the presentation layer.
"""


class RefreshError(Exception):
    """Base class for anything that aborts a single refresh cycle."""

    kind = "refresh_error"


class LocationUnavailable(RefreshError):
    """Authorization denied, no fix obtained, or the location platform failed."""

    kind = "location_unavailable"


class NetworkError(RefreshError):
    """Connection, timeout or HTTP status failure talking to the risk endpoint."""

    kind = "network_error"


class MalformedResponse(RefreshError):
    """The risk endpoint answered with a body that is not a valid risk report."""

    kind = "malformed_response"
