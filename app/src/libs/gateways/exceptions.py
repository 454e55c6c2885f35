from fastapi import status
from fastapi_problem.error import StatusProblem


class GatewayError(StatusProblem):
    """Base error for gateway catalog issues"""

    type_ = "gateway_error"
    title = "Gateway Error"
    detail = "An error occurred while resolving store gateways."
    status = status.HTTP_500_INTERNAL_SERVER_ERROR


class GatewayNotFoundError(GatewayError):
    """Raised when a gateway code is not registered in a catalog."""

    type_ = "gateway_not_found"
    title = "Gateway Not Found"
    detail = "The requested gateway is not registered."
    status = status.HTTP_404_NOT_FOUND
