"""
API Gateway Module

Centralized gateway layer that handles middleware, authentication, error
rendering and router registration. The gateway is the single entry point
for all API requests.
"""
from .gateway import APIGateway

__all__ = ["APIGateway"]
