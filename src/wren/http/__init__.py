"""Minimal request/response carriers."""

from wren.http.request import Request
from wren.http.response import Response

__all__ = ["Request", "Response"]
