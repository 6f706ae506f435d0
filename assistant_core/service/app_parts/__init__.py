"""Request bodies and response helpers for the FastAPI app."""

from .bodies import ChatBody, ConfigBody, ContentBody, PluginInstallBody
from .responses import error_response, registry_http_error, success_response

__all__ = [
    "ChatBody",
    "ConfigBody",
    "ContentBody",
    "PluginInstallBody",
    "error_response",
    "registry_http_error",
    "success_response",
]
