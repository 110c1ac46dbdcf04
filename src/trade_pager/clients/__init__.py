from .http_client import AiohttpRequester, Requester

__all__ = ["AiohttpRequester", "Requester"]
