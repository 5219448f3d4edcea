from .authenticator import Authenticator, AuthenticationError, get_token

__all__ = ["Authenticator", "AuthenticationError", "get_token"]
