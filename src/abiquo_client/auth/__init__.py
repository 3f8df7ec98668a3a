"""Authentication strategies for the Abiquo API."""
from .base import AuthStrategy
from .basic import BasicAuth
from .oauth import OAuth1Auth
from .token import TokenAuth

__all__ = ["AuthStrategy", "BasicAuth", "OAuth1Auth", "TokenAuth"]
