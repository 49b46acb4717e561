"""Token adapters - Signed JWT implementations."""

from .jwt_tokens import JwtActivationTokenCodec, JwtSessionTokenIssuer

__all__ = ["JwtActivationTokenCodec", "JwtSessionTokenIssuer"]
