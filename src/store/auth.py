import hmac
from typing import Protocol


class StoreError(Exception):
    """Base class for user-facing storefront errors."""


class InvalidCredentialsError(StoreError):
    def __init__(self, message: str = "Invalid credentials. Access Denied.") -> None:
        super().__init__(message)


class IncompleteLoginError(StoreError):
    def __init__(self, message: str = "Email and password are required.") -> None:
        super().__init__(message)


class LoginRequiredError(StoreError):
    def __init__(self, message: str = "Please sign in to place an order.") -> None:
        super().__init__(message)


class CredentialVerifier(Protocol):
    def verify(self, secret: str) -> bool: ...


class PasscodeVerifier:
    """Accepts exactly one configured passcode."""

    def __init__(self, passcode: str) -> None:
        self._passcode = passcode.encode("utf-8")

    def verify(self, secret: str) -> bool:
        if not secret:
            return False
        return hmac.compare_digest(secret.encode("utf-8"), self._passcode)
