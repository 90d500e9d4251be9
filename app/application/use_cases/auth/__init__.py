"""Use cases for authentication flows."""

from .oauth_callback import CallbackOutcome, handle_oauth_callback, login_error_path

__all__ = ["CallbackOutcome", "handle_oauth_callback", "login_error_path"]
