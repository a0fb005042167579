"""Login and registration payload validation."""

from __future__ import annotations

from ..form_base import PayloadForm

MIN_PASSWORD_LENGTH = 6


class LoginForm(PayloadForm):
    FIELDS = ("email", "password")

    def clean(self) -> None:
        self._text("email", "Email", max_length=255)
        if "email" in self.cleaned:
            self.cleaned["email"] = self.cleaned["email"].lower()
        password = self.raw_data.get("password")
        if not isinstance(password, str) or not password:
            self._add_error("password", "Password is required.")
        else:
            self.cleaned["password"] = password


class RegisterForm(PayloadForm):
    FIELDS = ("email", "password", "confirm_password", "username", "first_name", "last_name")

    def clean(self) -> None:
        self._text("email", "Email", max_length=255)
        email = self.cleaned.get("email")
        if email is not None:
            if "@" not in email or email.startswith("@") or email.endswith("@"):
                self._add_error("email", "Enter a valid email address.")
            else:
                self.cleaned["email"] = email.lower()

        password = self.raw_data.get("password")
        if not isinstance(password, str) or not password:
            self._add_error("password", "Password is required.")
        elif len(password) < MIN_PASSWORD_LENGTH:
            self._add_error(
                "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        else:
            self.cleaned["password"] = password
            if self.raw_data.get("confirm_password") != password:
                self._add_error("confirm_password", "Passwords don't match.")

        self._text("username", "Username", max_length=64, required=False)
        if not self.cleaned.get("username") and email and "@" in email:
            self.cleaned["username"] = email.split("@", 1)[0]
        self._text("first_name", "First name", max_length=64, required=False)
        self._text("last_name", "Last name", max_length=64, required=False)
