"""Plain HTML bodies for account e-mails."""

from __future__ import annotations


def new_activation_email(username: str, activate_url: str) -> tuple[str, str]:
    """Subject and body of an account activation mail."""
    body = (
        "Hi, " + username + "<br>请激活您的帐号： <a href = '"
        + activate_url + "'>" + activate_url + "</a>"
    )
    return "帐号激活链接", body


def new_reset_password_email(username: str, reset_url: str) -> tuple[str, str]:
    """Subject and body of a password reset mail."""
    body = (
        "Hi, " + username + "<br>您的重置链接为： <a href = '"
        + reset_url + "'>" + reset_url + "</a>"
    )
    return "密码重置", body