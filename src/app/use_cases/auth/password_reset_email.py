"""
Password reset e-mail rendering.
"""

import html
from datetime import datetime
from typing import Tuple

from src.domain.entities import Advisor

PRODUCT_NAME = "Richie AI"
EXPIRY_DISPLAY_FORMAT = "%d %B %Y, %I:%M %p UTC"


def build_reset_url(frontend_url: str, secret: str) -> str:
    return f"{frontend_url.rstrip('/')}/reset-password/{secret}"


def format_expiry(expires_at: datetime) -> str:
    return expires_at.strftime(EXPIRY_DISPLAY_FORMAT)


def render_password_reset_email(
    advisor: Advisor, reset_url: str, expires_at: datetime, expiry_hours: float
) -> Tuple[str, str]:
    """Return (subject, html_body) for the reset e-mail."""
    subject = f"Reset Your {PRODUCT_NAME} Password"

    name = html.escape(advisor.display_name or advisor.email)
    url = html.escape(reset_url, quote=True)
    expiry_time = html.escape(format_expiry(expires_at))
    window = f"{expiry_hours:g} hour" + ("" if expiry_hours == 1 else "s")

    html_body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; background-color: #f8f9fa;">
        <div style="background: #667eea; color: white; padding: 40px; text-align: center;">
            <h1 style="margin: 0; font-size: 28px;">{PRODUCT_NAME}</h1>
            <p style="margin: 10px 0 0 0; font-size: 16px;">Password Reset Request</p>
        </div>

        <div style="padding: 40px; background: white;">
            <h2 style="color: #333;">Hello {name},</h2>
            <p style="color: #555; line-height: 1.6;">
                We received a request to reset the password for your {PRODUCT_NAME} account.
                If you didn't make this request, you can safely ignore this email.
            </p>
            <p style="color: #666; font-size: 14px;">
                <strong>Security Notice:</strong> This link will expire in {window}.
            </p>

            <div style="text-align: center; margin: 40px 0;">
                <a href="{url}" style="background: #667eea; color: white; padding: 16px 32px; text-decoration: none; border-radius: 8px; font-weight: 600;">
                    Reset My Password
                </a>
            </div>

            <p style="color: #666; font-size: 14px;"><strong>Link expires:</strong> {expiry_time}</p>
            <p style="color: #666; font-size: 14px;">
                If the button above doesn't work, copy and paste this link into your browser:
            </p>
            <p style="color: #667eea; font-size: 14px; word-break: break-all;">{url}</p>

            <p style="color: #999; font-size: 12px; font-style: italic;">
                This is an automated message. Please do not reply to this email.
            </p>
        </div>
    </div>
    """
    return subject, html_body
