# =============================================================================
# core/templates/welcome_email.py - Welcome Email Template
# =============================================================================

from html import escape

WELCOME_EMAIL_SUBJECT = "Welcome to Userbase!"

_WELCOME_EMAIL_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Welcome to Userbase!</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 0; padding: 0; background-color: #f4f4f4; }}
        .container {{ width: 100%; max-width: 600px; margin: 0 auto; background-color: #ffffff; padding: 20px; }}
        .header {{ background-color: #007bff; color: #ffffff; padding: 20px; }}
        .header h1 {{ margin: 0; }}
        .content {{ padding: 20px; }}
        .content p {{ font-size: 16px; color: #333333; }}
        .footer {{ padding: 20px; font-size: 12px; color: #777777; text-align: center; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Welcome, {user_name}!</h1>
        </div>
        <div class="content">
            <p>Hi {user_name},</p>
            <p>Thanks for joining Userbase. Your account is ready to use.</p>
            <p>If you have any questions, just reply to this email.</p>
        </div>
        <div class="footer">
            <p>You are receiving this email because an account was created with this address.</p>
        </div>
    </div>
</body>
</html>
"""


def welcome_email_html(user_name: str) -> str:
    """Render the welcome email body for a user."""
    return _WELCOME_EMAIL_HTML.format(user_name=escape(user_name))
