from __future__ import annotations
import html
from dataclasses import dataclass

ACCEPTANCE_SUBJECT = "Your Application Has Been Accepted - iRecruit"
SUPPORT_EMAIL = "support@irecruit.com"

_ACCEPTANCE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Application Accepted</title>
  <style>
    body {{ font-family: Arial, sans-serif; background-color: #f4f4f4; margin: 0; padding: 0; }}
    .container {{ max-width: 600px; margin: 20px auto; background-color: #ffffff; border-radius: 8px; }}
    .header {{ background-color: #007bff; color: #ffffff; padding: 20px; text-align: center; }}
    .content {{ padding: 30px; color: #333333; line-height: 1.6; }}
    .message {{ background-color: #f8f9fa; padding: 15px; border-left: 4px solid #007bff; margin: 20px 0; }}
    .footer {{ background-color: #f8f9fa; padding: 20px; text-align: center; color: #666666; font-size: 14px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>iRecruit</h1>
      <p>Recruitment Platform</p>
    </div>
    <div class="content">
      <h2>Congratulations! Your Application Has Been Accepted</h2>
      <p>Dear Candidate,</p>
      <p>Your profile has been selected for the next stage of our recruitment process.</p>
      <div class="message">
        <strong>Message from our team:</strong><br>
        {message}
      </div>
      <p>Please keep an eye on your email for further instructions regarding the next steps.</p>
      <a href="mailto:{support}">Contact Support</a>
    </div>
    <div class="footer">
      <p>&copy; {year} iRecruit. All rights reserved.</p>
      <p>If you have questions, reply to this email or contact us at {support}</p>
    </div>
  </div>
</body>
</html>
"""


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str


def render_acceptance_email(message: str, year: int) -> EmailContent:
    # le message admin est échappé: il est inséré dans du HTML
    body = _ACCEPTANCE_TEMPLATE.format(
        message=html.escape(message or "").replace("\n", "<br>"),
        support=SUPPORT_EMAIL,
        year=year,
    )
    return EmailContent(subject=ACCEPTANCE_SUBJECT, html=body)
