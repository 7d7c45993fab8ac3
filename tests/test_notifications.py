from irecruit_core.notifications import ACCEPTANCE_SUBJECT, render_acceptance_email


def test_acceptance_email_escapes_admin_message():
    email = render_acceptance_email("Merci <script>x</script>\nÀ bientôt", year=2026)
    assert email.subject == ACCEPTANCE_SUBJECT
    assert "&lt;script&gt;" in email.html
    assert "<script>" not in email.html
    assert "Merci &lt;script&gt;x&lt;/script&gt;<br>À bientôt" in email.html
    assert "&copy; 2026 iRecruit" in email.html
