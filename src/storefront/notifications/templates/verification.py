"""Email verification template: Sent when a user registers."""


class VerificationTemplate:
    name = "verification"

    @staticmethod
    def render(context: dict) -> dict:
        first_name = context.get("first_name") or "there"
        url = f"{context['frontend_url']}/verify-email?token={context['token']}"
        return {
            "subject": "Verify your Storefront email",
            "body": (
                f"Hi {first_name},\n\n"
                "Please confirm your email address by opening the link below:\n\n"
                f"{url}\n"
            ),
            "html_body": (
                "<h2>Verify your email</h2>"
                "<p>Click the link below to verify your email address:</p>"
                f'<a href="{url}">Verify Email</a>'
                f"<p>Or copy this link: {url}</p>"
            ),
        }
