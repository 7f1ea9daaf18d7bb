"""Password reset template: Sent when a user asks for a reset link."""


class PasswordResetTemplate:
    name = "password_reset"

    @staticmethod
    def render(context: dict) -> dict:
        url = f"{context['frontend_url']}/reset-password?token={context['token']}"
        hours = context.get("expiry_hours", 24)
        return {
            "subject": "Reset your Storefront password",
            "body": (
                "We received a request to reset your password.\n\n"
                f"Open this link to choose a new one: {url}\n\n"
                f"The link expires in {hours} hours. If you did not ask for a reset, ignore this email.\n"
            ),
            "html_body": (
                "<h2>Reset your password</h2>"
                "<p>Click the link below to reset your password:</p>"
                f'<a href="{url}">Reset Password</a>'
                f"<p>Or copy this link: {url}</p>"
                f"<p>This link expires in {hours} hours.</p>"
            ),
        }
