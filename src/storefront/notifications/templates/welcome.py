"""Welcome template: sent when an account is registered."""

from html import escape

from storefront.notifications.notification import NotificationKind
from storefront.notifications.templates.text import html_to_text


class WelcomeTemplate:
    kind = NotificationKind.WELCOME.value

    @staticmethod
    def render(context: dict) -> dict:
        name = escape(context.get("name", "there"))
        html = (
            f"<h2>Welcome to GameBazaar, {name}!</h2>"
            "<p>Your account is ready. Browse the catalogue, build your wishlist "
            "and check out whenever you are ready to play.</p>"
            "<p>Happy gaming!<br>The GameBazaar Team</p>"
        )
        return {
            "subject": f"Welcome to GameBazaar, {context.get('name', 'there')}!",
            "html": html,
            "text": html_to_text(html),
        }
