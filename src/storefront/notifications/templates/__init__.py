"""Template registry: Maps template names to template classes."""

from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.password_reset import PasswordResetTemplate
from storefront.notifications.templates.verification import VerificationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    VerificationTemplate.name: VerificationTemplate,
    PasswordResetTemplate.name: PasswordResetTemplate,
    OrderConfirmationTemplate.name: OrderConfirmationTemplate,
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered with name: {name}")
    return template_cls
