"""Tests for the email templates and the template registry."""

import pytest

from storefront.notifications.templates import get_template
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.password_reset import PasswordResetTemplate
from storefront.notifications.templates.verification import VerificationTemplate


class TestRegistry:
    @pytest.mark.parametrize(
        "name,template",
        [
            ("verification", VerificationTemplate),
            ("password_reset", PasswordResetTemplate),
            ("order_confirmation", OrderConfirmationTemplate),
        ],
    )
    def test_lookup(self, name, template):
        assert get_template(name) is template

    def test_unknown_template_raises(self):
        with pytest.raises(ValueError, match="No template registered"):
            get_template("newsletter")


class TestVerificationTemplate:
    def test_renders_link_and_greeting(self):
        content = VerificationTemplate.render(
            {"first_name": "Jane", "token": "abc", "frontend_url": "https://shop.example.com"}
        )
        assert content["subject"] == "Verify your Storefront email"
        assert "Hi Jane" in content["body"]
        assert "https://shop.example.com/verify-email?token=abc" in content["body"]
        assert 'href="https://shop.example.com/verify-email?token=abc"' in content["html_body"]

    def test_missing_first_name_falls_back(self):
        content = VerificationTemplate.render({"token": "abc", "frontend_url": "http://x"})
        assert "Hi there" in content["body"]


class TestPasswordResetTemplate:
    def test_renders_link_and_expiry(self):
        content = PasswordResetTemplate.render({"token": "xyz", "frontend_url": "http://x", "expiry_hours": 24})
        assert content["subject"] == "Reset your Storefront password"
        assert "http://x/reset-password?token=xyz" in content["body"]
        assert "24 hours" in content["body"]


class TestOrderConfirmationTemplate:
    def test_renders_lines_and_total(self):
        content = OrderConfirmationTemplate.render(
            {
                "order_number": "ORD-ABC123",
                "total": 20.77,
                "items": [{"product_name": "Orange Juice", "quantity": 2, "price": 4.99}],
            }
        )
        assert content["subject"] == "Order Confirmation - ORD-ABC123"
        assert "2 x Orange Juice @ $4.99" in content["body"]
        assert "Total: $20.77" in content["body"]
