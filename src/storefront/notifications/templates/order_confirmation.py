"""Order confirmation template: Sent when an order is placed."""


class OrderConfirmationTemplate:
    name = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        total = float(context.get("total", 0.0))
        lines = "\n".join(
            f"  {item['quantity']} x {item['product_name']} @ ${item['price']:.2f}" for item in context.get("items", [])
        )
        return {
            "subject": f"Order Confirmation - {order_number}",
            "body": (
                "Thank you for your order!\n\n"
                f"Order: {order_number}\n"
                f"{lines}\n\n"
                f"Total: ${total:.2f}\n\n"
                "You can track your order in your account dashboard.\n"
            ),
            "html_body": (
                "<h2>Order Confirmation</h2>"
                "<p>Thank you for your order!</p>"
                f"<p>Order: {order_number}</p>"
                f"<p>Total: ${total:.2f}</p>"
                "<p>You can track your order in your account dashboard.</p>"
            ),
        }
