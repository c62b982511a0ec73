"""Order confirmation message template."""


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        total = context.get("total", "0.00")
        currency_symbol = context.get("currency_symbol", "$")
        store_name = context.get("store_name", "ShopStream")
        greeting = f"Hi {context['customer_name']},\n\n" if context.get("customer_name") else ""
        return {
            "subject": f"Order {order_number} Confirmed",
            "body": (
                f"{greeting}"
                f"Your order {order_number} has been placed.\n\n"
                f"Items: {context.get('item_count', 0)}\n"
                f"Order Total: {currency_symbol}{total}\n\n"
                "We'll notify you once your order is approved.\n\n"
                f"Thank you for shopping with {store_name}!"
            ),
        }
