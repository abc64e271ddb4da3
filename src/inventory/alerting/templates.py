"""Low stock alert template: what operators see when a variant runs low."""


class LowStockAlertTemplate:
    title = "Low Stock Alert"
    category = "WORKFLOW"
    priority = "NORMAL"
    action_label = "View Inventory"

    @staticmethod
    def display_name(product_name: str | None, variant_name: str | None) -> str:
        if product_name and variant_name:
            return f"{product_name} - {variant_name}"
        return product_name or "Unknown"

    @classmethod
    def render(cls, context: dict) -> dict:
        name = cls.display_name(context.get("product_name"), context.get("variant_name"))
        available = context.get("available", 0)
        return {
            "title": cls.title,
            "message": f"{name} is running low. Only {available} units available.",
            "metadata": {
                "category": cls.category,
                "priority": cls.priority,
                "action_url": context.get("action_url"),
                "action_label": cls.action_label,
                "required_permission": context.get("permission"),
                "variant_id": context.get("variant_id"),
                "sku": context.get("sku"),
                "available": available,
                "low_stock_threshold": context.get("low_stock_threshold"),
            },
        }
