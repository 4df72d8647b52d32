import json
from typing import Any, Dict, List

from storefront.domain.models.product import Product

NO_MATCH_SUMMARY = "No products found that match your search."


def _format_price(price: float) -> str:
    # 49.0 -> "49", 129.99 -> "129.99"
    return str(int(price)) if float(price).is_integer() else str(price)


def search_prompt(query: str, catalog: List[Dict[str, Any]]) -> str:
    """Prompt asking the model to pick matching ids from the catalog and justify them as strict JSON."""
    product_catalog = json.dumps(catalog, indent=2, ensure_ascii=False)
    return (
        "You are an intelligent product discovery assistant. A user is searching for products using natural language.\n\n"
        f'User query: "{query.strip()}"\n\n'
        "Available product catalog (JSON):\n"
        f"{product_catalog}\n\n"
        "Your task:\n"
        "1. Analyze the user's query carefully.\n"
        "2. Identify which products from the catalog best match what the user is looking for.\n"
        "3. Return ONLY a valid JSON object (no extra text, no markdown) in this exact format:\n"
        "{\n"
        '  "productIds": [<array of matching product IDs as numbers>],\n'
        '  "summary": "<1-2 sentence explanation of why these products match the query>"\n'
        "}\n\n"
        "Rules:\n"
        "- Only include products that genuinely match the query.\n"
        f'- If NO products match, return: {{"productIds": [], "summary": "{NO_MATCH_SUMMARY}"}}\n'
        "- Do NOT add any commentary, markdown, or text outside the JSON object."
    )


def pitch_prompt(product: Product) -> str:
    """Prompt for a two-sentence sales pitch, plain text only."""
    return (
        'You are a high-end sales expert. Write a compelling, 2-sentence "elevator pitch" for why someone should buy this specific product.\n'
        "Focus on its unique value proposition, quality, and how it solves a problem or enhances the user's life.\n\n"
        "Product Details:\n"
        f"Name: {product.name}\n"
        f"Category: {product.category}\n"
        f"Price: ${_format_price(product.price)}\n"
        f"Description: {product.description}\n"
        f"Tags: {', '.join(product.tags)}\n\n"
        "Your response must be ONLY the 2-sentence pitch text. No markdown, no quotes, no extra text."
    )
