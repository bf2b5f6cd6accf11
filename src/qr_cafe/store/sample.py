from decimal import Decimal

# Демо-кафе для локальной разработки и fallback-режима
SAMPLE_CAFE = {
    "name": "Sample Café",
    "owner_email": "owner@example.com",
    "address": "123 Main Street, City",
    "phone": "+1-234-567-8900",
}

SAMPLE_MENU = [
    {
        "name": "Cappuccino",
        "price": Decimal("120.00"),
        "description": "Rich espresso with steamed milk foam",
        "category": "Beverage",
        "available": True,
    },
    {
        "name": "Margherita Pizza",
        "price": Decimal("350.00"),
        "description": "Classic pizza with tomato, mozzarella, and basil",
        "category": "Food",
        "available": True,
    },
    {
        "name": "Chocolate Cake",
        "price": Decimal("180.00"),
        "description": "Decadent chocolate cake with rich frosting",
        "category": "Dessert",
        "available": True,
    },
]


async def seed_sample_data(cafe_store) -> bool:
    """Кладёт демо-кафе в пустое хранилище. Возвращает True, если что-то добавили."""
    if await cafe_store.list_cafes(active_only=False):
        return False
    cafe = await cafe_store.create_cafe(SAMPLE_CAFE)
    for item in SAMPLE_MENU:
        await cafe_store.add_menu_item(cafe.id, item)
    return True
