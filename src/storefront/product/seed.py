"""Sample grocery catalogue used to seed an empty product store."""

import structlog
from protean.utils.globals import current_domain

from storefront.product.management import CreateProduct
from storefront.product.product import Product

logger = structlog.get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Fresh Organic Apples",
        "description": "Crisp and sweet organic apples, perfect for snacking or baking.",
        "price": 4.99,
        "category": "fruits",
        "stock": 100,
        "image_url": "https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400",
    },
    {
        "name": "Organic Bananas",
        "description": "Ripe organic bananas, great source of potassium and energy.",
        "price": 2.99,
        "category": "fruits",
        "stock": 150,
        "image_url": "https://images.unsplash.com/photo-1603833665858-e61d17a86224?w=400",
    },
    {
        "name": "Fresh Spinach",
        "description": "Nutrient-rich fresh spinach leaves, perfect for salads and cooking.",
        "price": 3.49,
        "category": "vegetables",
        "stock": 80,
        "image_url": "https://images.unsplash.com/photo-1576045057995-568f588f82fb?w=400",
    },
    {
        "name": "Organic Broccoli",
        "description": "Fresh organic broccoli crowns, packed with vitamins and minerals.",
        "price": 3.99,
        "category": "vegetables",
        "stock": 60,
        "image_url": "https://images.unsplash.com/photo-1459411621453-7b03977f4bfc?w=400",
    },
    {
        "name": "Whole Milk",
        "description": "Fresh whole milk, rich in calcium and protein.",
        "price": 3.79,
        "category": "dairy",
        "stock": 50,
        "image_url": "https://images.unsplash.com/photo-1550583724-b2692b85b150?w=400",
    },
    {
        "name": "Greek Yogurt",
        "description": "Creamy Greek yogurt with probiotics, available in various flavors.",
        "price": 5.99,
        "category": "dairy",
        "stock": 40,
        "image_url": "https://images.unsplash.com/photo-1488477304112-4944851de03d?w=400",
    },
    {
        "name": "Fresh Salmon Fillet",
        "description": "Wild-caught salmon fillet, rich in omega-3 fatty acids.",
        "price": 12.99,
        "category": "meat",
        "stock": 25,
        "image_url": "https://images.unsplash.com/photo-1519708227418-c8fd9a32b7a2?w=400",
    },
    {
        "name": "Organic Chicken Breast",
        "description": "Free-range organic chicken breast, lean and full of protein.",
        "price": 8.99,
        "category": "meat",
        "stock": 30,
        "image_url": "https://images.unsplash.com/photo-1604503468506-a8da13d82791?w=400",
    },
    {
        "name": "Artisan Sourdough Bread",
        "description": "Handcrafted sourdough bread with a crispy crust and soft interior.",
        "price": 4.49,
        "category": "bakery",
        "stock": 20,
        "image_url": "https://images.unsplash.com/photo-1509440159596-0249088772ff?w=400",
    },
    {
        "name": "Chocolate Croissants",
        "description": "Buttery, flaky croissants filled with rich dark chocolate.",
        "price": 6.99,
        "category": "bakery",
        "stock": 15,
        "image_url": "https://images.unsplash.com/photo-1555507036-ab1f4038808a?w=400",
    },
    {
        "name": "Orange Juice",
        "description": "Freshly squeezed orange juice with no added sugar.",
        "price": 4.99,
        "category": "beverages",
        "stock": 35,
        "image_url": "https://images.unsplash.com/photo-1600271886742-f049cd451bba?w=400",
    },
    {
        "name": "Organic Green Tea",
        "description": "Premium organic green tea leaves, rich in antioxidants.",
        "price": 7.99,
        "category": "beverages",
        "stock": 45,
        "image_url": "https://images.unsplash.com/photo-1556679343-c7306c1976bc?w=400",
    },
]


def seed_products(products=None) -> int:
    """Insert the sample catalogue if the product store is empty.

    Returns the number of products created.
    """
    if current_domain.repository_for(Product).count() > 0:
        logger.info("Products already exist, skipping seed")
        return 0

    products = SAMPLE_PRODUCTS if products is None else products
    for data in products:
        current_domain.process(CreateProduct(**data), asynchronous=False)

    logger.info("Seeded sample products", count=len(products))
    return len(products)
