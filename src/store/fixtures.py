# catalog used when the backend is unreachable, and pushed to it when empty

from typing import List

from store.models import Product

FALLBACK_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Yellow Mart Pro Headphones",
        price=12500,
        category="Electronics",
        description="High-fidelity noise cancelling headphones with 40h battery life.",
        image="https://picsum.photos/400/400?random=1",
        rating=4.8,
        stock=45,
        features=("Noise Cancellation", "Bluetooth 5.3", "Fast Charging"),
    ),
    Product(
        id="2",
        name="Urban Runner Sneakers",
        price=4500,
        category="Fashion",
        description="Lightweight, breathable running shoes for the modern athlete.",
        image="https://picsum.photos/400/400?random=2",
        rating=4.5,
        stock=120,
        features=("Memory Foam", "Breathable Mesh", "Non-slip Sole"),
    ),
    Product(
        id="3",
        name="Smart Watch Series Y",
        price=8500,
        category="Electronics",
        description="Track your fitness, sleep, and notifications on the go.",
        image="https://picsum.photos/400/400?random=3",
        rating=4.9,
        stock=15,
        features=("ECG Monitor", "Water Resistant", "Always-on Display"),
    ),
    Product(
        id="4",
        name="Vintage Denim Jacket",
        price=3200,
        category="Fashion",
        description="Classic style meets modern comfort. 100% cotton.",
        image="https://picsum.photos/400/400?random=4",
        rating=4.2,
        stock=8,
        features=("Premium Denim", "Unisex Fit", "Vintage Wash"),
    ),
    Product(
        id="5",
        name="4K Drone Camera",
        price=45000,
        category="Electronics",
        description="Professional grade drone with 3-axis gimbal and 4K video.",
        image="https://picsum.photos/400/400?random=5",
        rating=4.9,
        stock=5,
        features=("4K 60fps", "30min Flight Time", "Obstacle Avoidance"),
    ),
    Product(
        id="6",
        name="Ergonomic Office Chair",
        price=15000,
        category="Furniture",
        description="Work in comfort with lumbar support and adjustable height.",
        image="https://picsum.photos/400/400?random=6",
        rating=4.7,
        stock=22,
        features=("Lumbar Support", "Mesh Back", "360 Swivel"),
    ),
]
