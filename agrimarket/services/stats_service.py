from .auth_service import format_user
from .product_service import format_product


def get_stats(users, products):
    all_users = users.list()
    all_products = products.list()
    top_rated = sorted(all_products, key=lambda p: p.rating or 0, reverse=True)[:3]
    return {
        'totalUsers': len(all_users),
        'totalProducts': len(all_products),
        'farmers': sum(1 for u in all_users if u.is_seller),
        'buyers': sum(1 for u in all_users if u.is_buyer),
        'recentUsers': [format_user(u) for u in all_users[-3:]],
        'popularProducts': [format_product(p) for p in top_rated],
    }
